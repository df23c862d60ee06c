from jose import jwt, JWTError
from datetime import datetime, timedelta, timezone
from typing import Optional
from config.settings import Settings

def create_jwt_token(data: dict, settings: Settings, expires_delta: timedelta = None) -> str:
    """Create a shared-secret JWT (local development and tests)"""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(seconds=settings.JWT_EXPIRATION)

    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
    return encoded_jwt

def verify_jwt_token(token: str, settings: Settings) -> Optional[dict]:
    """Verify a shared-secret JWT"""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
        return payload
    except JWTError:
        return None
