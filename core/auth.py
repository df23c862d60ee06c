"""Request authorization: API key allow-list and access token ownership.

Both checks run before a handler touches the store. The API key arrives in the
``API_KEY`` query parameter; the access token and the claimed user id arrive in
the JSON body. A token authorizes a request only when its ``sub`` claim equals
the claimed user id.
"""
from functools import lru_cache
from typing import Any, Dict, Optional
import logging

import httpx
from fastapi import Depends, Query
from jose import jwt, JWTError

from config.settings import Settings, get_settings
from core.errors import AuthorizationError
from schemas.common import TokenPayload
from utilities.jwt import verify_jwt_token

logger = logging.getLogger(__name__)

def validate_api_key(api_key: Optional[str], settings: Settings) -> bool:
    return bool(api_key) and api_key in settings.ALLOWED_API_KEYS

def require_api_key(
    api_key: Optional[str] = Query(None, alias="API_KEY"),
    settings: Settings = Depends(get_settings)
) -> str:
    """Dependency rejecting requests without an allowed API key"""
    if not validate_api_key(api_key, settings):
        raise AuthorizationError("Invalid API Key.")
    return api_key

@lru_cache(maxsize=4)
def fetch_jwks(jwks_url: str, timeout: float) -> Dict[str, Any]:
    """Download the user pool signing keys once per process"""
    response = httpx.get(jwks_url, timeout=timeout)
    response.raise_for_status()
    logger.debug(f"Fetched JWKS from {jwks_url}")
    return response.json()

class TokenVerifier:
    """Checks that an access token was issued to the user it claims to be"""

    def __init__(self, settings: Settings):
        self.settings = settings

    def _decode_cognito(self, token: str) -> Dict[str, Any]:
        claims = jwt.decode(
            token,
            fetch_jwks(self.settings.COGNITO_JWKS_URL, self.settings.HTTP_TIMEOUT),
            algorithms=["RS256"],
            issuer=self.settings.COGNITO_ISSUER,
            # Access tokens carry client_id instead of aud
            options={"verify_aud": False},
        )
        if claims.get("token_use") != self.settings.COGNITO_TOKEN_USE:
            raise JWTError("unexpected token_use")
        if self.settings.COGNITO_CLIENT_ID and claims.get("client_id") != self.settings.COGNITO_CLIENT_ID:
            raise JWTError("unexpected client_id")
        return claims

    def decode(self, token: str) -> Optional[Dict[str, Any]]:
        if self.settings.COGNITO_USER_POOL_ID:
            try:
                return self._decode_cognito(token)
            except (JWTError, httpx.HTTPError) as e:
                logger.error(f"Access token rejected: {e}")
                return None
        return verify_jwt_token(token, self.settings)

    def verify(self, access_token: Optional[str], user_id: Optional[str]) -> bool:
        if not access_token or not user_id:
            return False

        claims = self.decode(access_token)
        if claims is None or claims.get("sub") != user_id:
            logger.error(f"Supplied Token not valid for {user_id}")
            return False

        logger.debug(f"Supplied Token is valid for {user_id}")
        return True

    def authorize(self, payload: TokenPayload, user_id: Optional[str] = None) -> str:
        """Raise unless the body's token belongs to `user_id` (default: the body's userId)"""
        user_id = user_id if user_id is not None else payload.user_id
        if not self.verify(payload.access_token, user_id):
            raise AuthorizationError("Invalid JWT Token.")
        return user_id

def get_token_verifier(settings: Settings = Depends(get_settings)) -> TokenVerifier:
    return TokenVerifier(settings)
