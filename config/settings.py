import logging
from functools import lru_cache
from pathlib import Path
from typing import List
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Load environment variables from the backend .env explicitly (works regardless of cwd)
load_dotenv(dotenv_path=Path(__file__).parent.parent / ".env")

logger = logging.getLogger(__name__)

class Settings(BaseSettings):
    """Application settings"""

    # Base directory
    BASE_DIR: Path = Path(__file__).parent.parent

    # Service
    APP_NAME: str = "NFT Collections API"
    APP_VERSION: str = "1.0.0"
    ENV: str = "dev"
    DEBUG: bool = False
    PORT: int = 3001

    # Database - PostgreSQL in production (fallback to local SQLite if not provided)
    DATABASE_URL: str = "sqlite:///./nft_collections.db"
    DB_ECHO: bool = False

    # API keys accepted in the API_KEY query parameter (JSON list in env)
    ALLOWED_API_KEYS: List[str] = []

    # Cognito access token verification (RS256 via the user pool JWKS)
    COGNITO_REGION: str = "us-west-1"
    COGNITO_USER_POOL_ID: str = ""
    COGNITO_CLIENT_ID: str = ""
    COGNITO_TOKEN_USE: str = "access"

    # Shared-secret JWT, used when no user pool is configured (local dev, tests)
    JWT_SECRET: str = "your-secret-key-here"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION: int = 3600  # 1 hour

    # Supabase Storage (blob storage for original assets and NFT metadata)
    SUPABASE_URL: str = ""
    SUPABASE_ANON_KEY: str = ""
    SUPABASE_SERVICE_ROLE_KEY: str = ""
    ORIGINAL_ASSETS_BUCKET: str = "original-assets"
    COLLECTIONS_BUCKET: str = "unic-collections"

    # Pinata (IPFS pinning)
    PINATA_BASE_URL: str = "https://api.pinata.cloud"
    PINATA_API_KEY: str = ""
    PINATA_API_SECRET: str = ""
    PINATA_JWT: str = ""
    IPFS_GATEWAY_URL: str = "https://gateway.pinata.cloud/ipfs"
    HTTP_TIMEOUT: float = 30.0

    # Redis
    REDIS_URL: str = "redis://localhost:6379"

    # Rate limiting
    RATE_LIMIT_REQUESTS: int = 100
    RATE_LIMIT_WINDOW: int = 60  # seconds

    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    @property
    def COGNITO_ISSUER(self) -> str:
        return f"https://cognito-idp.{self.COGNITO_REGION}.amazonaws.com/{self.COGNITO_USER_POOL_ID}"

    @property
    def COGNITO_JWKS_URL(self) -> str:
        return f"{self.COGNITO_ISSUER}/.well-known/jwks.json"

    @property
    def SUPABASE_KEY(self) -> str:
        """Prefers service role key (server-side) and falls back to anon key."""
        return self.SUPABASE_SERVICE_ROLE_KEY or self.SUPABASE_ANON_KEY

    model_config = {
        "env_file": ".env",
        "extra": "ignore",
    }

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings are built once per process and injected where needed."""
    return Settings()

def validate_env_variables(settings: Settings) -> bool:
    """Log missing integration settings. Missing values are not fatal."""
    optional_vars = {
        "ALLOWED_API_KEYS": settings.ALLOWED_API_KEYS,
        "COGNITO_USER_POOL_ID": settings.COGNITO_USER_POOL_ID,
        "SUPABASE_URL": settings.SUPABASE_URL,
        "SUPABASE_KEY": settings.SUPABASE_KEY,
        "PINATA_API_KEY": settings.PINATA_API_KEY,
        "PINATA_API_SECRET": settings.PINATA_API_SECRET,
    }

    missing_vars = [name for name, value in optional_vars.items() if not value]
    if missing_vars:
        logger.warning(f"Missing environment variables: {', '.join(missing_vars)}")
        return False

    logger.info("All integration environment variables are set")
    return True
