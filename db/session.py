from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import sessionmaker
from config.settings import get_settings
from db.base import Base
import logging

logger = logging.getLogger(__name__)

engine_kwargs = {"pool_pre_ping": True, "pool_recycle": 300}

def make_engine(database_url: str, echo: bool = False) -> Engine:
    """Build a sync engine for the configured store"""
    url = make_url(database_url)

    # SQLite: sessions are handed to the worker thread pool
    if url.drivername.startswith("sqlite"):
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False, "timeout": 30},
            **engine_kwargs
        )

    if url.drivername.startswith("postgresql"):
        return create_engine(
            database_url,
            echo=echo,
            connect_args={
                "sslmode": url.query.get("sslmode", "require"),
                "connect_timeout": 10,
                "application_name": "nft-collections-backend",
            },
            **engine_kwargs
        )

    # Default
    return create_engine(database_url, echo=echo, **engine_kwargs)

_settings = get_settings()
engine = make_engine(_settings.DATABASE_URL, echo=_settings.DB_ECHO)

# Create sessionmaker
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def get_db():
    """Dependency to get database session"""
    db = SessionLocal()
    try:
        yield db
    except Exception as e:
        logger.error(f"Database error: {e}")
        db.rollback()
        raise
    finally:
        db.close()

def create_tables(bind: Engine = None):
    """Create all tables"""
    # Register every model on the metadata before create_all
    import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
