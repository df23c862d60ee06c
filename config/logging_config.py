import logging
from pathlib import Path

from config.settings import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

def setup_logging(settings: Settings) -> None:
    """Configure root logging: console plus a file under LOG_DIR"""
    log_dir = Path(settings.LOG_DIR)
    if not log_dir.is_absolute():
        log_dir = settings.BASE_DIR / log_dir
    log_dir.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(log_dir / f"{settings.ENV}-app.log"),
            logging.StreamHandler()
        ]
    )

    # SQL echo is driven by DB_ECHO, keep the engine logger quiet otherwise
    if not settings.DB_ECHO:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
