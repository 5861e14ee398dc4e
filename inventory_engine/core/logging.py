import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    max_bytes: int = 10_485_760,
    backup_count: int = 5,
) -> None:
    """
    Configure centralized engine logging.
    """
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(
            RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count)
        )

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )


def setup_logging_from_settings() -> None:
    """Configure logging from environment settings."""
    from inventory_engine.config import settings

    setup_logging(
        level=settings.LOG_LEVEL,
        log_file=settings.LOG_FILE,
        max_bytes=settings.LOG_MAX_BYTES,
        backup_count=settings.LOG_BACKUP_COUNT,
    )


def get_logger(name: str) -> logging.Logger:
    """
    Retrieve a namespaced logger.
    """
    return logging.getLogger(name)
