import os
import logging
from logging.handlers import RotatingFileHandler

from paramconverter.core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _build_handlers() -> list:
    handlers: list = [logging.StreamHandler()]

    if settings.LOG_FILE:
        log_dir = os.path.dirname(os.path.abspath(settings.LOG_FILE))
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                settings.LOG_FILE,
                maxBytes=(10 * 1024 * 1024),   # 10MB per file
                backupCount=7,                 # Last 7 rotated logs kept
                encoding="utf-8"
            )
        )

    return handlers


# Python 'logging' root config
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format=LOG_FORMAT,
    datefmt=DATE_FORMAT,
    handlers=_build_handlers(),
)

def get_logger(name: str) -> logging.Logger:
    """Return a configured logger with the given module name."""
    return logging.getLogger(name)
