import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from catalog_api.core.config import settings

LOG_FILE_NAME = "catalog.log"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024  # 10MB
LOG_FILE_BACKUPS = 5

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def _log_level() -> int:
    return getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)


def _log_path() -> str:
    # <project root>/logs unless LOG_DIR overrides it
    root = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
    log_dir = settings.LOG_DIR or os.path.join(root, "logs")
    os.makedirs(log_dir, exist_ok=True)
    return os.path.join(log_dir, LOG_FILE_NAME)


def _build_handlers(level: int):
    file_handler = RotatingFileHandler(
        filename=_log_path(),
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
    )
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    for handler in (file_handler, console_handler):
        handler.setLevel(level)
    return file_handler, console_handler


def get_logger(name):
    """
    Get a logger that writes to the rotating catalog log file and stdout.

    The level comes from LOG_LEVEL. Handlers are attached the first time a
    logger is requested, so calling this at import time in every module is safe.

    Args:
        name (str): The name of the logger, typically __name__ of the calling module

    Returns:
        logging.Logger: Configured logger instance
    """
    logger = logging.getLogger(name)
    level = _log_level()
    logger.setLevel(level)

    if not logger.handlers:
        for handler in _build_handlers(level):
            logger.addHandler(handler)

    return logger
