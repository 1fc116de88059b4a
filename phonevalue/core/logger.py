import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TextIO

from phonevalue.core.config import settings

LOG_FILE = Path(settings.LOG_DIR) / "phonevalue.log"
LOG_FORMAT = "%(levelname)s | %(asctime)s | %(name)s | %(message)s"


def _utf8_stdout() -> TextIO:
    # Scraped prices are logged with a pound sign; a cp1252 console would choke on it.
    try:
        return open(sys.stdout.fileno(), mode="w", encoding="utf-8", closefd=False)
    except (OSError, ValueError):
        # pytest and some process managers hand out a stdout without a real fd
        return sys.stdout


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    formatter = logging.Formatter(LOG_FORMAT)
    LOG_FILE.parent.mkdir(parents=True, exist_ok=True)

    handlers = [
        RotatingFileHandler(LOG_FILE, maxBytes=2_000_000, backupCount=3, encoding="utf-8"),
        logging.StreamHandler(_utf8_stdout()),
    ]
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
        logger.addHandler(handler)

    logger.setLevel(level)
    logger.propagate = False
    return logger
