"""Logging configuration for server events."""
import logging
from logging.handlers import RotatingFileHandler

from .config import LOG_FILE

LOGGER_NAME = "line_chat_server"


def configure_logging() -> logging.Logger:
    """Configure application-wide logging to a rotating file handler."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)
    if not logger.handlers:
        handler = RotatingFileHandler(LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=3)
        handler.setFormatter(_formatter())
        logger.addHandler(handler)
    return logger


def add_console_handler(logger: logging.Logger) -> None:
    """Mirror server events to stderr for interactive runs."""
    if any(type(h) is logging.StreamHandler for h in logger.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(_formatter())
    logger.addHandler(handler)


def _formatter() -> logging.Formatter:
    return logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
