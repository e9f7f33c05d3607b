# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-02
# Description: logging_utils.py
# -----------------------------------------------------------------------------

# logging_utils.py
import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

import colorlog

BASE_LOGGER_NAME = "semindex"


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(
        colorlog.ColoredFormatter(
            fmt=(
                "%(log_color)s%(asctime)s [%(levelname)s] "
                "%(name)s:%(lineno)d:%(reset)s %(message_log_color)s%(message)s"
            ),
            datefmt="%Y-%m-%d %H:%M:%S",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "bold_red",
            },
            secondary_log_colors={
                "message": {
                    "INFO": "white",
                    "WARNING": "yellow",
                    "ERROR": "light_red",
                    "CRITICAL": "red",
                }
            },
            style="%",
        )
    )
    return handler


def _file_handler(log_file: str) -> logging.Handler:
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    # Rotating file prevents infinite growth
    max_bytes = int(os.getenv("SEMINDEX_LOG_MAX_BYTES", str(5 * 1024 * 1024)))  # 5MB
    backup_count = int(os.getenv("SEMINDEX_LOG_BACKUP_COUNT", "5"))

    handler = RotatingFileHandler(
        filename=str(log_path),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    return handler


def _create_logger(full_name: str) -> logging.Logger:
    """
    Internal helper to create/configure a logger with a given full name.
    Handlers are attached once; later calls return the same configured logger.
    """
    logger = logging.getLogger(full_name)

    if not logger.handlers:
        logger.addHandler(_console_handler())

        # File logging is opt-in for the indexing pipeline (it runs inside other processes)
        log_to_file = os.getenv("SEMINDEX_LOG_TO_FILE", "0").lower() in ("1", "true", "yes", "y")
        if log_to_file:
            logger.addHandler(_file_handler(os.getenv("SEMINDEX_LOG_FILE", "./logs/semindex.log")))

        level_name = os.getenv("SEMINDEX_LOG_LEVEL", "INFO").upper()
        logger.setLevel(getattr(logging, level_name, logging.INFO))
        logger.propagate = False

    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Generic logger that does not include a class name.
    """
    full_name = f"{BASE_LOGGER_NAME}.{name}" if name else BASE_LOGGER_NAME
    return _create_logger(full_name)


def get_class_logger(cls: type) -> logging.Logger:
    """
    Returns a logger whose name includes module + class, e.g.:

      semindex.chunking.TextChunker.TextChunker
      semindex.vectorstore.SemanticVectorStore.SemanticVectorStore
    """
    module = getattr(cls, "__module__", "unknown_module")
    classname = getattr(cls, "__name__", "UnknownClass")
    return _create_logger(f"{BASE_LOGGER_NAME}.{module}.{classname}")
