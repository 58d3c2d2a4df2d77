"""
Centralized Logging Configuration for Ghostwriter

Every module logs through a child of the "ghostwriter" package logger, which
owns two handlers: the console (INFO) and one rotating file,
logs/ghostwriter.log (DEBUG). The interactive CLI turns the console down so
log lines do not interleave with the story; the file keeps everything.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "ghostwriter"
LOG_FILE_NAME = "ghostwriter.log"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5

CONSOLE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class GhostwriterLogger:
    """Configures the package logger once and hands out its children."""

    _console_handler: Optional[logging.Handler] = None
    _file_handler: Optional[RotatingFileHandler] = None

    @classmethod
    def configure(cls, log_dir: Optional[Path] = None) -> logging.Logger:
        """
        Attach the console and file handlers to the package logger.

        Safe to call repeatedly; only the first call has an effect.

        Args:
            log_dir: Directory for ghostwriter.log (defaults to the configured logs dir)
        """
        root = logging.getLogger(PACKAGE_LOGGER)
        if cls._console_handler is not None:
            return root

        root.setLevel(logging.DEBUG)
        root.propagate = False

        cls._console_handler = logging.StreamHandler(sys.stdout)
        cls._console_handler.setLevel(logging.INFO)
        cls._console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
        root.addHandler(cls._console_handler)

        if log_dir is None:
            from .config import config
            log_dir = config.logs_dir
        log_dir.mkdir(exist_ok=True, parents=True)

        cls._file_handler = RotatingFileHandler(
            log_dir / LOG_FILE_NAME,
            maxBytes=MAX_LOG_BYTES,
            backupCount=LOG_BACKUPS,
            encoding="utf-8"
        )
        cls._file_handler.setLevel(logging.DEBUG)
        cls._file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
        root.addHandler(cls._file_handler)

        return root

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        cls.configure()
        if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
            name = f"{PACKAGE_LOGGER}.{name}"
        return logging.getLogger(name)

    @classmethod
    def set_console_level(cls, level: int) -> None:
        cls.configure()
        cls._console_handler.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the ghostwriter package logger.

    Example:
        from ghostwriter.logging_config import get_logger
        logger = get_logger(__name__)
        logger.info("Turn opened")
    """
    return GhostwriterLogger.get_logger(name)


def set_console_level(level: int) -> None:
    """Raise or lower the console threshold; the log file is unaffected."""
    GhostwriterLogger.set_console_level(level)
