#!/usr/bin/env python3
"""
Campus AutoLogin - Logging Setup

One rotating log file per user plus an optional console stream in debug mode.
The activity log in the window is fed through UILogHandler.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Callable, Optional

from src.config.settings import (
    LOGGER_NAME,
    LOG_FILE,
    LOG_FORMAT,
    LOG_LEVEL,
    MAX_LOG_SIZE_MB,
    LOG_BACKUP_COUNT,
)
from src.utils.system_utils import PathManager


class UILogHandler(logging.Handler):
    """Forward formatted records to a callable (e.g. the activity log)"""

    def __init__(self, sink: Callable[[str], None], level: int = logging.INFO):
        super().__init__(level)
        self.sink = sink
        self.setFormatter(logging.Formatter("%(message)s"))

    def emit(self, record: logging.LogRecord):
        try:
            self.sink(self.format(record))
        except Exception:
            self.handleError(record)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Application logger, or a named child of it"""
    if name:
        return logging.getLogger(f"{LOGGER_NAME}.{name}")
    return logging.getLogger(LOGGER_NAME)


def setup_logging(debug: Optional[bool] = None) -> logging.Logger:
    """Configure the application logger once; later calls only adjust the level

    With debug unset, CAMPUS_AUTOLOGIN_DEBUG decides.
    """
    if debug is None:
        debug = os.getenv("CAMPUS_AUTOLOGIN_DEBUG", "false").lower() == "true"
    logger = get_logger()
    logger.setLevel(logging.DEBUG if debug else getattr(logging, LOG_LEVEL, logging.INFO))

    if any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        return logger

    formatter = logging.Formatter(LOG_FORMAT)

    logs_dir = PathManager.get_logs_dir()
    if PathManager.ensure_directory(logs_dir):
        file_handler = RotatingFileHandler(
            logs_dir / LOG_FILE,
            maxBytes=MAX_LOG_SIZE_MB * 1024 * 1024,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if debug:
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        logger.addHandler(console)

    return logger
