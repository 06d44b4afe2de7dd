from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

import pytest

from src.utils.log_setup import UILogHandler, get_logger, setup_logging


def test_child_loggers_share_the_app_namespace() -> None:
    assert get_logger().name == "campus_autologin"
    assert get_logger("controller.actions").name == "campus_autologin.controller.actions"


def test_ui_handler_forwards_plain_messages() -> None:
    lines: list = []
    logger = get_logger("test.ui_handler")
    handler = UILogHandler(lines.append)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        logger.info("Loaded %s", "settings")
        logger.debug("hidden")
    finally:
        logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)

    assert lines == ["Loaded settings"]


def test_setup_logging_is_idempotent(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CAMPUS_AUTOLOGIN_DEBUG", raising=False)

    logger = setup_logging()
    setup_logging()

    file_handlers = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
    assert len(file_handlers) == 1
    assert logger.level == logging.INFO

    monkeypatch.setenv("CAMPUS_AUTOLOGIN_DEBUG", "true")
    assert setup_logging().level == logging.DEBUG
    setup_logging(debug=False)
