"""Tests for logging configuration."""

import logging

from photo_portfolio.api.app import create_app
from photo_portfolio.app_logging import configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger("photo_portfolio")
    logger.handlers.clear()

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging()
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1


def test_configure_logging_applies_level() -> None:
    logger = logging.getLogger("photo_portfolio")

    configure_logging("debug")
    assert logger.level == logging.DEBUG

    configure_logging()
    assert logger.level == logging.INFO


def test_create_app_uses_configured_level(container) -> None:
    container.settings.log_level = "WARNING"

    create_app(container)

    assert logging.getLogger("photo_portfolio").level == logging.WARNING
    configure_logging()
