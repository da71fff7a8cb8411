"""Tests for CLI logging setup."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from fluorite_flake.utils.logging import LOGGER_NAME, setup_logging


class TestSetupLogging:
    """Test suite for setup_logging."""

    def test_configures_package_logger(self) -> None:
        """Test a single rich handler is attached at the requested level."""
        logger = setup_logging(level="warning")

        assert logger.name == LOGGER_NAME
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], RichHandler)
        assert logger.propagate is False

    def test_verbose_forces_debug(self) -> None:
        """Test verbose mode overrides the level."""
        logger = setup_logging(level="ERROR", verbose=True)

        assert logger.level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self) -> None:
        """Test an unknown level name is treated as INFO."""
        logger = setup_logging(level="chatty")

        assert logger.level == logging.INFO

    def test_repeated_setup_does_not_duplicate_handlers(self) -> None:
        """Test calling setup twice keeps one handler."""
        setup_logging()
        logger = setup_logging()

        assert len(logger.handlers) == 1
