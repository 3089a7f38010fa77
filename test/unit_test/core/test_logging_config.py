"""Unit tests for logging configuration module.

Tests verify that the logging configuration functions work correctly with different
scenarios including various log levels, formats, and file logging options.
"""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from leadsync.core.logging_config import (
    DETAILED_FORMAT,
    JSON_FORMAT,
    MODULE_LOG_LEVELS,
    SIMPLE_FORMAT,
    get_logger,
    setup_logging,
)


def _console_handler():
    return next(
        (h for h in logging.getLogger().handlers if type(h) is logging.StreamHandler),
        None,
    )


def _file_handler():
    return next(
        (h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)),
        None,
    )


@pytest.fixture(autouse=True)
def _close_file_handlers():
    yield
    for handler in logging.getLogger().handlers[:]:
        if isinstance(handler, logging.FileHandler):
            handler.close()
            logging.getLogger().removeHandler(handler)


class TestSetupLoggingLogLevels:
    """Test setup_logging with different log levels."""

    @pytest.mark.parametrize(
        "log_level,expected_level",
        [
            ("DEBUG", logging.DEBUG),
            ("INFO", logging.INFO),
            ("WARNING", logging.WARNING),
            ("ERROR", logging.ERROR),
            ("CRITICAL", logging.CRITICAL),
            ("debug", logging.DEBUG),
        ],
    )
    def test_setup_logging_with_different_levels(self, log_level, expected_level):
        setup_logging(log_level=log_level, enable_file=False)

        assert _console_handler().level == expected_level

    def test_root_logger_level_is_debug(self):
        """Root logger captures everything; filtering happens at handler level."""
        setup_logging(log_level="WARNING", enable_file=False)

        assert logging.getLogger().level == logging.DEBUG


class TestSetupLoggingFormats:
    """Test setup_logging with different log formats."""

    @pytest.mark.parametrize(
        "log_format,expected_format",
        [
            ("simple", SIMPLE_FORMAT),
            ("detailed", DETAILED_FORMAT),
            ("json", JSON_FORMAT),
            ("unknown", DETAILED_FORMAT),
        ],
    )
    def test_setup_logging_with_different_formats(self, log_format, expected_format):
        setup_logging(log_format=log_format, enable_file=False)

        formatter = _console_handler().formatter
        assert formatter._fmt == expected_format
        assert formatter.datefmt == "%Y-%m-%d %H:%M:%S"


class TestSetupLoggingFileHandling:
    """Test setup_logging file logging functionality."""

    def test_file_logging_requires_env_flag(self, tmp_path: Path):
        with patch("leadsync.core.logging_config.LOG_FILE_DIR", str(tmp_path)):
            with patch("leadsync.core.logging_config.ENABLE_FILE_LOGGING", False):
                setup_logging(enable_file=True)

        assert _file_handler() is None

    def test_file_handler_created_and_always_debug(self, tmp_path: Path):
        log_dir = tmp_path / "new_logs"

        with patch("leadsync.core.logging_config.LOG_FILE_DIR", str(log_dir)):
            with patch("leadsync.core.logging_config.ENABLE_FILE_LOGGING", True):
                setup_logging(log_level="ERROR", enable_file=True)

        handler = _file_handler()
        assert handler is not None
        assert handler.level == logging.DEBUG
        assert Path(handler.baseFilename) == log_dir / "leadsync.log"
        assert log_dir.exists()

    def test_enable_file_false_overrides_env_flag(self, tmp_path: Path):
        with patch("leadsync.core.logging_config.LOG_FILE_DIR", str(tmp_path)):
            with patch("leadsync.core.logging_config.ENABLE_FILE_LOGGING", True):
                setup_logging(enable_file=False)

        assert _file_handler() is None


class TestSetupLoggingHandlerManagement:
    """Test setup_logging handler management."""

    def test_repeated_setup_does_not_duplicate_handlers(self):
        setup_logging(enable_file=False)
        setup_logging(enable_file=False)

        assert len(logging.getLogger().handlers) == 1


class TestSetupLoggingModuleSpecificLevels:
    """Test module-specific log level configuration."""

    @pytest.mark.parametrize(
        "module_name,expected_level",
        [
            ("leadsync.website_checker", logging.DEBUG),
            ("leadsync.reconciliation", logging.DEBUG),
            ("leadsync.email", logging.INFO),
            ("leadsync.server", logging.INFO),
            ("leadsync.server.api", logging.DEBUG),
            ("sqlalchemy", logging.WARNING),
            ("httpx", logging.WARNING),
        ],
    )
    def test_module_specific_log_levels(self, module_name, expected_level):
        setup_logging(enable_file=False)

        assert logging.getLogger(module_name).level == expected_level

    def test_all_module_log_levels_configured(self):
        setup_logging(enable_file=False)

        for module_name, expected_level_str in MODULE_LOG_LEVELS.items():
            assert logging.getLogger(module_name).level == getattr(logging, expected_level_str)


class TestGetLogger:
    """Test get_logger function."""

    def test_get_logger_returns_named_logger(self):
        logger = get_logger("leadsync.services.lead_service")

        assert isinstance(logger, logging.Logger)
        assert logger.name == "leadsync.services.lead_service"
        assert logger is get_logger("leadsync.services.lead_service")

    def test_child_logger_inherits_module_level(self):
        setup_logging(enable_file=False)

        child = get_logger("leadsync.reconciliation.stripe_events")
        assert child.getEffectiveLevel() == logging.DEBUG
