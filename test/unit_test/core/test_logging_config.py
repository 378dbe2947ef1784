"""Unit tests for logging configuration module.

Tests verify the dictConfig schema built for the service and the handlers
installed by setup_logging for different levels, formats and file settings.
"""

import logging
import logging.handlers
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from user_service.core.logging_config import (
    DATE_FORMAT,
    LOG_FILE_BACKUP_COUNT,
    LOG_FILE_MAX_BYTES,
    LOG_FORMATS,
    LOGGER_LEVELS,
    build_logging_config,
    get_logger,
    setup_logging,
)
from user_service.server.core.config import settings


def _console_handler():
    root_logger = logging.getLogger()
    return next(
        (
            h
            for h in root_logger.handlers
            if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        ),
        None,
    )


def _file_handler():
    root_logger = logging.getLogger()
    return next((h for h in root_logger.handlers if isinstance(h, logging.FileHandler)), None)


class TestBuildLoggingConfig:
    """Test the dictConfig schema."""

    def test_console_only_by_default(self):
        config = build_logging_config()

        assert list(config["handlers"]) == ["console"]
        assert config["handlers"]["console"]["level"] == "INFO"
        assert config["root"] == {"level": "DEBUG", "handlers": ["console"]}
        assert config["disable_existing_loggers"] is False

    def test_file_handler_rotates(self, tmp_path):
        config = build_logging_config("warning", "simple", str(tmp_path))

        file_handler = config["handlers"]["file"]
        assert file_handler["class"] == "logging.handlers.RotatingFileHandler"
        assert file_handler["level"] == "DEBUG"
        assert file_handler["filename"] == str(tmp_path / "user_service.log")
        assert file_handler["maxBytes"] == LOG_FILE_MAX_BYTES
        assert file_handler["backupCount"] == LOG_FILE_BACKUP_COUNT
        assert config["handlers"]["console"]["level"] == "WARNING"
        assert config["root"]["handlers"] == ["console", "file"]

    def test_unknown_format_falls_back_to_detailed(self):
        config = build_logging_config(log_format="xml")

        assert config["formatters"]["default"]["format"] == LOG_FORMATS["detailed"]

    def test_logger_levels(self):
        config = build_logging_config()

        assert config["loggers"] == {name: {"level": level} for name, level in LOGGER_LEVELS.items()}


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
            ("debug", logging.DEBUG),  # Test lowercase
            ("info", logging.INFO),
        ],
    )
    def test_setup_logging_with_different_levels(self, log_level, expected_level):
        """Test setup_logging configures correct log level."""
        setup_logging(log_level=log_level, enable_file=False)

        console_handler = _console_handler()
        assert console_handler is not None
        assert console_handler.level == expected_level

    def test_setup_logging_defaults_to_settings_level(self):
        setup_logging(enable_file=False)

        assert _console_handler().level == logging.getLevelName(settings.log_level.upper())

    def test_setup_logging_root_logger_level_is_debug(self):
        """Test root logger is set to DEBUG to capture all levels."""
        setup_logging(log_level="WARNING", enable_file=False)

        assert logging.getLogger().level == logging.DEBUG


class TestSetupLoggingFormats:
    """Test setup_logging with different log formats."""

    @pytest.mark.parametrize(
        "log_format,expected_format",
        [
            ("simple", LOG_FORMATS["simple"]),
            ("detailed", LOG_FORMATS["detailed"]),
            ("json", LOG_FORMATS["json"]),
            ("unknown", LOG_FORMATS["detailed"]),
        ],
    )
    def test_setup_logging_with_different_formats(self, log_format, expected_format):
        """Test setup_logging configures correct format."""
        setup_logging(log_format=log_format, enable_file=False)

        console_handler = _console_handler()
        assert console_handler is not None
        assert console_handler.formatter._fmt == expected_format

    def test_setup_logging_format_with_timestamp(self):
        """Test that formatter includes timestamp."""
        setup_logging(log_format="detailed", enable_file=False)

        assert _console_handler().formatter.datefmt == DATE_FORMAT


class TestSetupLoggingFileHandling:
    """Test setup_logging file logging functionality."""

    def test_setup_logging_with_file_enabled(self):
        """Test setup_logging creates the rotating file handler when enabled."""
        with tempfile.TemporaryDirectory() as tmpdir:
            log_dir = Path(tmpdir) / "new_logs"
            with (
                patch.object(settings, "log_file_dir", str(log_dir)),
                patch.object(settings, "enable_file_logging", True),
            ):
                try:
                    setup_logging(log_level="ERROR", enable_file=True)

                    file_handler = _file_handler()
                    assert isinstance(file_handler, logging.handlers.RotatingFileHandler)
                    assert file_handler.level == logging.DEBUG
                    assert Path(file_handler.baseFilename) == log_dir / "user_service.log"
                    assert log_dir.exists()
                finally:
                    setup_logging(enable_file=False)

    def test_setup_logging_with_file_disabled(self):
        """Test setup_logging does not create file handler when disabled."""
        with patch.object(settings, "enable_file_logging", True):
            setup_logging(enable_file=False)

        assert _file_handler() is None

    def test_setup_logging_file_logging_needs_setting(self):
        """File logging stays off unless ENABLE_FILE_LOGGING is set."""
        with patch.object(settings, "enable_file_logging", False):
            setup_logging(enable_file=True)

        assert _file_handler() is None


class TestSetupLoggingHandlerManagement:
    """Test setup_logging handler management."""

    def test_setup_logging_replaces_existing_handlers(self):
        """Calling setup_logging twice leaves a single console handler."""
        setup_logging(enable_file=False)
        setup_logging(enable_file=False)

        assert len(logging.getLogger().handlers) == 1

    def test_existing_loggers_stay_enabled(self):
        logger = get_logger("user_service.server.services.users")

        setup_logging(enable_file=False)

        assert logger.disabled is False


class TestSetupLoggingModuleSpecificLevels:
    """Test module-specific log level configuration."""

    @pytest.mark.parametrize(
        "module_name,expected_level",
        [
            ("user_service.core", logging.INFO),
            ("user_service.server", logging.INFO),
            ("user_service.server.api", logging.DEBUG),
            ("user_service.server.services", logging.DEBUG),
            ("sqlalchemy", logging.WARNING),
            ("passlib", logging.ERROR),
            ("httpx", logging.WARNING),
        ],
    )
    def test_module_specific_log_levels(self, module_name, expected_level):
        """Test module-specific log levels are configured correctly."""
        setup_logging(enable_file=False)

        assert logging.getLogger(module_name).level == expected_level


class TestGetLogger:
    """Test get_logger function."""

    def test_get_logger_returns_named_logger(self):
        logger = get_logger("user_service.test")

        assert isinstance(logger, logging.Logger)
        assert logger.name == "user_service.test"

    def test_get_logger_same_instance(self):
        assert get_logger("user_service.same") is get_logger("user_service.same")
