"""
Logging Configuration Module.

``setup_logging`` installs the service's handlers through
``logging.config.dictConfig``: a console handler at the configured level and,
when ``ENABLE_FILE_LOGGING`` is on, a size-rotated ``user_service.log`` that
records everything down to DEBUG.

Levels for the service's own packages and for noisy libraries live in
``LOGGER_LEVELS``. Settings are read when ``setup_logging`` runs, so importing
this module never loads the server configuration.
"""

import logging
import logging.config
from pathlib import Path
from typing import Any, Dict, Optional

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_FORMATS = {
    "simple": "%(levelname)s - %(name)s - %(message)s",
    "detailed": "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s",
    "json": (
        '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", '
        '"module": "%(filename)s", "function": "%(funcName)s", "line": %(lineno)d, '
        '"message": "%(message)s"}'
    ),
}
DEFAULT_LOG_FORMAT = "detailed"

LOG_FILE_NAME = "user_service.log"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUP_COUNT = 5

LOGGER_LEVELS = {
    "user_service.core": "INFO",
    "user_service.server": "INFO",
    "user_service.server.api": "DEBUG",
    "user_service.server.services": "DEBUG",
    # Authentication failures are logged by the API layer; keep passlib quiet.
    "passlib": "ERROR",
    "sqlalchemy": "WARNING",
    "sqlalchemy.engine": "WARNING",
    "sqlalchemy.pool": "WARNING",
    "alembic": "INFO",
    "httpx": "WARNING",
    "asyncio": "WARNING",
    "uvicorn": "INFO",
    "uvicorn.access": "INFO",
}


def build_logging_config(
    log_level: str = "INFO",
    log_format: str = DEFAULT_LOG_FORMAT,
    log_file_dir: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build a ``dictConfig`` schema for the service.

    Args:
        log_level: Console level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: One of ``LOG_FORMATS``; unknown names fall back to detailed
        log_file_dir: Directory of the rotating log file, or None for console only

    Returns:
        A dictionary accepted by ``logging.config.dictConfig``
    """
    handlers: Dict[str, Dict[str, Any]] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": log_level.upper(),
            "formatter": "default",
        },
    }
    if log_file_dir:
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "DEBUG",
            "formatter": "default",
            "filename": str(Path(log_file_dir) / LOG_FILE_NAME),
            "maxBytes": LOG_FILE_MAX_BYTES,
            "backupCount": LOG_FILE_BACKUP_COUNT,
            "encoding": "utf-8",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": LOG_FORMATS.get(log_format, LOG_FORMATS[DEFAULT_LOG_FORMAT]),
                "datefmt": DATE_FORMAT,
            },
        },
        "handlers": handlers,
        "loggers": {name: {"level": level} for name, level in LOGGER_LEVELS.items()},
        # Handlers filter by level; the root lets every record through.
        "root": {"level": "DEBUG", "handlers": list(handlers)},
    }


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    enable_file: bool = True,
) -> None:
    """
    Configure logging for the application.

    Args:
        log_level: Override the LOG_LEVEL setting
        log_format: Override the LOG_FORMAT setting (simple, detailed, json)
        enable_file: Allow the file handler; it is only added when ENABLE_FILE_LOGGING is on
    """
    from user_service.server.core.config import settings

    level = (log_level or settings.log_level).upper()
    fmt = log_format or settings.log_format
    log_file_dir = settings.log_file_dir if enable_file and settings.enable_file_logging else None
    if log_file_dir:
        Path(log_file_dir).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(build_logging_config(level, fmt, log_file_dir))
    logging.getLogger(__name__).info(f"Logging configured: level={level}, format={fmt}, log_file_dir={log_file_dir}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: The module name (typically __name__)

    Returns:
        A configured logger instance
    """
    return logging.getLogger(name)
