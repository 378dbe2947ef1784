"""
Core utilities and configuration for user-service.

This package provides core functionality including logging configuration,
monitoring, domain errors and the database layer.
"""

from user_service.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
