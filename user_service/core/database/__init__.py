"""
Centralized database layer for user-service.

Structure:
- entities/: Database entity models
- repositories/: Data access layer
- schemas/: API schema models for request/response serialization
- mappers.py: Schema-to-entity mapping
- session.py: Global engine and session factory management
- utils.py: Database utility functions (engine, session factory, DDL helpers)
"""

from .base import Base
from .session import (
    async_session_maker,
    engine,
    get_session,
)
from .utils import (
    create_all,
    create_engine,
    create_sessionmaker,
    drop_all,
    normalize_database_url,
    ping,
)

__all__ = [
    "Base",
    "async_session_maker",
    "create_all",
    "create_engine",
    "create_sessionmaker",
    "drop_all",
    "engine",
    "get_session",
    "normalize_database_url",
    "ping",
]
