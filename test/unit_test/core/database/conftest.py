"""Test configuration for database unit tests.

This module provides common fixtures and utilities for testing the
database layer with in-memory SQLite.
"""

from __future__ import annotations

from typing import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from user_service.core.database.utils import create_all, create_engine, create_sessionmaker


@pytest.fixture(scope="function")
async def in_memory_engine() -> AsyncGenerator:
    """Create in-memory SQLite engine with all tables for testing."""
    engine = create_engine("sqlite+aiosqlite:///:memory:")
    await create_all(engine)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture(scope="function")
async def in_memory_session(in_memory_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create in-memory SQLite session for testing."""
    async with create_sessionmaker(in_memory_engine)() as session:
        yield session


@pytest.fixture(scope="function")
def sample_user_data() -> dict:
    """Sample user data for testing."""
    return {
        "username": "Alice",
        "email": "Alice@Example.com",
        "password": "$2b$04$abcdefghijklmnopqrstuuJ1E1Vn6Fj8Qx0dYqjzGv2wz0bK9o3W.",
    }
