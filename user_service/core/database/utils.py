"""
Database utility functions for engine and session management.

This module provides the core utility functions for creating database engines
and session factories. Built with async SQLAlchemy.

Functions:
- normalize_database_url: Rewrites sync driver URLs to their async drivers
- create_engine: Creates async SQLAlchemy engine with URL normalization
- create_sessionmaker: Creates async session factory with safe defaults
- create_all / drop_all: Create or drop all tables from ORM metadata (for tests/dev)
- ping: Runs a trivial query to verify connectivity
"""

from __future__ import annotations

import re
from datetime import datetime, timezone

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from .base import Base

_MYSQL_URL = re.compile(r"^(?:mysql|mariadb)(?:\+[a-z0-9_]+)?://")
_SQLITE_URL = re.compile(r"^sqlite(?:\+[a-z0-9_]+)?://")
_POSTGRES_URL = re.compile(r"^postgres(?:ql)?(?:\+[a-z0-9_]+)?://")


def normalize_database_url(db_url: str) -> str:
    """Rewrite a database URL so that it uses an async driver.

    ``mysql://``, ``mysql+pymysql://`` and ``mariadb://`` become
    ``mysql+aiomysql://``; ``sqlite://`` becomes ``sqlite+aiosqlite://``;
    ``postgres://`` and ``postgresql://`` variants become ``postgresql+asyncpg://``.
    Any other URL is returned unchanged.
    """
    if _MYSQL_URL.match(db_url):
        return _MYSQL_URL.sub("mysql+aiomysql://", db_url, count=1)
    if _SQLITE_URL.match(db_url):
        return _SQLITE_URL.sub("sqlite+aiosqlite://", db_url, count=1)
    if _POSTGRES_URL.match(db_url):
        return _POSTGRES_URL.sub("postgresql+asyncpg://", db_url, count=1)
    return db_url


def create_engine(db_url: str, echo: bool = False) -> AsyncEngine:
    """Create an async SQLAlchemy engine.

    In-memory SQLite databases get a ``StaticPool`` so that every session sees
    the same database.

    Args:
        db_url: Database connection URL
        echo: Log emitted SQL statements

    Returns:
        Configured AsyncEngine instance
    """
    url = normalize_database_url(db_url)
    if url.startswith("sqlite"):
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url.rstrip("/").endswith("sqlite+aiosqlite:"):
            kwargs["poolclass"] = StaticPool
        return create_async_engine(url, echo=echo, **kwargs)
    return create_async_engine(url, echo=echo, pool_pre_ping=True, pool_recycle=3600)


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create an ``async_sessionmaker`` with safe defaults for this project.

    Args:
        engine: Async SQLAlchemy engine

    Returns:
        Configured async session factory
    """
    return async_sessionmaker(engine, expire_on_commit=False)


async def create_all(engine: AsyncEngine) -> None:
    """Create all tables for the current ORM metadata.

    This is mainly intended for tests and local development.
    Production should use Alembic migrations instead.

    Args:
        engine: Async SQLAlchemy engine
    """
    from . import entities  # noqa: F401  registers the table models

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_all(engine: AsyncEngine) -> None:
    """Drop all tables of the current ORM metadata."""
    from . import entities  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def ping(engine: AsyncEngine) -> None:
    """Run ``SELECT 1`` against the engine; raises when the database is unreachable."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


def utc_now() -> datetime:
    """Get current UTC datetime.

    Returns:
        Current timezone-aware UTC datetime
    """
    return datetime.now(timezone.utc)
