"""Fixtures for Alembic migration tests."""

import io
from pathlib import Path

import pytest

from alembic.config import Config

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent


@pytest.fixture
def sql_buffer() -> io.StringIO:
    """Buffer receiving the SQL emitted by offline migrations."""
    return io.StringIO()


@pytest.fixture
def alembic_config(sql_buffer: io.StringIO) -> Config:
    """Alembic configuration of the project, writing offline SQL to ``sql_buffer``."""
    return Config(str(PROJECT_ROOT / "alembic.ini"), output_buffer=sql_buffer)


@pytest.fixture
def sqlite_file_url(tmp_path: Path) -> str:
    """URL of an empty SQLite database file."""
    return f"sqlite+aiosqlite:///{tmp_path / 'migration.db'}"


@pytest.fixture
def sync_url(sqlite_file_url: str) -> str:
    """Synchronous URL for inspecting the migrated database."""
    return sqlite_file_url.replace("+aiosqlite", "")
