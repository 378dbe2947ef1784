"""Alembic migration environment for user-service.

Runs migrations through the same async engine factory the application uses.
The target URL is resolved in this order: ``-x db_url=...``, ``sqlalchemy.url``
from the Alembic config, then the application settings.
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy.engine import Connection

from alembic import context
from user_service.core.database.base import Base
from user_service.core.database.entities import users  # noqa: F401
from user_service.core.database.utils import create_engine, normalize_database_url
from user_service.server.core.config import settings

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata


def get_url() -> str:
    x_args = context.get_x_argument(as_dictionary=True)
    url = x_args.get("db_url") or config.get_main_option("sqlalchemy.url") or settings.resolved_database_url
    return normalize_database_url(url)


def run_migrations_offline() -> None:
    """Emit the migration SQL to the output buffer without a database connection."""
    context.configure(
        url=get_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    engine = create_engine(get_url())

    async with engine.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await engine.dispose()


def run_migrations_online() -> None:
    """Run migrations against a live database."""
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
