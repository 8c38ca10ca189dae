"""Alembic environment for the book and api_key tables.

Invariants:
    - DATABASE_URL, when set, wins over sqlalchemy.url in alembic.ini and goes
      through Settings so the asyncpg driver rewrite matches the app
    - Online runs use a throwaway NullPool async engine
"""

import asyncio
import os
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.ext.asyncio import create_async_engine

from alembic import context

from bookshelf.config import get_settings
from bookshelf.db.base import Base
import bookshelf.models  # noqa: F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def _migration_url() -> str:
    if os.environ.get("DATABASE_URL"):
        return get_settings().database_url
    return config.get_main_option("sqlalchemy.url")


def _configure_and_run(**options) -> None:
    context.configure(target_metadata=Base.metadata, **options)
    with context.begin_transaction():
        context.run_migrations()


async def _migrate_online(url: str) -> None:
    engine = create_async_engine(url, poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(
                lambda sync_conn: _configure_and_run(connection=sync_conn),
            )
    finally:
        await engine.dispose()


if context.is_offline_mode():
    # Emits SQL to stdout instead of connecting
    _configure_and_run(
        url=_migration_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
else:
    asyncio.run(_migrate_online(_migration_url()))
