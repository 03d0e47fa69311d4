"""Alembic environment — migrations for the users and products tables.

Invariants:
    - The database URL comes from stockroom Settings (DATABASE_URL / .env),
      already rewritten to an async driver; alembic.ini is only the fallback
    - SQLite runs in batch mode so ALTERs are emulated by table copy
    - Online mode always goes through an async engine with NullPool
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.ext.asyncio import create_async_engine

from alembic import context

from stockroom.config import get_settings
from stockroom.db.base import Base
from stockroom import models  # noqa: F401  (populates Base.metadata)

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def _database_url() -> str:
    return get_settings().database_url or config.get_main_option("sqlalchemy.url")


def _configure(url: str, **options) -> None:
    context.configure(
        target_metadata=Base.metadata,
        render_as_batch=url.startswith("sqlite"),
        compare_type=True,
        **options,
    )


def run_offline(url: str) -> None:
    """Emit SQL to stdout without a connection."""
    _configure(
        url, url=url, literal_binds=True, dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_online(url: str) -> None:
    engine = create_async_engine(url, poolclass=pool.NullPool)

    def _migrate(connection) -> None:
        _configure(url, connection=connection)
        with context.begin_transaction():
            context.run_migrations()

    async with engine.connect() as connection:
        await connection.run_sync(_migrate)
    await engine.dispose()


if context.is_offline_mode():
    run_offline(_database_url())
else:
    asyncio.run(run_online(_database_url()))
