"""Migration environment for po_order_analysis / cpi_data.

The URL comes from the application settings (DATABASE_URL or .env) unless
alembic.ini sets sqlalchemy.url explicitly, so migrations and the forecast
CLI always target the same database.
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

import poforecast.infrastructure.persistence.models  # noqa: F401  (registers mappers)
from poforecast.infrastructure.database import Base
from poforecast.infrastructure.settings import Settings

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

if not config.get_main_option("sqlalchemy.url"):
    # configparser interpolation: escape % in passwords.
    config.set_main_option("sqlalchemy.url", Settings().database_url.replace("%", "%%"))

target_metadata = Base.metadata


def _configure(**kwargs) -> None:  # type: ignore[no-untyped-def]
    context.configure(target_metadata=target_metadata, compare_type=True, **kwargs)
    with context.begin_transaction():
        context.run_migrations()


def migrate_offline() -> None:
    """Render the migration SQL without a database connection."""
    _configure(
        url=config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )


def _migrate_sync(connection: Connection) -> None:
    _configure(connection=connection)


async def migrate_online() -> None:
    engine = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_migrate_sync)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    migrate_offline()
else:
    asyncio.run(migrate_online())
