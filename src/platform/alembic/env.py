import asyncio
import os
from logging.config import fileConfig
from typing import Optional

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from src.platform.config.core_setting import settings
from src.platform.database.orm_db_setting import Base
import src.service.ticketing.driven_adapter.model  # noqa: F401  (registers models)


config = context.config


# Hosting platforms hand out postgresql:// URLs; migrations run on the asyncpg driver
def _normalize_for_alembic(url: Optional[str]) -> Optional[str]:
    if not url:
        return url
    if url.startswith('postgres://'):
        url = 'postgresql://' + url.removeprefix('postgres://')
    if '+psycopg2' in url:
        return url.replace('+psycopg2', '+asyncpg')
    if url.startswith('postgresql://'):
        return 'postgresql+asyncpg://' + url.removeprefix('postgresql://')
    return url


# DATABASE_URL wins, then an explicit sqlalchemy.url (tests set one), then Settings
env_db_url = os.getenv('DATABASE_URL')
ini_url = config.get_main_option('sqlalchemy.url')
config.set_main_option(
    'sqlalchemy.url',
    _normalize_for_alembic(env_db_url or ini_url) or settings.DATABASE_URL_ASYNC,
)

if config.config_file_name:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit SQL without connecting."""
    url = config.get_main_option('sqlalchemy.url')
    if not url:
        raise RuntimeError(
            'No sqlalchemy.url configured for Alembic. Set DATABASE_URL or POSTGRES_* settings.'
        )

    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={'paramstyle': 'named'},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix='sqlalchemy.',
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    """Connect with the async driver and run migrations on a sync facade."""
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
