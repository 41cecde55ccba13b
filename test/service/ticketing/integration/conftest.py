"""
Integration Test Fixtures

Runs against the PostgreSQL named by the POSTGRES_* settings (database
``tickethub_test_db``). The schema is rebuilt once per session through alembic and
every table is truncated before each test. The suite is skipped when no server
answers.
"""

import asyncio
from typing import AsyncGenerator, Generator, List, Optional

from alembic import command
from alembic.config import Config
import pytest
from sqlalchemy import exc, text
from sqlalchemy.ext.asyncio import create_async_engine

from src.platform.config.core_setting import settings
from src.platform.constant.path import BASE_DIR
from src.platform.database.orm_db_setting import Database, dispose_engine


_cached_tables: Optional[List[str]] = None


async def _setup_test_database() -> None:
    db_url = settings.DATABASE_URL_ASYNC
    server_url, db_name = db_url.rsplit('/', 1)

    # Create database if not exists
    engine = create_async_engine(f'{server_url}/postgres', isolation_level='AUTOCOMMIT')
    try:
        async with engine.connect() as conn:
            result = await conn.execute(
                text('SELECT 1 FROM pg_database WHERE datname = :name'), {'name': db_name}
            )
            if not result.fetchone():
                await conn.execute(text(f'CREATE DATABASE "{db_name}"'))
    finally:
        await engine.dispose()

    reset_engine = create_async_engine(db_url)
    try:
        async with reset_engine.begin() as conn:
            await conn.execute(text('DROP SCHEMA public CASCADE'))
            await conn.execute(text('CREATE SCHEMA public'))
    finally:
        await reset_engine.dispose()


async def _clean_all_tables() -> None:
    global _cached_tables
    engine = create_async_engine(settings.DATABASE_URL_ASYNC)
    try:
        async with engine.begin() as conn:
            if _cached_tables is None:
                result = await conn.execute(
                    text(
                        "SELECT tablename FROM pg_tables WHERE schemaname = 'public' "
                        "AND tablename != 'alembic_version'"
                    )
                )
                _cached_tables = [row[0] for row in result]

            if _cached_tables:
                quoted = [f'"{table}"' for table in _cached_tables]
                await conn.execute(text(f'TRUNCATE {", ".join(quoted)} RESTART IDENTITY CASCADE'))
    finally:
        await engine.dispose()


@pytest.fixture(scope='session')
def migrated_database() -> Generator[None, None, None]:
    try:
        asyncio.run(_setup_test_database())
    except (OSError, exc.DBAPIError) as e:
        pytest.skip(f'PostgreSQL is not reachable: {e}')

    # env.py runs its own event loop, so this stays outside asyncio.run
    alembic_cfg = Config(str(BASE_DIR / 'alembic.ini'))
    alembic_cfg.set_main_option('sqlalchemy.url', settings.DATABASE_URL_ASYNC)
    command.upgrade(alembic_cfg, 'head')
    yield


@pytest.fixture
async def clean_database(migrated_database: None) -> AsyncGenerator[None, None]:
    await _clean_all_tables()
    yield
    await dispose_engine()


@pytest.fixture
def database(clean_database: None) -> Database:
    return Database()

