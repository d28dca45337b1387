import asyncio
import os
from pathlib import Path

from fastapi.testclient import TestClient
import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine


# Dedicated SQLite file per pytest-xdist worker
worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
test_db_path = Path(__file__).parent / f'test_seat_inventory_{worker_id}.db'
TEST_DATABASE_URL = f'sqlite+aiosqlite:///{test_db_path}'
os.environ['DATABASE_URL'] = TEST_DATABASE_URL

# Scheduled sweeper / seat count sync are driven explicitly by the tests
os.environ['RUN_BACKGROUND_JOBS'] = 'false'
os.environ['PROMOTION_CODES'] = '{"SAVE10": 10, "HALF": 50}'

# Override LOG_DIR to use test log directory
test_log_dir = Path(__file__).parent / 'test_log'
test_log_dir.mkdir(exist_ok=True)
os.environ['TEST_LOG_DIR'] = str(test_log_dir)

from src.main import app  # noqa: E402
from src.platform.database.db_setting import Base  # noqa: E402
from tests.seat_inventory.fixtures import *  # noqa: E402, F403
from tests.seat_inventory.functional.given import *  # noqa: E402, F403
from tests.seat_inventory.functional.then import *  # noqa: E402, F403
from tests.seat_inventory.functional.when import *  # noqa: E402, F403


async def execute_sql(url: str, statements: list, params: dict | None = None, fetch: bool = False):
    engine = create_async_engine(url)
    try:
        async with engine.begin() as conn:
            rows = []
            for stmt in statements:
                result = await conn.execute(text(stmt), params or {})
                if fetch:
                    rows = [dict(row._mapping) for row in result]
            return rows if fetch else None
    finally:
        await engine.dispose()


@pytest.fixture
def execute_sql_statement():
    """Run raw SQL from synchronous (BDD) steps."""

    def _execute(statement: str, params: dict | None = None, fetch: bool = False):
        return asyncio.run(execute_sql(TEST_DATABASE_URL, [statement], params, fetch))

    return _execute


@pytest.fixture
def run_sql():
    """Run raw SQL from async tests, e.g. to corrupt a counter on purpose."""

    async def _execute(statement: str, params: dict | None = None, fetch: bool = False):
        return await execute_sql(TEST_DATABASE_URL, [statement], params, fetch)

    return _execute


async def setup_test_database():
    if test_db_path.exists():
        test_db_path.unlink()
    engine = create_async_engine(TEST_DATABASE_URL)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()


async def clean_all_tables():
    # Children first so foreign keys never block the delete
    statements = [f'DELETE FROM "{table.name}"' for table in reversed(Base.metadata.sorted_tables)]
    await execute_sql(TEST_DATABASE_URL, statements)


def pytest_sessionstart(session):
    asyncio.run(setup_test_database())


@pytest.fixture(autouse=True)
async def clean_database():
    await clean_all_tables()
    yield


@pytest.fixture(scope='session')
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def clear_client_cookies(client):
    """Drop the auth cookie between tests so no login leaks across scenarios."""
    client.cookies.clear()
    yield
    client.cookies.clear()
