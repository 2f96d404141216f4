"""
Test Configuration and Fixtures

This module provides:
- A throwaway SQLite database per xdist worker (aiosqlite driver)
- Table cleanup between integration tests
- Session-scoped TestClient and users (admin and customers)

Architecture:
- Unit tests (test/**/unit/): Override fixtures with no-ops in their own conftest.py
- Integration tests: Go through the HTTP API against the real schema
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read at import time, so DATABASE_URL must be set first
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    db_path = test_log_dir / f'cinema_test_{worker_id}.db'
    os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{db_path}'

    os.environ['CINEMA_TIMEZONE'] = 'UTC'
    os.environ['CANCELLATION_WINDOW_HOURS'] = '2'
    os.environ.setdefault('SECRET_KEY', 'test_secret_key')


_early_setup_test_environment()

import asyncio  # noqa: E402
from collections.abc import Generator  # noqa: E402
from typing import Any  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import delete  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402

from src.platform.database.db_setting import Base  # noqa: E402
import src.service.cinema.driven_adapter.model  # noqa: E402, F401
from test.constants import (  # noqa: E402
    ANOTHER_CUSTOMER_EMAIL,
    ANOTHER_CUSTOMER_NAME,
    DEFAULT_PASSWORD,
    TEST_ADMIN_EMAIL,
    TEST_ADMIN_NAME,
    TEST_CUSTOMER_EMAIL,
    TEST_CUSTOMER_NAME,
)
from test.shared.utils import create_user  # noqa: E402


# =============================================================================
# Pytest Hooks: Detect test type and setup accordingly
# =============================================================================
def _is_unit_test_only_run(config: pytest.Config) -> bool:
    markexpr = config.getoption('markexpr', default='')
    if markexpr and 'unit' in str(markexpr) and 'not unit' not in str(markexpr):
        return True

    args = config.args or []
    test_paths = [arg for arg in args if arg and not arg.startswith('-')]
    return bool(test_paths and all('/unit/' in path or '\\unit\\' in path for path in test_paths))


def pytest_sessionstart(session: pytest.Session) -> None:
    if _is_unit_test_only_run(session.config):
        return

    asyncio.run(_setup_test_database())


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        markers = [m.name for m in item.iter_markers()]
        if 'unit' not in markers:
            item.fixturenames.insert(0, 'clean_database')


# =============================================================================
# Database Setup and Cleanup
# =============================================================================
def _get_test_database_url() -> str:
    return os.environ['DATABASE_URL']


async def _setup_test_database() -> None:
    engine = create_async_engine(_get_test_database_url())
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()


async def _clean_all_tables() -> None:
    engine = create_async_engine(_get_test_database_url())
    try:
        async with engine.begin() as conn:
            # Children first
            for table in reversed(Base.metadata.sorted_tables):
                await conn.execute(delete(table))
    finally:
        await engine.dispose()


@pytest.fixture(scope='function')
def clean_database() -> Generator[None, None, None]:
    asyncio.run(_clean_all_tables())
    yield


# =============================================================================
# Session-scoped Fixtures
# =============================================================================
@pytest.fixture(scope='session')
def client() -> Generator[TestClient, None, None]:
    from test.test_main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def clear_client_cookies(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    # Skip for unit tests - they don't use the HTTP client
    if 'unit' in [m.name for m in request.node.iter_markers()]:
        yield
        return
    client = request.getfixturevalue('client')
    client.cookies.clear()
    yield
    client.cookies.clear()


# Users are recreated per test because clean_database wipes every table
@pytest.fixture
def admin_user(client: TestClient) -> dict[str, Any]:
    return create_user(client, TEST_ADMIN_EMAIL, DEFAULT_PASSWORD, TEST_ADMIN_NAME, 'admin')


@pytest.fixture
def customer_user(client: TestClient) -> dict[str, Any]:
    return create_user(
        client, TEST_CUSTOMER_EMAIL, DEFAULT_PASSWORD, TEST_CUSTOMER_NAME, 'user'
    )


@pytest.fixture
def another_customer_user(client: TestClient) -> dict[str, Any]:
    return create_user(
        client, ANOTHER_CUSTOMER_EMAIL, DEFAULT_PASSWORD, ANOTHER_CUSTOMER_NAME, 'user'
    )
