"""
Unit test configuration for the cinema service.

Overrides autouse fixtures from the root conftest so unit tests run without
a database and never start the session-scoped TestClient.
"""

from collections.abc import Generator
from unittest.mock import MagicMock

from fastapi.testclient import TestClient
import pytest


@pytest.fixture(autouse=True, scope='function')
def clean_database() -> Generator[None, None, None]:
    """No-op override for unit tests - no real database needed"""
    yield


@pytest.fixture(scope='session')
def client() -> Generator[MagicMock, None, None]:
    """Mock client for unit tests - prevents TestClient/lifespan from being created"""
    mock_client = MagicMock(spec=TestClient)
    yield mock_client


@pytest.fixture(autouse=True)
def clear_client_cookies(client: MagicMock) -> Generator[None, None, None]:
    """No-op override for unit tests - uses mock client"""
    yield
