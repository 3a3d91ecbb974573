"""
Pytest configuration and shared fixtures for MDB_DOCSTORE tests.

This module provides:
- Mock Motor database/collection fixtures
- Testcontainers fixtures for integration tests
"""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest

from mdb_docstore.observability import get_metrics_collector

# ============================================================================
# MOCK MONGODB FIXTURES
# ============================================================================


def make_mock_collection(name: str = "users", database_name: str = "testdb") -> MagicMock:
    """Create a mock Motor collection with async write/read methods."""
    collection = MagicMock()
    collection.name = name
    collection.database.name = database_name
    collection.insert_one = AsyncMock(return_value=MagicMock(acknowledged=True, inserted_id="1"))
    collection.replace_one = AsyncMock(
        return_value=MagicMock(acknowledged=True, matched_count=1, upserted_id=None)
    )
    collection.find_one = AsyncMock(return_value=None)

    cursor = MagicMock()
    cursor.__aiter__.return_value = []
    collection.find = MagicMock(return_value=cursor)
    return collection


@pytest.fixture
def mock_mongo_collection() -> MagicMock:
    """Create a mock Motor collection named 'users'."""
    return make_mock_collection("users")


@pytest.fixture
def mock_mongo_database(mock_mongo_collection: MagicMock) -> MagicMock:
    """Create a mock Motor database whose collections are created on demand."""
    db = MagicMock()
    db.name = "testdb"
    collections = {"users": mock_mongo_collection}

    def get_collection(name: str) -> MagicMock:
        if name not in collections:
            collections[name] = make_mock_collection(name)
        return collections[name]

    db.get_collection = MagicMock(side_effect=get_collection)
    db.list_collection_names = AsyncMock(return_value=list(collections))
    return db


@pytest.fixture
def mock_mongo_client() -> MagicMock:
    """Create a mock Motor client."""
    client = MagicMock()
    client.admin = MagicMock()
    client.admin.command = AsyncMock(return_value={"ok": 1})
    return client


# ============================================================================
# ENVIRONMENT / GLOBAL STATE
# ============================================================================


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch):
    """Clear configuration environment variables before each test."""
    for var in ("MONGO_URI", "MONGO_APP_NAME"):
        monkeypatch.delenv(var, raising=False)
    yield


@pytest.fixture(autouse=True)
def reset_metrics():
    """Start every test with an empty metrics collector."""
    get_metrics_collector().reset()
    yield
    get_metrics_collector().reset()


# ============================================================================
# TESTCONTAINERS FIXTURES (Real MongoDB for Integration Tests)
# ============================================================================


@pytest.fixture(scope="session")
def mongodb_container():
    """
    Start a MongoDB container for integration tests.

    Session-scoped: the container starts once and is reused by all integration tests.
    """
    try:
        from testcontainers.mongodb import MongoDbContainer
    except ImportError:
        pytest.skip("testcontainers not installed. Install with: pip install -e '.[test]'")

    with MongoDbContainer(image="mongo:7") as container:
        yield container


@pytest.fixture
def mongodb_connection_string(mongodb_container) -> str:
    """Connection string for the test container."""
    return mongodb_container.get_connection_url()


@pytest.fixture
async def real_mongo_client(mongodb_connection_string):
    """
    Create a real client (through the package factory) connected to the container.

    Automatically closes the client after the test.
    """
    from mdb_docstore.database import close_mongo_client, create_mongo_client, verify_client

    client = create_mongo_client(mongodb_connection_string)
    if not await verify_client(client):
        pytest.fail("Failed to connect to MongoDB container")

    yield client

    close_mongo_client(client)


@pytest.fixture
async def real_mongo_db(real_mongo_client):
    """
    A fresh database per test, dropped afterwards.
    """
    db_name = f"testdb_{os.getpid()}_{id(real_mongo_client)}"
    db = real_mongo_client[db_name]

    yield db

    await real_mongo_client.drop_database(db_name)
