"""
MongoDB client lifecycle helpers.

The client returned by :func:`create_mongo_client` is a Motor client: every
driver call made through it runs on Motor's I/O thread pool and is awaited
from the event loop. Pooling, retries and timeouts are left at the driver's
defaults.

Usage:
    from mdb_docstore.database import create_mongo_client, close_mongo_client

    client = create_mongo_client()  # mongodb://localhost:27017 unless MONGO_URI is set
    db = client["testdb"]
    ...
    close_mongo_client(client)
"""

import logging

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import (
    ConnectionFailure,
    InvalidOperation,
    OperationFailure,
    ServerSelectionTimeoutError,
)

from ..config import StoreConfig
from ..observability import get_logger as get_contextual_logger
from ..observability import timed_operation

logger = logging.getLogger(__name__)
contextual_logger = get_contextual_logger(__name__)


def create_mongo_client(
    connection_string: str | None = None,
    config: StoreConfig | None = None,
) -> AsyncIOMotorClient:
    """
    Create a MongoDB client. The client must be closed when no longer needed.

    No I/O happens here; the driver connects lazily on the first operation.
    Malformed connection strings raise whatever the driver raises; a bad
    configured fallback raises ConfigurationError.

    Args:
        connection_string: MongoDB URI. Defaults to the configured URI, which
                           is the local endpoint unless MONGO_URI is set.
        config: Optional configuration (defaults to StoreConfig())

    Returns:
        AsyncIOMotorClient instance
    """
    config = config or StoreConfig()
    if connection_string is None:
        config.validate()
        mongo_uri = config.mongo_uri
    else:
        mongo_uri = connection_string

    client = AsyncIOMotorClient(mongo_uri, appname=config.app_name)
    contextual_logger.debug(
        "MongoDB client created",
        extra={"app_name": config.app_name, "default_uri": connection_string is None},
    )
    return client


@timed_operation("connection.verify")
async def verify_client(client: AsyncIOMotorClient) -> bool:
    """
    Ping the server behind ``client``.

    Returns:
        True if the server answered, False otherwise
    """
    try:
        await client.admin.command("ping")
        logger.debug("MongoDB client verification successful")
        return True
    except (
        ConnectionFailure,
        ServerSelectionTimeoutError,
        OperationFailure,
        InvalidOperation,
    ) as e:
        logger.warning(f"MongoDB client verification failed: {e}")
        return False


def close_mongo_client(client: AsyncIOMotorClient | None) -> None:
    """
    Close ``client``. Passing None is a no-op.
    """
    if client is None:
        return

    try:
        client.close()
        logger.info("MongoDB client closed")
    except (InvalidOperation, AttributeError) as e:
        logger.warning(f"Error closing MongoDB client: {e}")
