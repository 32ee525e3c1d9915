"""MongoDB client creation and startup connectivity check."""

from __future__ import annotations

import logging
from typing import Any

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError

from huds_backend.domain.shared.errors import StorageConnectionError

logger = logging.getLogger(__name__)


def create_mongo_client(uri: str, timeout_ms: int = 5000) -> AsyncIOMotorClient[Any]:
    """
    Create a Motor client with bounded timeouts.

    Motor connects lazily; call verify_connection() to fail fast.
    """
    return AsyncIOMotorClient(
        uri,
        serverSelectionTimeoutMS=timeout_ms,
        connectTimeoutMS=timeout_ms,
        socketTimeoutMS=timeout_ms,
    )


async def verify_connection(client: AsyncIOMotorClient[Any]) -> None:
    """
    Ping the server.

    Raises:
        StorageConnectionError: If MongoDB cannot be reached
    """
    try:
        await client.admin.command("ping")
    except PyMongoError as e:
        logger.error(f"MongoDB ping failed: {e}")
        raise StorageConnectionError(f"Cannot reach MongoDB: {e}") from e
    logger.info("MongoDB connection verified")
