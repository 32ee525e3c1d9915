"""Repository Factory for Persistence Layer.

Environment-based repository selection.
Strategy:
- REPOSITORY_BACKEND=mongodb (default, production persistence)
- REPOSITORY_BACKEND=inmemory (local development, tests)

Usage:
    from huds_backend.infrastructure.persistence.factory import (
        create_menu_repository,
    )

    repo = create_menu_repository(mongo_client)
"""

from __future__ import annotations

from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorClient

from huds_backend.domain.shared.errors import ConfigError
from huds_backend.domain.shared.ports.menu_repository import IMenuRepository
from huds_backend.infrastructure.config import (
    get_mongodb_collection,
    get_mongodb_database,
    get_repository_backend,
)
from huds_backend.infrastructure.persistence.in_memory.menu_repository import (
    InMemoryMenuRepository,
)
from huds_backend.infrastructure.persistence.mongodb.menu_repository import (
    MongoMenuRepository,
)


def create_menu_repository(
    client: Optional[AsyncIOMotorClient[Any]] = None,
) -> IMenuRepository:
    """Create menu repository based on REPOSITORY_BACKEND env var.

    Args:
        client: Connected Motor client (required for "mongodb")

    Returns:
        IMenuRepository: Repository instance

    Raises:
        ConfigError: Unknown backend, or mongodb selected without a client
    """
    mode = get_repository_backend()

    if mode == "inmemory":
        return InMemoryMenuRepository()

    if mode == "mongodb":
        if client is None:
            raise ConfigError("REPOSITORY_BACKEND=mongodb requires a MongoDB client")
        return MongoMenuRepository(
            client[get_mongodb_database()],
            collection_name=get_mongodb_collection(),
        )

    raise ConfigError(
        f"Unknown REPOSITORY_BACKEND={mode!r}. Use 'mongodb' or 'inmemory'"
    )
