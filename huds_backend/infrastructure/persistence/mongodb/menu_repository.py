"""
MongoDB implementation of the menu repository.

One document per serve date, upserted by date.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import ValidationError
from pymongo.errors import PyMongoError

from huds_backend.domain.menu.models import CondensedMenu, CondensedMenuItem
from huds_backend.domain.menu.serve_date import serve_date_key
from huds_backend.domain.shared.errors import MenuNotFoundError, MenuStorageError

logger = logging.getLogger(__name__)

# Item keys in documents written by the previous service, whose driver
# stored struct fields lowercased
LEGACY_ITEM_KEYS = {
    "foodname": "Food_Name",
    "allergens": "Allergens",
    "calories": "Calories",
    "menucategory": "Menu_Category_Name",
    "vegan": "Vegan",
    "vegetarian": "Vegetarian",
    "houselocation": "House_Location",
    "mealnumber": "Meal_Number",
    "servedate": "Serve_Date",
}


def _item_from_document(item: dict[str, Any]) -> dict[str, Any]:
    return {LEGACY_ITEM_KEYS.get(key, key): value for key, value in item.items()}


class MongoMenuRepository:
    """
    MongoDB implementation of IMenuRepository.

    Storage design:
    - Collection: data (configurable)
    - Unique index on serve_date (one document per date)
    - Index on serve_date_key (ISO date, chronological sort)

    Document shape:
        {
            "serve_date": "10/19/2026",
            "serve_date_key": "2026-10-19",
            "breakfast": [{"Food_Name": ..., ...}, ...],
            "lunch": [...],
            "dinner": [...],
        }

    Example:
        >>> from motor.motor_asyncio import AsyncIOMotorClient
        >>> client = AsyncIOMotorClient("mongodb://localhost:27017")
        >>> repository = MongoMenuRepository(client.huds)
        >>> await repository.find_by_date("10/19/2026")
    """

    COLLECTION_NAME = "data"

    def __init__(
        self,
        db: AsyncIOMotorDatabase[Any],
        collection_name: Optional[str] = None,
    ):
        """
        Initialize repository with MongoDB database.

        Args:
            db: Motor AsyncIOMotorDatabase instance
            collection_name: Overrides COLLECTION_NAME
        """
        self.db = db
        self.collection_name = collection_name or self.COLLECTION_NAME
        self.collection = db[self.collection_name]
        self._indexes_created = False

    async def ensure_indexes(self) -> None:
        """
        Create indexes if not already created.

        Indexes:
        - Unique index on serve_date
        - Index on serve_date_key
        """
        if self._indexes_created:
            return

        try:
            await self.collection.create_index(
                "serve_date",
                unique=True,
                name="unique_serve_date",
            )
            await self.collection.create_index(
                "serve_date_key",
                name="idx_serve_date_key",
            )
        except PyMongoError as e:
            logger.error(
                f"Error creating indexes: collection={self.collection_name}, error={e}"
            )
            raise MenuStorageError(f"create_index failed: {e}") from e

        self._indexes_created = True

    def _to_document(
        self,
        serve_date: str,
        breakfast: Sequence[CondensedMenuItem],
        lunch: Sequence[CondensedMenuItem],
        dinner: Sequence[CondensedMenuItem],
    ) -> dict[str, Any]:
        return {
            "serve_date": serve_date,
            "serve_date_key": serve_date_key(serve_date),
            "breakfast": [item.to_dict() for item in breakfast],
            "lunch": [item.to_dict() for item in lunch],
            "dinner": [item.to_dict() for item in dinner],
        }

    def _from_document(self, doc: dict[str, Any]) -> CondensedMenu:
        try:
            return CondensedMenu.model_validate(
                {
                    "Serve_Date": doc["serve_date"],
                    "Breakfast": self._items(doc, "breakfast"),
                    "Lunch": self._items(doc, "lunch"),
                    "Dinner": self._items(doc, "dinner"),
                }
            )
        except (AttributeError, KeyError, ValidationError) as e:
            raise MenuStorageError(f"Unreadable menu document: {e}") from e

    @staticmethod
    def _items(doc: dict[str, Any], meal: str) -> list[dict[str, Any]]:
        return [_item_from_document(item) for item in doc.get(meal) or []]

    async def upsert_menu(
        self,
        serve_date: str,
        breakfast: Sequence[CondensedMenuItem],
        lunch: Sequence[CondensedMenuItem],
        dinner: Sequence[CondensedMenuItem],
    ) -> None:
        """Insert or replace the menu for serve_date."""
        await self.ensure_indexes()

        doc = self._to_document(serve_date, breakfast, lunch, dinner)
        try:
            await self.collection.update_one(
                {"serve_date": serve_date},
                {"$set": doc},
                upsert=True,
            )
        except PyMongoError as e:
            logger.error(
                f"Error in update_one: collection={self.collection_name}, "
                f"serve_date={serve_date}, error={e}"
            )
            raise MenuStorageError(f"Failed to upsert menu for {serve_date}: {e}") from e

    async def find_by_date(self, serve_date: str) -> CondensedMenu:
        """Exact-match lookup by serve date."""
        doc = await self._find_one({"serve_date": serve_date})
        if doc is None:
            raise MenuNotFoundError(f"No menu stored for {serve_date}")

        logger.debug(f"Found menu for {serve_date}")
        return self._from_document(doc)

    async def find_earliest(self) -> CondensedMenu:
        return await self._find_edge(direction=1)

    async def find_latest(self) -> CondensedMenu:
        return await self._find_edge(direction=-1)

    async def count(self) -> int:
        try:
            return await self.collection.estimated_document_count()
        except PyMongoError as e:
            raise MenuStorageError(f"estimated_document_count failed: {e}") from e

    async def _find_edge(self, direction: int) -> CondensedMenu:
        doc = await self._find_one(
            {"serve_date_key": {"$exists": True}},
            sort=[("serve_date_key", direction)],
        )
        if doc is None:
            raise MenuNotFoundError("No menus stored")
        return self._from_document(doc)

    async def _find_one(
        self,
        filter_dict: dict[str, Any],
        sort: Optional[list[tuple[str, int]]] = None,
    ) -> Optional[dict[str, Any]]:
        try:
            if sort:
                return await self.collection.find_one(filter_dict, sort=sort)
            return await self.collection.find_one(filter_dict)
        except PyMongoError as e:
            logger.error(
                f"Error in find_one: collection={self.collection_name}, "
                f"filter={filter_dict}, error={e}"
            )
            raise MenuStorageError(f"find_one failed: {e}") from e
