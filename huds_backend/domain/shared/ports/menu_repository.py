"""Menu repository port (interface).

Defines the contract for per-date menu persistence.
The domain defines the port, infrastructure provides the implementation:
- InMemoryMenuRepository (development, tests)
- MongoMenuRepository (production)
"""

from typing import Protocol, Sequence

from huds_backend.domain.menu.models import CondensedMenu, CondensedMenuItem


class IMenuRepository(Protocol):
    """
    Interface for condensed menu persistence.

    The serve date is the natural key: at most one document per date.

    Example usage (application layer):
        >>> class MenuQueryService:
        ...     def __init__(self, repository: IMenuRepository):
        ...         self._repository = repository
        ...
        ...     async def get_menu(self, serve_date: str) -> CondensedMenu:
        ...         return await self._repository.find_by_date(serve_date)
    """

    async def upsert_menu(
        self,
        serve_date: str,
        breakfast: Sequence[CondensedMenuItem],
        lunch: Sequence[CondensedMenuItem],
        dinner: Sequence[CondensedMenuItem],
    ) -> None:
        """
        Insert or replace the menu for a serve date.

        Idempotent: repeating a call with identical input leaves storage
        unchanged.

        Raises:
            MenuStorageError: If the write fails
        """
        ...

    async def find_by_date(self, serve_date: str) -> CondensedMenu:
        """
        Exact-match lookup by serve date (``MM/DD/YYYY``).

        Raises:
            MenuNotFoundError: No document for the date
            MenuStorageError: Any other storage failure
        """
        ...

    async def find_earliest(self) -> CondensedMenu:
        """
        Menu with the chronologically earliest serve date.

        Raises:
            MenuNotFoundError: Storage is empty
        """
        ...

    async def find_latest(self) -> CondensedMenu:
        """
        Menu with the chronologically latest serve date.

        Raises:
            MenuNotFoundError: Storage is empty
        """
        ...

    async def count(self) -> int:
        """Number of stored menus (may be an estimate)."""
        ...
