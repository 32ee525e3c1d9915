"""In-memory menu repository implementation.

Provides an in-memory implementation of IMenuRepository for development
and tests. Uses a dictionary keyed by serve date with no external
dependencies.
"""

from typing import Dict, Sequence

from huds_backend.domain.menu.models import CondensedMenu, CondensedMenuItem
from huds_backend.domain.menu.serve_date import parse_serve_date
from huds_backend.domain.shared.errors import MenuNotFoundError


class InMemoryMenuRepository:
    """
    In-memory implementation of IMenuRepository port.

    Persistence: Data lost on process restart (in-memory only)

    Example:
        >>> repository = InMemoryMenuRepository()
        >>> await repository.upsert_menu("10/19/2026", [], [], dinner)
        >>> menu = await repository.find_by_date("10/19/2026")
    """

    def __init__(self) -> None:
        """Initialize repository with empty storage."""
        self._storage: Dict[str, CondensedMenu] = {}

    async def upsert_menu(
        self,
        serve_date: str,
        breakfast: Sequence[CondensedMenuItem],
        lunch: Sequence[CondensedMenuItem],
        dinner: Sequence[CondensedMenuItem],
    ) -> None:
        # Validates the date format the same way the Mongo key does
        parse_serve_date(serve_date)
        self._storage[serve_date] = CondensedMenu(
            serve_date=serve_date,
            breakfast=list(breakfast),
            lunch=list(lunch),
            dinner=list(dinner),
        )

    async def find_by_date(self, serve_date: str) -> CondensedMenu:
        menu = self._storage.get(serve_date)
        if menu is None:
            raise MenuNotFoundError(f"No menu stored for {serve_date}")
        return menu

    async def find_earliest(self) -> CondensedMenu:
        if not self._storage:
            raise MenuNotFoundError("No menus stored")
        return min(self._storage.values(), key=lambda m: parse_serve_date(m.serve_date))

    async def find_latest(self) -> CondensedMenu:
        if not self._storage:
            raise MenuNotFoundError("No menus stored")
        return max(self._storage.values(), key=lambda m: parse_serve_date(m.serve_date))

    async def count(self) -> int:
        return len(self._storage)

    def clear(self) -> None:
        """Clear all data (for testing)."""
        self._storage.clear()
