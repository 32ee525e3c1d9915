"""
In-memory cache for today's menu.

Holds a single CondensedMenu snapshot, replaced wholesale by the daily
refresh job or by a request that reads today's menu from storage.
"""

import threading
from typing import Optional

import structlog

from huds_backend.domain.menu.models import CondensedMenu

logger = structlog.get_logger(__name__)


class TodayMenuCache:
    """Thread-safe single-slot menu cache.

    CondensedMenu is immutable, so readers get the snapshot itself; the
    lock only guards swapping the reference.

    Example:
        >>> cache = TodayMenuCache()
        >>> cache.set(menu)
        >>> assert cache.get_for(menu.serve_date) is menu
    """

    def __init__(self) -> None:
        """Initialize empty cache."""
        self._lock = threading.Lock()
        self._menu: Optional[CondensedMenu] = None

    def get(self) -> Optional[CondensedMenu]:
        """Current snapshot, or None if empty."""
        with self._lock:
            return self._menu

    def get_for(self, serve_date: str) -> Optional[CondensedMenu]:
        """Cached menu for serve_date if it has at least one dinner item.

        Args:
            serve_date: ``MM/DD/YYYY`` text

        Returns:
            The cached menu or None on a miss
        """
        menu = self.get()
        if menu is None or menu.serve_date != serve_date or not menu.has_dinner:
            logger.debug("Cache miss", serve_date=serve_date)
            return None

        logger.debug("Cache hit", serve_date=serve_date)
        return menu

    def set(self, menu: CondensedMenu) -> None:
        """Replace the cached menu."""
        with self._lock:
            self._menu = menu
        logger.info(
            "Cached menu",
            serve_date=menu.serve_date,
            breakfast=len(menu.breakfast),
            lunch=len(menu.lunch),
            dinner=len(menu.dinner),
        )

    def clear(self) -> None:
        """Empty the cache (for testing)."""
        with self._lock:
            self._menu = None
        logger.debug("Cache cleared")
