"""Cache implementations."""

from huds_backend.infrastructure.cache.today_menu_cache import TodayMenuCache

__all__ = [
    "TodayMenuCache",
]
