"""
Menu ingestion service.

One refresh cycle: fetch raw records from HUDS, condense them, upsert one
document per serve date and, when today's menu is in the batch, replace
the in-memory cache.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timezone
from typing import Callable, Optional

import structlog

from huds_backend.domain.menu.condenser import build_condensed_menus, condense_menu_items
from huds_backend.domain.menu.models import CondensedMenu
from huds_backend.domain.menu.serve_date import (
    DEFAULT_TIMEZONE,
    format_serve_date,
    parse_serve_date,
    today,
)
from huds_backend.domain.shared.ports.menu_repository import IMenuRepository
from huds_backend.infrastructure.cache.today_menu_cache import TodayMenuCache
from huds_backend.infrastructure.external_apis.huds.client import HUDSApiClient

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class IngestionResult:
    """Outcome of one refresh cycle."""

    raw_count: int
    stored_dates: list[str] = field(default_factory=list)
    skipped_dates: list[str] = field(default_factory=list)
    cache_refreshed: bool = False


class MenuIngestionService:
    """Fetch → condense → store → cache.

    Errors from the API client (FetchError, DecodeError) and from storage
    (MenuStorageError) propagate to the caller; the cache is only replaced
    after every date in the batch has been stored.
    """

    def __init__(
        self,
        api_client: HUDSApiClient,
        repository: IMenuRepository,
        cache: TodayMenuCache,
        tz: timezone = DEFAULT_TIMEZONE,
        on_stored: Optional[Callable[[list[date]], None]] = None,
    ) -> None:
        """Initialize service.

        Args:
            api_client: Initialized HUDS API client
            repository: Menu storage
            cache: Today's menu cache
            tz: Timezone deciding what "today" is
            on_stored: Called with the calendar dates stored by a cycle
        """
        self.api_client = api_client
        self.repository = repository
        self.cache = cache
        self.tz = tz
        self.on_stored = on_stored

    async def run(self) -> IngestionResult:
        raw_items = await self.api_client.fetch_menu_items()
        menus = build_condensed_menus(condense_menu_items(raw_items))

        current_day = today(self.tz)
        stored: list[str] = []
        stored_dates: list[date] = []
        skipped: list[str] = []
        todays_menu: Optional[CondensedMenu] = None

        for menu in menus:
            try:
                served_on = parse_serve_date(menu.serve_date)
            except ValueError:
                logger.warning("Skipping menu with invalid serve date", serve_date=menu.serve_date)
                skipped.append(menu.serve_date)
                continue

            # Stored under the zero-padded form the read path looks up
            key = format_serve_date(served_on)
            await self.repository.upsert_menu(key, menu.breakfast, menu.lunch, menu.dinner)
            stored.append(key)
            stored_dates.append(served_on)
            if served_on == current_day:
                todays_menu = menu.model_copy(update={"serve_date": key})

        if todays_menu is not None:
            self.cache.set(todays_menu)

        if stored_dates and self.on_stored is not None:
            self.on_stored(stored_dates)

        logger.info(
            "Menu ingestion completed",
            raw_items=len(raw_items),
            stored=len(stored),
            skipped=len(skipped),
            cache_refreshed=todays_menu is not None,
        )
        return IngestionResult(
            raw_count=len(raw_items),
            stored_dates=stored,
            skipped_dates=skipped,
            cache_refreshed=todays_menu is not None,
        )
