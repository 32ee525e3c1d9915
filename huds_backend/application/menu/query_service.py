"""
Menu query service.

Serves one serve date's menu: today's menu from the in-memory cache when
possible, otherwise from storage, with range validation deciding between
"not found" and "lookup failed" outcomes.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timezone
from typing import Iterable, Optional

import structlog

from huds_backend.domain.menu.models import CondensedMenu
from huds_backend.domain.menu.serve_date import (
    DEFAULT_TIMEZONE,
    EARLIEST_SUPPORTED_DATE,
    format_serve_date,
    parse_serve_date,
    today,
)
from huds_backend.domain.shared.errors import (
    DateBeforeRecordsError,
    DateOutOfRangeError,
    InvalidServeDateError,
    MenuNotFoundError,
    MenuStorageError,
    MenuUnavailableError,
)
from huds_backend.domain.shared.ports.menu_repository import IMenuRepository
from huds_backend.infrastructure.cache.today_menu_cache import TodayMenuCache

logger = structlog.get_logger(__name__)

SERVE_DATE_REQUIRED = "serve_date query parameter is required"
SERVE_DATE_MALFORMED = "serve_date must be formatted as MM/DD/YYYY"
BEFORE_RECORDS = (
    f"records don't exist before {format_serve_date(EARLIEST_SUPPORTED_DATE)} :("
)
OUT_OF_RANGE = "date out of range"
LOOKUP_FAILED = "Failed to fetch data from MongoDB"


@dataclass(frozen=True)
class RecordRange:
    """Known range of stored serve dates (inclusive)."""

    earliest: date
    latest: date

    def contains(self, value: date) -> bool:
        return self.earliest <= value <= self.latest

    def widened(self, dates: Iterable[date]) -> RecordRange:
        """Range extended to cover dates."""
        dates = list(dates)
        if not dates:
            return self
        return RecordRange(
            earliest=min(self.earliest, *dates),
            latest=max(self.latest, *dates),
        )


async def load_record_range(
    repository: IMenuRepository,
    tz: timezone = DEFAULT_TIMEZONE,
) -> RecordRange:
    """
    Compute the stored date range.

    Falls back to EARLIEST_SUPPORTED_DATE and today when storage is empty
    or cannot be read.
    """
    earliest = EARLIEST_SUPPORTED_DATE
    latest = today(tz)

    try:
        earliest = parse_serve_date((await repository.find_earliest()).serve_date)
        latest = parse_serve_date((await repository.find_latest()).serve_date)
    except MenuNotFoundError:
        logger.info("No stored menus, using default record range")
    except (MenuStorageError, ValueError) as e:
        logger.error("Failed to get earliest and latest records", error=str(e))

    record_range = RecordRange(earliest=earliest, latest=latest)
    logger.info(
        "Record range loaded",
        earliest=format_serve_date(record_range.earliest),
        latest=format_serve_date(record_range.latest),
    )
    return record_range


class MenuQueryService:
    """Read path for /huds-data.

    Outcomes:
    - CondensedMenu on success
    - InvalidServeDateError: missing or malformed serve_date
    - DateBeforeRecordsError / DateOutOfRangeError: no document and the
      date is outside the known range
    - MenuUnavailableError: any other failure
    """

    def __init__(
        self,
        repository: IMenuRepository,
        cache: TodayMenuCache,
        record_range: RecordRange,
        tz: timezone = DEFAULT_TIMEZONE,
    ) -> None:
        """Initialize service.

        Args:
            repository: Menu storage
            cache: Today's menu cache, shared with the refresh job
            record_range: Known stored date range
            tz: Timezone deciding what "today" is
        """
        self.repository = repository
        self.cache = cache
        self.tz = tz
        self._record_range = record_range

    @property
    def record_range(self) -> RecordRange:
        return self._record_range

    def widen_range(self, dates: Iterable[date]) -> None:
        """Extend the known range after new menus are stored."""
        self._record_range = self._record_range.widened(dates)

    async def get_menu(self, serve_date: Optional[str]) -> CondensedMenu:
        """Menu for a ``MM/DD/YYYY`` serve date."""
        if not serve_date:
            raise InvalidServeDateError(SERVE_DATE_REQUIRED)

        try:
            requested = parse_serve_date(serve_date)
        except ValueError as e:
            raise InvalidServeDateError(SERVE_DATE_MALFORMED) from e

        serve_date = format_serve_date(requested)
        is_today = requested == today(self.tz)

        if is_today:
            cached = self.cache.get_for(serve_date)
            if cached is not None:
                logger.info("Served from local cache", serve_date=serve_date)
                return cached

        try:
            menu = await self.repository.find_by_date(serve_date)
        except MenuNotFoundError as e:
            record_range = self._record_range
            if not record_range.contains(requested):
                if requested < EARLIEST_SUPPORTED_DATE:
                    raise DateBeforeRecordsError(BEFORE_RECORDS) from e
                raise DateOutOfRangeError(OUT_OF_RANGE) from e
            logger.error("No menu stored for in-range date", serve_date=serve_date)
            raise MenuUnavailableError(LOOKUP_FAILED) from e
        except MenuStorageError as e:
            logger.error("Menu lookup failed", serve_date=serve_date, error=str(e))
            raise MenuUnavailableError(LOOKUP_FAILED) from e

        if not menu.has_dinner:
            logger.error("Stored menu has no dinner items", serve_date=serve_date)
            raise MenuUnavailableError(LOOKUP_FAILED)

        if is_today:
            self.cache.set(menu)

        return menu
