"""
Daily menu refresh background job.

Runs one ingestion cycle. A failed cycle is logged and leaves the cache
and storage at their previous state; the next scheduled run is the retry.
"""

import logging
from datetime import datetime
from typing import Optional

from huds_backend.application.menu.ingestion_service import (
    IngestionResult,
    MenuIngestionService,
)
from huds_backend.domain.shared.errors import DomainError

logger = logging.getLogger(__name__)


class MenuRefreshJob:
    """Background job wrapping MenuIngestionService for the scheduler."""

    def __init__(self, ingestion_service: MenuIngestionService):
        """
        Initialize menu refresh job.

        Args:
            ingestion_service: Service running fetch → condense → store
        """
        self.ingestion_service = ingestion_service
        self.last_result: Optional[IngestionResult] = None
        self.last_error: Optional[str] = None

    async def run(self) -> Optional[IngestionResult]:
        """
        Execute one menu refresh cycle.

        Main entry point called by scheduler.

        Returns:
            IngestionResult, or None if the cycle failed
        """
        logger.info("Fetching and processing HUDS data")
        start_time = datetime.now()

        try:
            result = await self.ingestion_service.run()
        except DomainError as e:
            self.last_error = str(e)
            logger.error(f"Failed to fetch HUDS data: {e}", exc_info=True)
            return None
        except Exception as e:
            self.last_error = str(e)
            logger.exception(f"Menu refresh failed unexpectedly: {e}")
            return None

        elapsed = (datetime.now() - start_time).total_seconds()
        self.last_result = result
        self.last_error = None
        logger.info(
            f"Fetched HUDS data successfully: "
            f"{len(result.stored_dates)} dates stored, "
            f"cache refreshed: {result.cache_refreshed}, "
            f"duration: {elapsed:.2f}s"
        )
        return result
