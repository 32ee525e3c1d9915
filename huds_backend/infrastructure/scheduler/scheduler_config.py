"""
APScheduler configuration and management.

Provides centralized scheduler configuration for the daily menu refresh.
"""

import logging
from datetime import timezone
from typing import Any, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from huds_backend.domain.menu.serve_date import DEFAULT_TIMEZONE

from .menu_refresh_job import MenuRefreshJob

logger = logging.getLogger(__name__)

MENU_REFRESH_JOB_ID = "menu_refresh"


class SchedulerManager:
    """
    Manages APScheduler lifecycle and job registration.

    Handles initialization, job registration, and shutdown of the
    application scheduler.
    """

    def __init__(self) -> None:
        """Initialize scheduler manager."""
        self.scheduler: Optional[AsyncIOScheduler] = None
        self._refresh_job: Optional[MenuRefreshJob] = None

    def initialize(
        self,
        refresh_job: MenuRefreshJob,
        cron_expression: str = "0 3 * * *",
        tz: timezone = DEFAULT_TIMEZONE,
    ) -> None:
        """
        Initialize and configure scheduler with jobs.

        Args:
            refresh_job: Menu refresh job instance
            cron_expression: Cron expression for the refresh
                (default: 3 AM every day)
            tz: Timezone the cron expression is evaluated in
        """
        if self.scheduler is not None:
            logger.warning("Scheduler already initialized")
            return

        self._refresh_job = refresh_job

        self.scheduler = AsyncIOScheduler(
            timezone=tz,
            job_defaults={
                "coalesce": True,  # Combine missed runs
                "max_instances": 1,  # One instance at a time
                "misfire_grace_time": 3600,  # 1 hour grace period
            },
        )

        self._register_refresh_job(cron_expression, tz)

        logger.info("Scheduler initialized successfully")

    def _register_refresh_job(self, cron_expression: str, tz: timezone) -> None:
        if self.scheduler is None or self._refresh_job is None:
            raise RuntimeError("Scheduler not initialized")

        trigger = CronTrigger.from_crontab(cron_expression, timezone=tz)

        self.scheduler.add_job(
            self._refresh_job.run,
            trigger=trigger,
            id=MENU_REFRESH_JOB_ID,
            name="Daily HUDS Menu Refresh",
            replace_existing=True,
        )

        logger.info(f"Menu refresh job registered with cron: {cron_expression}")

    def start(self) -> None:
        """Start scheduler (begin executing jobs)."""
        if self.scheduler is None:
            raise RuntimeError("Scheduler not initialized")

        if self.scheduler.running:
            logger.warning("Scheduler already running")
            return

        self.scheduler.start()
        logger.info("Scheduler started")

    def shutdown(self, wait: bool = True) -> None:
        """
        Shutdown scheduler gracefully.

        Args:
            wait: If True, wait for running jobs to complete
        """
        if self.scheduler is None:
            logger.warning("Scheduler not initialized")
            return

        if not self.scheduler.running:
            logger.warning("Scheduler not running")
            return

        self.scheduler.shutdown(wait=wait)
        logger.info(f"Scheduler shutdown (wait={wait})")

    def get_jobs(self) -> list[dict[str, Any]]:
        """List scheduled jobs with their next run time."""
        if self.scheduler is None:
            return []

        return [
            {
                "id": job.id,
                "name": job.name,
                "next_run": getattr(job, "next_run_time", None),
                "trigger": str(job.trigger),
            }
            for job in self.scheduler.get_jobs()
        ]

    async def trigger_refresh_now(self) -> None:
        """
        Run the menu refresh immediately.

        Used for the startup bootstrap and manual runs.
        """
        if self._refresh_job is None:
            raise RuntimeError("Menu refresh job not initialized")

        logger.info("Manually triggering menu refresh job")
        await self._refresh_job.run()
