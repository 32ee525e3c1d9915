"""
Scheduler infrastructure for background jobs.
"""

from .menu_refresh_job import MenuRefreshJob
from .scheduler_config import SchedulerManager

__all__ = ["SchedulerManager", "MenuRefreshJob"]
