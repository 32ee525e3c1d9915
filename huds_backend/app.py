from __future__ import annotations

# Standard library
import os
import logging as _logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

# Third-party
import structlog
from dotenv import load_dotenv
from fastapi import FastAPI
from motor.motor_asyncio import AsyncIOMotorClient

# Local application imports
from huds_backend import __version__
from huds_backend.api.menu import router as menu_router
from huds_backend.application.menu.ingestion_service import MenuIngestionService
from huds_backend.application.menu.query_service import (
    MenuQueryService,
    load_record_range,
)
from huds_backend.infrastructure.cache.today_menu_cache import TodayMenuCache
from huds_backend.infrastructure.config import (
    get_huds_api_timeout_s,
    get_huds_api_url,
    get_menu_refresh_cron,
    get_menu_timezone,
    get_mongodb_timeout_ms,
    get_repository_backend,
    require_huds_api_key,
    require_mongodb_uri,
)
from huds_backend.infrastructure.external_apis.huds.client import HUDSApiClient
from huds_backend.infrastructure.persistence.factory import create_menu_repository
from huds_backend.infrastructure.persistence.mongodb.client import (
    create_mongo_client,
    verify_connection,
)
from huds_backend.infrastructure.persistence.mongodb.menu_repository import (
    MongoMenuRepository,
)
from huds_backend.infrastructure.scheduler import MenuRefreshJob, SchedulerManager

# .env is optional; real environment variables take precedence
load_dotenv()

# --- Basic logging configuration (minimal) ---
_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
try:
    _logging.basicConfig(
        level=getattr(_logging, _LOG_LEVEL, _logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
except Exception:  # pragma: no cover
    _logging.basicConfig(level=_logging.INFO)

structlog.configure(
    processors=[
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        getattr(_logging, _LOG_LEVEL, _logging.INFO)
    ),
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifecycle manager.

    STARTUP (before yield):
    1. Connect to MongoDB and fail fast if unreachable
    2. Open the HUDS API client for the lifetime of the process
    3. Bootstrap storage with one refresh if it is empty
    4. Compute the known record range and start the daily scheduler

    SHUTDOWN (after yield):
    - Stop the scheduler, close the HTTP client and the MongoDB client

    Configuration and connection errors propagate and halt startup.
    """
    logger = _logging.getLogger("startup")
    tz = get_menu_timezone()

    scheduler = SchedulerManager()
    mongo_client: Optional[AsyncIOMotorClient[Any]] = None

    try:
        if get_repository_backend() == "mongodb":
            mongo_client = create_mongo_client(
                require_mongodb_uri(), get_mongodb_timeout_ms()
            )
            await verify_connection(mongo_client)

        repository = create_menu_repository(mongo_client)
        if isinstance(repository, MongoMenuRepository):
            await repository.ensure_indexes()

        api_key = require_huds_api_key()
        cache = TodayMenuCache()

        logger.info(
            "startup.config",
            extra={
                "repository": type(repository).__name__,
                "huds_api_url": get_huds_api_url(),
                "refresh_cron": get_menu_refresh_cron(),
            },
        )

        async with HUDSApiClient(
            api_key,
            url=get_huds_api_url(),
            timeout_s=get_huds_api_timeout_s(),
        ) as api_client:
            ingestion_service = MenuIngestionService(api_client, repository, cache, tz)
            scheduler.initialize(
                MenuRefreshJob(ingestion_service),
                cron_expression=get_menu_refresh_cron(),
                tz=tz,
            )

            if await repository.count() == 0:
                logger.info("No data in database, fetching and processing data...")
                await scheduler.trigger_refresh_now()

            record_range = await load_record_range(repository, tz)
            query_service = MenuQueryService(repository, cache, record_range, tz)
            ingestion_service.on_stored = query_service.widen_range

            app.state.menu_query_service = query_service
            app.state.scheduler = scheduler
            scheduler.start()
            for job in scheduler.get_jobs():
                logger.info(
                    "scheduler.job",
                    extra={"job_id": job["id"], "next_run": str(job["next_run"])},
                )

            logger.info("lifespan.ready", extra={"status": "serving"})
            yield

            logger.info("lifespan.shutdown", extra={"status": "cleanup"})
    finally:
        if scheduler.scheduler is not None and scheduler.scheduler.running:
            scheduler.shutdown(wait=False)
        if mongo_client is not None:
            mongo_client.close()


def create_app() -> FastAPI:
    """Build the FastAPI application (no I/O until the lifespan runs)."""
    application = FastAPI(
        title="HUDS Menu Backend",
        version=__version__,
        lifespan=lifespan,
    )
    application.include_router(menu_router)

    @application.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()
