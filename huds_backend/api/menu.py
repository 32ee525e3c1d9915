"""REST endpoint serving condensed HUDS menus by serve date.

Failures are returned as ``{"error": "<message>"}`` with the status code
of the query outcome.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from huds_backend.application.menu.query_service import MenuQueryService
from huds_backend.domain.menu.models import CondensedMenu
from huds_backend.domain.shared.errors import (
    DateBeforeRecordsError,
    DateOutOfRangeError,
    InvalidServeDateError,
    MenuUnavailableError,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["menu"])


def get_menu_query_service(request: Request) -> MenuQueryService:
    """Query service created by the application lifespan."""
    service: Optional[MenuQueryService] = getattr(
        request.app.state, "menu_query_service", None
    )
    if service is None:
        raise RuntimeError("Menu query service not initialized")
    return service


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.get(
    "/huds-data",
    response_model=CondensedMenu,
    response_model_exclude_none=True,
)
async def get_huds_data(
    serve_date: Optional[str] = Query(None, description="Serve date, MM/DD/YYYY"),
    service: MenuQueryService = Depends(get_menu_query_service),
) -> Any:
    try:
        return await service.get_menu(serve_date)
    except InvalidServeDateError as e:
        return error_response(400, str(e))
    except (DateBeforeRecordsError, DateOutOfRangeError) as e:
        logger.info(f"Menu request out of range: serve_date={serve_date}")
        return error_response(404, str(e))
    except MenuUnavailableError as e:
        return error_response(500, str(e))
