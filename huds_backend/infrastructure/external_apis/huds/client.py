"""
HUDS recipes API client.

Fetches the published menu records (usually several days at once) and
validates them into RawMenuItem models. Transient failures are retried
with exponential backoff; everything else surfaces as FetchError or
DecodeError so a bad upstream response never takes the service down.
"""

import asyncio
from typing import Optional

import httpx
import structlog
from pydantic import TypeAdapter, ValidationError

from huds_backend.domain.menu.models import RawMenuItem
from huds_backend.domain.shared.errors import DecodeError, FetchError
from huds_backend.infrastructure.config import DEFAULT_HUDS_API_URL

logger = structlog.get_logger(__name__)

API_KEY_HEADER = "x-api-key"
TIMEOUT_S = 10.0
MAX_RETRIES = 3  # total attempts including the first request
INITIAL_BACKOFF_S = 0.5
BACKOFF_FACTOR = 2.0
RETRY_STATUS_CODES = {500, 502, 503, 504}

_MENU_ITEMS = TypeAdapter(list[RawMenuItem])


class HUDSApiClient:
    """HUDS dining recipes API client.

    Example:
        >>> async def fetch():
        ...     async with HUDSApiClient(api_key="secret") as client:
        ...         return await client.fetch_menu_items()
    """

    def __init__(
        self,
        api_key: str,
        url: str = DEFAULT_HUDS_API_URL,
        timeout_s: float = TIMEOUT_S,
        max_retries: int = MAX_RETRIES,
        initial_backoff_s: float = INITIAL_BACKOFF_S,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Initialize API client.

        Args:
            api_key: HUDS API key
            url: Recipes endpoint
            timeout_s: Per-request timeout
            max_retries: Max attempts for transient failures
            initial_backoff_s: First retry delay (doubles each retry)
            client: Pre-built httpx client (ownership stays with caller)
        """
        self.api_key = api_key
        self.url = url
        self.timeout_s = timeout_s
        self.max_retries = max_retries
        self.initial_backoff_s = initial_backoff_s
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> "HUDSApiClient":
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout_s)
        return self

    async def __aexit__(self, *args: object) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch_menu_items(self) -> list[RawMenuItem]:
        """Fetch and validate the current batch of menu records.

        Returns:
            Raw menu records in upstream order

        Raises:
            FetchError: Transport failure, timeout or HTTP error status
            DecodeError: Body is not a JSON array of menu records
        """
        response = await self._get_with_retries()

        try:
            data = response.json()
        except ValueError as e:
            raise DecodeError(f"HUDS API returned invalid JSON: {e}") from e

        if not isinstance(data, list):
            raise DecodeError(f"Expected a JSON array, got {type(data).__name__}")

        try:
            items = _MENU_ITEMS.validate_python(data)
        except ValidationError as e:
            raise DecodeError(
                f"HUDS API returned malformed menu records: {e.error_count()} errors"
            ) from e

        logger.info("Fetched HUDS menu items", count=len(items))
        return items

    async def _get_with_retries(self) -> httpx.Response:
        if self._client is None:
            raise FetchError("Client not initialized, use async with")

        headers = {API_KEY_HEADER: self.api_key}
        backoff = self.initial_backoff_s
        attempt = 0

        while True:
            attempt += 1
            try:
                response = await self._client.get(self.url, headers=headers)
            except httpx.HTTPError as e:
                if attempt >= self.max_retries:
                    raise FetchError(
                        f"Network error after {attempt} attempts: {e!r}"
                    ) from e
                logger.warning(
                    "HUDS API request failed, retrying",
                    attempt=attempt,
                    backoff_s=backoff,
                    error=repr(e),
                )
                await asyncio.sleep(backoff)
                backoff *= BACKOFF_FACTOR
                continue

            if response.status_code in RETRY_STATUS_CODES and attempt < self.max_retries:
                logger.warning(
                    "HUDS API server error, retrying",
                    attempt=attempt,
                    status=response.status_code,
                )
                await asyncio.sleep(backoff)
                backoff *= BACKOFF_FACTOR
                continue

            if response.status_code >= 400:
                raise FetchError(f"HUDS API error: {response.status_code}")

            return response
