"""
Dashboard overview endpoint - Pre-aggregated alternative data source

The backend exposes ``GET <url>`` returning ``{"success": bool, "data": {...},
"message": str}``. ``data`` is merged into the all-zero snapshot; any failure
yields DashboardSnapshot.empty() instead of an error, so the dashboard always
renders.
"""

import json
from datetime import datetime, timezone
from typing import Any

import httpx

from traceboard.async_http_client import AsyncSecureHTTPClient
from traceboard.core.logging_config import get_logger
from traceboard.domain.snapshot import DashboardSnapshot
from traceboard.errors import SourceError
from traceboard.utils.error_handling import log_and_return_default

logger = get_logger(__name__)

OVERVIEW_DOMAIN = "overview"


class OverviewSource:
    """
    Fetch a DashboardSnapshot from the overview endpoint.

    Example:
        source = OverviewSource("https://dashboard.internal/api/dashboard/overview")
        snapshot = await source.fetch_snapshot()
        snapshot.source  # "overview", or "empty" when the fetch failed
    """

    def __init__(self, url: str, timeout: float = AsyncSecureHTTPClient.DEFAULT_TIMEOUT):
        self.url = url
        self.timeout = timeout

    async def fetch_payload(self) -> dict[str, Any]:
        """
        Fetch and unwrap the ``data`` object.

        Raises:
            SourceError: Transport failure, non-2xx status, invalid JSON,
                ``success: false`` or missing ``data``
        """
        try:
            async with AsyncSecureHTTPClient(timeout=self.timeout) as client:
                response = await client.get(self.url)
        except httpx.HTTPError as e:
            raise SourceError(OVERVIEW_DOMAIN, f"request failed: {e.__class__.__name__}: {e}") from e

        if not response.is_success:
            raise SourceError(OVERVIEW_DOMAIN, f"HTTP {response.status_code}")

        try:
            body = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise SourceError(OVERVIEW_DOMAIN, f"invalid JSON: {e}") from e

        if not isinstance(body, dict) or not body.get("success"):
            message = body.get("message") if isinstance(body, dict) else None
            raise SourceError(OVERVIEW_DOMAIN, message or "endpoint reported failure")

        data = body.get("data")
        if not isinstance(data, dict):
            raise SourceError(OVERVIEW_DOMAIN, "response has no data object")
        return data

    async def fetch_snapshot(self) -> DashboardSnapshot:
        """Return the overview as a snapshot, or the all-zero snapshot on any failure."""
        now = datetime.now(timezone.utc)
        try:
            data = await self.fetch_payload()
        except SourceError as e:
            return log_and_return_default(
                logger, e, {"url": self.url}, DashboardSnapshot.empty(now), "Overview fetch"
            )

        logger.info(f"Fetched dashboard overview from {self.url}")
        return DashboardSnapshot.empty(now).merged_with(data)
