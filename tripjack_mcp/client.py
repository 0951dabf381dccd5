"""Upstream client for the Tripjack API."""

import logging
from typing import Any, Dict, Optional

import httpx

from tripjack_mcp.config import DEFAULT_API_URL, DEFAULT_TIMEOUT, Settings
from tripjack_mcp.errors import UpstreamError
from tripjack_mcp.transform import map_upstream_error

logger = logging.getLogger(__name__)

SEARCH_ENDPOINT = "/fms/v1/air-search-all"
REVIEW_ENDPOINT = "/fms/v1/review"
BOOK_ENDPOINT = "/oms/v1/air/book"
BOOKING_DETAILS_ENDPOINT = "/oms/v1/booking-details"


def _get_http_headers(api_key: str) -> Dict[str, str]:
    """Get headers for Tripjack API requests."""
    return {
        "apikey": api_key,
        "Content-Type": "application/json",
        "Accept": "application/json"
    }


class TripjackClient:
    """
    A single long-lived HTTP client bound to the Tripjack base URL and API key.

    Construct once at startup and share across requests. Use as an async
    context manager, or call aclose() on shutdown.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url
        self._http = httpx.AsyncClient(
            base_url=base_url,
            headers=_get_http_headers(api_key),
            timeout=timeout,
            transport=transport
        )

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "TripjackClient":
        return cls(settings.api_key, base_url=settings.api_url, timeout=settings.timeout, **kwargs)

    async def post(self, endpoint: str, payload: Dict[str, Any]) -> Any:
        """POST a JSON payload and return the decoded JSON body.

        Raises UpstreamError on transport failures, timeouts, non-2xx statuses
        and bodies that are not JSON. Nothing is retried.
        """
        logger.debug("API request: POST %s", endpoint)
        try:
            response = await self._http.post(endpoint, json=payload)
            logger.debug("API response: %s %s", response.status_code, endpoint)
            response.raise_for_status()
        except httpx.HTTPError as e:
            status = e.response.status_code if isinstance(e, httpx.HTTPStatusError) else None
            message = map_upstream_error(e)
            logger.error("Tripjack API error on %s (status=%s): %s", endpoint, status, message)
            raise UpstreamError(message, status_code=status) from e

        try:
            return response.json()
        except ValueError as e:
            logger.error("Non-JSON response from %s", endpoint)
            raise UpstreamError(
                f"Invalid JSON in response from {endpoint}",
                status_code=response.status_code
            ) from e

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "TripjackClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
