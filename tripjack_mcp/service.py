"""
Flight operations shared by the HTTP and MCP front-ends.

Each operation checks presence of its required fields (raising
ValidationError before any upstream call), forwards to Tripjack and wraps the
outcome in a ResponseEnvelope. Upstream failures become failure envelopes;
they are never retried.
"""

import logging
from typing import Any, Dict

from tripjack_mcp.client import (
    BOOK_ENDPOINT,
    BOOKING_DETAILS_ENDPOINT,
    REVIEW_ENDPOINT,
    SEARCH_ENDPOINT,
    TripjackClient,
)
from tripjack_mcp.errors import UpstreamError
from tripjack_mcp.models import ResponseEnvelope
from tripjack_mcp.transform import (
    BOOK_REQUIRED_FIELDS,
    TICKET_REQUIRED_FIELDS,
    build_delivery_info,
    build_search_payload,
    build_traveller_list,
    require_fields,
)

logger = logging.getLogger(__name__)


class TripjackService:
    def __init__(self, client: TripjackClient):
        self._client = client

    async def _forward(self, endpoint: str, payload: Dict[str, Any]) -> ResponseEnvelope:
        try:
            data = await self._client.post(endpoint, payload)
        except UpstreamError as e:
            return ResponseEnvelope.fail(e.message)
        return ResponseEnvelope.ok(data)

    async def search_flights(self, request: Any) -> ResponseEnvelope:
        payload = build_search_payload(request)
        route = payload["searchQuery"]["routeInfos"][0]
        logger.info(
            "Searching flights %s -> %s on %s (pax=%s)",
            route["fromCityOrAirport"]["code"],
            route["toCityOrAirport"]["code"],
            route["travelDate"],
            payload["searchQuery"]["paxInfo"]
        )
        return await self._forward(SEARCH_ENDPOINT, payload)

    async def book_best_flight(self, request: Any) -> ResponseEnvelope:
        """
        Review the selected price, then book it.

        Two dependent, non-transactional calls: if booking fails after the
        review succeeded, the review is left in place upstream.
        """
        request = require_fields(request, BOOK_REQUIRED_FIELDS)
        traveller_info = build_traveller_list(request["passengers"])
        delivery_info = build_delivery_info(request["contactInfo"])

        try:
            logger.info("Reviewing price %s", request["priceId"])
            review = await self._client.post(REVIEW_ENDPOINT, {"priceIds": [request["priceId"]]})

            booking_id = review.get("bookingId") if isinstance(review, dict) else None
            book_request: Dict[str, Any] = {}
            if booking_id is None:
                logger.warning("Review response for %s has no bookingId", request["priceId"])
            else:
                book_request["bookingId"] = booking_id
            book_request["travellerInfo"] = traveller_info
            book_request["deliveryInfo"] = delivery_info

            logger.info("Booking %s for %d traveller(s)", booking_id, len(traveller_info))
            booking = await self._client.post(BOOK_ENDPOINT, book_request)
        except UpstreamError as e:
            return ResponseEnvelope.fail(e.message)

        logger.info("Booking %s submitted", booking_id)
        return ResponseEnvelope.ok(booking)

    async def get_ticket_info(self, request: Any) -> ResponseEnvelope:
        request = require_fields(request, TICKET_REQUIRED_FIELDS)
        logger.info("Fetching booking details for %s", request["bookingId"])
        return await self._forward(BOOKING_DETAILS_ENDPOINT, {"bookingId": request["bookingId"]})
