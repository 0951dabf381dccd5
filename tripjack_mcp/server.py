#!/usr/bin/env python3
"""
Tripjack MCP Server

This server provides tools to search for flights, book a selected fare, and
look up ticket details using the Tripjack API. It enables LLMs to help users
find and book flights through a compliant MCP interface.

Features:
- Flight search (economy, one-way, per-category passenger counts)
- Two-step booking (review, then book) with adult/child/infant travellers
- Ticket lookup by booking ID
- Persistent HTTP client owned by the entry point
- Proper isError flag handling for tool errors
- Multiple transport support (stdio, HTTP with SSE, streamable HTTP)
"""

import asyncio
import json
import logging
import sys
from typing import Annotated, Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from tripjack_mcp.client import TripjackClient
from tripjack_mcp.config import Settings, load_settings
from tripjack_mcp.errors import ConfigError, ValidationError
from tripjack_mcp.logger import configure_logging
from tripjack_mcp.models import ContactInfo, Passengers, ResponseEnvelope
from tripjack_mcp.service import TripjackService

logger = logging.getLogger(__name__)

SERVER_NAME = "tripjack-mcp"


# ============================================================================
# Result Helper
# ============================================================================

async def _run_tool(operation) -> str:
    """
    Await a service operation and render its envelope for MCP.

    Validation and upstream failures are raised as ToolError, which FastMCP
    reports as a tool result with isError=True rather than a protocol error.
    """
    try:
        envelope: ResponseEnvelope = await operation
    except ValidationError as e:
        logger.warning("Tool input rejected: %s", e.message)
        raise ToolError(e.message)

    if not envelope.success:
        raise ToolError(f"Tripjack API error: {envelope.error}")
    return json.dumps(envelope.data, indent=2)


# ============================================================================
# Tool Implementations
# ============================================================================

def create_mcp_server(client: TripjackClient) -> FastMCP:
    """Build the MCP server with all tools bound to the given client."""
    service = TripjackService(client)
    mcp = FastMCP(SERVER_NAME)

    @mcp.tool(
        name="get_flight_data",
        annotations={
            "title": "Search Flights",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": False,
            "openWorldHint": True
        }
    )
    async def get_flight_data(
        departureCity: Annotated[str, Field(description="Departure city code (e.g., DEL for Delhi)")],
        arrivalCity: Annotated[str, Field(description="Arrival city code (e.g., BOM for Mumbai)")],
        travelDate: Annotated[str, Field(
            description="Travel date in YYYY-MM-DD format",
            json_schema_extra={"format": "date"}
        )],
        adults: Annotated[int, Field(description="Number of adult passengers", ge=0)] = 1,
        children: Annotated[int, Field(description="Number of child passengers", ge=0)] = 0,
        infants: Annotated[int, Field(description="Number of infant passengers", ge=0)] = 0,
    ) -> str:
        """
        Get real-time flight data.

        Searches economy fares for a single one-way segment. Each result carries
        a price ID that book_best_flight accepts.

        Returns:
            str: The Tripjack search response as pretty-printed JSON
        """
        return await _run_tool(service.search_flights({
            "departureCity": departureCity,
            "arrivalCity": arrivalCity,
            "travelDate": travelDate,
            "adults": adults,
            "children": children,
            "infants": infants,
        }))

    @mcp.tool(
        name="book_best_flight",
        annotations={
            "title": "Book Flight",
            "readOnlyHint": False,
            "destructiveHint": False,
            "idempotentHint": False,
            "openWorldHint": True
        }
    )
    async def book_best_flight(
        priceId: Annotated[str, Field(description="Price ID from flight search results")],
        passengers: Annotated[Passengers, Field(description="Travellers grouped by category")],
        contactInfo: Annotated[ContactInfo, Field(description="Booking contact details")],
    ) -> str:
        """
        Book the best flight based on travel request.

        Reviews the selected price, then books it for the given travellers.
        Children and infants need a date of birth; adults may omit it.

        Returns:
            str: The Tripjack booking response as pretty-printed JSON
        """
        return await _run_tool(service.book_best_flight({
            "priceId": priceId,
            "passengers": passengers.model_dump(exclude_none=True),
            "contactInfo": contactInfo.model_dump(),
        }))

    @mcp.tool(
        name="get_ticket_info",
        annotations={
            "title": "Get Ticket Information",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True
        }
    )
    async def get_ticket_info(
        bookingId: Annotated[str, Field(description="Booking ID")],
    ) -> str:
        """Get ticket information for a booking."""
        return await _run_tool(service.get_ticket_info({"bookingId": bookingId}))

    return mcp


# ============================================================================
# Main Entry Point
# ============================================================================

async def serve(settings: Settings, transport: str, **transport_kwargs: Any) -> None:
    """Run the MCP server until the transport stops, then close the client."""
    async with TripjackClient.from_settings(settings) as client:
        mcp = create_mcp_server(client)
        await mcp.run_async(transport=transport, **transport_kwargs)
    logger.info("Server closed")


def main():
    """Run the Tripjack MCP server with configurable transport."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Tripjack MCP Server - Flight search and booking via MCP"
    )
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse", "http"],
        default="stdio",
        help="Transport type: 'stdio' (default) for CLI, 'sse' or 'http' for network clients"
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host for network transports (default: 127.0.0.1)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port for network transports (default: 8000)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()
    configure_logging(args.debug)

    try:
        settings = load_settings()
    except ConfigError as e:
        logger.error("%s", e.message)
        sys.exit(1)

    logger.info("Starting Tripjack MCP server with transport: %s", args.transport)

    transport_kwargs = {}
    if args.transport != "stdio":
        logger.info("%s server starting on http://%s:%d", args.transport.upper(), args.host, args.port)
        transport_kwargs = {"host": args.host, "port": args.port}

    try:
        asyncio.run(serve(settings, args.transport, **transport_kwargs))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")


if __name__ == "__main__":
    main()
