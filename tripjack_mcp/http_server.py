#!/usr/bin/env python3
"""
Tripjack HTTP Server

Exposes the flight operations as three POST routes:

- /get_flight_data
- /book_best_flight
- /get_ticket_info

Every response carries permissive CORS headers. OPTIONS on any path is a 204
preflight acknowledgement, any other non-POST method is rejected with 405.
"""

import asyncio
import logging
import sys
from typing import Awaitable

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from tripjack_mcp import __version__
from tripjack_mcp.client import TripjackClient
from tripjack_mcp.config import Settings, load_port, load_settings
from tripjack_mcp.errors import ConfigError, ValidationError
from tripjack_mcp.logger import configure_logging
from tripjack_mcp.models import ResponseEnvelope
from tripjack_mcp.service import TripjackService

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


async def _respond(operation: Awaitable[ResponseEnvelope]) -> JSONResponse:
    try:
        envelope = await operation
    except ValidationError as e:
        logger.warning("Rejected request: %s", e.message)
        return JSONResponse({"error": "Missing required fields"}, status_code=400)
    return JSONResponse(envelope.to_dict(), status_code=200 if envelope.success else 500)


def create_app(client: TripjackClient) -> FastAPI:
    """Build the FastAPI app around an already constructed client."""
    service = TripjackService(client)
    app = FastAPI(
        title="Tripjack Flight API",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False
    )

    @app.middleware("http")
    async def dispatch(request: Request, call_next):
        if request.method == "OPTIONS":
            response = Response(status_code=204)
        elif request.method != "POST":
            response = JSONResponse({"error": "Method not allowed"}, status_code=405)
        else:
            logger.info("Request: %s %s", request.method, request.url.path)
            try:
                response = await call_next(request)
            except Exception:
                logger.exception("Unhandled error on %s", request.url.path)
                response = JSONResponse({"error": "Internal server error"}, status_code=500)
        response.headers.update(CORS_HEADERS)
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            return JSONResponse({"error": "Not found"}, status_code=404)
        return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code)

    @app.post("/get_flight_data")
    async def get_flight_data(request: Request) -> JSONResponse:
        return await _respond(service.search_flights(await request.json()))

    @app.post("/book_best_flight")
    async def book_best_flight(request: Request) -> JSONResponse:
        return await _respond(service.book_best_flight(await request.json()))

    @app.post("/get_ticket_info")
    async def get_ticket_info(request: Request) -> JSONResponse:
        return await _respond(service.get_ticket_info(await request.json()))

    return app


async def serve(settings: Settings, host: str, port: int) -> None:
    """Run uvicorn until interrupted, then close the upstream client."""
    async with TripjackClient.from_settings(settings) as client:
        config = uvicorn.Config(create_app(client), host=host, port=port, log_config=None)
        server = uvicorn.Server(config)
        logger.info("Tripjack HTTP server running on http://%s:%d", host, port)
        # uvicorn installs the SIGINT/SIGTERM handlers and drives graceful shutdown.
        await server.serve()
    logger.info("Server closed")


def main():
    """Run the Tripjack HTTP server."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Tripjack HTTP Server - Flight search and booking over plain HTTP"
    )
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Host to bind (default: 0.0.0.0)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: $PORT or 3000)"
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
        port = args.port if args.port is not None else load_port()
    except ConfigError as e:
        logger.error("%s", e.message)
        sys.exit(1)

    logger.info("Initializing Tripjack HTTP server against %s", settings.api_url)
    asyncio.run(serve(settings, args.host, port))


if __name__ == "__main__":
    main()
