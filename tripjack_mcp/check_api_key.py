#!/usr/bin/env python3
"""
Check that the configured Tripjack API key works.

Runs a real flight search against TRIPJACK_API_URL before the servers are put
in front of users. Nothing is reviewed or booked.
"""

import asyncio
import sys
from datetime import datetime, timedelta

from tripjack_mcp.client import SEARCH_ENDPOINT, TripjackClient
from tripjack_mcp.config import load_settings
from tripjack_mcp.errors import ConfigError, UpstreamError
from tripjack_mcp.transform import build_search_payload


def print_header(text: str):
    """Print a formatted header."""
    print("\n" + "=" * 70)
    print(f"  {text}")
    print("=" * 70)


def print_result(test_name: str, success: bool, message: str):
    """Print a formatted check result."""
    status = "PASS" if success else "FAIL"
    print(f"\n{status} - {test_name}")
    print(f"   {message}")


async def check_search(client: TripjackClient) -> bool:
    """Search DEL -> BOM 30 days out with one adult."""
    travel_date = (datetime.now() + timedelta(days=30)).strftime("%Y-%m-%d")
    payload = build_search_payload({
        "departureCity": "DEL",
        "arrivalCity": "BOM",
        "travelDate": travel_date,
    })

    try:
        data = await client.post(SEARCH_ENDPOINT, payload)
    except UpstreamError as e:
        status = f"status {e.status_code}" if e.status_code else "no response"
        print_result(f"POST {SEARCH_ENDPOINT}", False, f"{status} - {e.message}")
        return False

    found = 0
    if isinstance(data, dict):
        trip_infos = (data.get("searchResult") or {}).get("tripInfos") or {}
        found = sum(len(v) for v in trip_infos.values() if isinstance(v, list))
    print_result(f"POST {SEARCH_ENDPOINT}", True, f"Search for {travel_date} returned {found} trip(s)")
    return True


async def main() -> int:
    print_header("TRIPJACK API KEY CHECK")

    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"\nERROR: {e.message}")
        print("\nTo run this check:")
        print("  export TRIPJACK_API_KEY='your_api_key_here'")
        print("  tripjack-check-key")
        return 1

    print(f"\nTesting API Key: {settings.api_key[:8]}...")
    print(f"API Base URL: {settings.api_url}")

    async with TripjackClient.from_settings(settings) as client:
        passed = await check_search(client)

    print("\n" + "=" * 70)
    if passed:
        print("  API key accepted - ready to run the Tripjack servers")
    else:
        print("  API key check failed - verify TRIPJACK_API_KEY and TRIPJACK_API_URL")
    print("=" * 70 + "\n")
    return 0 if passed else 1


def run():
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
