import json
from typing import Any, Dict, List

import httpx
import pytest

from tripjack_mcp.client import TripjackClient
from tripjack_mcp.service import TripjackService

TEST_API_KEY = "test-api-key"
TEST_BASE_URL = "https://tripjack.test"


class FakeUpstream:
    """Scripted stand-in for the Tripjack API, served through httpx.MockTransport.

    Each path holds a queue of outcomes; the last one repeats once the queue is
    drained. Unscripted paths answer 404.
    """

    def __init__(self):
        self.outcomes: Dict[str, List[Any]] = {}
        self.requests: List[httpx.Request] = []

    def respond(self, path: str, json_body: Any = None, status_code: int = 200, content: bytes = None):
        self.outcomes.setdefault(path, []).append(("response", status_code, json_body, content))
        return self

    def fail(self, path: str, exc_type: type, message: str):
        self.outcomes.setdefault(path, []).append(("raise", exc_type, message, None))
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.outcomes.get(request.url.path)
        if not queue:
            return httpx.Response(404, json={"message": f"No route {request.url.path}"})
        kind, first, second, content = queue.pop(0) if len(queue) > 1 else queue[0]
        if kind == "raise":
            raise first(second, request=request)
        if content is not None:
            return httpx.Response(first, content=content)
        return httpx.Response(first, json=second)

    def calls(self, path: str) -> List[Dict[str, Any]]:
        """JSON payloads posted to path, in order."""
        return [json.loads(r.content) for r in self.requests if r.url.path == path]

    @property
    def paths(self) -> List[str]:
        return [r.url.path for r in self.requests]


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def tripjack_client(upstream):
    return TripjackClient(
        TEST_API_KEY,
        base_url=TEST_BASE_URL,
        transport=httpx.MockTransport(upstream.handler)
    )


@pytest.fixture
def service(tripjack_client):
    return TripjackService(tripjack_client)


@pytest.fixture
def search_request():
    return {
        "departureCity": "DEL",
        "arrivalCity": "BOM",
        "travelDate": "2026-11-20",
    }


@pytest.fixture
def book_request():
    """Two adults (one with dob) and one child."""
    return {
        "priceId": "price-1",
        "passengers": {
            "adults": [
                {"title": "Mr", "firstName": "Ravi", "lastName": "Kumar", "dob": "1985-04-12"},
                {"title": "Mrs", "firstName": "Asha", "lastName": "Kumar"},
            ],
            "children": [
                {"title": "Master", "firstName": "Dev", "lastName": "Kumar", "dob": "2018-02-01"},
            ],
        },
        "contactInfo": {"email": "ravi@example.com", "phone": "9876543210"},
    }
