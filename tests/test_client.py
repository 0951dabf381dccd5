import httpx
import pytest

from tripjack_mcp.client import SEARCH_ENDPOINT, TripjackClient
from tripjack_mcp.config import Settings
from tripjack_mcp.errors import UpstreamError


class TestTripjackClient:
    async def test_sends_credential_and_json(self, tripjack_client, upstream):
        upstream.respond(SEARCH_ENDPOINT, {"status": {"success": True}})

        data = await tripjack_client.post(SEARCH_ENDPOINT, {"searchQuery": {}})

        assert data == {"status": {"success": True}}
        request = upstream.requests[0]
        assert request.method == "POST"
        assert str(request.url) == "https://tripjack.test/fms/v1/air-search-all"
        assert request.headers["apikey"] == "test-api-key"
        assert request.headers["content-type"] == "application/json"

    async def test_non_2xx_raises_with_upstream_message(self, tripjack_client, upstream):
        upstream.respond(SEARCH_ENDPOINT, {"message": "Fare expired"}, status_code=400)

        with pytest.raises(UpstreamError) as exc_info:
            await tripjack_client.post(SEARCH_ENDPOINT, {})

        assert exc_info.value.message == "Fare expired"
        assert exc_info.value.status_code == 400

    async def test_timeout_is_an_upstream_error(self, tripjack_client, upstream):
        upstream.fail(SEARCH_ENDPOINT, httpx.ReadTimeout, "timed out")

        with pytest.raises(UpstreamError) as exc_info:
            await tripjack_client.post(SEARCH_ENDPOINT, {})

        assert exc_info.value.message == "timed out"
        assert exc_info.value.status_code is None

    async def test_non_json_body_raises(self, tripjack_client, upstream):
        upstream.respond(SEARCH_ENDPOINT, content=b"not json")

        with pytest.raises(UpstreamError, match="Invalid JSON"):
            await tripjack_client.post(SEARCH_ENDPOINT, {})

    async def test_from_settings_uses_url_and_timeout(self):
        settings = Settings(api_key="k", api_url="https://example.test", timeout=5.0)

        async with TripjackClient.from_settings(settings) as client:
            assert client.base_url == "https://example.test"
            assert client._http.timeout.read == 5.0
