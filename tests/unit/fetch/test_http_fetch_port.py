"""
Tests for HttpFetchPort using httpx.MockTransport.
"""

import httpx
import pytest

from asyncops.async_infrastructure.cancellation import (
    CancellationError,
    CancellationScope,
)
from asyncops.config.settings import FetchSettings
from asyncops.errors.exceptions import FetchError, FetchTimeoutError
from asyncops.fetch import FetchPort, HttpFetchPort
from asyncops.models import WorkResult

PAGES = {
    "https://one.example/": "x" * 12,
    "https://two.example/": "hello",
}


def handler(request: httpx.Request) -> httpx.Response:
    url = str(request.url)
    if url in PAGES:
        return httpx.Response(200, text=PAGES[url])
    if "timeout" in url:
        raise httpx.ReadTimeout("too slow", request=request)
    if "refused" in url:
        raise httpx.ConnectError("refused", request=request)
    return httpx.Response(404, text="missing")


@pytest.fixture
def requests_seen():
    return []


@pytest.fixture
def port(requests_seen):
    def recording_handler(request):
        requests_seen.append(request)
        return handler(request)

    return HttpFetchPort(
        settings=FetchSettings(timeout=5.0, user_agent="asyncops-tests"),
        transport=httpx.MockTransport(recording_handler),
    )


class TestHttpFetchPort:
    """Test the blocking and async forms."""

    def test_satisfies_protocol(self, port):
        assert isinstance(port, FetchPort)

    def test_fetch_returns_payload_size(self, port):
        result = port.fetch("https://one.example/")

        assert result == WorkResult("https://one.example/", 12)

    @pytest.mark.asyncio
    async def test_fetch_async_returns_payload_size(self, port):
        result = await port.fetch_async("https://two.example/", CancellationScope())

        assert result == WorkResult("https://two.example/", 5)

    def test_user_agent_header(self, port, requests_seen):
        port.fetch("https://one.example/")

        assert requests_seen[0].headers["User-Agent"] == "asyncops-tests"

    def test_http_error_status_is_a_fetch_error(self, port):
        with pytest.raises(FetchError) as exc_info:
            port.fetch("https://missing.example/")

        assert exc_info.value.error_code == "FETCH-HttpStatus"
        assert exc_info.value.details["status_code"] == 404
        assert exc_info.value.identifier == "https://missing.example/"

    @pytest.mark.asyncio
    async def test_timeout_is_a_fetch_timeout_error(self, port):
        with pytest.raises(FetchTimeoutError) as exc_info:
            await port.fetch_async("https://timeout.example/")

        assert exc_info.value.error_code == "FETCH-Timeout"
        assert exc_info.value.suggestion

    def test_transport_error_is_a_fetch_error(self, port):
        with pytest.raises(FetchError) as exc_info:
            port.fetch("https://refused.example/")

        assert exc_info.value.error_code == "FETCH-RequestFailed"

    def test_failures_are_not_retried(self, port, requests_seen):
        with pytest.raises(FetchError):
            port.fetch("https://refused.example/")

        assert len(requests_seen) == 1

    @pytest.mark.asyncio
    async def test_triggered_token_stops_before_request(self, port, requests_seen):
        scope = CancellationScope()
        scope.trigger()

        with pytest.raises(CancellationError):
            await port.fetch_async("https://one.example/", scope)

        assert requests_seen == []
