"""
HTTP implementation of the FetchPort using httpx.

Each call opens its own client, so the blocking and async forms can be used
from any thread or event loop without shared connection state.
"""

from typing import Any, Optional

import httpx

from asyncops.async_infrastructure.cancellation import CancellationToken
from asyncops.config.settings import FetchSettings, get_fetch_settings
from asyncops.errors.error_codes import ErrorCodes
from asyncops.errors.exceptions import FetchError, FetchTimeoutError
from asyncops.logging import get_logger
from asyncops.models import WorkResult

logger = get_logger(__name__)


class HttpFetchPort:
    """
    Downloads the body of a URL and reports its length.

    Args:
        settings: Fetch settings (defaults to the cached environment settings)
        transport: Optional httpx transport, used for both client flavours
            (e.g. ``httpx.MockTransport`` in tests)
    """

    def __init__(
        self,
        settings: Optional[FetchSettings] = None,
        transport: Optional[Any] = None,
    ):
        self.settings = settings or get_fetch_settings()
        self._transport = transport

    def _client_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "timeout": self.settings.timeout,
            "follow_redirects": self.settings.follow_redirects,
            "headers": {"User-Agent": self.settings.user_agent},
        }
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return kwargs

    def fetch(self, identifier: str) -> WorkResult:
        logger.debug(f"GET {identifier}")
        try:
            with httpx.Client(**self._client_kwargs()) as client:
                response = client.get(identifier)
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise self._translate(identifier, e) from e

        return self._to_result(identifier, response)

    async def fetch_async(
        self, identifier: str, token: Optional[CancellationToken] = None
    ) -> WorkResult:
        if token is not None:
            token.check_cancellation(f"fetch {identifier}")

        logger.debug(f"GET {identifier} (async)")
        try:
            async with httpx.AsyncClient(**self._client_kwargs()) as client:
                response = await client.get(identifier)
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise self._translate(identifier, e) from e

        return self._to_result(identifier, response)

    def _to_result(self, identifier: str, response: httpx.Response) -> WorkResult:
        result = WorkResult.from_payload(identifier, response.text)
        logger.debug(
            f"{identifier}: HTTP {response.status_code}, {result.payload_size} characters"
        )
        return result

    def _translate(self, identifier: str, error: httpx.HTTPError) -> FetchError:
        if isinstance(error, httpx.TimeoutException):
            return FetchTimeoutError(
                message=f"Timed out fetching {identifier}",
                identifier=identifier,
                error_code=ErrorCodes.FETCH_TIMEOUT,
                details={"timeout": self.settings.timeout},
                suggestion="Increase ASYNCOPS_FETCH_TIMEOUT or check the site",
            )
        if isinstance(error, httpx.HTTPStatusError):
            return FetchError(
                message=f"{identifier} answered HTTP {error.response.status_code}",
                identifier=identifier,
                error_code=ErrorCodes.FETCH_HTTP_STATUS,
                details={"status_code": error.response.status_code},
            )
        return FetchError(
            message=f"Failed to fetch {identifier}: {error}",
            identifier=identifier,
            error_code=ErrorCodes.FETCH_REQUEST_FAILED,
        )
