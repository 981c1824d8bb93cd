"""Async client for the Pxshot screenshot API."""

from types import TracebackType
from typing import Optional, Type
import time

import httpx

from ..models.requests import ScreenshotRequest
from ..models.responses import ScreenshotResponse, UsageStats
from ..utils.logger import get_logger
from .base import BaseClient, SCREENSHOT_PATH, USAGE_PATH, new_request_id

logger = get_logger(__name__)


class Pxshot(BaseClient):
    """
    Async Pxshot API client.

    Each call is exactly one HTTP round trip; nothing is retried or cached.
    The client holds only read-only configuration, so one instance can serve
    concurrent tasks.

    Usage:
        async with Pxshot("px_your_api_key") as client:
            response = await client.screenshot(
                ScreenshotRequest.builder().url("https://example.com").build()
            )
            response.save("screenshot.png")
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        connect_timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        super().__init__(api_key, base_url, timeout, connect_timeout)
        self._client = httpx.AsyncClient(
            headers=self.headers,
            timeout=self.timeout,
            follow_redirects=True,
            transport=transport
        )

    async def __aenter__(self) -> "Pxshot":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._client.aclose()

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def screenshot(
        self,
        request: ScreenshotRequest,
        timeout: Optional[float] = None
    ) -> ScreenshotResponse:
        """
        Capture a screenshot.

        Args:
            request: Built screenshot request
            timeout: Per-call timeout in seconds, overriding the client's

        Returns:
            ScreenshotResponse holding image bytes, or stored-asset info
            when request.store is set

        Raises:
            APIError: The API answered with a non-2xx status
            RequestError: Connection, TLS or timeout failure
            ClientClosedError: The client was already closed
            DeserializationError: A stored-screenshot body was malformed
        """
        self._ensure_open()
        url = self._url(SCREENSHOT_PATH)
        request_id = new_request_id()
        logger.debug(
            f"POST {url} for {request.url} (format={request.format.value}, store={request.store})",
            extra={"request_id": request_id}
        )

        start_time = time.time()
        try:
            response = await self._client.post(
                url,
                json=request.to_payload(),
                timeout=self._request_timeout(timeout)
            )
        except httpx.RequestError as e:
            raise self._transport_error(e, url, request_id) from e

        logger.debug(
            f"Screenshot response {response.status_code} in {time.time() - start_time:.3f}s",
            extra={"request_id": request_id}
        )
        return self._screenshot_response(request, response, request_id)

    async def usage(self, timeout: Optional[float] = None) -> UsageStats:
        """
        Get API usage statistics for the current billing period.

        Raises:
            APIError: The API answered with a non-2xx status
            RequestError: Connection, TLS or timeout failure
            ClientClosedError: The client was already closed
            DeserializationError: The usage body was malformed
        """
        self._ensure_open()
        url = self._url(USAGE_PATH)
        request_id = new_request_id()
        logger.debug(f"GET {url}", extra={"request_id": request_id})

        try:
            response = await self._client.get(url, timeout=self._request_timeout(timeout))
        except httpx.RequestError as e:
            raise self._transport_error(e, url, request_id) from e

        return self._usage_response(response, request_id)
