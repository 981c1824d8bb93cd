"""Blocking client for the Pxshot screenshot API."""

from types import TracebackType
from typing import Optional, Type
import time

import httpx

from ..models.requests import ScreenshotRequest
from ..models.responses import ScreenshotResponse, UsageStats
from ..utils.logger import get_logger
from .base import BaseClient, SCREENSHOT_PATH, USAGE_PATH, new_request_id

logger = get_logger(__name__)


class BlockingPxshot(BaseClient):
    """
    Blocking Pxshot API client with the same contract as the async Pxshot.

    Usage:
        with BlockingPxshot("px_your_api_key") as client:
            usage = client.usage()
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        connect_timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None
    ):
        super().__init__(api_key, base_url, timeout, connect_timeout)
        self._client = httpx.Client(
            headers=self.headers,
            timeout=self.timeout,
            follow_redirects=True,
            transport=transport
        )

    def __enter__(self) -> "BlockingPxshot":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    def screenshot(
        self,
        request: ScreenshotRequest,
        timeout: Optional[float] = None
    ) -> ScreenshotResponse:
        """Capture a screenshot (blocking). See Pxshot.screenshot."""
        self._ensure_open()
        url = self._url(SCREENSHOT_PATH)
        request_id = new_request_id()
        logger.debug(
            f"POST {url} for {request.url} (format={request.format.value}, store={request.store})",
            extra={"request_id": request_id}
        )

        start_time = time.time()
        try:
            response = self._client.post(
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

    def usage(self, timeout: Optional[float] = None) -> UsageStats:
        """Get API usage statistics (blocking)."""
        self._ensure_open()
        url = self._url(USAGE_PATH)
        request_id = new_request_id()
        logger.debug(f"GET {url}", extra={"request_id": request_id})

        try:
            response = self._client.get(url, timeout=self._request_timeout(timeout))
        except httpx.RequestError as e:
            raise self._transport_error(e, url, request_id) from e

        return self._usage_response(response, request_id)
