"""
pxshot - Python client for the Pxshot screenshot API

Usage:
    # Async usage
    from pxshot import Pxshot, ScreenshotRequest, ImageFormat

    async with Pxshot("px_your_api_key") as client:
        response = await client.screenshot(
            ScreenshotRequest.builder()
            .url("https://example.com")
            .format(ImageFormat.PNG)
            .viewport(1920, 1080)
            .build()
        )
        response.save("screenshot.png")

    # Blocking usage
    from pxshot import BlockingPxshot

    with BlockingPxshot("px_your_api_key") as client:
        usage = client.usage()
        print(usage.screenshots, usage.bytes)
"""

__version__ = "0.1.0"

from .core.exceptions import (
    PxshotError,
    ValidationError,
    RequestError,
    APIError,
    AuthenticationError,
    AuthorizationError,
    QuotaExceededError,
    RateLimitError,
    DeserializationError,
    ConfigurationError,
    ClientClosedError,
)
from .models.requests import (
    ImageFormat,
    WaitUntil,
    ScreenshotRequest,
    ScreenshotRequestBuilder,
)
from .models.responses import (
    ResponseKind,
    ScreenshotResponse,
    StoredScreenshot,
    UsageStats,
)
from .services.client import Pxshot
from .services.blocking import BlockingPxshot
from .utils.logger import setup_logging

__all__ = [
    "Pxshot",
    "BlockingPxshot",
    "ImageFormat",
    "WaitUntil",
    "ScreenshotRequest",
    "ScreenshotRequestBuilder",
    "ResponseKind",
    "ScreenshotResponse",
    "StoredScreenshot",
    "UsageStats",
    "PxshotError",
    "ValidationError",
    "RequestError",
    "APIError",
    "AuthenticationError",
    "AuthorizationError",
    "QuotaExceededError",
    "RateLimitError",
    "DeserializationError",
    "ConfigurationError",
    "ClientClosedError",
    "setup_logging",
]
