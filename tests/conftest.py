import json

import httpx
import pytest

from pxshot import ScreenshotRequest

API_KEY = "px_test_key"
BASE_URL = "https://api.pxshot.test"

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + bytes(range(256)) * 4

STORED_BODY = {
    "url": "https://cdn.example/x.png",
    "expires_at": "2025-01-01T00:00:00Z",
    "width": 1920,
    "height": 1080,
}

USAGE_BODY = {
    "screenshots": 10,
    "bytes": 204800,
    "period_start": "2025-01-01T00:00:00Z",
    "period_end": "2025-02-01T00:00:00Z",
}


class RecordingHandler:
    """MockTransport handler returning a canned response and recording requests."""

    def __init__(self, response_factory):
        self.response_factory = response_factory
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response_factory(request)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_json(self) -> dict:
        return json.loads(self.last_request.content)


@pytest.fixture
def basic_request():
    return ScreenshotRequest.builder().url("https://example.com").build()


@pytest.fixture
def stored_request():
    return ScreenshotRequest.builder().url("https://example.com").store(True).build()


@pytest.fixture
def image_handler():
    return RecordingHandler(
        lambda request: httpx.Response(200, content=PNG_BYTES, headers={"content-type": "image/png"})
    )


@pytest.fixture
def stored_handler():
    return RecordingHandler(lambda request: httpx.Response(200, json=STORED_BODY))


@pytest.fixture
def usage_handler():
    return RecordingHandler(lambda request: httpx.Response(200, json=USAGE_BODY))


@pytest.fixture
def quota_handler():
    return RecordingHandler(
        lambda request: httpx.Response(402, json={"status": 402, "message": "quota exceeded"})
    )


@pytest.fixture
def refused_handler():
    def refuse(request):
        raise httpx.ConnectError("[Errno 111] Connection refused", request=request)
    return RecordingHandler(refuse)


@pytest.fixture
def timeout_handler():
    def time_out(request):
        raise httpx.ReadTimeout("timed out", request=request)
    return RecordingHandler(time_out)
