from typing import Any, Dict, Optional, Type, TypeVar
import json
import uuid

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .. import __version__
from ..config import settings
from ..core.exceptions import (
    APIError,
    ClientClosedError,
    ConfigurationError,
    DeserializationError,
    RequestError,
    api_error_for_status
)
from ..models.requests import ScreenshotRequest, is_http_url
from ..models.responses import (
    ApiErrorBody,
    ScreenshotResponse,
    StoredScreenshot,
    UsageStats
)
from ..utils.logger import get_logger

logger = get_logger(__name__)

SCREENSHOT_PATH = "/v1/screenshot"
USAGE_PATH = "/v1/usage"

ModelT = TypeVar("ModelT", bound=BaseModel)


def _media_type(response: httpx.Response) -> str:
    content_type = response.headers.get("content-type", "")
    return content_type.split(";", 1)[0].strip().lower()


def _is_json(media_type: str) -> bool:
    return media_type == "application/json" or media_type.endswith("+json")


def _is_image(media_type: str) -> bool:
    return media_type.startswith("image/") or media_type == "application/octet-stream"


def new_request_id() -> str:
    return uuid.uuid4().hex[:12]


class BaseClient:
    """
    Configuration and response handling shared by the async and blocking clients.

    Holds only read-only state after construction; subclasses own the httpx
    client and perform the actual I/O.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        connect_timeout: Optional[float] = None
    ):
        api_key = api_key if api_key is not None else settings.api_key
        if not api_key or not api_key.strip():
            raise ConfigurationError(
                "API key not configured (pass api_key or set PXSHOT_API_KEY)",
                config_key="api_key"
            )

        base_url = (base_url or settings.base_url).strip().rstrip("/")
        if not is_http_url(base_url):
            raise ConfigurationError(f"Invalid base URL: {base_url!r}", config_key="base_url")

        self._api_key = api_key.strip()
        self.base_url = base_url
        self.timeout = httpx.Timeout(
            timeout if timeout is not None else settings.timeout,
            connect=connect_timeout if connect_timeout is not None else settings.connect_timeout
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self.base_url!r})"

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Accept": "image/*, application/json",
            "User-Agent": settings.user_agent or f"pxshot-python/{__version__}",
        }

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _request_timeout(self, timeout: Optional[float]) -> Any:
        if timeout is None:
            return httpx.USE_CLIENT_DEFAULT
        return httpx.Timeout(timeout)

    def _ensure_open(self) -> None:
        if self._client.is_closed:
            raise ClientClosedError(f"{type(self).__name__} is closed; create a new client")

    # Error mapping

    def _transport_error(self, exc: httpx.RequestError, url: str, request_id: str) -> RequestError:
        is_timeout = isinstance(exc, httpx.TimeoutException)
        reason = "Request timed out" if is_timeout else "HTTP request failed"
        logger.error(
            f"{reason} for {url}: {type(exc).__name__}: {exc}",
            extra={"request_id": request_id}
        )
        return RequestError(f"{reason}: {exc or type(exc).__name__}", url=url, timeout=is_timeout)

    def _api_error(self, response: httpx.Response, request_id: str) -> APIError:
        status = response.status_code
        message = None

        raw = response.text.strip()
        if raw:
            try:
                body = ApiErrorBody.model_validate_json(raw)
                message = body.message
            except PydanticValidationError:
                pass
            if not message:
                message = raw

        if not message:
            message = response.reason_phrase or "Unknown error"

        logger.warning(
            f"API returned {status} for {response.request.method} {response.request.url.path}: {message}",
            extra={"request_id": request_id}
        )
        return api_error_for_status(status, message, response.headers)

    def _parse_model(self, response: httpx.Response, model: Type[ModelT], what: str) -> ModelT:
        try:
            return model.model_validate(response.json())
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DeserializationError(
                f"failed to parse {what} response: body is not valid JSON",
                body=response.text
            ) from e
        except PydanticValidationError as e:
            raise DeserializationError(
                f"failed to parse {what} response: {e.error_count()} invalid field(s)",
                body=response.text
            ) from e

    # Response mapping

    def _screenshot_response(
        self,
        request: ScreenshotRequest,
        response: httpx.Response,
        request_id: str
    ) -> ScreenshotResponse:
        if not response.is_success:
            raise self._api_error(response, request_id)

        media_type = _media_type(response)
        if _is_json(media_type):
            stored = True
        elif _is_image(media_type):
            stored = False
        else:
            # Unknown content type: trust what was asked for
            stored = request.store

        if stored:
            result = ScreenshotResponse.from_stored(
                self._parse_model(response, StoredScreenshot, "stored screenshot")
            )
            logger.debug(f"Screenshot stored at {result.stored.url}", extra={"request_id": request_id})
        else:
            result = ScreenshotResponse.from_bytes(response.content, content_type=media_type or None)
            logger.debug(
                f"Received {len(response.content)} bytes ({media_type or 'unknown type'})",
                extra={"request_id": request_id}
            )
        return result

    def _usage_response(self, response: httpx.Response, request_id: str) -> UsageStats:
        if not response.is_success:
            raise self._api_error(response, request_id)
        return self._parse_model(response, UsageStats, "usage")
