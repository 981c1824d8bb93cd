from typing import Any, Dict, Optional, Union
from enum import Enum

from pydantic import AnyHttpUrl, BaseModel, Field, TypeAdapter, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import ValidationError
from ..utils.logger import get_logger

logger = get_logger(__name__)


class ImageFormat(str, Enum):
    """Image format for screenshots."""
    PNG = "png"
    JPEG = "jpeg"
    WEBP = "webp"


class WaitUntil(str, Enum):
    """When the page counts as loaded."""
    LOAD = "load"
    DOM_CONTENT_LOADED = "dom_content_loaded"
    NETWORK_IDLE = "network_idle"


# Formats where the quality setting has an effect
LOSSY_FORMATS = (ImageFormat.JPEG, ImageFormat.WEBP)

_HTTP_URL = TypeAdapter(AnyHttpUrl)


def is_http_url(value: str) -> bool:
    """True if value parses as an absolute http(s) URL with a host."""
    try:
        _HTTP_URL.validate_python(value)
    except PydanticValidationError:
        return False
    return True


class ScreenshotRequest(BaseModel):
    """Request model for screenshot capture. Immutable once built."""

    url: str = Field(..., description="URL to capture", min_length=1)
    format: ImageFormat = Field(ImageFormat.PNG, description="Image format")
    quality: Optional[int] = Field(None, description="Image quality (JPEG/WebP only)", ge=1, le=100)
    width: Optional[int] = Field(None, description="Viewport width in pixels", ge=1)
    height: Optional[int] = Field(None, description="Viewport height in pixels", ge=1)
    full_page: bool = Field(False, description="Capture the full scrollable page")
    wait_until: Optional[WaitUntil] = Field(None, description="When to consider navigation finished")
    wait_for_selector: Optional[str] = Field(
        None,
        description="CSS selector to wait for before capturing",
        min_length=1
    )
    wait_for_timeout: Optional[int] = Field(
        None,
        description="Extra wait after page load in milliseconds",
        ge=0
    )
    device_scale_factor: Optional[float] = Field(
        None,
        description="Device pixel ratio (the API accepts 1-3)",
        gt=0
    )
    store: bool = Field(False, description="Store the screenshot and return a URL instead of bytes")
    block_ads: bool = Field(False, description="Block ads and trackers")

    model_config = {"frozen": True}

    @field_validator('url')
    @classmethod
    def validate_url(cls, v):
        """Require an absolute http(s) URL; the original string is kept."""
        if not is_http_url(v):
            raise ValueError(f"URL must be an absolute http(s) URL: {v!r}")
        return v

    @model_validator(mode='after')
    def warn_quality_ignored(self):
        if self.quality is not None and self.format not in LOSSY_FORMATS:
            logger.warning(
                f"quality={self.quality} has no effect for format '{self.format.value}'"
            )
        return self

    @classmethod
    def builder(cls) -> "ScreenshotRequestBuilder":
        """Create a new builder for a screenshot request."""
        return ScreenshotRequestBuilder()

    def to_payload(self) -> Dict[str, Any]:
        """JSON body for the capture endpoint; unset options are omitted."""
        return self.model_dump(mode="json", exclude_none=True)


class ScreenshotRequestBuilder:
    """
    Chaining builder for ScreenshotRequest.

    Usage:
        request = (
            ScreenshotRequest.builder()
            .url("https://example.com")
            .format(ImageFormat.JPEG)
            .quality(80)
            .build()
        )
    """

    def __init__(self):
        self._fields: Dict[str, Any] = {}

    def _set(self, name: str, value: Any) -> "ScreenshotRequestBuilder":
        self._fields[name] = value
        return self

    def url(self, url: str) -> "ScreenshotRequestBuilder":
        return self._set("url", url)

    def format(self, format: Union[ImageFormat, str]) -> "ScreenshotRequestBuilder":
        return self._set("format", format)

    def quality(self, quality: int) -> "ScreenshotRequestBuilder":
        """Set the image quality (1-100, only for JPEG/WebP)."""
        return self._set("quality", quality)

    def width(self, width: int) -> "ScreenshotRequestBuilder":
        return self._set("width", width)

    def height(self, height: int) -> "ScreenshotRequestBuilder":
        return self._set("height", height)

    def viewport(self, width: int, height: int) -> "ScreenshotRequestBuilder":
        """Set both viewport dimensions."""
        return self.width(width).height(height)

    def full_page(self, full_page: bool = True) -> "ScreenshotRequestBuilder":
        return self._set("full_page", full_page)

    def wait_until(self, wait_until: Union[WaitUntil, str]) -> "ScreenshotRequestBuilder":
        return self._set("wait_until", wait_until)

    def wait_for_selector(self, selector: str) -> "ScreenshotRequestBuilder":
        return self._set("wait_for_selector", selector)

    def wait_for_timeout(self, timeout_ms: int) -> "ScreenshotRequestBuilder":
        """Additional wait time in milliseconds after page load."""
        return self._set("wait_for_timeout", timeout_ms)

    def device_scale_factor(self, factor: float) -> "ScreenshotRequestBuilder":
        return self._set("device_scale_factor", factor)

    def store(self, store: bool = True) -> "ScreenshotRequestBuilder":
        """Store the screenshot and return a URL instead of bytes."""
        return self._set("store", store)

    def block_ads(self, block_ads: bool = True) -> "ScreenshotRequestBuilder":
        return self._set("block_ads", block_ads)

    def build(self) -> ScreenshotRequest:
        """
        Validate the accumulated fields and build the request.

        Raises:
            ValidationError: If url is missing or any field is out of range
        """
        if not self._fields.get("url"):
            raise ValidationError("missing required field: url", field="url")

        try:
            return ScreenshotRequest(**self._fields)
        except PydanticValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first.get("loc", ())) or None
            message = first.get("msg", str(e))
            raise ValidationError(
                f"invalid {field}: {message}" if field else message,
                field=field,
                details={"errors": e.errors(include_url=False, include_context=False)}
            ) from e
