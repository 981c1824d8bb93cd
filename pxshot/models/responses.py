from typing import Any, Optional, Union
from datetime import datetime
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pydantic import AliasChoices, BaseModel, Field

from ..core.exceptions import PxshotError


class ResponseKind(str, Enum):
    """Which variant a ScreenshotResponse holds."""
    BYTES = "bytes"
    STORED = "stored"


class StoredScreenshot(BaseModel):
    """Screenshot persisted by the API (store=true)."""

    url: str = Field(..., description="URL where the screenshot is stored")
    expires_at: datetime = Field(..., description="When the stored screenshot expires")
    width: int = Field(..., description="Width of the screenshot in pixels", ge=0)
    height: int = Field(..., description="Height of the screenshot in pixels", ge=0)
    size_bytes: Optional[int] = Field(None, description="Size of the screenshot in bytes", ge=0)

    model_config = {"frozen": True, "extra": "ignore"}


class UsageStats(BaseModel):
    """API usage for the current billing period."""

    screenshots: int = Field(..., description="Screenshots taken this period", ge=0)
    bytes: int = Field(..., description="Total bytes of screenshots taken this period", ge=0)
    period_start: datetime = Field(..., description="Billing period start")
    period_end: datetime = Field(..., description="Billing period end")

    model_config = {"frozen": True, "extra": "ignore"}


class ApiErrorBody(BaseModel):
    """Error body returned with non-2xx responses."""

    # Informational only; the HTTP status line is authoritative
    status: Optional[Any] = None
    message: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("message", "error", "detail")
    )

    model_config = {"extra": "ignore"}


@dataclass(frozen=True)
class ScreenshotResponse:
    """
    Result of a screenshot request: raw image bytes or a stored asset.

    Exactly one of ``image_bytes`` and ``stored`` is populated; the accessor
    for the other variant returns None.
    """
    kind: ResponseKind
    _data: Optional[bytes] = None
    _stored: Optional[StoredScreenshot] = None
    content_type: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "kind", ResponseKind(self.kind))
        if self.kind is ResponseKind.BYTES:
            valid = self._data is not None and self._stored is None
        else:
            valid = self._stored is not None and self._data is None
        if not valid:
            raise ValueError(f"ScreenshotResponse of kind '{self.kind.value}' must hold exactly that variant")

    @classmethod
    def from_bytes(cls, data: bytes, content_type: Optional[str] = None) -> "ScreenshotResponse":
        return cls(kind=ResponseKind.BYTES, _data=data, content_type=content_type)

    @classmethod
    def from_stored(cls, stored: StoredScreenshot) -> "ScreenshotResponse":
        return cls(kind=ResponseKind.STORED, _stored=stored)

    @property
    def is_bytes(self) -> bool:
        return self.kind is ResponseKind.BYTES

    @property
    def is_stored(self) -> bool:
        return self.kind is ResponseKind.STORED

    @property
    def image_bytes(self) -> Optional[bytes]:
        """Image bytes if this is a bytes response, else None."""
        return self._data if self.is_bytes else None

    @property
    def stored(self) -> Optional[StoredScreenshot]:
        """Stored screenshot info if this is a stored response, else None."""
        return self._stored if self.is_stored else None

    def save(self, path: Union[str, Path]) -> Path:
        """
        Write the image bytes to a file.

        Args:
            path: Destination file path

        Returns:
            The path written

        Raises:
            PxshotError: If the screenshot was stored server-side
        """
        if not self.is_bytes:
            raise PxshotError(
                "Stored screenshots have no inline image data; download it from stored.url",
                "NO_IMAGE_DATA"
            )
        file_path = Path(path)
        file_path.write_bytes(self._data)
        return file_path

    def __repr__(self) -> str:
        if self.is_bytes:
            return f"ScreenshotResponse(kind=bytes, size={len(self._data)}, content_type={self.content_type!r})"
        return f"ScreenshotResponse(kind=stored, url={self._stored.url!r})"
