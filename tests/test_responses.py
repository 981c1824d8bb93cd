import pytest
from datetime import datetime, timezone
from pydantic import ValidationError as PydanticValidationError

from pxshot import PxshotError, ResponseKind, ScreenshotResponse, StoredScreenshot, UsageStats
from pxshot.models.responses import ApiErrorBody

from conftest import PNG_BYTES, STORED_BODY, USAGE_BODY


class TestScreenshotResponse:
    """Test the bytes/stored tagged union."""

    def test_bytes_variant(self):
        response = ScreenshotResponse.from_bytes(PNG_BYTES, content_type="image/png")

        assert response.kind is ResponseKind.BYTES
        assert response.is_bytes is True
        assert response.is_stored is False
        assert response.image_bytes == PNG_BYTES
        assert response.stored is None
        assert response.content_type == "image/png"

    def test_stored_variant(self):
        stored = StoredScreenshot.model_validate(STORED_BODY)
        response = ScreenshotResponse.from_stored(stored)

        assert response.kind is ResponseKind.STORED
        assert response.is_stored is True
        assert response.stored == stored
        assert response.image_bytes is None

    def test_empty_bytes_still_bytes_variant(self):
        response = ScreenshotResponse.from_bytes(b"")
        assert response.image_bytes == b""
        assert response.stored is None

    def test_save_writes_bytes(self, tmp_path):
        response = ScreenshotResponse.from_bytes(PNG_BYTES)
        written = response.save(tmp_path / "shot.png")

        assert written == tmp_path / "shot.png"
        assert written.read_bytes() == PNG_BYTES

    def test_save_stored_raises(self, tmp_path):
        response = ScreenshotResponse.from_stored(StoredScreenshot.model_validate(STORED_BODY))

        with pytest.raises(PxshotError, match="no inline image data"):
            response.save(tmp_path / "shot.png")
        assert not (tmp_path / "shot.png").exists()

    def test_repr(self):
        assert "size=3" in repr(ScreenshotResponse.from_bytes(b"abc"))
        stored = ScreenshotResponse.from_stored(StoredScreenshot.model_validate(STORED_BODY))
        assert "https://cdn.example/x.png" in repr(stored)

    @pytest.mark.parametrize("kind", [ResponseKind.BYTES, ResponseKind.STORED])
    def test_constructor_requires_matching_variant(self, kind):
        with pytest.raises(ValueError):
            ScreenshotResponse(kind=kind)

    def test_constructor_rejects_both_variants(self):
        stored = StoredScreenshot.model_validate(STORED_BODY)
        with pytest.raises(ValueError):
            ScreenshotResponse(kind=ResponseKind.BYTES, _data=PNG_BYTES, _stored=stored)
        with pytest.raises(ValueError):
            ScreenshotResponse(kind=ResponseKind.STORED, _data=PNG_BYTES, _stored=stored)

    def test_constructor_coerces_kind(self):
        response = ScreenshotResponse(kind="bytes", _data=b"x")
        assert response.kind is ResponseKind.BYTES
        assert response.image_bytes == b"x"


class TestStoredScreenshot:
    """Test stored screenshot parsing."""

    def test_parse(self):
        stored = StoredScreenshot.model_validate(STORED_BODY)

        assert stored.url == "https://cdn.example/x.png"
        assert stored.expires_at == datetime(2025, 1, 1, tzinfo=timezone.utc)
        assert stored.width == 1920
        assert stored.height == 1080
        assert stored.size_bytes is None

    def test_size_bytes_and_unknown_fields(self):
        stored = StoredScreenshot.model_validate({**STORED_BODY, "size_bytes": 52000, "id": "abc"})
        assert stored.size_bytes == 52000

    @pytest.mark.parametrize("missing", ["url", "expires_at", "width", "height"])
    def test_required_fields(self, missing):
        body = {k: v for k, v in STORED_BODY.items() if k != missing}
        with pytest.raises(PydanticValidationError):
            StoredScreenshot.model_validate(body)

    def test_malformed_timestamp(self):
        with pytest.raises(PydanticValidationError):
            StoredScreenshot.model_validate({**STORED_BODY, "expires_at": "tomorrow"})


class TestUsageStats:
    """Test usage statistics parsing."""

    def test_parse(self):
        usage = UsageStats.model_validate(USAGE_BODY)

        assert usage.screenshots == 10
        assert usage.bytes == 204800
        assert usage.period_start == datetime(2025, 1, 1, tzinfo=timezone.utc)
        assert usage.period_end == datetime(2025, 2, 1, tzinfo=timezone.utc)

    def test_usage_is_read_only(self):
        usage = UsageStats.model_validate(USAGE_BODY)
        with pytest.raises(PydanticValidationError):
            usage.screenshots = 11

    def test_negative_counts_rejected(self):
        with pytest.raises(PydanticValidationError):
            UsageStats.model_validate({**USAGE_BODY, "bytes": -1})


class TestApiErrorBody:
    """Test tolerant error body parsing."""

    def test_status_and_message(self):
        body = ApiErrorBody.model_validate({"status": 402, "message": "quota exceeded"})
        assert body.status == 402
        assert body.message == "quota exceeded"

    @pytest.mark.parametrize("key", ["error", "detail"])
    def test_message_aliases(self, key):
        body = ApiErrorBody.model_validate({key: "invalid api key"})
        assert body.message == "invalid api key"
        assert body.status is None

    def test_empty_body(self):
        body = ApiErrorBody.model_validate({})
        assert body.message is None

    def test_malformed_status_keeps_message(self):
        body = ApiErrorBody.model_validate({"status": "n/a", "message": "quota exceeded"})
        assert body.message == "quota exceeded"
