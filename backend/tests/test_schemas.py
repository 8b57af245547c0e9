"""
Tests for Pydantic schemas and error codes.
"""
import pytest
from pydantic import ValidationError

from imagehost.errors import UploadError, UploadRejected
from imagehost.schemas.image import ErrorResponse, UploadResponse


class TestUploadResponse:
    """Tests for the upload response schema."""

    def test_serializes_page_url_alias(self):
        schema = UploadResponse(id="abc", page_url="http://test/i/abc")
        assert schema.model_dump(by_alias=True) == {"id": "abc", "pageUrl": "http://test/i/abc"}

    def test_accepts_alias_on_input(self):
        schema = UploadResponse(id="abc", pageUrl="http://test/i/abc")
        assert schema.page_url == "http://test/i/abc"

    def test_missing_page_url(self):
        with pytest.raises(ValidationError):
            UploadResponse(id="abc")


class TestErrorResponse:
    """Tests for the error response schema."""

    def test_wire_shape(self):
        schema = ErrorResponse(error=UploadError.FILE_REQUIRED)
        assert schema.model_dump(mode="json") == {"error": "file_required"}

    def test_unknown_code_rejected(self):
        with pytest.raises(ValidationError):
            ErrorResponse(error="something_else")


class TestUploadError:
    """Tests for error code to status mapping."""

    @pytest.mark.parametrize("error,status", [
        (UploadError.FILE_REQUIRED, 400),
        (UploadError.TOO_MANY_FILES, 400),
        (UploadError.FILE_TOO_LARGE, 413),
        (UploadError.UPLOAD_FAILED, 500),
    ])
    def test_status_codes(self, error, status):
        assert error.status_code == status

    def test_rejection_carries_code(self):
        exc = UploadRejected(UploadError.FILE_REQUIRED, detail="no file part")
        assert exc.error is UploadError.FILE_REQUIRED
        assert str(exc) == "no file part"
