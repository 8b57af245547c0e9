"""
Error types shared by the API and storage layers.
"""
import enum
from typing import Optional


class UploadError(str, enum.Enum):
    """Machine-readable upload error codes, sent as {"error": "<code>"}."""
    FILE_REQUIRED = "file_required"
    TOO_MANY_FILES = "too_many_files"
    FILE_TOO_LARGE = "file_too_large"
    UPLOAD_FAILED = "upload_failed"

    @property
    def status_code(self) -> int:
        return _UPLOAD_ERROR_STATUS[self]


_UPLOAD_ERROR_STATUS = {
    UploadError.FILE_REQUIRED: 400,
    UploadError.TOO_MANY_FILES: 400,
    UploadError.FILE_TOO_LARGE: 413,
    UploadError.UPLOAD_FAILED: 500,
}


class UploadRejected(Exception):
    """Raised by the upload path; rendered by the app's exception handler."""

    def __init__(self, error: UploadError, detail: Optional[str] = None):
        self.error = error
        self.detail = detail
        super().__init__(detail or error.value)


class StorageError(Exception):
    """Any failure reported by the object store backend."""

    def __init__(self, operation: str, key: Optional[str], message: str):
        self.operation = operation
        self.key = key
        self.message = message
        super().__init__(f"{operation} failed for {key!r}: {message}")
