"""
Pydantic schemas for API request/response validation.
"""
from imagehost.schemas.image import ErrorResponse, UploadResponse

__all__ = [
    "ErrorResponse",
    "UploadResponse",
]
