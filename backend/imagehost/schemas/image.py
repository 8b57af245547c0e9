"""
Pydantic schemas for image endpoints.
"""
from pydantic import BaseModel, ConfigDict, Field

from imagehost.errors import UploadError


class UploadResponse(BaseModel):
    """Schema for a successful upload."""
    id: str = Field(..., description="32-character hex image id")
    page_url: str = Field(..., alias="pageUrl", description="Viewing URL for the image")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "9f1c2b3a4d5e6f708192a3b4c5d6e7f8",
                "pageUrl": "https://img.example.com/i/9f1c2b3a4d5e6f708192a3b4c5d6e7f8",
            }
        },
    )


class ErrorResponse(BaseModel):
    """Schema for upload errors."""
    error: UploadError
