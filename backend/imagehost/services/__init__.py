"""
Business logic services.
"""
from imagehost.services.image_service import ImageService

__all__ = [
    "ImageService",
]
