"""
Storage module for S3-compatible object storage.

Uploaded bytes are written here under their image id, and retrieval
hands out presigned GET URLs so the backend serves the bandwidth.
"""
from imagehost.storage.base import ObjectStore
from imagehost.storage.s3_client import S3ObjectStore

__all__ = ["ObjectStore", "S3ObjectStore"]
