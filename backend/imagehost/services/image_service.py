"""
Image upload and retrieval business logic.

Handlers stay thin: they parse HTTP input and map outcomes to responses.
All object store calls go through here and run in a worker thread so the
event loop is never blocked on the network.
"""
import asyncio
import logging
import time
from typing import Optional

from imagehost.errors import StorageError, UploadError, UploadRejected
from imagehost.storage.base import ObjectStore
from imagehost.utils.ids import generate_image_id
from imagehost.utils.logging import (
    log_image_not_found,
    log_image_redirected,
    log_image_upload_failed,
    log_image_uploaded,
)
from imagehost.utils.metrics import (
    images_not_found_total,
    signed_urls_issued_total,
    upload_size_bytes,
    uploads_total,
)
from imagehost.utils.multipart import UploadedFile

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"
ORIGINAL_NAME_METADATA_KEY = "originalname"


class ImageService:
    """
    Service for storing and resolving images.

    Responsibilities:
    - Generate image ids
    - Write uploads to the object store
    - Resolve ids to presigned download URLs
    """

    @staticmethod
    async def store_upload(store: ObjectStore, upload: UploadedFile) -> str:
        """
        Store an uploaded file under a fresh image id.

        Args:
            store: Object store backend
            upload: Buffered file part

        Returns:
            The new image id (only once the write has succeeded)

        Raises:
            UploadRejected: UPLOAD_FAILED if the backend write fails
        """
        image_id = generate_image_id()
        content_type = upload.content_type or DEFAULT_CONTENT_TYPE
        start = time.perf_counter()

        try:
            await asyncio.to_thread(
                store.put_object,
                image_id,
                upload.data,
                content_type,
                {ORIGINAL_NAME_METADATA_KEY: upload.filename},
            )
        except StorageError as e:
            uploads_total.labels(outcome=UploadError.UPLOAD_FAILED.value).inc()
            log_image_upload_failed(
                logger,
                image_id=image_id,
                error=e.message,
                duration_ms=(time.perf_counter() - start) * 1000,
                size_bytes=upload.size,
            )
            raise UploadRejected(UploadError.UPLOAD_FAILED, detail=e.message) from e

        uploads_total.labels(outcome="stored").inc()
        upload_size_bytes.observe(upload.size)
        log_image_uploaded(
            logger,
            image_id=image_id,
            size_bytes=upload.size,
            content_type=content_type,
            duration_ms=(time.perf_counter() - start) * 1000,
        )
        return image_id

    @staticmethod
    async def resolve_download_url(store: ObjectStore, image_id: str, expires_in: int) -> Optional[str]:
        """
        Resolve an image id to a freshly signed download URL.

        A missing object and a failing backend both yield None; the
        backend error is logged here and not passed on to the caller.

        Args:
            store: Object store backend
            image_id: Any string; not checked against the id format
            expires_in: URL lifetime in seconds

        Returns:
            Presigned URL, or None if the image cannot be served
        """
        start = time.perf_counter()

        try:
            exists = await asyncio.to_thread(store.object_exists, image_id)
            if not exists:
                images_not_found_total.inc()
                log_image_not_found(logger, image_id=image_id)
                return None

            url = await asyncio.to_thread(store.presigned_get_url, image_id, expires_in)
        except StorageError as e:
            images_not_found_total.inc()
            log_image_not_found(logger, image_id=image_id, error=e.message, operation=e.operation)
            return None

        signed_urls_issued_total.inc()
        log_image_redirected(
            logger,
            image_id=image_id,
            expires_in=expires_in,
            duration_ms=(time.perf_counter() - start) * 1000,
        )
        return url
