"""
Image endpoints.

1. POST /upload - Store a multipart file under a new id
2. GET /i/{image_id} - Redirect to a presigned download URL

The service never streams image bytes back out; reads are served by the
object store through the signed URL.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse, RedirectResponse
from starlette.formparsers import MultiPartException

from imagehost.config import Settings
from imagehost.errors import UploadError, UploadRejected
from imagehost.api.dependencies import get_app_settings, get_object_store
from imagehost.schemas.image import ErrorResponse, UploadResponse
from imagehost.services.image_service import ImageService
from imagehost.storage.base import ObjectStore
from imagehost.utils.logging import log_image_upload_rejected
from imagehost.utils.metrics import uploads_total
from imagehost.utils.multipart import (
    BodyTooLarge,
    TooManyFiles,
    is_multipart,
    read_multipart_form,
    read_upload,
)

logger = logging.getLogger(__name__)

router = APIRouter()

UPLOAD_FIELD = "file"


def _reject(error: UploadError, detail: Optional[str] = None, **fields) -> UploadRejected:
    uploads_total.labels(outcome=error.value).inc()
    log_image_upload_rejected(logger, error=error.value, detail=detail, **fields)
    return UploadRejected(error, detail=detail)


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={
        400: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def upload_image(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    store: ObjectStore = Depends(get_object_store),
):
    """
    Store one uploaded file and return its id and viewing URL.

    Flow:
    1. Read the multipart body into memory (bounded)
    2. Require exactly one file part named "file"
    3. Write it to the object store under a new id
    4. Build pageUrl from the request's own scheme and host
    """
    if not is_multipart(request):
        raise _reject(UploadError.FILE_REQUIRED, "request is not multipart/form-data")

    try:
        form = await read_multipart_form(request, settings.max_upload_bytes)
    except BodyTooLarge as e:
        raise _reject(UploadError.FILE_TOO_LARGE, str(e))
    except TooManyFiles as e:
        raise _reject(UploadError.TOO_MANY_FILES, str(e))
    except MultiPartException as e:
        raise _reject(UploadError.FILE_REQUIRED, f"malformed multipart body: {e.message}")

    try:
        upload = await read_upload(form, UPLOAD_FIELD)
    finally:
        await form.close()

    if upload is None:
        raise _reject(UploadError.FILE_REQUIRED, f'no "{UPLOAD_FIELD}" file part')

    if upload.size > settings.max_upload_bytes:
        raise _reject(
            UploadError.FILE_TOO_LARGE,
            f"file exceeds {settings.max_upload_bytes} bytes",
            size_bytes=upload.size,
        )

    image_id = await ImageService.store_upload(store, upload)

    base_url = f"{request.url.scheme}://{request.url.netloc}"
    return UploadResponse(id=image_id, page_url=f"{base_url}/i/{image_id}")


@router.get("/i/{image_id}")
async def get_image(
    image_id: str,
    settings: Settings = Depends(get_app_settings),
    store: ObjectStore = Depends(get_object_store),
):
    """
    Redirect to a freshly signed download URL.

    Unknown ids and backend failures both answer 404.
    """
    url = await ImageService.resolve_download_url(store, image_id, settings.signed_url_ttl)
    if url is None:
        return PlainTextResponse("Not found", status_code=404)

    return RedirectResponse(url, status_code=302)
