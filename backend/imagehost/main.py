"""
FastAPI application factory.
Wires settings, the object store client, routes, metrics and the landing page.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from imagehost import __version__
from imagehost.api.router import api_router
from imagehost.config import Settings, get_settings
from imagehost.errors import UploadRejected
from imagehost.middleware.metrics_middleware import MetricsMiddleware
from imagehost.storage.base import ObjectStore
from imagehost.storage.s3_client import S3ObjectStore
from imagehost.utils.logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.
    - Startup: configure structured logging
    """
    settings: Settings = app.state.settings
    configure_logging("imagehost", settings.log_level)
    logger.info(
        "Image host server listening for requests",
        extra={"event": "startup", "bucket": settings.s3_bucket, "environment": settings.environment},
    )
    yield


async def upload_rejected_handler(request: Request, exc: UploadRejected) -> JSONResponse:
    return JSONResponse(
        status_code=exc.error.status_code,
        content={"error": exc.error.value},
    )


def create_app(
    settings: Optional[Settings] = None,
    object_store: Optional[ObjectStore] = None,
) -> FastAPI:
    """
    Build the application.

    Settings are loaded from the environment when not given; a missing
    bucket or credential raises here, before the server binds its port.
    """
    if settings is None:
        settings = get_settings()
    if object_store is None:
        object_store = S3ObjectStore.from_settings(settings)

    app = FastAPI(
        title="Image Host",
        description="Anonymous image hosting backed by S3-compatible storage",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.object_store = object_store

    app.add_exception_handler(UploadRejected, upload_rejected_handler)
    app.add_middleware(MetricsMiddleware)

    app.include_router(api_router)

    @app.get("/metrics", include_in_schema=False)
    async def metrics():
        """Prometheus metrics endpoint."""
        return Response(
            content=generate_latest(),
            media_type=CONTENT_TYPE_LATEST
        )

    # Landing page and assets; mounted last so API routes win
    if settings.public_dir.is_dir():
        app.mount("/", StaticFiles(directory=settings.public_dir, html=True), name="public")
    else:
        logger.warning(f"Public directory not found, landing page disabled: {settings.public_dir}")

    return app
