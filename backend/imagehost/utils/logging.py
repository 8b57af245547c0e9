"""
Production logging utility for structured JSON logging.

Provides event-specific logging functions with mandatory fields:
- timestamp (ISO8601)
- level
- service
- event

Optional fields (included when applicable):
- image_id
- size_bytes
- duration_ms

Usage:
    from imagehost.utils.logging import configure_logging, log_image_uploaded

    configure_logging('imagehost', 'INFO')
    log_image_uploaded(logger, image_id='...', size_bytes=5, duration_ms=12.3)
"""
import logging
import sys
from typing import Optional, Dict, Any
from pythonjsonlogger.json import JsonFormatter


class StructuredLogger:
    """Structured JSON logger with mandatory fields."""

    _service_name = None
    _configured = False

    @classmethod
    def configure(cls, service_name: str, log_level: str = "INFO"):
        """
        Configure structured JSON logging for the application.

        Args:
            service_name: Service identifier
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        """
        if cls._configured:
            return  # Already configured

        cls._service_name = service_name

        # Remove default handlers
        root_logger = logging.getLogger()
        root_logger.handlers = []

        formatter = JsonFormatter(
            '%(timestamp)s %(level)s %(name)s %(message)s',
            timestamp=True,
            json_ensure_ascii=False
        )

        # Console handler (for container logs)
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)

        root_logger.addHandler(handler)
        root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

        # Add service name to all log records via filter
        class ServiceFilter(logging.Filter):
            def filter(self, record):
                record.service = cls._service_name
                return True

        handler.addFilter(ServiceFilter())
        cls._configured = True


def _build_log_extra(
    event: str,
    image_id: Optional[str] = None,
    duration_ms: Optional[float] = None,
    **kwargs
) -> Dict[str, Any]:
    """
    Build extra fields for structured logging.

    Args:
        event: Event name (mandatory)
        image_id: Optional image ID
        duration_ms: Optional duration in milliseconds
        **kwargs: Additional fields

    Returns:
        Dictionary of extra fields
    """
    extra = {
        "event": event,
        **kwargs
    }

    if image_id:
        extra["image_id"] = image_id
    if duration_ms is not None:
        extra["duration_ms"] = round(duration_ms, 2)

    return extra


# Upload events

def log_image_uploaded(
    logger: logging.Logger,
    image_id: str,
    size_bytes: int,
    content_type: str,
    duration_ms: Optional[float] = None,
    **kwargs
):
    """Log a successful upload."""
    extra = _build_log_extra(
        event="image_uploaded",
        image_id=image_id,
        duration_ms=duration_ms,
        size_bytes=size_bytes,
        content_type=content_type,
        **kwargs
    )
    logger.info(f"Image uploaded: {image_id}", extra=extra)


def log_image_upload_rejected(
    logger: logging.Logger,
    error: str,
    **kwargs
):
    """Log an upload refused for client input reasons (no storage call made)."""
    extra = _build_log_extra(event="image_upload_rejected", error=error, **kwargs)
    logger.info(f"Image upload rejected: {error}", extra=extra)


def log_image_upload_failed(
    logger: logging.Logger,
    image_id: str,
    error: str,
    duration_ms: Optional[float] = None,
    **kwargs
):
    """
    Log a storage failure during upload.

    Includes the stack trace when called from an except block.
    """
    extra = _build_log_extra(
        event="image_upload_failed",
        image_id=image_id,
        duration_ms=duration_ms,
        error=str(error),
        **kwargs
    )
    message = f"Image upload failed: {image_id} - {error}"
    exc_info = sys.exc_info()
    if exc_info[0] is not None:
        logger.error(message, extra=extra, exc_info=exc_info)
    else:
        logger.error(message, extra=extra)


# Retrieval events

def log_image_redirected(
    logger: logging.Logger,
    image_id: str,
    expires_in: int,
    duration_ms: Optional[float] = None,
    **kwargs
):
    """Log a retrieval answered with a signed URL redirect."""
    extra = _build_log_extra(
        event="image_redirected",
        image_id=image_id,
        duration_ms=duration_ms,
        expires_in=expires_in,
        **kwargs
    )
    logger.info(f"Image redirected: {image_id}", extra=extra)


def log_image_not_found(
    logger: logging.Logger,
    image_id: str,
    error: Optional[str] = None,
    **kwargs
):
    """
    Log a retrieval answered with 404.

    A backend error is logged at WARNING with its detail; a plain miss at INFO.
    """
    extra = _build_log_extra(event="image_not_found", image_id=image_id, **kwargs)
    if error:
        extra["error"] = str(error)
        logger.warning(f"Image lookup failed: {image_id} - {error}", extra=extra)
    else:
        logger.info(f"Image not found: {image_id}", extra=extra)


def configure_logging(service_name: str, log_level: str = "INFO"):
    """Configure logging (alias for StructuredLogger.configure)."""
    StructuredLogger.configure(service_name, log_level)
