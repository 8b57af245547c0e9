"""
Health check endpoint.
Verifies the configured bucket is reachable.
"""
import asyncio

from fastapi import APIRouter, Depends, HTTPException

from imagehost.api.dependencies import get_object_store
from imagehost.errors import StorageError
from imagehost.storage.base import ObjectStore

router = APIRouter()


@router.get("")
async def health_check(store: ObjectStore = Depends(get_object_store)):
    """
    Health check endpoint.
    Returns status of the object store connection.
    """
    health_status = {
        "status": "healthy",
        "storage": "unknown"
    }

    try:
        await asyncio.to_thread(store.ping)
        health_status["storage"] = "connected"
    except StorageError as e:
        health_status["storage"] = f"error: {e.message}"
        health_status["status"] = "unhealthy"

    if health_status["status"] == "unhealthy":
        raise HTTPException(status_code=503, detail=health_status)

    return health_status
