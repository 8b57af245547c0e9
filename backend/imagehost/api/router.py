"""
API router aggregator.
Includes all route modules.
"""
from fastapi import APIRouter
from imagehost.api import health, images

api_router = APIRouter()

# Include route modules
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(images.router, tags=["images"])
