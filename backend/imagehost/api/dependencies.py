"""
FastAPI dependencies.

Settings and the object store are created once by the app factory and
kept on app.state; handlers receive them through these functions so tests
can hand in their own.
"""
from fastapi import Request

from imagehost.config import Settings
from imagehost.storage.base import ObjectStore


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_object_store(request: Request) -> ObjectStore:
    return request.app.state.object_store
