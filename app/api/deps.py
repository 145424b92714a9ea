from fastapi import Request

from app.core.config import Settings
from app.db.store import DocumentStore
from app.services.cdn import CloudinaryStorage


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


def get_storage(request: Request) -> CloudinaryStorage:
    return request.app.state.storage
