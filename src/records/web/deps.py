"""Request dependencies shared by route handlers."""

from fastapi import Request

from records.config.app_config import AppConfig
from records.db.store import RecordStore


def get_store(request: Request) -> RecordStore:
    """Return the store attached to the running app."""
    return request.app.state.store


def get_config(request: Request) -> AppConfig:
    """Return the config the app was created with."""
    return request.app.state.config
