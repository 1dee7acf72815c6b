"""Shared request helpers for the HTTP routers."""
from __future__ import annotations

from fastapi import HTTPException, Request

from ..config import Settings
from ..content.store import ContentStore


def get_store(request: Request) -> ContentStore:
    store = getattr(request.app.state, "content_store", None)
    if not isinstance(store, ContentStore):
        raise HTTPException(status_code=503, detail="Content store not ready")
    return store


def get_settings(request: Request) -> Settings:
    settings = getattr(request.app.state, "settings", None)
    if isinstance(settings, Settings):
        return settings
    return Settings()
