"""API key schemas. The key hash never appears in a response."""

from __future__ import annotations

from datetime import datetime

from .common import APIModel


class ApiKeyCreate(APIModel):
    """Request body for creating an API key."""

    graph_id: str
    expires_at: datetime | None = None


class ApiKeyUpdate(APIModel):
    """Request body for updating an API key; only the expiry can change."""

    expires_at: datetime | None = None


class ApiKeyResponse(APIModel):
    """API key metadata."""

    id: str
    graph_id: str
    public_id: str
    key_prefix: str
    last_used_at: datetime | None = None
    expires_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class ApiKeyCreateResponse(APIModel):
    """A new API key; ``key`` is only ever returned here."""

    api_key: ApiKeyResponse
    key: str
