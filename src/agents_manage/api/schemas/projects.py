"""Project schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from .common import APIModel, Models, ProjectStopWhen, ResourceId


class ProjectCreate(APIModel):
    """Request body for creating a project."""

    id: ResourceId
    name: str = Field(min_length=1, max_length=255)
    description: str = ""
    models: Models | None = None
    stop_when: ProjectStopWhen | None = None


class ProjectUpdate(APIModel):
    """Request body for updating a project. Omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    models: Models | None = None
    stop_when: ProjectStopWhen | None = None


class ProjectResponse(APIModel):
    """Project as returned by the API."""

    id: str
    name: str
    description: str
    models: dict[str, Any] | None = None
    stop_when: dict[str, Any] | None = None
    created_at: datetime
    updated_at: datetime
