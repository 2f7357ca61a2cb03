"""Data and artifact component schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from .common import APIModel, ResourceId


class DataComponentCreate(APIModel):
    """Request body for creating a data component."""

    id: ResourceId
    name: str = Field(min_length=1, max_length=255)
    description: str = ""
    props: dict[str, Any] | None = None


class DataComponentUpdate(APIModel):
    """Request body for updating a data component."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    props: dict[str, Any] | None = None


class DataComponentResponse(APIModel):
    """Data component as returned by the API."""

    id: str
    name: str
    description: str
    props: dict[str, Any] | None = None
    created_at: datetime
    updated_at: datetime


class ArtifactComponentCreate(APIModel):
    """Request body for creating an artifact component."""

    id: ResourceId
    name: str = Field(min_length=1, max_length=255)
    description: str = ""
    summary_props: dict[str, Any] | None = None
    full_props: dict[str, Any] | None = None


class ArtifactComponentUpdate(APIModel):
    """Request body for updating an artifact component."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    summary_props: dict[str, Any] | None = None
    full_props: dict[str, Any] | None = None


class ArtifactComponentResponse(APIModel):
    """Artifact component as returned by the API."""

    id: str
    name: str
    description: str
    summary_props: dict[str, Any] | None = None
    full_props: dict[str, Any] | None = None
    created_at: datetime
    updated_at: datetime


class AgentDataComponentCreate(APIModel):
    """Request body for associating a data component with an agent."""

    agent_id: str
    data_component_id: str


class AgentDataComponentResponse(APIModel):
    """Agent-data component association."""

    id: str
    graph_id: str
    agent_id: str
    data_component_id: str
    created_at: datetime


class AgentArtifactComponentCreate(APIModel):
    """Request body for associating an artifact component with an agent."""

    agent_id: str
    artifact_component_id: str


class AgentArtifactComponentResponse(APIModel):
    """Agent-artifact component association."""

    id: str
    graph_id: str
    agent_id: str
    artifact_component_id: str
    created_at: datetime


class ComponentAgentResponse(APIModel):
    """An agent using a component."""

    agent_id: str
    graph_id: str
    created_at: datetime
