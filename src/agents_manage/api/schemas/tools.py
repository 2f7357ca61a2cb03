"""Tool, agent-tool relation and credential reference schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import Field

from agents_manage.db.models.enums import CredentialStoreType, ToolStatus

from .common import APIModel, ResourceId


class McpServer(APIModel):
    """Location of an MCP server."""

    url: str = Field(min_length=1)


class McpTransport(APIModel):
    """Transport used to reach an MCP server."""

    type: Literal["streamable_http", "sse"] = "streamable_http"
    request_init: dict[str, Any] | None = None


class McpToolSettings(APIModel):
    """MCP-specific part of a tool config."""

    server: McpServer
    transport: McpTransport | None = None
    active_tools: list[str] | None = None


class ToolConfig(APIModel):
    """Tool configuration document."""

    type: Literal["mcp"] = "mcp"
    mcp: McpToolSettings


class ToolCreate(APIModel):
    """Request body for registering a tool."""

    id: ResourceId
    name: str = Field(min_length=1, max_length=255)
    config: ToolConfig
    credential_reference_id: str | None = None
    headers: dict[str, str] | None = None
    image_url: str | None = None
    capabilities: dict[str, Any] | None = None


class ToolUpdate(APIModel):
    """Request body for updating a tool."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    config: ToolConfig | None = None
    credential_reference_id: str | None = None
    headers: dict[str, str] | None = None
    image_url: str | None = None
    capabilities: dict[str, Any] | None = None
    status: ToolStatus | None = None


class ToolResponse(APIModel):
    """Tool as returned by the API."""

    id: str
    name: str
    config: dict[str, Any]
    credential_reference_id: str | None = None
    headers: dict[str, str] | None = None
    image_url: str | None = None
    capabilities: dict[str, Any] | None = None
    status: ToolStatus
    last_health_check: datetime | None = None
    last_error: str | None = None
    available_tools: list[dict[str, Any]] | None = None
    last_tools_sync: datetime | None = None
    created_at: datetime
    updated_at: datetime


class AgentToolRelationCreate(APIModel):
    """Request body for giving an agent access to a tool."""

    agent_id: str
    tool_id: str
    selected_tools: list[str] | None = None
    headers: dict[str, str] | None = None


class AgentToolRelationUpdate(APIModel):
    """Request body for updating an agent-tool relation."""

    agent_id: str | None = None
    tool_id: str | None = None
    selected_tools: list[str] | None = None
    headers: dict[str, str] | None = None


class AgentToolRelationResponse(APIModel):
    """Agent-tool relation as returned by the API."""

    id: str
    graph_id: str
    agent_id: str
    tool_id: str
    selected_tools: list[str] | None = None
    headers: dict[str, str] | None = None
    created_at: datetime
    updated_at: datetime


class ToolAgentResponse(APIModel):
    """An agent that can use a given tool."""

    agent_id: str
    graph_id: str
    relation_id: str
    selected_tools: list[str] | None = None


class CredentialReferenceCreate(APIModel):
    """Request body for creating a credential reference."""

    id: ResourceId
    type: CredentialStoreType
    credential_store_id: str = Field(min_length=1)
    retrieval_params: dict[str, Any] | None = None


class CredentialReferenceUpdate(APIModel):
    """Request body for updating a credential reference."""

    type: CredentialStoreType | None = None
    credential_store_id: str | None = Field(default=None, min_length=1)
    retrieval_params: dict[str, Any] | None = None


class CredentialReferenceResponse(APIModel):
    """Credential reference as returned by the API."""

    id: str
    type: CredentialStoreType
    credential_store_id: str
    retrieval_params: dict[str, Any] | None = None
    created_at: datetime
    updated_at: datetime
