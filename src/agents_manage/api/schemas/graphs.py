"""Agent graph, agent, relation, external agent and context config schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field, model_validator

from agents_manage.db.models.enums import RelationType

from .common import (
    AgentStopWhen,
    APIModel,
    ConversationHistoryConfig,
    GraphStopWhen,
    Models,
    ResourceId,
    StatusUpdates,
)

GRAPH_PROMPT_MAX_LENGTH = 5000


# Agent graphs


class AgentGraphCreate(APIModel):
    """Request body for creating an agent graph."""

    id: ResourceId
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    default_agent_id: str | None = None
    context_config_id: str | None = None
    models: Models | None = None
    status_updates: StatusUpdates | None = None
    graph_prompt: str | None = Field(default=None, max_length=GRAPH_PROMPT_MAX_LENGTH)
    stop_when: GraphStopWhen | None = None


class AgentGraphUpdate(APIModel):
    """Request body for updating an agent graph."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    default_agent_id: str | None = None
    context_config_id: str | None = None
    models: Models | None = None
    status_updates: StatusUpdates | None = None
    graph_prompt: str | None = Field(default=None, max_length=GRAPH_PROMPT_MAX_LENGTH)
    stop_when: GraphStopWhen | None = None


class AgentGraphResponse(APIModel):
    """Agent graph as returned by the API."""

    id: str
    name: str
    description: str | None = None
    default_agent_id: str | None = None
    context_config_id: str | None = None
    models: dict[str, Any] | None = None
    status_updates: dict[str, Any] | None = None
    graph_prompt: str | None = None
    stop_when: dict[str, Any] | None = None
    created_at: datetime
    updated_at: datetime


class RelatedAgentResponse(APIModel):
    """An agent reachable from another agent through a relation."""

    id: str
    name: str
    description: str
    relation_type: RelationType


# Agents


class AgentCreate(APIModel):
    """Request body for creating an agent."""

    id: ResourceId
    name: str = Field(min_length=1, max_length=255)
    description: str = ""
    prompt: str
    conversation_history_config: ConversationHistoryConfig | None = None
    models: Models | None = None
    stop_when: AgentStopWhen | None = None


class AgentUpdate(APIModel):
    """Request body for updating an agent."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    prompt: str | None = None
    conversation_history_config: ConversationHistoryConfig | None = None
    models: Models | None = None
    stop_when: AgentStopWhen | None = None


class AgentResponse(APIModel):
    """Agent as returned by the API."""

    id: str
    graph_id: str
    name: str
    description: str
    prompt: str
    conversation_history_config: dict[str, Any] | None = None
    models: dict[str, Any] | None = None
    stop_when: dict[str, Any] | None = None
    created_at: datetime
    updated_at: datetime


# Agent relations


class AgentRelationCreate(APIModel):
    """Request body for creating a relation.

    Exactly one of targetAgentId and externalAgentId must be given.
    """

    source_agent_id: str
    target_agent_id: str | None = None
    external_agent_id: str | None = None
    relation_type: RelationType

    @model_validator(mode="after")
    def _one_target(self) -> AgentRelationCreate:
        if bool(self.target_agent_id) == bool(self.external_agent_id):
            raise ValueError("Exactly one of targetAgentId or externalAgentId must be provided")
        return self


class AgentRelationUpdate(APIModel):
    """Request body for updating a relation."""

    target_agent_id: str | None = None
    external_agent_id: str | None = None
    relation_type: RelationType | None = None

    @model_validator(mode="after")
    def _at_most_one_target(self) -> AgentRelationUpdate:
        if self.target_agent_id and self.external_agent_id:
            raise ValueError("Only one of targetAgentId or externalAgentId can be provided")
        return self


class AgentRelationResponse(APIModel):
    """Agent relation as returned by the API."""

    id: str
    graph_id: str
    source_agent_id: str
    target_agent_id: str | None = None
    external_agent_id: str | None = None
    relation_type: RelationType
    created_at: datetime
    updated_at: datetime


# External agents


class ExternalAgentCreate(APIModel):
    """Request body for registering an external agent."""

    id: ResourceId
    name: str = Field(min_length=1, max_length=255)
    description: str = ""
    base_url: str = Field(min_length=1)
    credential_reference_id: str | None = None
    headers: dict[str, str] | None = None


class ExternalAgentUpdate(APIModel):
    """Request body for updating an external agent."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    base_url: str | None = Field(default=None, min_length=1)
    credential_reference_id: str | None = None
    headers: dict[str, str] | None = None


class ExternalAgentResponse(APIModel):
    """External agent as returned by the API."""

    id: str
    graph_id: str
    name: str
    description: str
    base_url: str
    credential_reference_id: str | None = None
    headers: dict[str, str] | None = None
    created_at: datetime
    updated_at: datetime


# Context configs


class ContextConfigCreate(APIModel):
    """Request body for creating a context config."""

    id: ResourceId
    name: str = ""
    description: str = ""
    request_context_schema: dict[str, Any] | None = None
    context_variables: dict[str, Any] | None = None


class ContextConfigUpdate(APIModel):
    """Request body for updating a context config."""

    name: str | None = None
    description: str | None = None
    request_context_schema: dict[str, Any] | None = None
    context_variables: dict[str, Any] | None = None


class ContextConfigResponse(APIModel):
    """Context config as returned by the API."""

    id: str
    name: str
    description: str
    request_context_schema: dict[str, Any] | None = None
    context_variables: dict[str, Any] | None = None
    created_at: datetime
    updated_at: datetime
