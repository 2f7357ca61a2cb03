"""Full graph and full project definitions.

A full definition nests every resource of a graph (or project) in a single
document so that it can be created, replaced or read in one request.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Literal, Union

from pydantic import Discriminator, Field, Tag

from .common import (
    AgentStopWhen,
    APIModel,
    ConversationHistoryConfig,
    GraphStopWhen,
    Models,
    ProjectStopWhen,
    ResourceId,
    StatusUpdates,
)
from .components import ArtifactComponentCreate, DataComponentCreate
from .graphs import GRAPH_PROMPT_MAX_LENGTH
from .tools import CredentialReferenceCreate, ToolCreate


class CanUseItem(APIModel):
    """A tool an agent can use, as listed in ``canUse``."""

    agent_tool_relation_id: str | None = None
    tool_id: str
    tool_selection: list[str] | None = None
    headers: dict[str, str] | None = None


class InternalAgentDefinition(APIModel):
    """An agent hosted by this system, with its tools and relations."""

    id: ResourceId
    name: str = Field(min_length=1, max_length=255)
    description: str = ""
    prompt: str
    conversation_history_config: ConversationHistoryConfig | None = None
    models: Models | None = None
    stop_when: AgentStopWhen | None = None
    can_use: list[CanUseItem] = Field(default_factory=list)
    data_components: list[str] = Field(default_factory=list)
    artifact_components: list[str] = Field(default_factory=list)
    can_transfer_to: list[str] = Field(default_factory=list)
    can_delegate_to: list[str] = Field(default_factory=list)
    type: Literal["internal"] = "internal"


class ExternalAgentDefinition(APIModel):
    """An agent served elsewhere and reached over HTTP."""

    id: ResourceId
    name: str = Field(min_length=1, max_length=255)
    description: str = ""
    base_url: str = Field(min_length=1)
    credential_reference_id: str | None = None
    headers: dict[str, str] | None = None
    type: Literal["external"] = "external"


def _agent_kind(value: Any) -> str | None:
    """Internal agents carry a prompt, external agents a base URL."""
    if isinstance(value, dict):
        if "prompt" in value:
            return "internal"
        if "baseUrl" in value or "base_url" in value:
            return "external"
        return None
    return getattr(value, "type", None)


AgentDefinition = Annotated[
    Union[
        Annotated[InternalAgentDefinition, Tag("internal")],
        Annotated[ExternalAgentDefinition, Tag("external")],
    ],
    Discriminator(_agent_kind),
]


class ContextConfigDefinition(APIModel):
    """Context config embedded in a graph definition."""

    id: ResourceId
    name: str = ""
    description: str = ""
    request_context_schema: dict[str, Any] | None = None
    context_variables: dict[str, Any] | None = None


class FullGraphDefinition(APIModel):
    """A graph with every agent, relation and association it owns."""

    id: ResourceId
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    default_agent_id: str | None = None
    agents: dict[str, AgentDefinition]
    context_config: ContextConfigDefinition | None = None
    status_updates: StatusUpdates | None = None
    models: Models | None = None
    stop_when: GraphStopWhen | None = None
    graph_prompt: str | None = Field(default=None, max_length=GRAPH_PROMPT_MAX_LENGTH)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def internal_agents(self) -> dict[str, InternalAgentDefinition]:
        """Agents hosted by this system, keyed by id."""
        return {
            agent_id: agent
            for agent_id, agent in self.agents.items()
            if isinstance(agent, InternalAgentDefinition)
        }

    @property
    def external_agents(self) -> dict[str, ExternalAgentDefinition]:
        """External agents, keyed by id."""
        return {
            agent_id: agent
            for agent_id, agent in self.agents.items()
            if isinstance(agent, ExternalAgentDefinition)
        }


class FullProjectDefinition(APIModel):
    """A project with its graphs and every shared resource."""

    id: ResourceId
    name: str = Field(min_length=1, max_length=255)
    description: str = ""
    models: Models | None = None
    stop_when: ProjectStopWhen | None = None
    graphs: dict[str, FullGraphDefinition] = Field(default_factory=dict)
    tools: dict[str, ToolCreate] = Field(default_factory=dict)
    data_components: dict[str, DataComponentCreate] | None = None
    artifact_components: dict[str, ArtifactComponentCreate] | None = None
    credential_references: dict[str, CredentialReferenceCreate] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
