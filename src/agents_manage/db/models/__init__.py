"""Database models for agent graph management."""

from .agent import Agent
from .agent_graph import AgentGraph
from .agent_relation import AgentRelation
from .api_key import ApiKey
from .artifact_component import AgentArtifactComponent, ArtifactComponent
from .base import Base
from .context_config import ContextConfig
from .conversation import Conversation, Message
from .credential_reference import CredentialReference
from .data_component import AgentDataComponent, DataComponent
from .external_agent import ExternalAgent
from .project import Project
from .tool import AgentToolRelation, Tool

__all__ = [
    "Base",
    "Project",
    "AgentGraph",
    "ContextConfig",
    "Agent",
    "AgentRelation",
    "ExternalAgent",
    "Tool",
    "AgentToolRelation",
    "DataComponent",
    "AgentDataComponent",
    "ArtifactComponent",
    "AgentArtifactComponent",
    "CredentialReference",
    "Conversation",
    "Message",
    "ApiKey",
]
