"""Database repository layer."""

from .agent_graph_repo import AgentGraphRepository
from .agent_relation_repo import AgentRelationRepository
from .agent_repo import AgentRepository
from .api_key_repo import ApiKeyRepository
from .base import BaseRepository
from .component_repo import (
    AgentArtifactComponentRepository,
    AgentDataComponentRepository,
    ArtifactComponentRepository,
    DataComponentRepository,
)
from .context_config_repo import ContextConfigRepository
from .conversation_repo import ConversationRepository, MessageRepository
from .credential_reference_repo import CredentialReferenceRepository
from .external_agent_repo import ExternalAgentRepository
from .project_repo import ProjectRepository
from .tool_repo import AgentToolRelationRepository, ToolRepository

__all__ = [
    "BaseRepository",
    "ProjectRepository",
    "AgentGraphRepository",
    "AgentRepository",
    "AgentRelationRepository",
    "ExternalAgentRepository",
    "ToolRepository",
    "AgentToolRelationRepository",
    "DataComponentRepository",
    "ArtifactComponentRepository",
    "AgentDataComponentRepository",
    "AgentArtifactComponentRepository",
    "ContextConfigRepository",
    "CredentialReferenceRepository",
    "ConversationRepository",
    "MessageRepository",
    "ApiKeyRepository",
]
