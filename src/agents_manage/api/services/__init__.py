"""Business logic services for API endpoints."""

from .base import CrudService, GraphScopedCrudService, ProjectScopedCrudService
from .component_service import (
    AgentArtifactComponentService,
    AgentComponentService,
    AgentDataComponentService,
    ArtifactComponentService,
    DataComponentService,
)
from .graph_full_service import GraphFullService
from .graph_service import AgentGraphService, AgentService
from .project_full_service import ProjectFullService
from .project_service import ProjectService
from .relation_service import AgentRelationService, ExternalAgentService
from .resource_service import ApiKeyService, ContextConfigService, ConversationService
from .tool_service import AgentToolRelationService, CredentialReferenceService, ToolService

__all__ = [
    "CrudService",
    "GraphScopedCrudService",
    "ProjectScopedCrudService",
    "ProjectService",
    "AgentGraphService",
    "AgentService",
    "AgentRelationService",
    "ExternalAgentService",
    "ToolService",
    "AgentToolRelationService",
    "CredentialReferenceService",
    "DataComponentService",
    "ArtifactComponentService",
    "AgentComponentService",
    "AgentDataComponentService",
    "AgentArtifactComponentService",
    "ContextConfigService",
    "ApiKeyService",
    "ConversationService",
    "GraphFullService",
    "ProjectFullService",
]
