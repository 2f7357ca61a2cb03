"""Pydantic schemas for API requests and responses."""

from .api_keys import ApiKeyCreate, ApiKeyCreateResponse, ApiKeyResponse, ApiKeyUpdate
from .common import (
    AgentStopWhen,
    APIModel,
    ConversationHistoryConfig,
    ErrorBody,
    ExistsResponse,
    GraphStopWhen,
    ListResponse,
    Models,
    ModelSettings,
    Pagination,
    ProblemDetails,
    ProjectStopWhen,
    RemovedResponse,
    SingleResponse,
    StatusComponent,
    StatusUpdates,
)
from .components import (
    AgentArtifactComponentCreate,
    AgentArtifactComponentResponse,
    AgentDataComponentCreate,
    AgentDataComponentResponse,
    ArtifactComponentCreate,
    ArtifactComponentResponse,
    ArtifactComponentUpdate,
    ComponentAgentResponse,
    DataComponentCreate,
    DataComponentResponse,
    DataComponentUpdate,
)
from .conversations import ConversationResponse, MessageResponse
from .full import (
    AgentDefinition,
    CanUseItem,
    ContextConfigDefinition,
    ExternalAgentDefinition,
    FullGraphDefinition,
    FullProjectDefinition,
    InternalAgentDefinition,
)
from .graphs import (
    AgentCreate,
    AgentGraphCreate,
    AgentGraphResponse,
    AgentGraphUpdate,
    AgentRelationCreate,
    AgentRelationResponse,
    AgentRelationUpdate,
    AgentResponse,
    AgentUpdate,
    ContextConfigCreate,
    ContextConfigResponse,
    ContextConfigUpdate,
    ExternalAgentCreate,
    ExternalAgentResponse,
    ExternalAgentUpdate,
    RelatedAgentResponse,
)
from .projects import ProjectCreate, ProjectResponse, ProjectUpdate
from .tools import (
    AgentToolRelationCreate,
    AgentToolRelationResponse,
    AgentToolRelationUpdate,
    CredentialReferenceCreate,
    CredentialReferenceResponse,
    CredentialReferenceUpdate,
    ToolAgentResponse,
    ToolConfig,
    ToolCreate,
    ToolResponse,
    ToolUpdate,
)

__all__ = [
    # Common
    "APIModel",
    "Pagination",
    "ListResponse",
    "SingleResponse",
    "ExistsResponse",
    "RemovedResponse",
    "ErrorBody",
    "ProblemDetails",
    "ModelSettings",
    "Models",
    "GraphStopWhen",
    "AgentStopWhen",
    "ProjectStopWhen",
    "StatusComponent",
    "StatusUpdates",
    "ConversationHistoryConfig",
    # Projects
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectResponse",
    # Graphs
    "AgentGraphCreate",
    "AgentGraphUpdate",
    "AgentGraphResponse",
    "RelatedAgentResponse",
    "AgentCreate",
    "AgentUpdate",
    "AgentResponse",
    "AgentRelationCreate",
    "AgentRelationUpdate",
    "AgentRelationResponse",
    "ExternalAgentCreate",
    "ExternalAgentUpdate",
    "ExternalAgentResponse",
    "ContextConfigCreate",
    "ContextConfigUpdate",
    "ContextConfigResponse",
    # Tools
    "ToolConfig",
    "ToolCreate",
    "ToolUpdate",
    "ToolResponse",
    "AgentToolRelationCreate",
    "AgentToolRelationUpdate",
    "AgentToolRelationResponse",
    "ToolAgentResponse",
    "CredentialReferenceCreate",
    "CredentialReferenceUpdate",
    "CredentialReferenceResponse",
    # Components
    "DataComponentCreate",
    "DataComponentUpdate",
    "DataComponentResponse",
    "ArtifactComponentCreate",
    "ArtifactComponentUpdate",
    "ArtifactComponentResponse",
    "AgentDataComponentCreate",
    "AgentDataComponentResponse",
    "AgentArtifactComponentCreate",
    "AgentArtifactComponentResponse",
    "ComponentAgentResponse",
    # API keys
    "ApiKeyCreate",
    "ApiKeyUpdate",
    "ApiKeyResponse",
    "ApiKeyCreateResponse",
    # Conversations
    "ConversationResponse",
    "MessageResponse",
    # Full definitions
    "AgentDefinition",
    "CanUseItem",
    "ContextConfigDefinition",
    "InternalAgentDefinition",
    "ExternalAgentDefinition",
    "FullGraphDefinition",
    "FullProjectDefinition",
]
