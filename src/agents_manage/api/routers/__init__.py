"""API routers for endpoint organization."""

from .agent_components import artifact_components_router as agent_artifact_components_router
from .agent_components import data_components_router as agent_data_components_router
from .agent_graphs import router as agent_graphs_router
from .agent_relations import external_agents_router
from .agent_relations import router as agent_relations_router
from .agent_tool_relations import router as agent_tool_relations_router
from .agents import router as agents_router
from .api_keys import router as api_keys_router
from .components import (
    artifact_components_router,
    context_configs_router,
    data_components_router,
)
from .conversations import router as conversations_router
from .graph_full import router as graph_full_router
from .health import router as health_router
from .project_full import router as project_full_router
from .projects import router as projects_router
from .tools import credentials_router
from .tools import router as tools_router

__all__ = [
    "health_router",
    "projects_router",
    "agent_graphs_router",
    "agents_router",
    "agent_relations_router",
    "external_agents_router",
    "agent_tool_relations_router",
    "agent_data_components_router",
    "agent_artifact_components_router",
    "tools_router",
    "credentials_router",
    "data_components_router",
    "artifact_components_router",
    "context_configs_router",
    "api_keys_router",
    "conversations_router",
    "graph_full_router",
    "project_full_router",
]
