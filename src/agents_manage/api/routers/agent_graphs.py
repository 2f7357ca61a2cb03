"""Agent graph endpoints."""

from typing import Annotated

from fastapi import APIRouter, Path, status

from ..dependencies import DBSession, GraphScopeDep, Page, ProjectScopeDep
from ..exceptions import NotFoundError
from ..schemas import (
    AgentGraphCreate,
    AgentGraphResponse,
    AgentGraphUpdate,
    FullGraphDefinition,
    ListResponse,
    RelatedAgentResponse,
    SingleResponse,
)
from ..services import AgentGraphService, GraphFullService

router = APIRouter(
    prefix="/tenants/{tenantId}/projects/{projectId}/agent-graphs",
    tags=["agent-graphs"],
)


@router.get("", response_model=ListResponse[AgentGraphResponse], summary="List agent graphs")
async def list_graphs(
    scope: ProjectScopeDep,
    db: DBSession,
    page: Page,
) -> ListResponse[AgentGraphResponse]:
    """List the agent graphs of a project."""
    return await AgentGraphService(db).list(scope, page)


@router.post(
    "",
    response_model=SingleResponse[AgentGraphResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create an agent graph",
)
async def create_graph(
    request: AgentGraphCreate,
    scope: ProjectScopeDep,
    db: DBSession,
) -> SingleResponse[AgentGraphResponse]:
    """Create an empty agent graph."""
    return SingleResponse(data=await AgentGraphService(db).create(scope, request))


@router.get(
    "/{graphId}",
    response_model=SingleResponse[AgentGraphResponse],
    summary="Get an agent graph",
)
async def get_graph(scope: GraphScopeDep, db: DBSession) -> SingleResponse[AgentGraphResponse]:
    """Get one agent graph without its agents."""
    return SingleResponse(data=await AgentGraphService(db).get(scope.project, scope.graph_id))


@router.get(
    "/{graphId}/full",
    response_model=SingleResponse[FullGraphDefinition],
    response_model_exclude_none=True,
    summary="Get an agent graph with all of its agents",
)
async def get_full_graph(
    scope: GraphScopeDep,
    db: DBSession,
) -> SingleResponse[FullGraphDefinition]:
    """Get the full definition of a graph.

    Raises:
        NotFoundError: If the graph does not exist
    """
    graph = await GraphFullService(db).get_full_graph(scope.project, scope.graph_id)
    if graph is None:
        raise NotFoundError("Agent graph", scope.graph_id)
    return SingleResponse(data=graph)


@router.get(
    "/{graphId}/agents/{agentId}/related",
    response_model=ListResponse[RelatedAgentResponse],
    summary="List agents reachable from an agent",
)
async def get_related_agents(
    agent_id: Annotated[str, Path(alias="agentId")],
    scope: GraphScopeDep,
    db: DBSession,
) -> ListResponse[RelatedAgentResponse]:
    """List the agents an agent can transfer or delegate to."""
    return await AgentGraphService(db).get_related_agents(scope, agent_id)


@router.put(
    "/{graphId}",
    response_model=SingleResponse[AgentGraphResponse],
    summary="Update an agent graph",
)
async def update_graph(
    request: AgentGraphUpdate,
    scope: GraphScopeDep,
    db: DBSession,
) -> SingleResponse[AgentGraphResponse]:
    """Update a graph.

    Agents still using the previous graph model receive the new one.
    Empty models, statusUpdates, contextConfigId, graphPrompt or stopWhen
    clear the stored value.
    """
    service = AgentGraphService(db)
    return SingleResponse(data=await service.update(scope.project, scope.graph_id, request))


@router.delete(
    "/{graphId}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an agent graph",
)
async def delete_graph(scope: GraphScopeDep, db: DBSession) -> None:
    """Delete a graph; its agents, relations and keys go with it."""
    await AgentGraphService(db).delete(scope.project, scope.graph_id)
