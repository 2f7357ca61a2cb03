"""Agent endpoints."""

from fastapi import APIRouter, status

from ..dependencies import DBSession, GraphScopeDep, Page
from ..schemas import AgentCreate, AgentResponse, AgentUpdate, ListResponse, SingleResponse
from ..services import AgentService

router = APIRouter(
    prefix="/tenants/{tenantId}/projects/{projectId}/graphs/{graphId}/agents",
    tags=["agents"],
)


@router.get("", response_model=ListResponse[AgentResponse], summary="List agents")
async def list_agents(
    scope: GraphScopeDep,
    db: DBSession,
    page: Page,
) -> ListResponse[AgentResponse]:
    """List the agents of a graph."""
    return await AgentService(db).list(scope, page)


@router.post(
    "",
    response_model=SingleResponse[AgentResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create an agent",
)
async def create_agent(
    request: AgentCreate,
    scope: GraphScopeDep,
    db: DBSession,
) -> SingleResponse[AgentResponse]:
    """Create an agent in a graph.

    Args:
        request: Agent creation request
        scope: Graph from the path
        db: Database session

    Returns:
        Created agent
    """
    return SingleResponse(data=await AgentService(db).create(scope, request))


@router.get("/{id}", response_model=SingleResponse[AgentResponse], summary="Get an agent")
async def get_agent(id: str, scope: GraphScopeDep, db: DBSession) -> SingleResponse[AgentResponse]:
    """Get one agent."""
    return SingleResponse(data=await AgentService(db).get(scope, id))


@router.put("/{id}", response_model=SingleResponse[AgentResponse], summary="Update an agent")
async def update_agent(
    id: str,
    request: AgentUpdate,
    scope: GraphScopeDep,
    db: DBSession,
) -> SingleResponse[AgentResponse]:
    """Update an agent."""
    return SingleResponse(data=await AgentService(db).update(scope, id, request))


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an agent")
async def delete_agent(id: str, scope: GraphScopeDep, db: DBSession) -> None:
    """Delete an agent; its tool relations and component associations go with it."""
    await AgentService(db).delete(scope, id)
