"""Agent-tool relation endpoints."""

from typing import Annotated

from fastapi import APIRouter, Path, Query, status

from ..dependencies import DBSession, GraphScopeDep, Page
from ..schemas import (
    AgentToolRelationCreate,
    AgentToolRelationResponse,
    AgentToolRelationUpdate,
    ListResponse,
    SingleResponse,
    ToolAgentResponse,
)
from ..services import AgentToolRelationService

router = APIRouter(
    prefix="/tenants/{tenantId}/projects/{projectId}/graphs/{graphId}/agent-tool-relations",
    tags=["agent-tool-relations"],
)


@router.get(
    "",
    response_model=ListResponse[AgentToolRelationResponse],
    summary="List agent-tool relations",
)
async def list_agent_tool_relations(
    scope: GraphScopeDep,
    db: DBSession,
    page: Page,
    agent_id: Annotated[str | None, Query(alias="agentId")] = None,
    tool_id: Annotated[str | None, Query(alias="toolId")] = None,
) -> ListResponse[AgentToolRelationResponse]:
    """List relations, optionally for one agent or one tool."""
    return await AgentToolRelationService(db).list_relations(
        scope, page, agent_id=agent_id, tool_id=tool_id
    )


@router.get(
    "/tool/{toolId}/agents",
    response_model=ListResponse[ToolAgentResponse],
    summary="List agents using a tool",
)
async def get_agents_for_tool(
    tool_id: Annotated[str, Path(alias="toolId")],
    scope: GraphScopeDep,
    db: DBSession,
    page: Page,
) -> ListResponse[ToolAgentResponse]:
    """List every agent of the project that can use a tool."""
    return await AgentToolRelationService(db).get_agents_for_tool(scope, tool_id, page)


@router.post(
    "",
    response_model=SingleResponse[AgentToolRelationResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Give an agent access to a tool",
)
async def create_agent_tool_relation(
    request: AgentToolRelationCreate,
    scope: GraphScopeDep,
    db: DBSession,
) -> SingleResponse[AgentToolRelationResponse]:
    """Give an agent access to a tool, optionally to some of its functions."""
    service = AgentToolRelationService(db)
    return SingleResponse(data=await service.create_relation(scope, request))


@router.get(
    "/{id}",
    response_model=SingleResponse[AgentToolRelationResponse],
    summary="Get an agent-tool relation",
)
async def get_agent_tool_relation(
    id: str,
    scope: GraphScopeDep,
    db: DBSession,
) -> SingleResponse[AgentToolRelationResponse]:
    """Get one relation."""
    return SingleResponse(data=await AgentToolRelationService(db).get(scope, id))


@router.put(
    "/{id}",
    response_model=SingleResponse[AgentToolRelationResponse],
    summary="Update an agent-tool relation",
)
async def update_agent_tool_relation(
    id: str,
    request: AgentToolRelationUpdate,
    scope: GraphScopeDep,
    db: DBSession,
) -> SingleResponse[AgentToolRelationResponse]:
    """Update a relation."""
    return SingleResponse(data=await AgentToolRelationService(db).update(scope, id, request))


@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an agent-tool relation",
)
async def delete_agent_tool_relation(id: str, scope: GraphScopeDep, db: DBSession) -> None:
    """Delete a relation."""
    await AgentToolRelationService(db).delete(scope, id)
