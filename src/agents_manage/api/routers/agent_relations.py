"""Agent relation and external agent endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from ..dependencies import DBSession, GraphScopeDep, Page
from ..schemas import (
    AgentRelationCreate,
    AgentRelationResponse,
    AgentRelationUpdate,
    ExternalAgentCreate,
    ExternalAgentResponse,
    ExternalAgentUpdate,
    ListResponse,
    SingleResponse,
)
from ..services import AgentRelationService, ExternalAgentService

GRAPH_PREFIX = "/tenants/{tenantId}/projects/{projectId}/graphs/{graphId}"

router = APIRouter(prefix=f"{GRAPH_PREFIX}/agent-relations", tags=["agent-relations"])
external_agents_router = APIRouter(
    prefix=f"{GRAPH_PREFIX}/external-agents",
    tags=["external-agents"],
)


# Agent relations


@router.get("", response_model=ListResponse[AgentRelationResponse], summary="List relations")
async def list_relations(
    scope: GraphScopeDep,
    db: DBSession,
    page: Page,
    source_agent_id: Annotated[str | None, Query(alias="sourceAgentId")] = None,
    target_agent_id: Annotated[str | None, Query(alias="targetAgentId")] = None,
    external_agent_id: Annotated[str | None, Query(alias="externalAgentId")] = None,
) -> ListResponse[AgentRelationResponse]:
    """List relations, optionally filtered by source, target or external agent."""
    return await AgentRelationService(db).list_relations(
        scope,
        page,
        source_agent_id=source_agent_id,
        target_agent_id=target_agent_id,
        external_agent_id=external_agent_id,
    )


@router.post(
    "",
    response_model=SingleResponse[AgentRelationResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a relation",
)
async def create_relation(
    request: AgentRelationCreate,
    scope: GraphScopeDep,
    db: DBSession,
) -> SingleResponse[AgentRelationResponse]:
    """Create a transfer or delegate relation.

    The target must exist (400) and the same relation must not exist
    already (422).
    """
    return SingleResponse(data=await AgentRelationService(db).create_relation(scope, request))


@router.get(
    "/{id}",
    response_model=SingleResponse[AgentRelationResponse],
    summary="Get a relation",
)
async def get_relation(
    id: str,
    scope: GraphScopeDep,
    db: DBSession,
) -> SingleResponse[AgentRelationResponse]:
    """Get one relation."""
    return SingleResponse(data=await AgentRelationService(db).get(scope, id))


@router.put(
    "/{id}",
    response_model=SingleResponse[AgentRelationResponse],
    summary="Update a relation",
)
async def update_relation(
    id: str,
    request: AgentRelationUpdate,
    scope: GraphScopeDep,
    db: DBSession,
) -> SingleResponse[AgentRelationResponse]:
    """Update a relation."""
    return SingleResponse(data=await AgentRelationService(db).update(scope, id, request))


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a relation")
async def delete_relation(id: str, scope: GraphScopeDep, db: DBSession) -> None:
    """Delete a relation."""
    await AgentRelationService(db).delete(scope, id)


# External agents


@external_agents_router.get(
    "",
    response_model=ListResponse[ExternalAgentResponse],
    summary="List external agents",
)
async def list_external_agents(
    scope: GraphScopeDep,
    db: DBSession,
    page: Page,
) -> ListResponse[ExternalAgentResponse]:
    """List the external agents of a graph."""
    return await ExternalAgentService(db).list(scope, page)


@external_agents_router.post(
    "",
    response_model=SingleResponse[ExternalAgentResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Register an external agent",
)
async def create_external_agent(
    request: ExternalAgentCreate,
    scope: GraphScopeDep,
    db: DBSession,
) -> SingleResponse[ExternalAgentResponse]:
    """Register an agent served elsewhere."""
    return SingleResponse(data=await ExternalAgentService(db).create(scope, request))


@external_agents_router.get(
    "/{id}",
    response_model=SingleResponse[ExternalAgentResponse],
    summary="Get an external agent",
)
async def get_external_agent(
    id: str,
    scope: GraphScopeDep,
    db: DBSession,
) -> SingleResponse[ExternalAgentResponse]:
    """Get one external agent."""
    return SingleResponse(data=await ExternalAgentService(db).get(scope, id))


@external_agents_router.put(
    "/{id}",
    response_model=SingleResponse[ExternalAgentResponse],
    summary="Update an external agent",
)
async def update_external_agent(
    id: str,
    request: ExternalAgentUpdate,
    scope: GraphScopeDep,
    db: DBSession,
) -> SingleResponse[ExternalAgentResponse]:
    """Update an external agent."""
    return SingleResponse(data=await ExternalAgentService(db).update(scope, id, request))


@external_agents_router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an external agent",
)
async def delete_external_agent(id: str, scope: GraphScopeDep, db: DBSession) -> None:
    """Delete an external agent."""
    await ExternalAgentService(db).delete(scope, id)
