"""Endpoints associating data and artifact components with agents.

Both association kinds expose the same routes, so the routers are built by
one factory.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Path, status

from ..dependencies import DBSession, GraphScopeDep
from ..schemas import (
    AgentArtifactComponentCreate,
    AgentArtifactComponentResponse,
    AgentDataComponentCreate,
    AgentDataComponentResponse,
    APIModel,
    ArtifactComponentResponse,
    ComponentAgentResponse,
    DataComponentResponse,
    ExistsResponse,
    RemovedResponse,
    SingleResponse,
)
from ..services import (
    AgentArtifactComponentService,
    AgentComponentService,
    AgentDataComponentService,
)

GRAPH_PREFIX = "/tenants/{tenantId}/projects/{projectId}/graphs/{graphId}"

AgentId = Annotated[str, Path(alias="agentId")]
ComponentId = Annotated[str, Path(alias="componentId")]


def build_agent_component_router(
    path: str,
    service_class: type[AgentComponentService],
    create_schema: type[APIModel],
    component_field: str,
    component_response: type[APIModel],
    association_response: type[APIModel],
) -> APIRouter:
    """Build the association routes for one component kind.

    Args:
        path: Route segment, e.g. "agent-data-components"
        service_class: Association service
        create_schema: Request body of the create route
        component_field: Attribute of the request body holding the component id
        component_response: Response schema of a component
        association_response: Response schema of an association

    Returns:
        Router with list, create, remove and exists routes
    """
    router = APIRouter(prefix=f"{GRAPH_PREFIX}/{path}", tags=[path])

    @router.get(
        "/agent/{agentId}",
        response_model=SingleResponse[list[component_response]],  # type: ignore[valid-type]
        summary="List the components of an agent",
    )
    async def get_components_for_agent(
        agent_id: AgentId,
        scope: GraphScopeDep,
        db: DBSession,
    ) -> Any:
        return await service_class(db).get_components_for_agent(scope, agent_id)

    @router.get(
        "/component/{componentId}/agents",
        response_model=SingleResponse[list[ComponentAgentResponse]],
        summary="List the agents using a component",
    )
    async def get_agents_for_component(
        component_id: ComponentId,
        scope: GraphScopeDep,
        db: DBSession,
    ) -> Any:
        return await service_class(db).get_agents_for_component(scope, component_id)

    @router.post(
        "",
        response_model=SingleResponse[association_response],  # type: ignore[valid-type]
        status_code=status.HTTP_201_CREATED,
        summary="Associate a component with an agent",
    )
    async def associate_component(
        request: create_schema,  # type: ignore[valid-type]
        scope: GraphScopeDep,
        db: DBSession,
    ) -> Any:
        association = await service_class(db).associate(
            scope, request.agent_id, getattr(request, component_field)
        )
        return SingleResponse(data=association)

    @router.delete(
        "/agent/{agentId}/component/{componentId}",
        response_model=RemovedResponse,
        summary="Remove a component from an agent",
    )
    async def remove_component(
        agent_id: AgentId,
        component_id: ComponentId,
        scope: GraphScopeDep,
        db: DBSession,
    ) -> RemovedResponse:
        return await service_class(db).remove(scope, agent_id, component_id)

    @router.get(
        "/agent/{agentId}/component/{componentId}/exists",
        response_model=ExistsResponse,
        summary="Check whether a component is associated with an agent",
    )
    async def association_exists(
        agent_id: AgentId,
        component_id: ComponentId,
        scope: GraphScopeDep,
        db: DBSession,
    ) -> ExistsResponse:
        return await service_class(db).exists(scope, agent_id, component_id)

    return router


data_components_router = build_agent_component_router(
    "agent-data-components",
    AgentDataComponentService,
    AgentDataComponentCreate,
    "data_component_id",
    DataComponentResponse,
    AgentDataComponentResponse,
)

artifact_components_router = build_agent_component_router(
    "agent-artifact-components",
    AgentArtifactComponentService,
    AgentArtifactComponentCreate,
    "artifact_component_id",
    ArtifactComponentResponse,
    AgentArtifactComponentResponse,
)
