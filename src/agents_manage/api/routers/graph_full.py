"""Full graph endpoints: a graph with all of its agents in one document."""

from typing import Annotated

from fastapi import APIRouter, Path, Response, status

from ..dependencies import DBSession, GraphScopeDep, ProjectScopeDep
from ..exceptions import BadRequestError, ConflictError, NotFoundError
from ..schemas import FullGraphDefinition, SingleResponse
from ..services import GraphFullService

router = APIRouter(
    prefix="/tenants/{tenantId}/projects/{projectId}/graph",
    tags=["graph-full"],
)


@router.post(
    "",
    response_model=SingleResponse[FullGraphDefinition],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Create a full graph",
)
async def create_full_graph(
    request: FullGraphDefinition,
    scope: ProjectScopeDep,
    db: DBSession,
) -> SingleResponse[FullGraphDefinition]:
    """Create a graph with its agents, tools, components and relations.

    Args:
        request: Full graph definition
        scope: Project from the path
        db: Database session

    Returns:
        The stored graph

    Raises:
        ConflictError: If the graph already exists
    """
    service = GraphFullService(db)
    if await service.graph_exists(scope, request.id):
        raise ConflictError(f"Agent graph '{request.id}' already exists")
    return SingleResponse(data=await service.create_full_graph(scope, request))


@router.get(
    "/{graphId}",
    response_model=SingleResponse[FullGraphDefinition],
    response_model_exclude_none=True,
    summary="Get a full graph",
)
async def get_full_graph(
    scope: GraphScopeDep,
    db: DBSession,
) -> SingleResponse[FullGraphDefinition]:
    """Get a graph with everything it owns."""
    graph = await GraphFullService(db).get_full_graph(scope.project, scope.graph_id)
    if graph is None:
        raise NotFoundError("Agent graph", scope.graph_id)
    return SingleResponse(data=graph)


@router.put(
    "/{graphId}",
    response_model=SingleResponse[FullGraphDefinition],
    response_model_exclude_none=True,
    summary="Create or replace a full graph",
)
async def update_full_graph(
    graph_id: Annotated[str, Path(alias="graphId")],
    request: FullGraphDefinition,
    scope: ProjectScopeDep,
    db: DBSession,
    response: Response,
) -> SingleResponse[FullGraphDefinition]:
    """Replace a graph with the given definition.

    Responds 201 when the graph did not exist yet, 200 otherwise.

    Raises:
        BadRequestError: If the body id differs from the path id
    """
    if request.id != graph_id:
        raise BadRequestError("Graph ID mismatch")

    service = GraphFullService(db)
    created = not await service.graph_exists(scope, graph_id)
    graph = await service.update_full_graph(scope, request)
    if created:
        response.status_code = status.HTTP_201_CREATED
    return SingleResponse(data=graph)


@router.delete(
    "/{graphId}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a full graph",
)
async def delete_full_graph(scope: GraphScopeDep, db: DBSession) -> None:
    """Delete a graph and everything it owns."""
    if not await GraphFullService(db).delete_full_graph(scope.project, scope.graph_id):
        raise NotFoundError("Agent graph", scope.graph_id)
