"""Full project endpoints: a project with every graph and shared resource."""

from typing import Annotated

from fastapi import APIRouter, Path, Response, status

from ..dependencies import DBSession, TenantScopeDep
from ..exceptions import BadRequestError, NotFoundError
from ..schemas import FullProjectDefinition, SingleResponse
from ..services import ProjectFullService

router = APIRouter(prefix="/tenants/{tenantId}/project-full", tags=["project-full"])

ProjectId = Annotated[str, Path(alias="projectId")]


@router.post(
    "",
    response_model=SingleResponse[FullProjectDefinition],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Create a full project",
)
async def create_full_project(
    request: FullProjectDefinition,
    scope: TenantScopeDep,
    db: DBSession,
) -> SingleResponse[FullProjectDefinition]:
    """Create a project with its graphs, tools, components and credentials.

    Args:
        request: Full project definition
        scope: Tenant from the path
        db: Database session

    Returns:
        The stored project
    """
    return SingleResponse(data=await ProjectFullService(db).create_full_project(scope, request))


@router.get(
    "/{projectId}",
    response_model=SingleResponse[FullProjectDefinition],
    response_model_exclude_none=True,
    summary="Get a full project",
)
async def get_full_project(
    project_id: ProjectId,
    scope: TenantScopeDep,
    db: DBSession,
) -> SingleResponse[FullProjectDefinition]:
    """Get a project with everything it contains."""
    project = await ProjectFullService(db).get_full_project(scope, project_id)
    if project is None:
        raise NotFoundError("Project", project_id)
    return SingleResponse(data=project)


@router.put(
    "/{projectId}",
    response_model=SingleResponse[FullProjectDefinition],
    response_model_exclude_none=True,
    summary="Create or update a full project",
)
async def update_full_project(
    project_id: ProjectId,
    request: FullProjectDefinition,
    scope: TenantScopeDep,
    db: DBSession,
    response: Response,
) -> SingleResponse[FullProjectDefinition]:
    """Upsert a project and everything in the definition.

    Responds 201 when the project did not exist yet, 200 otherwise.

    Raises:
        BadRequestError: If the body id differs from the path id
    """
    if request.id != project_id:
        raise BadRequestError("Project ID mismatch")

    service = ProjectFullService(db)
    created = not await service.project_exists(scope, project_id)
    project = await service.update_full_project(scope, request)
    if created:
        response.status_code = status.HTTP_201_CREATED
    return SingleResponse(data=project)


@router.delete(
    "/{projectId}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a full project",
)
async def delete_full_project(project_id: ProjectId, scope: TenantScopeDep, db: DBSession) -> None:
    """Delete a project with all of its graphs and resources."""
    if not await ProjectFullService(db).delete_full_project(scope, project_id):
        raise NotFoundError("Project", project_id)
