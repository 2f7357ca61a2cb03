"""Project endpoints."""

from fastapi import APIRouter, status

from ..dependencies import DBSession, Page, TenantScopeDep
from ..schemas import (
    ListResponse,
    ProjectCreate,
    ProjectResponse,
    ProjectUpdate,
    SingleResponse,
)
from ..services import ProjectService

router = APIRouter(prefix="/tenants/{tenantId}/projects", tags=["projects"])


@router.get("", response_model=ListResponse[ProjectResponse], summary="List projects")
async def list_projects(
    scope: TenantScopeDep,
    db: DBSession,
    page: Page,
) -> ListResponse[ProjectResponse]:
    """List the projects of a tenant."""
    return await ProjectService(db).list(scope, page)


@router.post(
    "",
    response_model=SingleResponse[ProjectResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a project",
)
async def create_project(
    request: ProjectCreate,
    scope: TenantScopeDep,
    db: DBSession,
) -> SingleResponse[ProjectResponse]:
    """Create a project.

    Args:
        request: Project creation request
        scope: Tenant from the path
        db: Database session

    Returns:
        Created project
    """
    return SingleResponse(data=await ProjectService(db).create(scope, request))


@router.get("/{id}", response_model=SingleResponse[ProjectResponse], summary="Get a project")
async def get_project(
    id: str,
    scope: TenantScopeDep,
    db: DBSession,
) -> SingleResponse[ProjectResponse]:
    """Get one project."""
    return SingleResponse(data=await ProjectService(db).get(scope, id))


@router.patch(
    "/{id}",
    response_model=SingleResponse[ProjectResponse],
    summary="Update a project",
)
async def update_project(
    id: str,
    request: ProjectUpdate,
    scope: TenantScopeDep,
    db: DBSession,
) -> SingleResponse[ProjectResponse]:
    """Update a project.

    Changed stopWhen limits are pushed down to graphs and agents that
    inherit them.
    """
    return SingleResponse(data=await ProjectService(db).update(scope, id, request))


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a project")
async def delete_project(id: str, scope: TenantScopeDep, db: DBSession) -> None:
    """Delete a project that no longer owns any resource."""
    await ProjectService(db).delete(scope, id)
