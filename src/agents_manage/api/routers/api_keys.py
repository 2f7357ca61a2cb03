"""API key endpoints. The key hash is never returned."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from ..dependencies import DBSession, Page, ProjectScopeDep
from ..schemas import (
    ApiKeyCreate,
    ApiKeyCreateResponse,
    ApiKeyResponse,
    ApiKeyUpdate,
    ListResponse,
    SingleResponse,
)
from ..services import ApiKeyService

router = APIRouter(prefix="/tenants/{tenantId}/projects/{projectId}/api-keys", tags=["api-keys"])


@router.get("", response_model=ListResponse[ApiKeyResponse], summary="List API keys")
async def list_api_keys(
    scope: ProjectScopeDep,
    db: DBSession,
    page: Page,
    graph_id: Annotated[str | None, Query(alias="graphId")] = None,
) -> ListResponse[ApiKeyResponse]:
    """List the API keys of a project, newest first."""
    return await ApiKeyService(db).list_keys(scope, page, graph_id)


@router.get("/{id}", response_model=SingleResponse[ApiKeyResponse], summary="Get an API key")
async def get_api_key(
    id: str,
    scope: ProjectScopeDep,
    db: DBSession,
) -> SingleResponse[ApiKeyResponse]:
    """Get the metadata of one API key."""
    return SingleResponse(data=await ApiKeyService(db).get(scope, id))


@router.post(
    "",
    response_model=SingleResponse[ApiKeyCreateResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create an API key",
)
async def create_api_key(
    request: ApiKeyCreate,
    scope: ProjectScopeDep,
    db: DBSession,
) -> SingleResponse[ApiKeyCreateResponse]:
    """Generate an API key for a graph.

    The full key is only part of this response; store it right away.

    Args:
        request: Target graph and optional expiry
        scope: Project from the path
        db: Database session

    Returns:
        Key metadata and the plain key
    """
    return SingleResponse(data=await ApiKeyService(db).generate_and_create(scope, request))


@router.put("/{id}", response_model=SingleResponse[ApiKeyResponse], summary="Update an API key")
async def update_api_key(
    id: str,
    request: ApiKeyUpdate,
    scope: ProjectScopeDep,
    db: DBSession,
) -> SingleResponse[ApiKeyResponse]:
    """Change the expiry of an API key."""
    return SingleResponse(data=await ApiKeyService(db).update(scope, id, request))


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an API key")
async def delete_api_key(id: str, scope: ProjectScopeDep, db: DBSession) -> None:
    """Revoke an API key."""
    await ApiKeyService(db).delete(scope, id)
