"""Tool and credential reference endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from agents_manage.db.models.enums import ToolStatus

from ..dependencies import DBSession, Page, ProjectScopeDep
from ..schemas import (
    CredentialReferenceCreate,
    CredentialReferenceResponse,
    CredentialReferenceUpdate,
    ListResponse,
    SingleResponse,
    ToolCreate,
    ToolResponse,
    ToolUpdate,
)
from ..services import CredentialReferenceService, ToolService

PROJECT_PREFIX = "/tenants/{tenantId}/projects/{projectId}"

router = APIRouter(prefix=f"{PROJECT_PREFIX}/tools", tags=["tools"])
credentials_router = APIRouter(prefix=f"{PROJECT_PREFIX}/credentials", tags=["credentials"])


# Tools


@router.get("", response_model=ListResponse[ToolResponse], summary="List tools")
async def list_tools(
    scope: ProjectScopeDep,
    db: DBSession,
    page: Page,
    tool_status: Annotated[ToolStatus | None, Query(alias="status")] = None,
) -> ListResponse[ToolResponse]:
    """List the tools of a project, optionally by health status."""
    return await ToolService(db).list_tools(scope, page, tool_status)


@router.post(
    "",
    response_model=SingleResponse[ToolResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Register a tool",
)
async def create_tool(
    request: ToolCreate,
    scope: ProjectScopeDep,
    db: DBSession,
) -> SingleResponse[ToolResponse]:
    """Register an MCP tool server.

    Args:
        request: Tool creation request
        scope: Project from the path
        db: Database session

    Returns:
        Created tool, with status "unknown" until it is checked
    """
    return SingleResponse(data=await ToolService(db).create(scope, request))


@router.get("/{id}", response_model=SingleResponse[ToolResponse], summary="Get a tool")
async def get_tool(id: str, scope: ProjectScopeDep, db: DBSession) -> SingleResponse[ToolResponse]:
    """Get one tool."""
    return SingleResponse(data=await ToolService(db).get(scope, id))


@router.put("/{id}", response_model=SingleResponse[ToolResponse], summary="Update a tool")
async def update_tool(
    id: str,
    request: ToolUpdate,
    scope: ProjectScopeDep,
    db: DBSession,
) -> SingleResponse[ToolResponse]:
    """Update a tool."""
    return SingleResponse(data=await ToolService(db).update(scope, id, request))


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a tool")
async def delete_tool(id: str, scope: ProjectScopeDep, db: DBSession) -> None:
    """Delete a tool; agents lose access to it."""
    await ToolService(db).delete(scope, id)


# Credential references


@credentials_router.get(
    "",
    response_model=ListResponse[CredentialReferenceResponse],
    summary="List credential references",
)
async def list_credentials(
    scope: ProjectScopeDep,
    db: DBSession,
    page: Page,
) -> ListResponse[CredentialReferenceResponse]:
    """List the credential references of a project."""
    return await CredentialReferenceService(db).list(scope, page)


@credentials_router.post(
    "",
    response_model=SingleResponse[CredentialReferenceResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a credential reference",
)
async def create_credential(
    request: CredentialReferenceCreate,
    scope: ProjectScopeDep,
    db: DBSession,
) -> SingleResponse[CredentialReferenceResponse]:
    """Create a reference to a credential held in an external store."""
    return SingleResponse(data=await CredentialReferenceService(db).create(scope, request))


@credentials_router.get(
    "/{id}",
    response_model=SingleResponse[CredentialReferenceResponse],
    summary="Get a credential reference",
)
async def get_credential(
    id: str,
    scope: ProjectScopeDep,
    db: DBSession,
) -> SingleResponse[CredentialReferenceResponse]:
    """Get one credential reference."""
    return SingleResponse(data=await CredentialReferenceService(db).get(scope, id))


@credentials_router.put(
    "/{id}",
    response_model=SingleResponse[CredentialReferenceResponse],
    summary="Update a credential reference",
)
async def update_credential(
    id: str,
    request: CredentialReferenceUpdate,
    scope: ProjectScopeDep,
    db: DBSession,
) -> SingleResponse[CredentialReferenceResponse]:
    """Update a credential reference."""
    return SingleResponse(data=await CredentialReferenceService(db).update(scope, id, request))


@credentials_router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a credential reference",
)
async def delete_credential(id: str, scope: ProjectScopeDep, db: DBSession) -> None:
    """Delete a credential reference and detach it from tools and external agents."""
    await CredentialReferenceService(db).delete(scope, id)
