"""FastAPI dependencies for dependency injection."""

from collections.abc import AsyncGenerator
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from agents_manage.db.scopes import GraphScope, ProjectScope, TenantScope
from agents_manage.db.session import get_db_session

from .config import get_api_settings
from .exceptions import BadRequestError


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Database session dependency.

    Yields:
        AsyncSession for database operations
    """
    async for session in get_db_session():
        yield session


@dataclass(frozen=True)
class PageParams:
    """Requested page of a list endpoint."""

    page: int
    limit: int


def get_page_params(
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int | None, Query(ge=1)] = None,
) -> PageParams:
    """Pagination query parameters.

    Args:
        page: 1-based page number
        limit: Page size

    Returns:
        Page parameters

    Raises:
        BadRequestError: If limit exceeds the configured maximum page size
    """
    settings = get_api_settings()
    if limit is not None and limit > settings.max_page_size:
        raise BadRequestError(f"limit must be at most {settings.max_page_size}")
    return PageParams(page=page, limit=limit or settings.default_page_size)


def get_tenant_scope(tenant_id: Annotated[str, Path(alias="tenantId")]) -> TenantScope:
    """Tenant scope from the path."""
    return TenantScope(tenant_id)


def get_project_scope(
    tenant_id: Annotated[str, Path(alias="tenantId")],
    project_id: Annotated[str, Path(alias="projectId")],
) -> ProjectScope:
    """Project scope from the path."""
    return ProjectScope(tenant_id, project_id)


def get_graph_scope(
    tenant_id: Annotated[str, Path(alias="tenantId")],
    project_id: Annotated[str, Path(alias="projectId")],
    graph_id: Annotated[str, Path(alias="graphId")],
) -> GraphScope:
    """Graph scope from the path."""
    return GraphScope(tenant_id, project_id, graph_id)


# Type aliases for cleaner route signatures
DBSession = Annotated[AsyncSession, Depends(get_db)]
Page = Annotated[PageParams, Depends(get_page_params)]
TenantScopeDep = Annotated[TenantScope, Depends(get_tenant_scope)]
ProjectScopeDep = Annotated[ProjectScope, Depends(get_project_scope)]
GraphScopeDep = Annotated[GraphScope, Depends(get_graph_scope)]
