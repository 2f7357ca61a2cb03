"""Shared CRUD behaviour for scoped resources."""

from typing import Any, Generic, TypeVar

import structlog
from sqlalchemy import ColumnElement
from sqlalchemy.ext.asyncio import AsyncSession

from agents_manage.db.repository import AgentGraphRepository, BaseRepository, ProjectRepository
from agents_manage.db.scopes import GraphScope, ProjectScope, TenantScope

from ..dependencies import PageParams
from ..exceptions import ConflictError, NotFoundError
from ..schemas import APIModel, ListResponse, Pagination

logger = structlog.get_logger()

ResponseType = TypeVar("ResponseType", bound=APIModel)


class CrudService(Generic[ResponseType]):
    """List, get, create, update and delete for one scoped resource.

    Subclasses set the repository in ``__init__`` and declare the resource
    name (used in errors and log events) and the response schema.

    Attributes:
        resource_name: Human readable resource name, e.g. "Agent"
        response_schema: Schema used to serialize model instances
    """

    resource_name: str = "Resource"
    response_schema: type[ResponseType]

    def __init__(self, db_session: AsyncSession, repository: BaseRepository[Any]) -> None:
        """Initialize service.

        Args:
            db_session: Database session
            repository: Repository of the resource
        """
        self.db = db_session
        self.repo = repository

    def to_response(self, instance: Any) -> ResponseType:
        """Serialize a model instance."""
        return self.response_schema.model_validate(instance)

    async def list(
        self,
        scope: TenantScope,
        page: PageParams,
        *conditions: ColumnElement[bool],
    ) -> ListResponse[ResponseType]:
        """List one page of resources.

        Args:
            scope: Ownership scope
            page: Requested page
            *conditions: Extra filter expressions

        Returns:
            Paginated list response
        """
        items, total = await self.repo.paginate(
            scope, *conditions, page=page.page, limit=page.limit
        )
        return ListResponse[self.response_schema](  # type: ignore[name-defined]
            data=[self.to_response(item) for item in items],
            pagination=Pagination.build(page.page, page.limit, total),
        )

    async def get_instance(self, scope: TenantScope, resource_id: str) -> Any:
        """Get the model instance or raise NotFoundError."""
        instance = await self.repo.get_by_id(scope, resource_id)
        if instance is None:
            raise NotFoundError(self.resource_name, resource_id)
        return instance

    async def get(self, scope: TenantScope, resource_id: str) -> ResponseType:
        """Get one resource.

        Raises:
            NotFoundError: If the resource does not exist
        """
        return self.to_response(await self.get_instance(scope, resource_id))

    async def create(self, scope: TenantScope, body: APIModel, **extra: Any) -> ResponseType:
        """Create a resource from a request body.

        Args:
            scope: Ownership scope
            body: Request body; its ``id`` must be free in the scope
            **extra: Additional column values

        Returns:
            Created resource

        Raises:
            ConflictError: If a resource with the same id exists
        """
        columns = {**body.to_columns(), **extra}
        resource_id = columns.get("id")
        if resource_id is not None and await self.repo.exists(scope, resource_id):
            raise ConflictError(f"{self.resource_name} '{resource_id}' already exists")

        instance = await self.repo.create(**scope.as_filters(), **columns)
        await self.db.commit()

        logger.info(
            "resource_created",
            resource=self.resource_name,
            id=instance.id,
            **scope.as_filters(),
        )
        return self.to_response(instance)

    async def update(
        self,
        scope: TenantScope,
        resource_id: str,
        body: APIModel,
    ) -> ResponseType:
        """Apply the fields present in a request body.

        Raises:
            NotFoundError: If the resource does not exist
        """
        instance = await self.repo.update(scope, resource_id, **body.to_columns(exclude_unset=True))
        if instance is None:
            raise NotFoundError(self.resource_name, resource_id)
        await self.db.commit()

        logger.info("resource_updated", resource=self.resource_name, id=resource_id)
        return self.to_response(instance)

    async def delete(self, scope: TenantScope, resource_id: str) -> None:
        """Delete a resource.

        Raises:
            NotFoundError: If the resource does not exist
        """
        if not await self.repo.delete(scope, resource_id):
            raise NotFoundError(self.resource_name, resource_id)
        await self.db.commit()

        logger.info("resource_deleted", resource=self.resource_name, id=resource_id)


async def require_graph(db_session: AsyncSession, scope: GraphScope) -> None:
    """Raise NotFoundError unless the graph of the scope exists."""
    if not await AgentGraphRepository(db_session).exists(scope.project, scope.graph_id):
        raise NotFoundError("Agent graph", scope.graph_id)


class GraphScopedCrudService(CrudService[ResponseType]):
    """CRUD for resources living inside an agent graph."""

    async def create(  # type: ignore[override]
        self,
        scope: GraphScope,
        body: APIModel,
        **extra: Any,
    ) -> ResponseType:
        """Create a resource in an existing graph.

        Raises:
            NotFoundError: If the graph does not exist
            ConflictError: If a resource with the same id exists
        """
        await require_graph(self.db, scope)
        return await super().create(scope, body, **extra)


async def require_project(db_session: AsyncSession, scope: ProjectScope) -> None:
    """Raise NotFoundError unless the project of the scope exists."""
    if not await ProjectRepository(db_session).exists(
        TenantScope(scope.tenant_id), scope.project_id
    ):
        raise NotFoundError("Project", scope.project_id)


class ProjectScopedCrudService(CrudService[ResponseType]):
    """CRUD for resources shared by the graphs of a project."""

    async def create(  # type: ignore[override]
        self,
        scope: ProjectScope,
        body: APIModel,
        **extra: Any,
    ) -> ResponseType:
        """Create a resource in an existing project.

        Raises:
            NotFoundError: If the project does not exist
            ConflictError: If a resource with the same id exists
        """
        await require_project(self.db, scope)
        return await super().create(scope, body, **extra)
