"""Project management service."""

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from agents_manage.core.exceptions import ProjectHasResourcesError
from agents_manage.db.repository import ProjectRepository
from agents_manage.db.scopes import ProjectScope, TenantScope

from ..exceptions import NotFoundError
from ..schemas import ProjectResponse, ProjectUpdate
from .base import CrudService

logger = structlog.get_logger()


class ProjectService(CrudService[ProjectResponse]):
    """Projects of a tenant.

    Updating a project pushes changed execution limits down to the graphs
    and agents that inherit them. A project can only be deleted once it no
    longer owns any resource.
    """

    resource_name = "Project"
    response_schema = ProjectResponse

    def __init__(self, db_session: AsyncSession) -> None:
        """Initialize project service.

        Args:
            db_session: Database session
        """
        self.project_repo = ProjectRepository(db_session)
        super().__init__(db_session, self.project_repo)

    async def update(  # type: ignore[override]
        self,
        scope: TenantScope,
        resource_id: str,
        body: ProjectUpdate,
    ) -> ProjectResponse:
        """Update a project and cascade its stopWhen.

        Raises:
            NotFoundError: If the project does not exist
        """
        project = await self.get_instance(scope, resource_id)
        old_stop_when = project.stop_when
        columns = body.to_columns(exclude_unset=True)

        updated = await self.project_repo.update(scope, resource_id, **columns)
        if updated is None:
            raise NotFoundError(self.resource_name, resource_id)
        if "stop_when" in columns:
            await self.project_repo.cascade_stop_when(
                ProjectScope(scope.tenant_id, resource_id), old_stop_when, updated.stop_when
            )
        await self.db.commit()

        logger.info("project_updated", tenant_id=scope.tenant_id, project_id=resource_id)
        return self.to_response(updated)

    async def delete(self, scope: TenantScope, resource_id: str) -> None:
        """Delete an empty project.

        Raises:
            NotFoundError: If the project does not exist
            ProjectHasResourcesError: If the project still owns resources
        """
        await self.get_instance(scope, resource_id)
        project_scope = ProjectScope(scope.tenant_id, resource_id)
        if await self.project_repo.has_resources(project_scope):
            counts = await self.project_repo.get_resource_counts(project_scope)
            raise ProjectHasResourcesError(resource_id, counts)
        await super().delete(scope, resource_id)
