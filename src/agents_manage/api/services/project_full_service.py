"""Create, read, replace and delete a project with all of its resources."""

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from agents_manage.core.validation import ProjectResources
from agents_manage.db.repository import (
    AgentGraphRepository,
    ArtifactComponentRepository,
    ContextConfigRepository,
    CredentialReferenceRepository,
    DataComponentRepository,
    ProjectRepository,
    ToolRepository,
)
from agents_manage.db.scopes import ProjectScope, TenantScope

from ..exceptions import ConflictError, InternalServerError
from ..schemas import (
    ArtifactComponentCreate,
    CredentialReferenceCreate,
    DataComponentCreate,
    FullGraphDefinition,
    FullProjectDefinition,
    Models,
    ProjectStopWhen,
    ToolCreate,
)
from .graph_full_service import GraphFullService, dump_document

logger = structlog.get_logger()


class ProjectFullService:
    """Project-full orchestration.

    Resources are written in dependency order: the project, credential
    references, tools, context configs, data components, artifact
    components and finally every graph. All writes share one transaction.
    """

    def __init__(self, db_session: AsyncSession) -> None:
        """Initialize project-full service.

        Args:
            db_session: Database session
        """
        self.db = db_session
        self.project_repo = ProjectRepository(db_session)
        self.graph_repo = AgentGraphRepository(db_session)
        self.credential_repo = CredentialReferenceRepository(db_session)
        self.tool_repo = ToolRepository(db_session)
        self.context_config_repo = ContextConfigRepository(db_session)
        self.data_component_repo = DataComponentRepository(db_session)
        self.artifact_component_repo = ArtifactComponentRepository(db_session)
        self.graph_full = GraphFullService(db_session)

    async def project_exists(self, tenant: TenantScope, project_id: str) -> bool:
        """Check whether a project exists."""
        return await self.project_repo.exists(tenant, project_id)

    async def create_full_project(
        self,
        tenant: TenantScope,
        definition: FullProjectDefinition,
    ) -> FullProjectDefinition:
        """Create a project and everything it contains.

        Args:
            tenant: Tenant scope
            definition: Full project definition

        Returns:
            The stored project, read back from the database

        Raises:
            ConflictError: If the project already exists
            GraphValidationError: If a graph references missing agents or resources
        """
        if await self.project_repo.exists(tenant, definition.id):
            raise ConflictError(f"Project '{definition.id}' already exists")

        logger.info(
            "full_project_create_started",
            tenant_id=tenant.tenant_id,
            project_id=definition.id,
            graph_count=len(definition.graphs),
        )
        await self.project_repo.create(
            tenant_id=tenant.tenant_id,
            id=definition.id,
            **self._project_columns(definition),
        )
        scope = ProjectScope(tenant.tenant_id, definition.id)
        await self._write_resources(scope, definition)

        resources = self._project_resources(definition)
        for graph in definition.graphs.values():
            await self.graph_full.create_full_graph(scope, graph, resources, commit=False)

        await self.db.commit()
        logger.info("full_project_created", tenant_id=tenant.tenant_id, project_id=definition.id)

        result = await self.get_full_project(tenant, definition.id)
        if result is None:
            raise InternalServerError(f"Project '{definition.id}' could not be read back")
        return result

    async def update_full_project(
        self,
        tenant: TenantScope,
        definition: FullProjectDefinition,
    ) -> FullProjectDefinition:
        """Upsert a project and everything it contains, creating it when missing.

        Graphs already stored but absent from the definition are kept.

        Args:
            tenant: Tenant scope
            definition: Full project definition

        Returns:
            The stored project, read back from the database
        """
        if not await self.project_repo.exists(tenant, definition.id):
            return await self.create_full_project(tenant, definition)

        await self.project_repo.update(tenant, definition.id, **self._project_columns(definition))
        scope = ProjectScope(tenant.tenant_id, definition.id)
        await self._write_resources(scope, definition)

        resources = self._project_resources(definition)
        for graph in definition.graphs.values():
            await self.graph_full.update_full_graph(scope, graph, resources, commit=False)

        await self.db.commit()
        logger.info("full_project_updated", tenant_id=tenant.tenant_id, project_id=definition.id)

        result = await self.get_full_project(tenant, definition.id)
        if result is None:
            raise InternalServerError(f"Project '{definition.id}' could not be read back")
        return result

    async def get_full_project(
        self,
        tenant: TenantScope,
        project_id: str,
    ) -> FullProjectDefinition | None:
        """Assemble the full definition of a stored project.

        A graph that cannot be read is logged and left out.

        Returns:
            The full definition, or None if the project does not exist
        """
        project = await self.project_repo.get_by_id(tenant, project_id)
        if project is None:
            return None

        scope = ProjectScope(tenant.tenant_id, project_id)
        graphs: dict[str, FullGraphDefinition] = {}
        for graph in await self.graph_repo.get_all(scope):
            try:
                full_graph = await self.graph_full.get_full_graph(scope, graph.id)
            except SQLAlchemyError as exc:
                logger.error("full_graph_read_failed", graph_id=graph.id, error=str(exc))
                continue
            if full_graph is not None:
                graphs[graph.id] = full_graph

        tools = await self.tool_repo.get_all(scope)
        data_components = await self.data_component_repo.get_all(scope)
        artifact_components = await self.artifact_component_repo.get_all(scope)
        credentials = await self.credential_repo.get_all(scope)

        return FullProjectDefinition(
            id=project.id,
            name=project.name,
            description=project.description,
            models=Models.model_validate(project.models) if project.models else None,
            stop_when=(
                ProjectStopWhen.model_validate(project.stop_when) if project.stop_when else None
            ),
            graphs=graphs,
            tools={t.id: ToolCreate.model_validate(t) for t in tools},
            data_components={c.id: DataComponentCreate.model_validate(c) for c in data_components},
            artifact_components={
                c.id: ArtifactComponentCreate.model_validate(c) for c in artifact_components
            },
            credential_references={
                c.id: CredentialReferenceCreate.model_validate(c) for c in credentials
            },
            created_at=project.created_at,
            updated_at=project.updated_at,
        )

    async def delete_full_project(self, tenant: TenantScope, project_id: str) -> bool:
        """Delete a project, its graphs and all shared resources.

        Returns:
            False if the project does not exist
        """
        if not await self.project_repo.exists(tenant, project_id):
            return False

        scope = ProjectScope(tenant.tenant_id, project_id)
        for graph in await self.graph_repo.get_all(scope):
            await self.graph_full.delete_full_graph(scope, graph.id, commit=False)
        await self.project_repo.delete(tenant, project_id)

        await self.db.commit()
        logger.info("full_project_deleted", tenant_id=tenant.tenant_id, project_id=project_id)
        return True

    async def _write_resources(
        self,
        scope: ProjectScope,
        definition: FullProjectDefinition,
    ) -> None:
        """Upsert the project-level resources graphs depend on."""
        for credential_id, credential in (definition.credential_references or {}).items():
            await self.credential_repo.upsert(
                scope, credential_id, **_without_id(credential.to_columns())
            )
        for tool_id, tool in definition.tools.items():
            await self.tool_repo.upsert(scope, tool_id, **_without_id(tool.to_columns()))

        for graph in definition.graphs.values():
            context_config = graph.context_config
            if context_config is not None:
                await self.context_config_repo.upsert(
                    scope, context_config.id, **_without_id(context_config.to_columns())
                )

        for component_id, component in (definition.data_components or {}).items():
            await self.data_component_repo.upsert(
                scope, component_id, **_without_id(component.to_columns())
            )
        for component_id, component in (definition.artifact_components or {}).items():
            await self.artifact_component_repo.upsert(
                scope, component_id, **_without_id(component.to_columns())
            )

        logger.info(
            "project_resources_written",
            project_id=scope.project_id,
            tools=len(definition.tools),
            credential_references=len(definition.credential_references or {}),
        )

    @staticmethod
    def _project_resources(definition: FullProjectDefinition) -> ProjectResources:
        return ProjectResources(
            tool_ids=set(definition.tools),
            data_component_ids=set(definition.data_components or {}),
            artifact_component_ids=set(definition.artifact_components or {}),
        )

    @staticmethod
    def _project_columns(definition: FullProjectDefinition) -> dict[str, object]:
        return {
            "name": definition.name,
            "description": definition.description,
            "models": dump_document(definition.models),
            "stop_when": dump_document(definition.stop_when),
        }


def _without_id(columns: dict[str, object]) -> dict[str, object]:
    columns.pop("id", None)
    return columns
