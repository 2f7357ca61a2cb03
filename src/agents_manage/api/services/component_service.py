"""Data and artifact components and their agent associations."""

from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from agents_manage.db.repository import (
    AgentArtifactComponentRepository,
    AgentDataComponentRepository,
    AgentRepository,
    ArtifactComponentRepository,
    DataComponentRepository,
)
from agents_manage.db.repository.component_repo import AgentComponentRepository
from agents_manage.db.scopes import GraphScope

from ..exceptions import ConflictError, NotFoundError
from ..schemas import (
    AgentArtifactComponentResponse,
    AgentDataComponentResponse,
    APIModel,
    ArtifactComponentResponse,
    ComponentAgentResponse,
    DataComponentResponse,
    ExistsResponse,
    RemovedResponse,
    SingleResponse,
)
from .base import ProjectScopedCrudService, require_graph

logger = structlog.get_logger()


class DataComponentService(ProjectScopedCrudService[DataComponentResponse]):
    """Structured data components agents can emit."""

    resource_name = "Data component"
    response_schema = DataComponentResponse

    def __init__(self, db_session: AsyncSession) -> None:
        """Initialize data component service.

        Args:
            db_session: Database session
        """
        super().__init__(db_session, DataComponentRepository(db_session))


class ArtifactComponentService(ProjectScopedCrudService[ArtifactComponentResponse]):
    """Artifact components agents can produce."""

    resource_name = "Artifact component"
    response_schema = ArtifactComponentResponse

    def __init__(self, db_session: AsyncSession) -> None:
        """Initialize artifact component service.

        Args:
            db_session: Database session
        """
        super().__init__(db_session, ArtifactComponentRepository(db_session))


class AgentComponentService:
    """Associations between the agents of a graph and project components.

    Attributes:
        component_name: Human readable component kind
        component_schema: Response schema of the component
        association_schema: Response schema of the association
    """

    component_name: str
    component_schema: type[APIModel]
    association_schema: type[APIModel]

    def __init__(
        self,
        db_session: AsyncSession,
        association_repo: AgentComponentRepository[Any],
        component_repo: Any,
    ) -> None:
        """Initialize association service.

        Args:
            db_session: Database session
            association_repo: Association repository
            component_repo: Repository of the project-level components
        """
        self.db = db_session
        self.association_repo = association_repo
        self.component_repo = component_repo
        self.agent_repo = AgentRepository(db_session)

    async def get_components_for_agent(
        self,
        scope: GraphScope,
        agent_id: str,
    ) -> SingleResponse[list[Any]]:
        """List the components associated with an agent."""
        components = await self.association_repo.get_components_for_agent(scope, agent_id)
        return SingleResponse[list[Any]](
            data=[self.component_schema.model_validate(c) for c in components]
        )

    async def get_agents_for_component(
        self,
        scope: GraphScope,
        component_id: str,
    ) -> SingleResponse[list[ComponentAgentResponse]]:
        """List the agents of the project that use a component."""
        agents = await self.association_repo.get_agents_for_component(scope.project, component_id)
        return SingleResponse[list[ComponentAgentResponse]](
            data=[ComponentAgentResponse.model_validate(a) for a in agents]
        )

    async def associate(self, scope: GraphScope, agent_id: str, component_id: str) -> Any:
        """Associate a component with an agent.

        Raises:
            NotFoundError: If the graph, the agent or the component does not exist
            ConflictError: If they are already associated
        """
        await require_graph(self.db, scope)
        if not await self.agent_repo.exists(scope, agent_id):
            raise NotFoundError("Agent", agent_id)
        if not await self.component_repo.exists(scope.project, component_id):
            raise NotFoundError(self.component_name, component_id)
        if await self.association_repo.is_associated(scope, agent_id, component_id):
            raise ConflictError(
                f"Agent '{agent_id}' is already associated with "
                f"{self.component_name.lower()} '{component_id}'"
            )

        association = await self.association_repo.associate(scope, agent_id, component_id)
        await self.db.commit()

        logger.info(
            "component_associated",
            component=self.component_name,
            agent_id=agent_id,
            component_id=component_id,
        )
        return self.association_schema.model_validate(association)

    async def remove(self, scope: GraphScope, agent_id: str, component_id: str) -> RemovedResponse:
        """Remove an association.

        Raises:
            NotFoundError: If the association does not exist
        """
        removed = await self.association_repo.remove(scope, agent_id, component_id)
        if not removed:
            raise NotFoundError("Association")
        await self.db.commit()

        logger.info(
            "component_association_removed",
            component=self.component_name,
            agent_id=agent_id,
            component_id=component_id,
        )
        return RemovedResponse(message="Association removed successfully", removed=True)

    async def exists(self, scope: GraphScope, agent_id: str, component_id: str) -> ExistsResponse:
        """Check whether an agent is associated with a component."""
        return ExistsResponse(
            exists=await self.association_repo.is_associated(scope, agent_id, component_id)
        )


class AgentDataComponentService(AgentComponentService):
    """Agent to data component associations."""

    component_name = "Data component"
    component_schema = DataComponentResponse
    association_schema = AgentDataComponentResponse

    def __init__(self, db_session: AsyncSession) -> None:
        super().__init__(
            db_session,
            AgentDataComponentRepository(db_session),
            DataComponentRepository(db_session),
        )


class AgentArtifactComponentService(AgentComponentService):
    """Agent to artifact component associations."""

    component_name = "Artifact component"
    component_schema = ArtifactComponentResponse
    association_schema = AgentArtifactComponentResponse

    def __init__(self, db_session: AsyncSession) -> None:
        super().__init__(
            db_session,
            AgentArtifactComponentRepository(db_session),
            ArtifactComponentRepository(db_session),
        )
