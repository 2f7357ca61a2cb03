"""Data and artifact component repositories.

Both component kinds share the same association shape: a graph-scoped
row linking an agent to a project-scoped component.
"""

from typing import Any, TypeVar
from uuid import uuid4

from sqlalchemy import ColumnElement, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import (
    AgentArtifactComponent,
    AgentDataComponent,
    ArtifactComponent,
    DataComponent,
)
from ..models.base import Base
from ..scopes import GraphScope, ProjectScope
from .base import BaseRepository

AssociationType = TypeVar("AssociationType", AgentDataComponent, AgentArtifactComponent)


class DataComponentRepository(BaseRepository[DataComponent]):
    """Repository for data component operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize data component repository.

        Args:
            session: Database session
        """
        super().__init__(DataComponent, session)


class ArtifactComponentRepository(BaseRepository[ArtifactComponent]):
    """Repository for artifact component operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize artifact component repository.

        Args:
            session: Database session
        """
        super().__init__(ArtifactComponent, session)


class AgentComponentRepository(BaseRepository[AssociationType]):
    """Generic repository for agent-component associations.

    Attributes:
        component_model: Project-scoped component model
        component_field: Name of the association column holding the component id
    """

    component_model: type[Base]
    component_field: str

    @property
    def _component_column(self) -> Any:
        return getattr(self.model, self.component_field)

    async def get_component_ids(self, scope: GraphScope, agent_id: str) -> list[str]:
        """Get ids of the components associated with an agent."""
        associations = await self.get_all(scope, self.model.agent_id == agent_id)
        return [getattr(a, self.component_field) for a in associations]

    async def get_components_for_agent(self, scope: GraphScope, agent_id: str) -> list[Any]:
        """Get the component rows associated with an agent.

        Args:
            scope: Graph scope
            agent_id: Agent identifier

        Returns:
            Component model instances
        """
        component = self.component_model
        stmt = (
            select(component)
            .join(
                self.model,
                (self._component_column == component.id)
                & (self.model.tenant_id == component.tenant_id)
                & (self.model.project_id == component.project_id),
            )
            .where(*self._scope_conditions(scope), self.model.agent_id == agent_id)
            .order_by(component.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_agents_for_component(
        self,
        scope: ProjectScope,
        component_id: str,
    ) -> list[dict[str, str]]:
        """Get the agents of a project that use a component.

        Returns:
            List of ``{agentId, graphId, createdAt}`` entries
        """
        associations = await self.get_all(scope, self._component_column == component_id)
        return [
            {
                "agentId": a.agent_id,
                "graphId": a.graph_id,
                "createdAt": a.created_at.isoformat(),
            }
            for a in associations
        ]

    def _pair(self, agent_id: str, component_id: str) -> list[ColumnElement[bool]]:
        return [self.model.agent_id == agent_id, self._component_column == component_id]

    async def is_associated(self, scope: GraphScope, agent_id: str, component_id: str) -> bool:
        """Check whether an agent is associated with a component."""
        return bool(await self.get_all(scope, *self._pair(agent_id, component_id), limit=1))

    async def associate(
        self,
        scope: GraphScope,
        agent_id: str,
        component_id: str,
    ) -> AssociationType:
        """Associate a component with an agent.

        Args:
            scope: Graph scope
            agent_id: Agent identifier
            component_id: Component identifier

        Returns:
            The new association
        """
        return await self.create(
            **scope.as_filters(),
            id=str(uuid4()),
            agent_id=agent_id,
            **{self.component_field: component_id},
        )

    async def remove(self, scope: GraphScope, agent_id: str, component_id: str) -> bool:
        """Remove an association.

        Returns:
            True if an association was removed
        """
        return await self.delete_where(scope, *self._pair(agent_id, component_id)) > 0

    async def clear_for_agent(self, scope: GraphScope, agent_id: str) -> int:
        """Remove every association of an agent.

        Returns:
            Number of removed associations
        """
        return await self.delete_where(scope, self.model.agent_id == agent_id)


class AgentDataComponentRepository(AgentComponentRepository[AgentDataComponent]):
    """Repository for agent-data component associations."""

    component_model = DataComponent
    component_field = "data_component_id"

    def __init__(self, session: AsyncSession) -> None:
        """Initialize agent-data component repository.

        Args:
            session: Database session
        """
        super().__init__(AgentDataComponent, session)


class AgentArtifactComponentRepository(AgentComponentRepository[AgentArtifactComponent]):
    """Repository for agent-artifact component associations."""

    component_model = ArtifactComponent
    component_field = "artifact_component_id"

    def __init__(self, session: AsyncSession) -> None:
        """Initialize agent-artifact component repository.

        Args:
            session: Database session
        """
        super().__init__(AgentArtifactComponent, session)
