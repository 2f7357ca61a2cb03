"""Agent relation repository."""

from sqlalchemy.ext.asyncio import AsyncSession

from ..models import AgentRelation
from ..models.enums import RelationType
from ..scopes import GraphScope
from .base import BaseRepository


class AgentRelationRepository(BaseRepository[AgentRelation]):
    """Repository for transfer and delegate relations between agents."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize agent relation repository.

        Args:
            session: Database session
        """
        super().__init__(AgentRelation, session)

    async def _targets(
        self, scope: GraphScope, source_agent_id: str, relation_type: RelationType
    ) -> list[str]:
        relations = await self.get_all(
            scope,
            AgentRelation.source_agent_id == source_agent_id,
            AgentRelation.relation_type == relation_type.value,
        )
        targets = (r.target_agent_id or r.external_agent_id for r in relations)
        return [t for t in targets if t]

    async def get_transfer_targets(self, scope: GraphScope, source_agent_id: str) -> list[str]:
        """Get ids of internal or external agents the source agent can transfer to."""
        return await self._targets(scope, source_agent_id, RelationType.TRANSFER)

    async def get_delegate_targets(self, scope: GraphScope, source_agent_id: str) -> list[str]:
        """Get ids of internal or external agents the source agent can delegate to."""
        return await self._targets(scope, source_agent_id, RelationType.DELEGATE)

    async def find_duplicate(
        self,
        scope: GraphScope,
        source_agent_id: str,
        target_agent_id: str | None,
        external_agent_id: str | None,
    ) -> AgentRelation | None:
        """Find an existing relation between the same pair of agents.

        Args:
            scope: Graph scope
            source_agent_id: Source agent id
            target_agent_id: Internal target id, if any
            external_agent_id: External target id, if any

        Returns:
            The existing relation or None
        """
        if external_agent_id:
            condition = AgentRelation.external_agent_id == external_agent_id
        else:
            condition = AgentRelation.target_agent_id == target_agent_id
        relations = await self.get_all(
            scope, AgentRelation.source_agent_id == source_agent_id, condition, limit=1
        )
        return relations[0] if relations else None

    async def delete_for_graph(self, scope: GraphScope) -> int:
        """Delete every relation of a graph.

        Returns:
            Number of deleted relations
        """
        return await self.delete_where(scope)
