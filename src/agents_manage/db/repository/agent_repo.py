"""Agent repository."""

from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Agent
from ..scopes import GraphScope
from .base import BaseRepository


class AgentRepository(BaseRepository[Agent]):
    """Repository for internal agent operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize agent repository.

        Args:
            session: Database session
        """
        super().__init__(Agent, session)

    async def delete_missing(self, scope: GraphScope, keep_ids: set[str]) -> int:
        """Delete the graph's agents whose id is not in keep_ids.

        Args:
            scope: Graph scope
            keep_ids: Agent ids to keep

        Returns:
            Number of deleted agents
        """
        if not keep_ids:
            return await self.delete_where(scope)
        return await self.delete_where(scope, Agent.id.not_in(keep_ids))
