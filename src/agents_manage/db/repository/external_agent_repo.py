"""External agent repository."""

from sqlalchemy.ext.asyncio import AsyncSession

from ..models import ExternalAgent
from ..scopes import GraphScope, ProjectScope
from .base import BaseRepository


class ExternalAgentRepository(BaseRepository[ExternalAgent]):
    """Repository for external agent operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize external agent repository.

        Args:
            session: Database session
        """
        super().__init__(ExternalAgent, session)

    async def delete_missing(self, scope: GraphScope, keep_ids: set[str]) -> int:
        """Delete the graph's external agents whose id is not in keep_ids."""
        if not keep_ids:
            return await self.delete_where(scope)
        return await self.delete_where(scope, ExternalAgent.id.not_in(keep_ids))

    async def clear_credential(self, scope: ProjectScope, credential_reference_id: str) -> int:
        """Detach a deleted credential reference from every external agent of a project.

        Returns:
            Number of external agents updated
        """
        agents = await self.get_all(
            scope, ExternalAgent.credential_reference_id == credential_reference_id
        )
        for agent in agents:
            agent.credential_reference_id = None
        await self.session.flush()
        return len(agents)
