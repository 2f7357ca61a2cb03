"""Project repository."""

from typing import Any

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import (
    Agent,
    AgentGraph,
    ContextConfig,
    Conversation,
    ExternalAgent,
    Project,
    Tool,
)
from ..scopes import ProjectScope
from .base import BaseRepository

logger = structlog.get_logger()

# Tables whose rows keep a project from being deleted
_RESOURCE_MODELS: dict[str, Any] = {
    "agentGraphs": AgentGraph,
    "agents": Agent,
    "tools": Tool,
    "contextConfigs": ContextConfig,
    "externalAgents": ExternalAgent,
    "conversations": Conversation,
}


def _inherits(current: Any, old_project_value: Any) -> bool:
    """A child inherits a limit when it has none or still carries the old project value."""
    return current is None or current == old_project_value


class ProjectRepository(BaseRepository[Project]):
    """Repository for project operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize project repository.

        Args:
            session: Database session
        """
        super().__init__(Project, session)

    async def get_resource_counts(self, scope: ProjectScope) -> dict[str, int]:
        """Count the resources owned by a project.

        Args:
            scope: Project scope

        Returns:
            Mapping of resource kind to row count
        """
        counts: dict[str, int] = {}
        for kind, model in _RESOURCE_MODELS.items():
            counts[kind] = await BaseRepository(model, self.session).count(scope)
        return counts

    async def has_resources(self, scope: ProjectScope) -> bool:
        """Check whether any resource still belongs to the project.

        Args:
            scope: Project scope

        Returns:
            True as soon as one owned row is found
        """
        for model in _RESOURCE_MODELS.values():
            stmt = (
                select(model.id)
                .where(model.tenant_id == scope.tenant_id, model.project_id == scope.project_id)
                .limit(1)
            )
            result = await self.session.execute(stmt)
            if result.first() is not None:
                return True
        return False

    async def cascade_stop_when(
        self,
        scope: ProjectScope,
        old_stop_when: dict[str, Any] | None,
        new_stop_when: dict[str, Any] | None,
    ) -> None:
        """Push changed project limits down to graphs and agents that inherit them.

        A graph inherits transferCountIs and an agent inherits stepCountIs
        when it has no value of its own or still carries the old project value.

        Args:
            scope: Project scope
            old_stop_when: Project stopWhen before the update
            new_stop_when: Project stopWhen after the update
        """
        old = old_stop_when or {}
        new = new_stop_when or {}

        if old.get("transferCountIs") != new.get("transferCountIs"):
            graph_repo = BaseRepository(AgentGraph, self.session)
            for graph in await graph_repo.get_all(scope):
                current = (graph.stop_when or {}).get("transferCountIs")
                if _inherits(current, old.get("transferCountIs")):
                    graph.stop_when = {
                        **(graph.stop_when or {}),
                        "transferCountIs": new.get("transferCountIs"),
                    }
                    logger.info(
                        "graph_stop_when_cascaded",
                        graph_id=graph.id,
                        transfer_count_is=new.get("transferCountIs"),
                    )

        if old.get("stepCountIs") != new.get("stepCountIs"):
            agent_repo = BaseRepository(Agent, self.session)
            for agent in await agent_repo.get_all(scope):
                current = (agent.stop_when or {}).get("stepCountIs")
                if _inherits(current, old.get("stepCountIs")):
                    agent.stop_when = {
                        **(agent.stop_when or {}),
                        "stepCountIs": new.get("stepCountIs"),
                    }

        await self.session.flush()
