"""Agent graph repository."""

from typing import Any

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.inheritance import cascade_agent_models
from ..models import Agent, AgentGraph, AgentRelation
from ..scopes import GraphScope, ProjectScope
from .base import BaseRepository

logger = structlog.get_logger()


class AgentGraphRepository(BaseRepository[AgentGraph]):
    """Repository for agent graph operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize agent graph repository.

        Args:
            session: Database session
        """
        super().__init__(AgentGraph, session)

    async def update_graph(
        self,
        scope: ProjectScope,
        graph_id: str,
        **kwargs: Any,
    ) -> AgentGraph | None:
        """Update a graph and cascade changed model settings to its agents.

        Agents whose model still equals the previous graph model are
        considered to inherit it and receive the new graph model.

        Args:
            scope: Project scope
            graph_id: Graph identifier
            **kwargs: Attributes to update

        Returns:
            Updated graph or None if not found
        """
        graph = await self.get_by_id(scope, graph_id)
        if graph is None:
            return None

        old_models = graph.models
        updated = await self.update(scope, graph_id, **kwargs)

        if "models" in kwargs and updated is not None and updated.models != old_models:
            agents = await BaseRepository(Agent, self.session).get_all(scope.graph(graph_id))
            for agent in agents:
                cascaded = cascade_agent_models(
                    agent.models, old_models, updated.models, agent.models
                )
                if cascaded != agent.models:
                    agent.models = cascaded
                    logger.info("agent_models_cascaded", graph_id=graph_id, agent_id=agent.id)
            await self.session.flush()
        return updated

    async def get_related_agents(
        self,
        scope: GraphScope,
        agent_id: str,
    ) -> list[dict[str, Any]]:
        """Get the internal agents an agent can hand work to.

        Args:
            scope: Graph scope
            agent_id: Source agent identifier

        Returns:
            List of ``{id, name, description, relationType}`` entries
        """
        stmt = (
            select(Agent.id, Agent.name, Agent.description, AgentRelation.relation_type)
            .join(
                AgentRelation,
                (AgentRelation.target_agent_id == Agent.id)
                & (AgentRelation.tenant_id == Agent.tenant_id)
                & (AgentRelation.project_id == Agent.project_id)
                & (AgentRelation.graph_id == Agent.graph_id),
            )
            .where(
                AgentRelation.tenant_id == scope.tenant_id,
                AgentRelation.project_id == scope.project_id,
                AgentRelation.graph_id == scope.graph_id,
                AgentRelation.source_agent_id == agent_id,
            )
            .order_by(Agent.id)
        )
        result = await self.session.execute(stmt)
        return [
            {
                "id": row.id,
                "name": row.name,
                "description": row.description,
                "relationType": row.relation_type,
            }
            for row in result.all()
        ]
