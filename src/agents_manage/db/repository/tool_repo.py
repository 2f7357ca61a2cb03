"""Tool and agent-tool relation repositories."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import AgentToolRelation, Tool
from ..scopes import GraphScope, ProjectScope
from .base import BaseRepository


class ToolRepository(BaseRepository[Tool]):
    """Repository for MCP tool operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize tool repository.

        Args:
            session: Database session
        """
        super().__init__(Tool, session)

    async def clear_credential(self, scope: ProjectScope, credential_reference_id: str) -> int:
        """Detach a deleted credential reference from every tool of a project.

        Returns:
            Number of tools updated
        """
        tools = await self.get_all(scope, Tool.credential_reference_id == credential_reference_id)
        for tool in tools:
            tool.credential_reference_id = None
        await self.session.flush()
        return len(tools)


class AgentToolRelationRepository(BaseRepository[AgentToolRelation]):
    """Repository for agent-tool relation operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize agent-tool relation repository.

        Args:
            session: Database session
        """
        super().__init__(AgentToolRelation, session)

    async def get_by_agent(self, scope: GraphScope, agent_id: str) -> list[AgentToolRelation]:
        """Get the tool relations of one agent."""
        return await self.get_all(scope, AgentToolRelation.agent_id == agent_id)

    async def get_agents_for_tool(self, scope: ProjectScope, tool_id: str) -> list[dict[str, Any]]:
        """Get every agent of the project that can use a tool.

        Args:
            scope: Project scope
            tool_id: Tool identifier

        Returns:
            List of ``{agentId, graphId, relationId, selectedTools}`` entries
        """
        stmt = (
            select(AgentToolRelation)
            .where(
                AgentToolRelation.tenant_id == scope.tenant_id,
                AgentToolRelation.project_id == scope.project_id,
                AgentToolRelation.tool_id == tool_id,
            )
            .order_by(AgentToolRelation.created_at, AgentToolRelation.id)
        )
        result = await self.session.execute(stmt)
        return [
            {
                "agentId": relation.agent_id,
                "graphId": relation.graph_id,
                "relationId": relation.id,
                "selectedTools": relation.selected_tools,
            }
            for relation in result.scalars().all()
        ]

    async def delete_for_agent(
        self,
        scope: GraphScope,
        agent_id: str,
        keep_ids: set[str] | None = None,
    ) -> int:
        """Delete an agent's tool relations, except the ids in keep_ids.

        Args:
            scope: Graph scope
            agent_id: Agent identifier
            keep_ids: Relation ids to keep; None or empty deletes all

        Returns:
            Number of deleted relations
        """
        conditions = [AgentToolRelation.agent_id == agent_id]
        if keep_ids:
            conditions.append(AgentToolRelation.id.not_in(keep_ids))
        return await self.delete_where(scope, *conditions)
