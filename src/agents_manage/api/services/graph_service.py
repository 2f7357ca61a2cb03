"""Agent graph and graph-scoped agent services."""

from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from agents_manage.db.repository import AgentGraphRepository, AgentRepository
from agents_manage.db.scopes import GraphScope, ProjectScope

from ..exceptions import NotFoundError
from ..schemas import (
    AgentGraphResponse,
    AgentGraphUpdate,
    AgentResponse,
    ListResponse,
    Pagination,
    RelatedAgentResponse,
)
from .base import GraphScopedCrudService, ProjectScopedCrudService

logger = structlog.get_logger()

# Graph fields reset to null when updated with an empty value
CLEARABLE_GRAPH_FIELDS = (
    "models",
    "status_updates",
    "context_config_id",
    "graph_prompt",
    "stop_when",
)


def clear_empty_fields(columns: dict[str, Any], fields: tuple[str, ...]) -> dict[str, Any]:
    """Turn empty strings and empty documents into None for the given fields."""
    for name in fields:
        if name in columns and not columns[name]:
            columns[name] = None
    return columns


class AgentGraphService(ProjectScopedCrudService[AgentGraphResponse]):
    """Agent graphs of a project."""

    resource_name = "Agent graph"
    response_schema = AgentGraphResponse

    def __init__(self, db_session: AsyncSession) -> None:
        """Initialize agent graph service.

        Args:
            db_session: Database session
        """
        self.graph_repo = AgentGraphRepository(db_session)
        self.agent_repo = AgentRepository(db_session)
        super().__init__(db_session, self.graph_repo)

    async def update(  # type: ignore[override]
        self,
        scope: ProjectScope,
        resource_id: str,
        body: AgentGraphUpdate,
    ) -> AgentGraphResponse:
        """Update a graph, cascading model changes to inheriting agents.

        Raises:
            NotFoundError: If the graph does not exist
        """
        columns = clear_empty_fields(body.to_columns(exclude_unset=True), CLEARABLE_GRAPH_FIELDS)
        graph = await self.graph_repo.update_graph(scope, resource_id, **columns)
        if graph is None:
            raise NotFoundError(self.resource_name, resource_id)
        await self.db.commit()

        logger.info("graph_updated", project_id=scope.project_id, graph_id=resource_id)
        return self.to_response(graph)

    async def get_related_agents(
        self,
        scope: GraphScope,
        agent_id: str,
    ) -> ListResponse[RelatedAgentResponse]:
        """List the agents an agent can transfer or delegate to.

        Raises:
            NotFoundError: If the graph or the agent does not exist
        """
        await self.get_instance(scope.project, scope.graph_id)
        if not await self.agent_repo.exists(scope, agent_id):
            raise NotFoundError("Agent", agent_id)

        related = await self.graph_repo.get_related_agents(scope, agent_id)
        return ListResponse[RelatedAgentResponse](
            data=[RelatedAgentResponse.model_validate(item) for item in related],
            pagination=Pagination(page=1, limit=len(related), total=len(related), pages=1),
        )


class AgentService(GraphScopedCrudService[AgentResponse]):
    """Internal agents of a graph."""

    resource_name = "Agent"
    response_schema = AgentResponse

    def __init__(self, db_session: AsyncSession) -> None:
        """Initialize agent service.

        Args:
            db_session: Database session
        """
        super().__init__(db_session, AgentRepository(db_session))

