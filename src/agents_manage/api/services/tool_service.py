"""Tool, agent-tool relation and credential reference services."""

from uuid import uuid4

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from agents_manage.db.models import AgentToolRelation, Tool
from agents_manage.db.models.enums import ToolStatus
from agents_manage.db.repository import (
    AgentRepository,
    AgentToolRelationRepository,
    CredentialReferenceRepository,
    ExternalAgentRepository,
    ToolRepository,
)
from agents_manage.db.scopes import GraphScope, ProjectScope

from ..dependencies import PageParams
from ..exceptions import NotFoundError
from ..schemas import (
    AgentToolRelationCreate,
    AgentToolRelationResponse,
    CredentialReferenceResponse,
    ListResponse,
    Pagination,
    ToolAgentResponse,
    ToolResponse,
)
from .base import GraphScopedCrudService, ProjectScopedCrudService

logger = structlog.get_logger()


class ToolService(ProjectScopedCrudService[ToolResponse]):
    """MCP tools registered in a project."""

    resource_name = "Tool"
    response_schema = ToolResponse

    def __init__(self, db_session: AsyncSession) -> None:
        """Initialize tool service.

        Args:
            db_session: Database session
        """
        super().__init__(db_session, ToolRepository(db_session))

    async def list_tools(
        self,
        scope: ProjectScope,
        page: PageParams,
        status: ToolStatus | None = None,
    ) -> ListResponse[ToolResponse]:
        """List tools, optionally only those with a given health status."""
        conditions = [Tool.status == status.value] if status else []
        return await self.list(scope, page, *conditions)


class AgentToolRelationService(GraphScopedCrudService[AgentToolRelationResponse]):
    """Which agents of a graph may use which tools."""

    resource_name = "Agent tool relation"
    response_schema = AgentToolRelationResponse

    def __init__(self, db_session: AsyncSession) -> None:
        """Initialize agent-tool relation service.

        Args:
            db_session: Database session
        """
        self.relation_repo = AgentToolRelationRepository(db_session)
        self.agent_repo = AgentRepository(db_session)
        self.tool_repo = ToolRepository(db_session)
        super().__init__(db_session, self.relation_repo)

    async def list_relations(
        self,
        scope: GraphScope,
        page: PageParams,
        agent_id: str | None = None,
        tool_id: str | None = None,
    ) -> ListResponse[AgentToolRelationResponse]:
        """List relations, optionally filtered by agent or tool."""
        conditions = []
        if agent_id:
            conditions.append(AgentToolRelation.agent_id == agent_id)
        if tool_id:
            conditions.append(AgentToolRelation.tool_id == tool_id)
        return await self.list(scope, page, *conditions)

    async def create_relation(
        self,
        scope: GraphScope,
        body: AgentToolRelationCreate,
    ) -> AgentToolRelationResponse:
        """Give an agent access to a tool.

        Raises:
            NotFoundError: If the graph, the agent or the tool does not exist
        """
        if not await self.agent_repo.exists(scope, body.agent_id):
            raise NotFoundError("Agent", body.agent_id)
        if not await self.tool_repo.exists(scope.project, body.tool_id):
            raise NotFoundError("Tool", body.tool_id)
        return await self.create(scope, body, id=str(uuid4()))

    async def get_agents_for_tool(
        self,
        scope: GraphScope,
        tool_id: str,
        page: PageParams,
    ) -> ListResponse[ToolAgentResponse]:
        """List the agents of the project that can use a tool."""
        agents = await self.relation_repo.get_agents_for_tool(scope.project, tool_id)
        start = (page.page - 1) * page.limit
        return ListResponse[ToolAgentResponse](
            data=[
                ToolAgentResponse.model_validate(a) for a in agents[start : start + page.limit]
            ],
            pagination=Pagination.build(page.page, page.limit, len(agents)),
        )


class CredentialReferenceService(ProjectScopedCrudService[CredentialReferenceResponse]):
    """References to credentials held in an external store."""

    resource_name = "Credential reference"
    response_schema = CredentialReferenceResponse

    def __init__(self, db_session: AsyncSession) -> None:
        """Initialize credential reference service.

        Args:
            db_session: Database session
        """
        self.tool_repo = ToolRepository(db_session)
        self.external_agent_repo = ExternalAgentRepository(db_session)
        super().__init__(db_session, CredentialReferenceRepository(db_session))

    async def delete(self, scope: ProjectScope, resource_id: str) -> None:  # type: ignore[override]
        """Delete a credential reference and detach it from tools and external agents.

        Raises:
            NotFoundError: If the credential reference does not exist
        """
        await self.get_instance(scope, resource_id)
        tools = await self.tool_repo.clear_credential(scope, resource_id)
        agents = await self.external_agent_repo.clear_credential(scope, resource_id)
        logger.info(
            "credential_detached",
            credential_reference_id=resource_id,
            tools=tools,
            external_agents=agents,
        )
        await super().delete(scope, resource_id)
