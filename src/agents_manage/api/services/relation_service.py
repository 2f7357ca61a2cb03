"""Agent relation and external agent services."""

from uuid import uuid4

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from agents_manage.db.models import AgentRelation
from agents_manage.db.repository import (
    AgentRelationRepository,
    AgentRepository,
    ExternalAgentRepository,
)
from agents_manage.db.scopes import GraphScope

from ..dependencies import PageParams
from ..exceptions import BadRequestError, UnprocessableEntityError
from ..schemas import (
    AgentRelationCreate,
    AgentRelationResponse,
    ExternalAgentResponse,
    ListResponse,
)
from .base import GraphScopedCrudService

logger = structlog.get_logger()


class AgentRelationService(GraphScopedCrudService[AgentRelationResponse]):
    """Transfer and delegate relations between the agents of a graph."""

    resource_name = "Agent relation"
    response_schema = AgentRelationResponse

    def __init__(self, db_session: AsyncSession) -> None:
        """Initialize agent relation service.

        Args:
            db_session: Database session
        """
        self.relation_repo = AgentRelationRepository(db_session)
        self.agent_repo = AgentRepository(db_session)
        self.external_agent_repo = ExternalAgentRepository(db_session)
        super().__init__(db_session, self.relation_repo)

    async def list_relations(
        self,
        scope: GraphScope,
        page: PageParams,
        source_agent_id: str | None = None,
        target_agent_id: str | None = None,
        external_agent_id: str | None = None,
    ) -> ListResponse[AgentRelationResponse]:
        """List relations, optionally filtered by one endpoint."""
        conditions = []
        if source_agent_id:
            conditions.append(AgentRelation.source_agent_id == source_agent_id)
        if target_agent_id:
            conditions.append(AgentRelation.target_agent_id == target_agent_id)
        if external_agent_id:
            conditions.append(AgentRelation.external_agent_id == external_agent_id)
        return await self.list(scope, page, *conditions)

    async def create_relation(
        self,
        scope: GraphScope,
        body: AgentRelationCreate,
    ) -> AgentRelationResponse:
        """Create a relation after checking its target.

        Raises:
            NotFoundError: If the graph does not exist
            BadRequestError: If the target agent does not exist
            UnprocessableEntityError: If the same relation already exists
        """
        if body.external_agent_id:
            if not await self.external_agent_repo.exists(scope, body.external_agent_id):
                raise BadRequestError(
                    f"External agent with ID {body.external_agent_id} not found"
                )
        elif not await self.agent_repo.exists(scope, body.target_agent_id or ""):
            raise BadRequestError(f"Target agent with ID {body.target_agent_id} not found")

        duplicate = await self.relation_repo.find_duplicate(
            scope, body.source_agent_id, body.target_agent_id, body.external_agent_id
        )
        if duplicate is not None:
            raise UnprocessableEntityError("A relation between these agents already exists")

        return await self.create(scope, body, id=str(uuid4()))


class ExternalAgentService(GraphScopedCrudService[ExternalAgentResponse]):
    """External agents registered in a graph."""

    resource_name = "External agent"
    response_schema = ExternalAgentResponse

    def __init__(self, db_session: AsyncSession) -> None:
        """Initialize external agent service.

        Args:
            db_session: Database session
        """
        super().__init__(db_session, ExternalAgentRepository(db_session))
