"""Context configs, API keys and conversations."""

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from agents_manage.db.repository import (
    AgentGraphRepository,
    ApiKeyRepository,
    ContextConfigRepository,
    ConversationRepository,
    MessageRepository,
)
from agents_manage.db.scopes import ProjectScope
from agents_manage.utils.api_keys import generate_api_key

from ..dependencies import PageParams
from ..exceptions import BadRequestError
from ..schemas import (
    ApiKeyCreate,
    ApiKeyCreateResponse,
    ApiKeyResponse,
    ContextConfigResponse,
    ConversationResponse,
    ListResponse,
    MessageResponse,
    Pagination,
)
from .base import CrudService, ProjectScopedCrudService

logger = structlog.get_logger()


class ContextConfigService(ProjectScopedCrudService[ContextConfigResponse]):
    """Context configs shared by the graphs of a project."""

    resource_name = "Context config"
    response_schema = ContextConfigResponse

    def __init__(self, db_session: AsyncSession) -> None:
        """Initialize context config service.

        Args:
            db_session: Database session
        """
        super().__init__(db_session, ContextConfigRepository(db_session))


class ApiKeyService(CrudService[ApiKeyResponse]):
    """API keys granting access to one graph."""

    resource_name = "API key"
    response_schema = ApiKeyResponse

    def __init__(self, db_session: AsyncSession) -> None:
        """Initialize API key service.

        Args:
            db_session: Database session
        """
        self.api_key_repo = ApiKeyRepository(db_session)
        self.graph_repo = AgentGraphRepository(db_session)
        super().__init__(db_session, self.api_key_repo)

    async def list_keys(
        self,
        scope: ProjectScope,
        page: PageParams,
        graph_id: str | None = None,
    ) -> ListResponse[ApiKeyResponse]:
        """List the keys of a project, newest first."""
        keys, total = await self.api_key_repo.list_paginated(
            scope, graph_id=graph_id, page=page.page, limit=page.limit
        )
        return ListResponse[ApiKeyResponse](
            data=[self.to_response(k) for k in keys],
            pagination=Pagination.build(page.page, page.limit, total),
        )

    async def generate_and_create(
        self,
        scope: ProjectScope,
        body: ApiKeyCreate,
    ) -> ApiKeyCreateResponse:
        """Generate a key for a graph and store its hash.

        Returns:
            Key metadata and the plain key, which is not retrievable later

        Raises:
            BadRequestError: If the graph does not exist
        """
        if not await self.graph_repo.exists(scope, body.graph_id):
            raise BadRequestError("Invalid graphId - graph does not exist")

        generated = generate_api_key()
        api_key = await self.api_key_repo.create(
            **scope.as_filters(),
            id=generated.id,
            graph_id=body.graph_id,
            public_id=generated.public_id,
            key_hash=generated.key_hash,
            key_prefix=generated.key_prefix,
            expires_at=body.expires_at,
        )
        await self.db.commit()

        logger.info(
            "api_key_created",
            project_id=scope.project_id,
            graph_id=body.graph_id,
            key_prefix=generated.key_prefix,
        )
        return ApiKeyCreateResponse(api_key=self.to_response(api_key), key=generated.key)


class ConversationService(CrudService[ConversationResponse]):
    """Read access to conversations and their messages."""

    resource_name = "Conversation"
    response_schema = ConversationResponse

    def __init__(self, db_session: AsyncSession) -> None:
        """Initialize conversation service.

        Args:
            db_session: Database session
        """
        self.conversation_repo = ConversationRepository(db_session)
        self.message_repo = MessageRepository(db_session)
        super().__init__(db_session, self.conversation_repo)

    async def list_conversations(
        self,
        scope: ProjectScope,
        page: PageParams,
        user_id: str | None = None,
    ) -> ListResponse[ConversationResponse]:
        """List conversations, optionally those of one user."""
        items, total = await self.conversation_repo.list_for_user(
            scope, user_id=user_id, page=page.page, limit=page.limit
        )
        return ListResponse[ConversationResponse](
            data=[self.to_response(c) for c in items],
            pagination=Pagination.build(page.page, page.limit, total),
        )

    async def list_messages(
        self,
        scope: ProjectScope,
        conversation_id: str,
        page: PageParams,
        visibility: list[str] | None = None,
    ) -> ListResponse[MessageResponse]:
        """List the messages of a conversation.

        Raises:
            NotFoundError: If the conversation does not exist
        """
        await self.get_instance(scope, conversation_id)
        items, total = await self.message_repo.list_for_conversation(
            scope, conversation_id, visibility=visibility, page=page.page, limit=page.limit
        )
        return ListResponse[MessageResponse](
            data=[MessageResponse.model_validate(m) for m in items],
            pagination=Pagination.build(page.page, page.limit, total),
        )
