"""Conversation and message repositories."""

from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Conversation, Message
from ..scopes import ProjectScope
from .base import BaseRepository


class ConversationRepository(BaseRepository[Conversation]):
    """Repository for conversation operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize conversation repository.

        Args:
            session: Database session
        """
        super().__init__(Conversation, session)

    async def list_for_user(
        self,
        scope: ProjectScope,
        user_id: str | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[Conversation], int]:
        """List conversations, optionally only those of one user."""
        conditions = [Conversation.user_id == user_id] if user_id else []
        return await self.paginate(scope, *conditions, page=page, limit=limit)


class MessageRepository(BaseRepository[Message]):
    """Repository for conversation message operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize message repository.

        Args:
            session: Database session
        """
        super().__init__(Message, session)

    async def list_for_conversation(
        self,
        scope: ProjectScope,
        conversation_id: str,
        visibility: list[str] | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[Message], int]:
        """List the messages of a conversation, oldest first.

        Args:
            scope: Project scope
            conversation_id: Conversation identifier
            visibility: Only return messages with one of these visibilities
            page: 1-based page number
            limit: Page size

        Returns:
            Tuple of (messages, total)
        """
        conditions = [Message.conversation_id == conversation_id]
        if visibility:
            conditions.append(Message.visibility.in_(visibility))
        return await self.paginate(scope, *conditions, page=page, limit=limit)
