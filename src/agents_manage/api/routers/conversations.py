"""Conversation endpoints (read only)."""

from typing import Annotated

from fastapi import APIRouter, Query

from ..dependencies import DBSession, Page, ProjectScopeDep
from ..schemas import ConversationResponse, ListResponse, MessageResponse, SingleResponse
from ..services import ConversationService

router = APIRouter(
    prefix="/tenants/{tenantId}/projects/{projectId}/conversations",
    tags=["conversations"],
)


@router.get("", response_model=ListResponse[ConversationResponse], summary="List conversations")
async def list_conversations(
    scope: ProjectScopeDep,
    db: DBSession,
    page: Page,
    user_id: Annotated[str | None, Query(alias="userId")] = None,
) -> ListResponse[ConversationResponse]:
    """List conversations, optionally those of one user."""
    return await ConversationService(db).list_conversations(scope, page, user_id)


@router.get(
    "/{id}",
    response_model=SingleResponse[ConversationResponse],
    summary="Get a conversation",
)
async def get_conversation(
    id: str,
    scope: ProjectScopeDep,
    db: DBSession,
) -> SingleResponse[ConversationResponse]:
    """Get one conversation."""
    return SingleResponse(data=await ConversationService(db).get(scope, id))


@router.get(
    "/{id}/messages",
    response_model=ListResponse[MessageResponse],
    summary="List the messages of a conversation",
)
async def list_messages(
    id: str,
    scope: ProjectScopeDep,
    db: DBSession,
    page: Page,
    visibility: Annotated[list[str] | None, Query()] = None,
) -> ListResponse[MessageResponse]:
    """List messages oldest first, optionally only some visibilities."""
    return await ConversationService(db).list_messages(scope, id, page, visibility)
