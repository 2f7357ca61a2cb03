"""Conversation router tests."""

from __future__ import annotations

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from agents_manage.db.models import Conversation, Message

CONVERSATIONS_URL = "/tenants/tenant-1/projects/project-1/conversations"


@pytest.fixture
async def conversation(db_session: AsyncSession, project: object) -> Conversation:
    """A conversation with one user-facing and one internal message."""
    scope = {"tenant_id": "tenant-1", "project_id": "project-1"}
    conversation = Conversation(
        **scope, id="conv-1", user_id="user-1", active_agent_id="agent-a", metadata_={"x": 1}
    )
    db_session.add(conversation)
    db_session.add_all(
        [
            Message(
                **scope,
                id="msg-1",
                conversation_id="conv-1",
                role="user",
                content={"text": "Hi"},
                visibility="user-facing",
            ),
            Message(
                **scope,
                id="msg-2",
                conversation_id="conv-1",
                role="agent",
                content={"text": "Routing"},
                visibility="internal",
            ),
        ]
    )
    await db_session.commit()
    return conversation


class TestConversations:
    """Tests for /conversations."""

    async def test_list_by_user(self, client: AsyncClient, conversation: Conversation) -> None:
        mine = await client.get(CONVERSATIONS_URL, params={"userId": "user-1"})
        others = await client.get(CONVERSATIONS_URL, params={"userId": "user-2"})

        assert [c["id"] for c in mine.json()["data"]] == ["conv-1"]
        assert mine.json()["data"][0]["metadata"] == {"x": 1}
        assert others.json()["data"] == []

    async def test_messages_by_visibility(
        self, client: AsyncClient, conversation: Conversation
    ) -> None:
        everything = await client.get(f"{CONVERSATIONS_URL}/conv-1/messages")
        visible = await client.get(
            f"{CONVERSATIONS_URL}/conv-1/messages", params={"visibility": "user-facing"}
        )

        assert everything.json()["pagination"]["total"] == 2
        assert [m["id"] for m in visible.json()["data"]] == ["msg-1"]

    async def test_unknown_conversation(self, client: AsyncClient, project: object) -> None:
        response = await client.get(f"{CONVERSATIONS_URL}/ghost/messages")

        assert response.status_code == 404
