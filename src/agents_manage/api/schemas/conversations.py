"""Conversation and message schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, Field

from .common import APIModel


class ConversationResponse(APIModel):
    """Conversation as returned by the API."""

    id: str
    user_id: str | None = None
    active_agent_id: str
    title: str | None = None
    last_context_resolution: str | None = None
    metadata: dict[str, Any] | None = Field(
        default=None,
        validation_alias=AliasChoices("metadata_", "metadata"),
        serialization_alias="metadata",
    )
    created_at: datetime
    updated_at: datetime


class MessageResponse(APIModel):
    """Conversation message as returned by the API."""

    id: str
    conversation_id: str
    role: str
    from_agent_id: str | None = None
    to_agent_id: str | None = None
    from_external_agent_id: str | None = None
    to_external_agent_id: str | None = None
    content: dict[str, Any]
    visibility: str
    message_type: str
    agent_id: str | None = None
    task_id: str | None = None
    parent_message_id: str | None = None
    a2a_task_id: str | None = None
    a2a_session_id: str | None = None
    metadata: dict[str, Any] | None = Field(
        default=None,
        validation_alias=AliasChoices("metadata_", "metadata"),
        serialization_alias="metadata",
    )
    created_at: datetime
    updated_at: datetime
