"""Conversation and message models."""

from typing import Any

from sqlalchemy import TEXT, VARCHAR, ForeignKeyConstraint, Index, PrimaryKeyConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, JSONType, TimestampMixin
from .enums import MessageVisibility


class Conversation(TimestampMixin, Base):
    """A chat thread between a user and the agents of a graph.

    Attributes:
        user_id: End user identifier, if known
        active_agent_id: Agent currently handling the conversation
        title: Optional display title
        last_context_resolution: Timestamp of the last context fetch
        metadata_: Arbitrary metadata (column ``metadata``)
    """

    __tablename__ = "conversations"

    tenant_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    project_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    user_id: Mapped[str | None] = mapped_column(VARCHAR(255))
    active_agent_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    title: Mapped[str | None] = mapped_column(TEXT)
    last_context_resolution: Mapped[str | None] = mapped_column(VARCHAR(64))
    metadata_: Mapped[dict[str, Any] | None] = mapped_column("metadata", JSONType)

    __table_args__ = (
        PrimaryKeyConstraint("tenant_id", "project_id", "id", name="pk_conversations"),
        ForeignKeyConstraint(
            ["tenant_id", "project_id"],
            ["projects.tenant_id", "projects.id"],
            ondelete="CASCADE",
            name="conversations_project_fk",
        ),
    )


class Message(TimestampMixin, Base):
    """A single message in a conversation.

    Either the internal or the external sender/recipient columns are set,
    depending on who exchanged the message.
    """

    __tablename__ = "messages"

    tenant_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    project_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    conversation_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    role: Mapped[str] = mapped_column(VARCHAR(20), nullable=False)

    from_agent_id: Mapped[str | None] = mapped_column(VARCHAR(255))
    to_agent_id: Mapped[str | None] = mapped_column(VARCHAR(255))
    from_external_agent_id: Mapped[str | None] = mapped_column(VARCHAR(255))
    to_external_agent_id: Mapped[str | None] = mapped_column(VARCHAR(255))

    content: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False)
    visibility: Mapped[str] = mapped_column(
        VARCHAR(20), nullable=False, default=MessageVisibility.USER_FACING.value
    )
    message_type: Mapped[str] = mapped_column(VARCHAR(20), nullable=False, default="chat")

    agent_id: Mapped[str | None] = mapped_column(VARCHAR(255))
    task_id: Mapped[str | None] = mapped_column(VARCHAR(255))
    parent_message_id: Mapped[str | None] = mapped_column(VARCHAR(255))
    a2a_task_id: Mapped[str | None] = mapped_column(VARCHAR(255))
    a2a_session_id: Mapped[str | None] = mapped_column(VARCHAR(255))
    metadata_: Mapped[dict[str, Any] | None] = mapped_column("metadata", JSONType)

    __table_args__ = (
        PrimaryKeyConstraint("tenant_id", "project_id", "id", name="pk_messages"),
        ForeignKeyConstraint(
            ["tenant_id", "project_id", "conversation_id"],
            ["conversations.tenant_id", "conversations.project_id", "conversations.id"],
            ondelete="CASCADE",
            name="messages_conversation_fk",
        ),
        Index("ix_messages_conversation", "tenant_id", "project_id", "conversation_id"),
    )
