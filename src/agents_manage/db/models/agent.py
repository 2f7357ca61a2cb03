"""Agent model."""

from typing import Any

from sqlalchemy import TEXT, VARCHAR, ForeignKeyConstraint, PrimaryKeyConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, JSONType, TimestampMixin


class Agent(TimestampMixin, Base):
    """An internal agent belonging to one graph.

    Attributes:
        prompt: System prompt
        conversation_history_config: How much history the agent sees
        models: Agent-level model settings
        stop_when: Agent-level limits (stepCountIs)
    """

    __tablename__ = "agents"

    tenant_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    project_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    graph_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    name: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    description: Mapped[str] = mapped_column(TEXT, nullable=False, default="")
    prompt: Mapped[str] = mapped_column(TEXT, nullable=False)
    conversation_history_config: Mapped[dict[str, Any] | None] = mapped_column(JSONType)
    models: Mapped[dict[str, Any] | None] = mapped_column(JSONType)
    stop_when: Mapped[dict[str, Any] | None] = mapped_column(JSONType)

    __table_args__ = (
        PrimaryKeyConstraint("tenant_id", "project_id", "graph_id", "id", name="pk_agents"),
        ForeignKeyConstraint(
            ["tenant_id", "project_id", "graph_id"],
            ["agent_graph.tenant_id", "agent_graph.project_id", "agent_graph.id"],
            ondelete="CASCADE",
            name="agents_graph_fk",
        ),
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Agent(graph_id={self.graph_id}, id={self.id})>"
