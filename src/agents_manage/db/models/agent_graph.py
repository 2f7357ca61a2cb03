"""Agent graph model."""

from typing import Any

from sqlalchemy import TEXT, VARCHAR, ForeignKeyConstraint, PrimaryKeyConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, JSONType, TimestampMixin


class AgentGraph(TimestampMixin, Base):
    """A graph of agents that hand work to each other.

    Attributes:
        default_agent_id: Agent that receives new conversations
        context_config_id: Optional project context config used by the graph
        models: Graph-level model settings
        status_updates: Status update settings for long-running runs
        graph_prompt: Prompt shared by every agent in the graph
        stop_when: Graph-level limits (transferCountIs)
    """

    __tablename__ = "agent_graph"

    tenant_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    project_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    name: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    description: Mapped[str | None] = mapped_column(TEXT)
    default_agent_id: Mapped[str | None] = mapped_column(VARCHAR(255))
    context_config_id: Mapped[str | None] = mapped_column(VARCHAR(255))
    models: Mapped[dict[str, Any] | None] = mapped_column(JSONType)
    status_updates: Mapped[dict[str, Any] | None] = mapped_column(JSONType)
    graph_prompt: Mapped[str | None] = mapped_column(TEXT)
    stop_when: Mapped[dict[str, Any] | None] = mapped_column(JSONType)

    __table_args__ = (
        PrimaryKeyConstraint("tenant_id", "project_id", "id", name="pk_agent_graph"),
        ForeignKeyConstraint(
            ["tenant_id", "project_id"],
            ["projects.tenant_id", "projects.id"],
            ondelete="CASCADE",
            name="agent_graph_project_fk",
        ),
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<AgentGraph(project_id={self.project_id}, id={self.id})>"
