"""Agent relation model."""

from sqlalchemy import VARCHAR, ForeignKeyConstraint, Index, PrimaryKeyConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class AgentRelation(TimestampMixin, Base):
    """A transfer or delegate edge from one agent to another.

    Exactly one of target_agent_id and external_agent_id is set.
    """

    __tablename__ = "agent_relations"

    tenant_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    project_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    graph_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    source_agent_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    target_agent_id: Mapped[str | None] = mapped_column(VARCHAR(255))
    external_agent_id: Mapped[str | None] = mapped_column(VARCHAR(255))
    relation_type: Mapped[str] = mapped_column(VARCHAR(20), nullable=False)  # transfer | delegate

    __table_args__ = (
        PrimaryKeyConstraint(
            "tenant_id", "project_id", "graph_id", "id", name="pk_agent_relations"
        ),
        ForeignKeyConstraint(
            ["tenant_id", "project_id", "graph_id"],
            ["agent_graph.tenant_id", "agent_graph.project_id", "agent_graph.id"],
            ondelete="CASCADE",
            name="agent_relations_graph_fk",
        ),
        Index("ix_agent_relations_source", "tenant_id", "project_id", "source_agent_id"),
    )

    def __repr__(self) -> str:
        """String representation."""
        target = self.target_agent_id or self.external_agent_id
        return f"<AgentRelation({self.source_agent_id} -{self.relation_type}-> {target})>"
