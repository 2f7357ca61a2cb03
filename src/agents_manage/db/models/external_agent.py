"""External agent model."""

from typing import Any

from sqlalchemy import TEXT, VARCHAR, ForeignKeyConstraint, PrimaryKeyConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, JSONType, TimestampMixin


class ExternalAgent(TimestampMixin, Base):
    """An agent served by another system, reached over HTTP.

    Attributes:
        base_url: Endpoint of the remote agent
        credential_reference_id: Credentials used to call it
        headers: Extra request headers
    """

    __tablename__ = "external_agents"

    tenant_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    project_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    graph_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    name: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    description: Mapped[str] = mapped_column(TEXT, nullable=False, default="")
    base_url: Mapped[str] = mapped_column(TEXT, nullable=False)
    credential_reference_id: Mapped[str | None] = mapped_column(VARCHAR(255))
    headers: Mapped[dict[str, str] | None] = mapped_column(JSONType)

    __table_args__ = (
        PrimaryKeyConstraint(
            "tenant_id", "project_id", "graph_id", "id", name="pk_external_agents"
        ),
        ForeignKeyConstraint(
            ["tenant_id", "project_id", "graph_id"],
            ["agent_graph.tenant_id", "agent_graph.project_id", "agent_graph.id"],
            ondelete="CASCADE",
            name="external_agents_graph_fk",
        ),
    )
