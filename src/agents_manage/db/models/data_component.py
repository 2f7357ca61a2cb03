"""Data component models."""

from typing import Any

from sqlalchemy import TEXT, VARCHAR, ForeignKeyConstraint, PrimaryKeyConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, JSONType, TimestampMixin


class DataComponent(TimestampMixin, Base):
    """A structured UI payload agents can emit; props is its JSON schema."""

    __tablename__ = "data_components"

    tenant_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    project_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    name: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    description: Mapped[str] = mapped_column(TEXT, nullable=False, default="")
    props: Mapped[dict[str, Any] | None] = mapped_column(JSONType)

    __table_args__ = (
        PrimaryKeyConstraint("tenant_id", "project_id", "id", name="pk_data_components"),
        ForeignKeyConstraint(
            ["tenant_id", "project_id"],
            ["projects.tenant_id", "projects.id"],
            ondelete="CASCADE",
            name="data_components_project_fk",
        ),
    )


class AgentDataComponent(TimestampMixin, Base):
    """Association between an agent and a data component."""

    __tablename__ = "agent_data_components"

    tenant_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    project_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    graph_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    agent_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    data_component_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)

    __table_args__ = (
        PrimaryKeyConstraint(
            "tenant_id", "project_id", "graph_id", "id", name="pk_agent_data_components"
        ),
        ForeignKeyConstraint(
            ["tenant_id", "project_id", "graph_id", "agent_id"],
            ["agents.tenant_id", "agents.project_id", "agents.graph_id", "agents.id"],
            ondelete="CASCADE",
            name="agent_data_components_agent_fk",
        ),
        ForeignKeyConstraint(
            ["tenant_id", "project_id", "data_component_id"],
            ["data_components.tenant_id", "data_components.project_id", "data_components.id"],
            ondelete="CASCADE",
            name="agent_data_components_component_fk",
        ),
    )
