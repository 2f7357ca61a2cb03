"""Artifact component models."""

from typing import Any

from sqlalchemy import TEXT, VARCHAR, ForeignKeyConstraint, PrimaryKeyConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, JSONType, TimestampMixin


class ArtifactComponent(TimestampMixin, Base):
    """A document-like output with a short and a full representation.

    Attributes:
        summary_props: JSON schema of the summary shown inline
        full_props: JSON schema of the complete artifact
    """

    __tablename__ = "artifact_components"

    tenant_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    project_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    name: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    description: Mapped[str] = mapped_column(TEXT, nullable=False, default="")
    summary_props: Mapped[dict[str, Any] | None] = mapped_column(JSONType)
    full_props: Mapped[dict[str, Any] | None] = mapped_column(JSONType)

    __table_args__ = (
        PrimaryKeyConstraint("tenant_id", "project_id", "id", name="pk_artifact_components"),
        ForeignKeyConstraint(
            ["tenant_id", "project_id"],
            ["projects.tenant_id", "projects.id"],
            ondelete="CASCADE",
            name="artifact_components_project_fk",
        ),
    )


class AgentArtifactComponent(TimestampMixin, Base):
    """Association between an agent and an artifact component."""

    __tablename__ = "agent_artifact_components"

    tenant_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    project_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    graph_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    agent_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    artifact_component_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)

    __table_args__ = (
        PrimaryKeyConstraint(
            "tenant_id", "project_id", "graph_id", "id", name="pk_agent_artifact_components"
        ),
        ForeignKeyConstraint(
            ["tenant_id", "project_id", "graph_id", "agent_id"],
            ["agents.tenant_id", "agents.project_id", "agents.graph_id", "agents.id"],
            ondelete="CASCADE",
            name="agent_artifact_components_agent_fk",
        ),
        ForeignKeyConstraint(
            ["tenant_id", "project_id", "artifact_component_id"],
            [
                "artifact_components.tenant_id",
                "artifact_components.project_id",
                "artifact_components.id",
            ],
            ondelete="CASCADE",
            name="agent_artifact_components_component_fk",
        ),
    )
