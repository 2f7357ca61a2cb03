"""Project model."""

from typing import Any

from sqlalchemy import TEXT, VARCHAR, PrimaryKeyConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, JSONType, TimestampMixin


class Project(TimestampMixin, Base):
    """A tenant's project, the container for graphs and shared resources.

    Attributes:
        tenant_id: Owning tenant
        id: Project identifier, unique per tenant
        name: Display name
        description: Free-form description
        models: Default model settings inherited by graphs and agents
        stop_when: Default execution limits inherited by graphs and agents
    """

    __tablename__ = "projects"

    tenant_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    name: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    description: Mapped[str] = mapped_column(TEXT, nullable=False, default="")
    models: Mapped[dict[str, Any] | None] = mapped_column(JSONType)
    stop_when: Mapped[dict[str, Any] | None] = mapped_column(JSONType)

    __table_args__ = (PrimaryKeyConstraint("tenant_id", "id", name="pk_projects"),)

    def __repr__(self) -> str:
        """String representation."""
        return f"<Project(tenant_id={self.tenant_id}, id={self.id})>"
