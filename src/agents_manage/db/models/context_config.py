"""Context configuration model."""

from typing import Any

from sqlalchemy import TEXT, VARCHAR, ForeignKeyConstraint, PrimaryKeyConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, JSONType, TimestampMixin


class ContextConfig(TimestampMixin, Base):
    """Request context schema and fetch definitions for a graph.

    Attributes:
        request_context_schema: JSON schema validating incoming request context
        context_variables: Template key to fetch definition mapping
    """

    __tablename__ = "context_configs"

    tenant_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    project_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    name: Mapped[str] = mapped_column(VARCHAR(255), nullable=False, default="")
    description: Mapped[str] = mapped_column(TEXT, nullable=False, default="")
    request_context_schema: Mapped[dict[str, Any] | None] = mapped_column(JSONType)
    context_variables: Mapped[dict[str, Any] | None] = mapped_column(JSONType)

    __table_args__ = (
        PrimaryKeyConstraint("tenant_id", "project_id", "id", name="pk_context_configs"),
        ForeignKeyConstraint(
            ["tenant_id", "project_id"],
            ["projects.tenant_id", "projects.id"],
            ondelete="CASCADE",
            name="context_configs_project_fk",
        ),
    )
