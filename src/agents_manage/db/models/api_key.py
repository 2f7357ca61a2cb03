"""API key model."""

from datetime import datetime

from sqlalchemy import VARCHAR, ForeignKeyConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class ApiKey(TimestampMixin, Base):
    """A hashed API key granting access to one graph.

    Only the hash is stored. The plain key is shown once at creation.

    Attributes:
        public_id: Lookup identifier embedded in the key (unique)
        key_hash: base64(salt + scrypt hash)
        key_prefix: First characters of the key, safe to display
        last_used_at: Last successful validation
        expires_at: Optional expiry
    """

    __tablename__ = "api_keys"

    id: Mapped[str] = mapped_column(VARCHAR(255), primary_key=True)
    tenant_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    project_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    graph_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    public_id: Mapped[str] = mapped_column(VARCHAR(64), nullable=False, unique=True)
    key_hash: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    key_prefix: Mapped[str] = mapped_column(VARCHAR(32), nullable=False)
    last_used_at: Mapped[datetime | None] = mapped_column()
    expires_at: Mapped[datetime | None] = mapped_column()

    __table_args__ = (
        ForeignKeyConstraint(
            ["tenant_id", "project_id", "graph_id"],
            ["agent_graph.tenant_id", "agent_graph.project_id", "agent_graph.id"],
            ondelete="CASCADE",
            name="api_keys_graph_fk",
        ),
        Index("ix_api_keys_tenant_project", "tenant_id", "project_id"),
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<ApiKey(id={self.id}, prefix={self.key_prefix})>"
