"""Credential reference model."""

from typing import Any

from sqlalchemy import VARCHAR, ForeignKeyConstraint, PrimaryKeyConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, JSONType, TimestampMixin


class CredentialReference(TimestampMixin, Base):
    """Pointer to a secret held in a credential store.

    The secret itself never touches this database.

    Attributes:
        type: Store backend (see CredentialStoreType)
        credential_store_id: Identifier of the store instance
        retrieval_params: Backend-specific lookup parameters
    """

    __tablename__ = "credential_references"

    tenant_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    project_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    type: Mapped[str] = mapped_column(VARCHAR(20), nullable=False)
    credential_store_id: Mapped[str] = mapped_column(VARCHAR(255), nullable=False)
    retrieval_params: Mapped[dict[str, Any] | None] = mapped_column(JSONType)

    __table_args__ = (
        PrimaryKeyConstraint("tenant_id", "project_id", "id", name="pk_credential_references"),
        ForeignKeyConstraint(
            ["tenant_id", "project_id"],
            ["projects.tenant_id", "projects.id"],
            ondelete="CASCADE",
            name="credential_references_project_fk",
        ),
    )
