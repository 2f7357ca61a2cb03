"""Credential reference repository."""

from sqlalchemy.ext.asyncio import AsyncSession

from ..models import CredentialReference
from .base import BaseRepository


class CredentialReferenceRepository(BaseRepository[CredentialReference]):
    """Repository for credential reference operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(CredentialReference, session)
