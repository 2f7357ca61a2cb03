"""Context config repository."""

from sqlalchemy.ext.asyncio import AsyncSession

from ..models import ContextConfig
from .base import BaseRepository


class ContextConfigRepository(BaseRepository[ContextConfig]):
    """Repository for context config operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(ContextConfig, session)
