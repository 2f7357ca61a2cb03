"""API key repository."""

from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ...utils.api_keys import extract_public_id, is_api_key_expired, validate_api_key
from ..models import ApiKey
from ..scopes import ProjectScope
from .base import MAX_PAGE_SIZE, BaseRepository


class ApiKeyRepository(BaseRepository[ApiKey]):
    """Repository for API key operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize API key repository.

        Args:
            session: Database session
        """
        super().__init__(ApiKey, session)

    async def list_paginated(
        self,
        scope: ProjectScope,
        graph_id: str | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[ApiKey], int]:
        """List API keys of a project, newest first.

        Args:
            scope: Project scope
            graph_id: Only return keys of this graph
            page: 1-based page number
            limit: Page size

        Returns:
            Tuple of (keys, total)
        """
        conditions = [ApiKey.graph_id == graph_id] if graph_id else []
        page = max(page, 1)
        limit = max(min(limit, MAX_PAGE_SIZE), 1)
        stmt = (
            self._select(scope, *conditions)
            .order_by(ApiKey.created_at.desc(), ApiKey.id)
            .limit(limit)
            .offset((page - 1) * limit)
        )
        result = await self.session.execute(stmt)
        total = await self.count(scope, *conditions)
        return list(result.scalars().all()), total

    async def get_by_public_id(self, public_id: str) -> ApiKey | None:
        """Look up a key by its public id, across all tenants."""
        result = await self.session.execute(select(ApiKey).where(ApiKey.public_id == public_id))
        return result.scalar_one_or_none()

    async def validate_and_get(self, key: str) -> ApiKey | None:
        """Validate a full API key and return its record.

        A successful validation records the time of use.

        Args:
            key: Full key as presented by a client

        Returns:
            The key record, or None if the key is malformed, unknown,
            does not match or has expired
        """
        public_id = extract_public_id(key)
        if public_id is None:
            return None

        api_key = await self.get_by_public_id(public_id)
        if api_key is None:
            return None

        if not validate_api_key(key, api_key.key_hash):
            return None
        if is_api_key_expired(api_key.expires_at):
            return None

        api_key.last_used_at = datetime.now(UTC)
        await self.session.flush()
        await self.session.refresh(api_key)
        return api_key
