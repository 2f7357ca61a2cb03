"""Base repository for generic scoped CRUD operations."""

from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, Select, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.base import Base
from ..scopes import TenantScope

ModelType = TypeVar("ModelType", bound=Base)

MAX_PAGE_SIZE = 100


class BaseRepository(Generic[ModelType]):
    """Generic repository for CRUD operations inside an ownership scope.

    Every query is filtered by the columns of the scope it receives, so a
    repository can never read or touch rows of another tenant, project or
    graph.

    Attributes:
        model: SQLAlchemy model class
        session: Database session
    """

    def __init__(self, model: type[ModelType], session: AsyncSession) -> None:
        """Initialize repository.

        Args:
            model: SQLAlchemy model class
            session: Database session
        """
        self.model = model
        self.session = session

    def _scope_conditions(self, scope: TenantScope) -> list[ColumnElement[bool]]:
        return [getattr(self.model, key) == value for key, value in scope.as_filters().items()]

    def _select(self, scope: TenantScope, *conditions: ColumnElement[bool]) -> Select[Any]:
        return select(self.model).where(*self._scope_conditions(scope), *conditions)

    async def create(self, **kwargs: Any) -> ModelType:
        """Create a new record.

        Args:
            **kwargs: Model attributes, scope columns included

        Returns:
            Created model instance
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def get_by_id(self, scope: TenantScope, id: str) -> ModelType | None:
        """Retrieve record by ID within a scope.

        Args:
            scope: Ownership scope
            id: Record identifier

        Returns:
            Model instance or None if not found
        """
        stmt = self._select(scope, self.model.id == id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def exists(self, scope: TenantScope, id: str) -> bool:
        """Check whether a record exists within a scope."""
        return await self.get_by_id(scope, id) is not None

    async def get_all(
        self,
        scope: TenantScope,
        *conditions: ColumnElement[bool],
        limit: int | None = None,
        offset: int = 0,
    ) -> list[ModelType]:
        """Retrieve all records of a scope.

        Args:
            scope: Ownership scope
            *conditions: Extra filter expressions
            limit: Maximum number of records to return, None for all
            offset: Number of records to skip

        Returns:
            List of model instances, oldest first
        """
        stmt = (
            self._select(scope, *conditions)
            .order_by(self.model.created_at, self.model.id)
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count(self, scope: TenantScope, *conditions: ColumnElement[bool]) -> int:
        """Count records of a scope.

        Args:
            scope: Ownership scope
            *conditions: Extra filter expressions

        Returns:
            Number of matching records
        """
        stmt = (
            select(func.count())
            .select_from(self.model)
            .where(*self._scope_conditions(scope), *conditions)
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def paginate(
        self,
        scope: TenantScope,
        *conditions: ColumnElement[bool],
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[ModelType], int]:
        """Retrieve one page of records and the total count.

        Args:
            scope: Ownership scope
            *conditions: Extra filter expressions
            page: 1-based page number
            limit: Page size, capped at MAX_PAGE_SIZE

        Returns:
            Tuple of (records on the page, total matching records)
        """
        page = max(page, 1)
        limit = max(min(limit, MAX_PAGE_SIZE), 1)
        items = await self.get_all(scope, *conditions, limit=limit, offset=(page - 1) * limit)
        total = await self.count(scope, *conditions)
        return items, total

    async def update(self, scope: TenantScope, id: str, **kwargs: Any) -> ModelType | None:
        """Update record by ID within a scope.

        Args:
            scope: Ownership scope
            id: Record identifier
            **kwargs: Attributes to update

        Returns:
            Updated model instance or None if not found
        """
        instance = await self.get_by_id(scope, id)
        if instance is None:
            return None

        for key, value in kwargs.items():
            setattr(instance, key, value)

        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def upsert(self, scope: TenantScope, id: str, **kwargs: Any) -> ModelType:
        """Update the record if it exists, create it otherwise.

        Args:
            scope: Ownership scope
            id: Record identifier
            **kwargs: Attributes to set

        Returns:
            Created or updated model instance
        """
        instance = await self.update(scope, id, **kwargs)
        if instance is not None:
            return instance
        return await self.create(**scope.as_filters(), id=id, **kwargs)

    async def delete(self, scope: TenantScope, id: str) -> bool:
        """Delete record by ID within a scope.

        Args:
            scope: Ownership scope
            id: Record identifier

        Returns:
            True if deleted, False if not found
        """
        instance = await self.get_by_id(scope, id)
        if instance is None:
            return False

        await self.session.delete(instance)
        await self.session.flush()
        return True

    async def delete_where(self, scope: TenantScope, *conditions: ColumnElement[bool]) -> int:
        """Delete every record of a scope matching the conditions.

        Args:
            scope: Ownership scope
            *conditions: Extra filter expressions

        Returns:
            Number of deleted records
        """
        stmt = delete(self.model).where(*self._scope_conditions(scope), *conditions)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0
