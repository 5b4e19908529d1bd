# eduassist_analytics/services/base_service.py
"""Base service with common read operations."""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Type, Any, List, TypeVar, Generic

T = TypeVar('T')

class BaseService(Generic[T]):
    def __init__(self, model: Type[T], db: AsyncSession):
        self.model = model
        self.db = db

    def _filtered(self, stmt, include_deleted: bool = False, **filters):
        # Soft-deleted rows are invisible unless asked for
        if hasattr(self.model, 'is_deleted') and not include_deleted:
            stmt = stmt.where(self.model.is_deleted == False)  # noqa: E712

        for key, value in filters.items():
            if hasattr(self.model, key) and value is not None:
                stmt = stmt.where(getattr(self.model, key) == value)
        return stmt

    async def get_multi(self, order_by=None, include_deleted: bool = False, **filters) -> List[T]:
        stmt = self._filtered(select(self.model), include_deleted, **filters)
        if order_by is not None:
            stmt = stmt.order_by(order_by)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_columns(self, *columns, order_by=None, **filters) -> List[Any]:
        """Fetch only the given columns as rows, skipping ORM object construction."""
        stmt = self._filtered(select(*columns), **filters)
        if order_by is not None:
            stmt = stmt.order_by(order_by)
        result = await self.db.execute(stmt)
        return list(result.all())

