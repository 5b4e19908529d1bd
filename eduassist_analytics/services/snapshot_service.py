# eduassist_analytics/services/snapshot_service.py
"""Writes and reads the class_analytics snapshot table."""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from .base_service import BaseService
from .aggregation.snapshot_builder import ClassSnapshot
from ..models import ClassAnalytics

# Identity of a snapshot row; everything else is replaced on conflict
CONFLICT_COLUMNS = ("class_id", "reporting_period")

_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class SnapshotService(BaseService[ClassAnalytics]):
    def __init__(self, db: AsyncSession):
        super().__init__(ClassAnalytics, db)

    def _insert(self):
        dialect = self.db.get_bind().dialect.name
        try:
            insert = _INSERT_BY_DIALECT[dialect]
        except KeyError:
            raise NotImplementedError(f"Snapshot upsert is not supported on {dialect}")
        return insert(ClassAnalytics)

    async def upsert(self, snapshot: ClassSnapshot) -> None:
        """Insert the snapshot or wholesale replace the row with the same (class, period)."""
        values = snapshot.as_record()
        stmt = self._insert().values(**values)
        replaced = {
            column: stmt.excluded[column]
            for column in values
            if column not in CONFLICT_COLUMNS
        }
        replaced["updated_at"] = func.now()
        replaced["is_deleted"] = False
        stmt = stmt.on_conflict_do_update(index_elements=list(CONFLICT_COLUMNS), set_=replaced)

        # Single statement, single transaction: a failed class never leaves a partial row
        try:
            await self.db.execute(stmt)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

    async def get_for_class(
        self,
        class_id: UUID,
        reporting_period: Optional[str] = None,
    ) -> List[ClassAnalytics]:
        return await self.get_multi(
            order_by=ClassAnalytics.updated_at.desc(),
            class_id=class_id,
            reporting_period=reporting_period,
        )
