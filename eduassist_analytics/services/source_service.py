# eduassist_analytics/services/source_service.py
"""Read-only access to the upstream school, class, grade, attendance and fee tables."""
from dataclasses import dataclass
from typing import List, Optional
from uuid import UUID
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from .base_service import BaseService
from .aggregation.records import (
    AttendanceRecord, ClassSourceData, FeeRecord, GradeRecord, to_number,
)
from ..models import Attendance, ClassModel, Fee, Grade, School, Student

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassTarget:
    school_id: UUID
    class_id: UUID


class ScopeService:
    """Resolves which classes a rollup run covers."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.schools = BaseService(School, db)
        self.classes = BaseService(ClassModel, db)

    async def list_school_ids(self) -> List[UUID]:
        rows = await self.schools.get_columns(School.id, order_by=School.created_at)
        return [row.id for row in rows]

    async def list_class_targets(
        self,
        school_id: Optional[UUID] = None,
        class_id: Optional[UUID] = None,
    ) -> List[ClassTarget]:
        if class_id is not None:
            # An explicit class implies its own school
            rows = await self.classes.get_columns(
                ClassModel.id, ClassModel.school_id, id=class_id, school_id=school_id,
            )
            return [ClassTarget(school_id=row.school_id, class_id=row.id) for row in rows]

        school_ids = [school_id] if school_id is not None else await self.list_school_ids()
        targets: List[ClassTarget] = []
        for sid in school_ids:
            rows = await self.classes.get_columns(
                ClassModel.id, order_by=ClassModel.created_at, school_id=sid,
            )
            targets.extend(ClassTarget(school_id=sid, class_id=row.id) for row in rows)
        return targets


class ClassSourceService:
    """Loads every raw row one class rollup needs."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def load(self, target: ClassTarget) -> ClassSourceData:
        grade_rows = await BaseService(Grade, self.db).get_columns(
            Grade.student_id, Grade.subject_id, Grade.score, Grade.max_score,
            Grade.term, Grade.year, Grade.recorded_at,
            order_by=Grade.recorded_at.desc(),
            class_id=target.class_id,
        )
        roster_rows = await BaseService(Student, self.db).get_columns(
            Student.id,
            order_by=Student.created_at,
            class_id=target.class_id,
            school_id=target.school_id,
            is_active=True,
        )
        attendance_rows = await BaseService(Attendance, self.db).get_columns(
            Attendance.status,
            class_id=target.class_id,
            school_id=target.school_id,
        )
        fee_rows = await BaseService(Fee, self.db).get_columns(
            Fee.amount, Fee.paid_amount, Fee.status,
            class_id=target.class_id,
            school_id=target.school_id,
        )

        logger.debug(
            f"Loaded class {target.class_id}: {len(grade_rows)} grades, "
            f"{len(roster_rows)} students, {len(attendance_rows)} attendance, {len(fee_rows)} fees"
        )

        return ClassSourceData(
            class_id=target.class_id,
            school_id=target.school_id,
            grades=tuple(
                GradeRecord(
                    student_id=row.student_id,
                    subject_id=row.subject_id,
                    score=to_number(row.score),
                    max_score=to_number(row.max_score),
                    term=row.term,
                    year=row.year,
                    recorded_at=row.recorded_at,
                )
                for row in grade_rows
            ),
            attendance=tuple(AttendanceRecord(status=row.status) for row in attendance_rows),
            fees=tuple(
                FeeRecord(amount=row.amount, paid_amount=row.paid_amount, status=row.status)
                for row in fee_rows
            ),
            roster=tuple(row.id for row in roster_rows),
        )
