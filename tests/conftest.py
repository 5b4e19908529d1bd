"""
Shared fixtures: a throwaway SQLite database per test and a small seeder
for the upstream school/class/grade/attendance/fee tables.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.pop("REDIS_URL", None)

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import create_async_engine

from eduassist_analytics.core.config import Settings
from eduassist_analytics.core.database import build_session_factory
from eduassist_analytics.core.locks import ClassLockManager
from eduassist_analytics.models import (
    Attendance, Base, ClassAnalytics, ClassModel, Fee, Grade, School, Student,
)
from eduassist_analytics.services.rollup_service import RollupService


class Seeder:
    """Inserts upstream rows the way the CRUD services would."""

    def __init__(self, session_factory):
        self.session_factory = session_factory
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    async def add(self, *objects):
        async with self.session_factory() as session:
            session.add_all(objects)
            await session.commit()
        return objects

    def _tick(self):
        # Strictly increasing timestamps keep scope order equal to creation order
        self._clock += timedelta(minutes=1)
        return self._clock

    async def school(self, name="Greenfield Academy"):
        school = School(id=uuid4(), school_name=name, created_at=self._tick())
        await self.add(school)
        return school

    async def klass(self, school, name="Grade 7", **fields):
        klass = ClassModel(
            id=uuid4(), school_id=school.id, class_name=name, created_at=self._tick(), **fields
        )
        await self.add(klass)
        return klass

    async def students(self, klass, count, active=True):
        students = [
            Student(
                id=uuid4(), school_id=klass.school_id, class_id=klass.id,
                first_name=f"Student{i}", last_name="Test", is_active=active,
                created_at=self._tick(),
            )
            for i in range(count)
        ]
        await self.add(*students)
        return students

    async def grades(self, klass, entries):
        """entries: (student, subject_id, score, term, year) tuples."""
        rows = []
        for student, subject_id, score, term, year in entries:
            rows.append(Grade(
                id=uuid4(), school_id=klass.school_id, class_id=klass.id,
                student_id=student.id, subject_id=subject_id, score=score,
                max_score=100, term=term, year=year, recorded_at=self._tick(),
            ))
        await self.add(*rows)
        return rows

    async def attendance(self, klass, present=0, absent=0):
        rows = [
            Attendance(id=uuid4(), school_id=klass.school_id, class_id=klass.id, status=status)
            for status in ["present"] * present + ["absent"] * absent
        ]
        await self.add(*rows)
        return rows

    async def fees(self, klass, entries):
        """entries: (amount, paid_amount, status) tuples."""
        rows = [
            Fee(
                id=uuid4(), school_id=klass.school_id, class_id=klass.id,
                amount=Decimal(str(amount)) if amount is not None else None,
                paid_amount=Decimal(str(paid)) if paid is not None else None,
                status=status,
            )
            for amount, paid, status in entries
        ]
        await self.add(*rows)
        return rows

    async def snapshots(self, class_id=None):
        async with self.session_factory() as session:
            stmt = select(ClassAnalytics)
            if class_id is not None:
                stmt = stmt.where(ClassAnalytics.class_id == class_id)
            result = await session.execute(stmt)
            return list(result.scalars().all())


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'rollup.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def seeder(session_factory):
    return Seeder(session_factory)


@pytest.fixture
def rollup_settings():
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        rollup_concurrency=2,
        rollup_class_timeout_seconds=10,
        rollup_lock_timeout_seconds=5,
    )


@pytest.fixture
def rollup_service(session_factory, rollup_settings):
    return RollupService(
        session_factory,
        rollup_settings,
        ClassLockManager(timeout=rollup_settings.rollup_lock_timeout_seconds),
    )
