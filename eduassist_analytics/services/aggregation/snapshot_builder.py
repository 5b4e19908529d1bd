"""
Composes one ClassAnalytics snapshot from a class's raw rows.

Each summarizer reads the same immutable ``ClassSourceData``; nothing here
touches the database.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID

from .attendance import summarize_attendance
from .finance import summarize_fees
from .grades import aggregate_period
from .periods import ReportingPeriodKey, group_by_period
from .ranking import rank_students, rank_subjects
from .records import ClassSourceData
from .trend import PerformanceTrend, classify_trend


@dataclass(frozen=True)
class RollupParameters:
    """Caller-supplied period fields shared by every class in a run."""
    period: Optional[str] = None
    term: Optional[str] = None
    year: Optional[int] = None

    def fallback_period(self) -> str:
        # Used only when a class has no grade rows to derive a period from
        if self.period:
            return self.period
        return ReportingPeriodKey.of(self.term, self.year).label


@dataclass(frozen=True)
class ClassSnapshot:
    class_id: UUID
    school_id: UUID
    reporting_period: str
    term: Optional[str]
    year: Optional[str]
    avg_grade: Optional[float]
    prev_avg_grade: Optional[float]
    performance_trend: PerformanceTrend
    improvement: Optional[float]
    top_students: List[Dict[str, Any]] = field(default_factory=list)
    best_subjects: List[Dict[str, Any]] = field(default_factory=list)
    weakest_subjects: List[Dict[str, Any]] = field(default_factory=list)
    attendance_rate: Optional[float] = None
    low_attendance_count: int = 0
    fee_collection: Decimal = Decimal("0")
    outstanding_fees: Decimal = Decimal("0")

    def as_record(self) -> Dict[str, Any]:
        """Column values for the class_analytics upsert."""
        return {
            "class_id": self.class_id,
            "school_id": self.school_id,
            "reporting_period": self.reporting_period,
            "term": self.term,
            "year": self.year,
            "avg_grade": self.avg_grade,
            "prev_avg_grade": self.prev_avg_grade,
            "performance_trend": self.performance_trend.value,
            "improvement": self.improvement,
            "top_students": list(self.top_students),
            "best_subjects": list(self.best_subjects),
            "weakest_subjects": list(self.weakest_subjects),
            "attendance_rate": self.attendance_rate,
            "low_attendance_count": self.low_attendance_count,
            "fee_collection": self.fee_collection,
            "outstanding_fees": self.outstanding_fees,
        }


def build_class_snapshot(source: ClassSourceData, params: RollupParameters) -> ClassSnapshot:
    groups = group_by_period(source.grades)
    current, previous = groups.current, groups.previous

    current_grades = aggregate_period(current)
    previous_grades = aggregate_period(previous)
    trend = classify_trend(current_grades.avg_grade, previous_grades.avg_grade)

    top_students = rank_students(current, source.roster)
    subjects = rank_subjects(current_grades.subject_means)
    attendance = summarize_attendance(source.attendance)
    finances = summarize_fees(source.fees)

    if current is not None:
        reporting_period = current.key.label
        term = params.term or (None if current.key.is_unknown else current.key.term)
        year = params.year if params.year is not None else current.key.year
    else:
        reporting_period = params.fallback_period()
        term, year = params.term, params.year

    return ClassSnapshot(
        class_id=source.class_id,
        school_id=source.school_id,
        reporting_period=reporting_period,
        term=term,
        year=str(year) if year is not None else None,
        avg_grade=current_grades.avg_grade,
        prev_avg_grade=previous_grades.avg_grade,
        performance_trend=trend.trend,
        improvement=trend.improvement,
        top_students=[s.as_dict() for s in top_students],
        best_subjects=[s.as_dict() for s in subjects.best],
        weakest_subjects=[s.as_dict() for s in subjects.weakest],
        attendance_rate=attendance.attendance_rate,
        low_attendance_count=attendance.low_attendance_count,
        fee_collection=finances.fee_collection,
        outstanding_fees=finances.outstanding_fees,
    )
