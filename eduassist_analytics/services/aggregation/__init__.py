"""Pure, side-effect free building blocks of the class analytics rollup."""
from .records import AttendanceRecord, FeeRecord, GradeRecord, ClassSourceData
from .periods import ReportingPeriodKey, PeriodBucket, PeriodGroups, group_by_period
from .grades import GradeAggregate, aggregate_period
from .trend import TREND_THRESHOLD, PerformanceTrend, TrendResult, classify_trend
from .ranking import (
    TOP_STUDENT_LIMIT, SUBJECT_RANK_LIMIT, StudentRanking, SubjectScore, SubjectRanking,
    rank_students, rank_subjects,
)
from .attendance import AttendanceSummary, summarize_attendance
from .finance import FinancialSummary, summarize_fees
from .snapshot_builder import RollupParameters, ClassSnapshot, build_class_snapshot

__all__ = [
    "AttendanceRecord", "FeeRecord", "GradeRecord", "ClassSourceData",
    "ReportingPeriodKey", "PeriodBucket", "PeriodGroups", "group_by_period",
    "GradeAggregate", "aggregate_period",
    "TREND_THRESHOLD", "PerformanceTrend", "TrendResult", "classify_trend",
    "TOP_STUDENT_LIMIT", "SUBJECT_RANK_LIMIT", "StudentRanking", "SubjectScore", "SubjectRanking",
    "rank_students", "rank_subjects",
    "AttendanceSummary", "summarize_attendance",
    "FinancialSummary", "summarize_fees",
    "RollupParameters", "ClassSnapshot", "build_class_snapshot",
]
