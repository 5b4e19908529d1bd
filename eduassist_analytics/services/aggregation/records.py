"""
Immutable views of the upstream rows one class rollup reads.

The rollup never touches ORM objects directly; the source service copies
each row into one of these records so every downstream component works on
plain, hashable values.
"""
import math
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional, Tuple
from uuid import UUID


def to_number(value: Any) -> Optional[float]:
    """Convert a stored score to float, or None when it is missing or not numeric."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(number) or math.isinf(number) else number


def to_decimal(value: Any) -> Decimal:
    """Money as Decimal; missing or unparsable amounts count as zero."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except ArithmeticError:
        return Decimal("0")


@dataclass(frozen=True)
class GradeRecord:
    student_id: UUID
    subject_id: Optional[UUID]
    score: Optional[float]
    max_score: Optional[float] = None
    term: Optional[str] = None
    year: Optional[int] = None
    recorded_at: Optional[datetime] = None


@dataclass(frozen=True)
class AttendanceRecord:
    status: str


@dataclass(frozen=True)
class FeeRecord:
    amount: Optional[Decimal]
    paid_amount: Optional[Decimal]
    status: str


@dataclass(frozen=True)
class ClassSourceData:
    """Everything one class rollup needs, read once and shared read-only."""
    class_id: UUID
    school_id: UUID
    grades: Tuple[GradeRecord, ...] = ()
    attendance: Tuple[AttendanceRecord, ...] = ()
    fees: Tuple[FeeRecord, ...] = ()
    # Active students, in the order the store returned them
    roster: Tuple[UUID, ...] = ()
