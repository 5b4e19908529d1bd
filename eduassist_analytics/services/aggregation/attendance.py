from dataclasses import dataclass
from typing import Iterable, Optional

from ...models.attendance import AttendanceStatus
from .records import AttendanceRecord


@dataclass(frozen=True)
class AttendanceSummary:
    present: int
    absent: int
    attendance_rate: Optional[float]
    # Coarse proxy: the number of absences, not a per-student threshold count
    low_attendance_count: int


def summarize_attendance(records: Iterable[AttendanceRecord]) -> AttendanceSummary:
    """Presence rate over every retained attendance row of the class.

    Not scoped to the grade reporting period. Statuses other than present
    and absent are not counted.
    """
    present = absent = 0
    for record in records:
        if record.status == AttendanceStatus.PRESENT.value:
            present += 1
        elif record.status == AttendanceStatus.ABSENT.value:
            absent += 1

    total = present + absent
    rate = present * 100 / total if total > 0 else None
    return AttendanceSummary(
        present=present,
        absent=absent,
        attendance_rate=rate,
        low_attendance_count=absent,
    )
