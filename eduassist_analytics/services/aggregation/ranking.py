"""
Student and subject ranking for the current period.

Both rankings sort descending with Python's stable sort and define no
secondary key: equal averages keep the order they arrived in (roster order
for students, first appearance in the period for subjects).
"""
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple
from uuid import UUID

from .grades import mean
from .periods import PeriodBucket
from .records import to_number

TOP_STUDENT_LIMIT = 5
SUBJECT_RANK_LIMIT = 2


@dataclass(frozen=True)
class StudentRanking:
    student_id: UUID
    avg_grade: float

    def as_dict(self) -> dict:
        return {"student_id": str(self.student_id), "avg_grade": self.avg_grade}


@dataclass(frozen=True)
class SubjectScore:
    subject_id: UUID
    avg_score: float

    def as_dict(self) -> dict:
        return {"subject_id": str(self.subject_id), "avg_score": self.avg_score}


@dataclass(frozen=True)
class SubjectRanking:
    best: Tuple[SubjectScore, ...] = ()
    weakest: Tuple[SubjectScore, ...] = ()


def rank_students(
    bucket: Optional[PeriodBucket],
    roster: Iterable[UUID],
    limit: int = TOP_STUDENT_LIMIT,
) -> List[StudentRanking]:
    """Top ``limit`` active students by mean score in the period.

    Students without a scored row in the period are left out, not ranked as zero.
    """
    if bucket is None:
        return []

    scores_by_student: Dict[UUID, List[float]] = defaultdict(list)
    for row in bucket.rows:
        score = to_number(row.score)
        if score is not None:
            scores_by_student[row.student_id].append(score)

    rankings = []
    for student_id in roster:
        student_mean = mean(scores_by_student.get(student_id, ()))
        if student_mean is not None:
            rankings.append(StudentRanking(student_id=student_id, avg_grade=student_mean))

    rankings.sort(key=lambda r: r.avg_grade, reverse=True)
    return rankings[:limit]


def rank_subjects(subject_means: Mapping[UUID, float], limit: int = SUBJECT_RANK_LIMIT) -> SubjectRanking:
    # With fewer than 2 * limit subjects best and weakest overlap; that is accepted
    ordered: Sequence[SubjectScore] = sorted(
        (SubjectScore(subject_id=s, avg_score=m) for s, m in subject_means.items()),
        key=lambda entry: entry.avg_score,
        reverse=True,
    )
    if not ordered:
        return SubjectRanking()
    return SubjectRanking(best=tuple(ordered[:limit]), weakest=tuple(ordered[-limit:]))
