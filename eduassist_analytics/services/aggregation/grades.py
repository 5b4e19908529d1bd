from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional
from uuid import UUID

from .periods import PeriodBucket


def mean(values: Iterable[float]) -> Optional[float]:
    values = list(values)
    if not values:
        return None
    return sum(values) / len(values)


@dataclass(frozen=True)
class GradeAggregate:
    avg_grade: Optional[float] = None
    subject_means: Mapping[UUID, float] = field(default_factory=dict)


def aggregate_period(bucket: Optional[PeriodBucket]) -> GradeAggregate:
    """Mean raw score for the period and per subject.

    Raw scores are averaged as stored, without normalizing by ``max_score``.
    """
    if bucket is None:
        return GradeAggregate()

    subject_means = {}
    for subject_id, scores in bucket.by_subject.items():
        subject_mean = mean(scores)
        if subject_mean is not None:
            subject_means[subject_id] = subject_mean

    return GradeAggregate(
        avg_grade=mean(bucket.scores),
        subject_means=MappingProxyType(subject_means),
    )
