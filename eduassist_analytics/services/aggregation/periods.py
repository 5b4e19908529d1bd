"""
Reporting-period grouping.

Grades are bucketed by a (term, year) value key and the buckets ordered
most recent first. Rows without a term land in the ``unknown`` bucket so no
grade is ever dropped.
"""
import re
from collections import defaultdict
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union
from uuid import UUID

from .records import GradeRecord, to_number

UNKNOWN_TERM = "unknown"

_DIGITS = re.compile(r"(\d+)")


def _natural_key(text: str) -> Tuple[Union[str, int], ...]:
    """'Term 10' sorts after 'Term 9'."""
    parts = _DIGITS.split(text.lower())
    return tuple(int(part) if index % 2 else part for index, part in enumerate(parts))


@dataclass(frozen=True)
class ReportingPeriodKey:
    term: str
    year: Optional[int] = None

    @classmethod
    def of(cls, term: Optional[str], year: Optional[int]) -> "ReportingPeriodKey":
        term = (term or "").strip() or UNKNOWN_TERM
        return cls(term=term, year=year)

    @property
    def is_unknown(self) -> bool:
        return self.term == UNKNOWN_TERM

    @property
    def label(self) -> str:
        """Label stored in ``class_analytics.reporting_period``."""
        return f"{self.term}-{self.year if self.year is not None else ''}"

    def recency_key(self):
        # Undated and unknown-term buckets count as the oldest
        return (
            self.year is not None,
            self.year or 0,
            not self.is_unknown,
            _natural_key(self.term),
            self.term,
        )

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class PeriodBucket:
    """All grade rows of one period plus their per-subject scores."""
    key: ReportingPeriodKey
    rows: Tuple[GradeRecord, ...]
    scores: Tuple[float, ...]
    by_subject: Mapping[UUID, Tuple[float, ...]] = field(default_factory=dict)


@dataclass(frozen=True)
class PeriodGroups:
    buckets: Mapping[ReportingPeriodKey, PeriodBucket]
    ordered_keys: Tuple[ReportingPeriodKey, ...]

    def period(self, index: int) -> Optional[PeriodBucket]:
        """Bucket at ``index`` in recency order (0 = current), None if absent."""
        if index < len(self.ordered_keys):
            return self.buckets[self.ordered_keys[index]]
        return None

    @property
    def current(self) -> Optional[PeriodBucket]:
        return self.period(0)

    @property
    def previous(self) -> Optional[PeriodBucket]:
        return self.period(1)


def group_by_period(rows: Iterable[GradeRecord]) -> PeriodGroups:
    """Bucket grade rows by reporting period, most recent period first."""
    rows_by_key: Dict[ReportingPeriodKey, List[GradeRecord]] = defaultdict(list)
    for row in rows:
        rows_by_key[ReportingPeriodKey.of(row.term, row.year)].append(row)

    buckets = {}
    for key, period_rows in rows_by_key.items():
        scores: List[float] = []
        by_subject: Dict[UUID, List[float]] = defaultdict(list)
        for row in period_rows:
            score = to_number(row.score)
            if score is None:
                continue
            scores.append(score)
            if row.subject_id:
                by_subject[row.subject_id].append(score)
        buckets[key] = PeriodBucket(
            key=key,
            rows=tuple(period_rows),
            scores=tuple(scores),
            by_subject=MappingProxyType({s: tuple(v) for s, v in by_subject.items()}),
        )

    ordered = sorted(buckets, key=ReportingPeriodKey.recency_key, reverse=True)
    return PeriodGroups(buckets=MappingProxyType(buckets), ordered_keys=tuple(ordered))
