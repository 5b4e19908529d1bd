import enum
from dataclasses import dataclass
from typing import Optional

# Points of avg_grade change needed before a class counts as improving or
# declining. Strict inequality: a change of exactly 5 is still stable.
TREND_THRESHOLD = 5


class PerformanceTrend(str, enum.Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


@dataclass(frozen=True)
class TrendResult:
    improvement: Optional[float]
    trend: PerformanceTrend


def classify_trend(current: Optional[float], previous: Optional[float]) -> TrendResult:
    if current is None or previous is None:
        return TrendResult(improvement=None, trend=PerformanceTrend.STABLE)

    improvement = current - previous
    if improvement > TREND_THRESHOLD:
        trend = PerformanceTrend.UP
    elif improvement < -TREND_THRESHOLD:
        trend = PerformanceTrend.DOWN
    else:
        trend = PerformanceTrend.STABLE
    return TrendResult(improvement=improvement, trend=trend)
