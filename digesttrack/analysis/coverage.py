"""
Per-day logging coverage.

A day only counts for analysis when enough of it was logged: we assume
`expected_meals_per_day` meals and `expected_bm_per_day` symptom logs, and a
day whose combined coverage falls below the threshold is excluded from every
derived table.
"""
from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional

from zoneinfo import ZoneInfo

from digesttrack.analysis.time_utils import iter_days, local_date, round_half_up
from digesttrack.config import settings
from digesttrack.models import DayCoverage


@dataclass
class DayMetrics:
    date: date
    meals_logged: int
    symptoms_logged: int
    meal_coverage: float
    bm_coverage: float
    total_coverage: int

    def is_valid(self, threshold: float) -> bool:
        return self.total_coverage >= threshold


def measure_day(
    day: date,
    meals_logged: int,
    symptoms_logged: int,
    expected_meals: Optional[int] = None,
    expected_bms: Optional[int] = None,
) -> DayMetrics:
    """Coverage percentages for a day given how many entries it has."""
    expected_meals = expected_meals or settings.expected_meals_per_day
    expected_bms = expected_bms or settings.expected_bm_per_day

    meal_coverage = min(100.0, meals_logged / expected_meals * 100)
    bm_coverage = min(100.0, symptoms_logged / expected_bms * 100)
    total_coverage = round_half_up((meal_coverage + bm_coverage) / 2)

    return DayMetrics(
        date=day,
        meals_logged=meals_logged,
        symptoms_logged=symptoms_logged,
        meal_coverage=meal_coverage,
        bm_coverage=bm_coverage,
        total_coverage=total_coverage,
    )


def compute_coverage(
    user_id: str,
    day: date,
    meals: Iterable,
    symptoms: Iterable,
    threshold: float,
    tz: ZoneInfo,
) -> Optional[DayCoverage]:
    """
    Coverage row for one day, or None when the day is excluded.

    `meals` and `symptoms` may span any range; only entries falling on `day`
    (in `tz`) are counted.
    """
    meals_logged = sum(1 for meal in meals if local_date(meal.meal_time, tz) == day)
    symptoms_logged = sum(
        1 for symptom in symptoms if local_date(symptom.occurred_at, tz) == day
    )
    metrics = measure_day(day, meals_logged, symptoms_logged)
    if not metrics.is_valid(threshold):
        return None
    return _to_row(user_id, metrics)


def measure_range(
    start: date, end: date, meals: Iterable, symptoms: Iterable, tz: ZoneInfo
) -> List[DayMetrics]:
    """Metrics for every calendar day from start through end, excluded days included."""
    meal_counts = Counter(local_date(meal.meal_time, tz) for meal in meals)
    symptom_counts = Counter(local_date(s.occurred_at, tz) for s in symptoms)
    return [
        measure_day(day, meal_counts[day], symptom_counts[day])
        for day in iter_days(start, end)
    ]


def regenerate_coverage(
    user_id: str,
    meals: Iterable,
    symptoms: Iterable,
    now: datetime,
    threshold: float,
    tz: ZoneInfo,
    lookback_days: Optional[int] = None,
) -> List[DayCoverage]:
    """
    Coverage rows for every valid day from `lookback_days` before now through now.

    Callers replace all previous coverage rows with this result; it is never
    merged with earlier runs.
    """
    lookback_days = lookback_days or settings.analysis_lookback_days
    today = local_date(now, tz)
    start = today - timedelta(days=lookback_days)

    return [
        _to_row(user_id, metrics)
        for metrics in measure_range(start, today, meals, symptoms, tz)
        if metrics.is_valid(threshold)
    ]


def _to_row(user_id: str, metrics: DayMetrics) -> DayCoverage:
    return DayCoverage(
        user_id=user_id,
        date=metrics.date,
        meal_coverage=metrics.meal_coverage,
        bm_coverage=metrics.bm_coverage,
        total_coverage=metrics.total_coverage,
    )
