"""Per-day, per-window symptom severity totals."""
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Set

from zoneinfo import ZoneInfo

from digesttrack.analysis.severity import score
from digesttrack.analysis.time_utils import local_date
from digesttrack.models import DailyWindowSeverity


def aggregate(
    user_id: str,
    window_hours: int,
    valid_days: Set[date],
    meals: Iterable,
    symptoms: Iterable,
    links: Iterable,
    tz: ZoneInfo,
) -> List[DailyWindowSeverity]:
    """
    Sum and max severity of the symptom events linked to each valid day's meals.

    A symptom linked to several meals of the same day is counted once for
    that day. Days without any linked symptom event get no row at all, so a
    missing row means "no data", never "severity zero".
    """
    meal_days: Dict[int, date] = {
        meal.id: local_date(meal.meal_time, tz) for meal in meals
    }
    symptoms_by_id = {symptom.id: symptom for symptom in symptoms}

    linked: Dict[date, Set[int]] = defaultdict(set)
    for link in links:
        if link.window_hours != window_hours:
            continue
        day = meal_days.get(link.meal_id)
        if day is None or day not in valid_days:
            continue
        if link.symptom_id in symptoms_by_id:
            linked[day].add(link.symptom_id)

    rows = []
    for day in sorted(linked):
        scores = [score(symptoms_by_id[symptom_id]) for symptom_id in sorted(linked[day])]
        rows.append(
            DailyWindowSeverity(
                user_id=user_id,
                date=day,
                window_hours=window_hours,
                severity_sum=sum(scores),
                severity_max=max(scores),
                bm_count=len(scores),
            )
        )
    return rows
