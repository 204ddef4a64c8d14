"""
Daily tag exposure and severity attribution.

A tag is any ingredient or declared trigger ingredient of a meal eaten that
day; both share one namespace. The day's total window severity is split
evenly across every distinct tag present. This is deliberately not causal
attribution: a tag that merely rides along with a trigger gets the same share.
"""
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Set

from zoneinfo import ZoneInfo

from digesttrack.analysis.time_utils import local_date, round_half_up
from digesttrack.models import TagExposure


def tags_by_day(meals: Iterable, valid_days: Set[date], tz: ZoneInfo) -> Dict[date, Set[str]]:
    """Distinct normalised tags for each valid day that has at least one tag."""
    day_tags: Dict[date, Set[str]] = defaultdict(set)
    for meal in meals:
        day = local_date(meal.meal_time, tz)
        if day in valid_days:
            day_tags[day] |= meal.tags
    return {day: tags for day, tags in day_tags.items() if tags}


def even_split_share(severity_sum: int, tag_count: int) -> int:
    if tag_count == 0:
        return 0
    return round_half_up(severity_sum / tag_count)


def derive_exposures(
    user_id: str,
    window_hours: int,
    valid_days: Set[date],
    meals: Iterable,
    daily_severity: Iterable,
    tz: ZoneInfo,
) -> List[TagExposure]:
    """
    Exposure rows for one window.

    For every valid day with tags, each tag present gets an exposed row with
    its even share of the day's severity (zero when nothing was linked that
    day). Days that do have severity data additionally get an unexposed row
    for every other tag seen in this window; those rows form the control
    group and carry the share an absent tag would have received.
    """
    day_tags = tags_by_day(meals, valid_days, tz)
    severity_by_day = {
        row.date: row.severity_sum
        for row in daily_severity
        if row.window_hours == window_hours
    }
    all_tags = set().union(*day_tags.values()) if day_tags else set()

    rows = []
    for day in sorted(day_tags):
        present = day_tags[day]
        share = even_split_share(severity_by_day.get(day, 0), len(present))

        for tag in sorted(present):
            rows.append(_row(user_id, day, tag, window_hours, True, share))

        if day not in severity_by_day:
            continue
        for tag in sorted(all_tags - present):
            rows.append(_row(user_id, day, tag, window_hours, False, share))

    return rows


def _row(user_id, day, tag, window_hours, exposed, share) -> TagExposure:
    return TagExposure(
        user_id=user_id,
        date=day,
        tag=tag,
        window_hours=window_hours,
        exposed=exposed,
        severity_share=share,
    )
