"""
Multi-window exposure/severity correlation.

For each tag and lag window the mean attributed severity on days the tag was
eaten is compared with the mean on control days (days with symptom data on
which the tag was absent). Reliability is a plain sample-size tier; there is
no significance testing.
"""
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set

from digesttrack.config import settings
from digesttrack.schemas import TagCorrelationResult, WindowComparison

HIGH_RELIABILITY_MIN = 10
MEDIUM_RELIABILITY_MIN = 5

RELIABILITY_WEIGHTS = {"High": 1.0, "Medium": 0.7, "Low": 0.4}

# Magnitude ratio bounds (relative to the primary window) for "similar"
SIMILAR_LOWER = 0.8
SIMILAR_UPPER = 1.2


@dataclass
class WindowStats:
    window: int
    n_exposures: int
    n_control: int
    mean_exposed: float
    mean_control: float
    effect: float
    reliability: str
    exposed_days: Set

    @property
    def score(self) -> float:
        return abs(self.effect) * RELIABILITY_WEIGHTS[self.reliability]

    @property
    def uplift_ratio(self) -> float:
        return uplift_ratio(self.mean_exposed, self.mean_control)


def reliability_tier(n_exposures: int) -> str:
    if n_exposures >= HIGH_RELIABILITY_MIN:
        return "High"
    if n_exposures >= MEDIUM_RELIABILITY_MIN:
        return "Medium"
    return "Low"


def uplift_ratio(mean_exposed: float, mean_control: float) -> float:
    """
    Exposed mean over control mean.

    Defined as 1.0 when the control mean is zero, which also covers "no
    control data at all"; the two cases are indistinguishable in the output.
    """
    if mean_control == 0:
        return 1.0
    return mean_exposed / mean_control


def compare_to_primary(effect: float, primary_effect: float) -> str:
    """
    Classify another window's effect against the primary window's.

    Ratio of magnitudes only, sign ignored: > 1.2 higher, < 0.8 lower,
    [0.8, 1.2] similar. A non-zero effect against a zero primary effect has
    no ratio and is "unclear".
    """
    if primary_effect == 0:
        return "similar" if effect == 0 else "unclear"

    ratio = abs(effect) / abs(primary_effect)
    if ratio > SIMILAR_UPPER:
        return "higher"
    if ratio < SIMILAR_LOWER:
        return "lower"
    return "similar"


def _mean(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def window_stats(
    tag: str, window: int, exposures: Iterable, min_exposures: int
) -> Optional[WindowStats]:
    """Stats for one (tag, window) pair, or None if it has too few exposed days."""
    exposed = []
    control = []
    for row in exposures:
        if row.tag != tag:
            continue
        if row.exposed:
            exposed.append(row)
        else:
            control.append(row)

    if len(exposed) < min_exposures:
        return None

    mean_exposed = _mean([row.severity_share for row in exposed])
    mean_control = _mean([row.severity_share for row in control])

    return WindowStats(
        window=window,
        n_exposures=len(exposed),
        n_control=len(control),
        mean_exposed=mean_exposed,
        mean_control=mean_control,
        effect=mean_exposed - mean_control,
        reliability=reliability_tier(len(exposed)),
        exposed_days={row.date for row in exposed},
    )


def co_occurring_tags(
    tag: str,
    window: int,
    exposed_days_by_tag: Dict[int, Dict[str, Set]],
    threshold: float,
) -> List[str]:
    """
    Tags eaten on more than `threshold` of this tag's exposed days.

    Such tags are confounders: their effect cannot be told apart from this
    one's with even-split attribution.
    """
    days_by_tag = exposed_days_by_tag.get(window, {})
    own_days = days_by_tag.get(tag, set())
    if not own_days:
        return []

    overlaps = []
    for other, other_days in days_by_tag.items():
        if other == tag:
            continue
        overlap = len(own_days & other_days) / len(own_days)
        if overlap > threshold:
            overlaps.append((overlap, other))

    overlaps.sort(key=lambda item: (-item[0], item[1]))
    return [other for _, other in overlaps]


def analyze_exposures(
    exposures_by_window: Dict[int, List],
    windows: List[int],
    min_exposures: int,
    cooccurrence_threshold: Optional[float] = None,
) -> List[TagCorrelationResult]:
    """
    Rank food tags by how much worse symptom days look when they were eaten.

    Args:
        exposures_by_window: TagExposure rows keyed by window hours
        windows: lag windows to consider, in hours
        min_exposures: minimum exposed days for a (tag, window) pair to count
        cooccurrence_threshold: overlap fraction above which tags are flagged
            as co-occurring (defaults to settings)

    Returns:
        One result per tag with at least one qualifying window, sorted by
        |effect| * reliability weight of its primary window, descending.
    """
    if cooccurrence_threshold is None:
        cooccurrence_threshold = settings.cooccurrence_threshold

    exposed_days_by_tag: Dict[int, Dict[str, Set]] = {}
    tags: Set[str] = set()
    for window in windows:
        days_by_tag: Dict[str, Set] = {}
        for row in exposures_by_window.get(window, []):
            tags.add(row.tag)
            if row.exposed:
                days_by_tag.setdefault(row.tag, set()).add(row.date)
        exposed_days_by_tag[window] = days_by_tag

    ranked = []
    for tag in sorted(tags):
        qualifying = []
        for window in windows:
            stats = window_stats(
                tag, window, exposures_by_window.get(window, []), min_exposures
            )
            if stats is not None:
                qualifying.append(stats)

        if not qualifying:
            continue

        # First window wins ties (windows are ascending)
        primary = qualifying[0]
        for stats in qualifying[1:]:
            if stats.score > primary.score:
                primary = stats

        other_windows = [
            WindowComparison(
                window=stats.window,
                effect=stats.effect,
                reliability=stats.reliability,
                comparison=compare_to_primary(stats.effect, primary.effect),
                n_exposures=stats.n_exposures,
                mean_exposed=stats.mean_exposed,
                mean_control=stats.mean_control,
                uplift_ratio=stats.uplift_ratio,
            )
            for stats in qualifying
            if stats is not primary
        ]

        result = TagCorrelationResult(
            tag=tag,
            primary_window=primary.window,
            effect=primary.effect,
            uplift_ratio=primary.uplift_ratio,
            reliability=primary.reliability,
            n_exposures=primary.n_exposures,
            n_control=primary.n_control,
            mean_exposed=primary.mean_exposed,
            mean_control=primary.mean_control,
            other_windows=other_windows,
            co_occurring_tags=co_occurring_tags(
                tag, primary.window, exposed_days_by_tag, cooccurrence_threshold
            ),
        )
        ranked.append((primary.score, result))

    # Stable sort keeps alphabetical order among equal scores
    ranked.sort(key=lambda item: item[0], reverse=True)
    return [result for _, result in ranked]
