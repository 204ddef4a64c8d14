"""
Correlation analysis orchestration.

A run regenerates every derived table for the user from raw entries
(coverage → links → daily severity → tag exposures), swaps the new set in
atomically, then ranks food tags across the requested lag windows.
"""
import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from digesttrack.analysis.aggregation import aggregate
from digesttrack.analysis.correlation import analyze_exposures
from digesttrack.analysis.coverage import measure_range, regenerate_coverage
from digesttrack.analysis.exposure import derive_exposures
from digesttrack.analysis.linker import link_meals_to_symptoms
from digesttrack.analysis.recommendations import get_recommendations
from digesttrack.analysis.time_utils import day_start, get_zone, local_date, to_utc
from digesttrack.config import settings
from digesttrack.repositories.base import DerivedStore, DerivedTables, EntryStore
from digesttrack.schemas import (
    CorrelationAnalysisSettings,
    CorrelationResponse,
    CoverageDay,
    CoverageResponse,
)

logger = logging.getLogger(__name__)


class AnalysisFailedError(Exception):
    """Regeneration or correlation failed; nothing partial was committed."""

    pass


_user_locks: Dict[str, threading.Lock] = {}
_user_locks_guard = threading.Lock()


def get_user_lock(user_id: str) -> threading.Lock:
    """One lock per user: runs for the same user queue up, other users run freely."""
    with _user_locks_guard:
        lock = _user_locks.get(user_id)
        if lock is None:
            lock = threading.Lock()
            _user_locks[user_id] = lock
        return lock


class CorrelationService:
    """Runs the derivation pipeline and correlation analysis for a user."""

    def __init__(self, entry_store: EntryStore, derived_store: DerivedStore):
        self.entry_store = entry_store
        self.derived_store = derived_store
        self.tz = get_zone(settings.analysis_timezone)

    def build_derived(
        self,
        user_id: str,
        analysis_settings: CorrelationAnalysisSettings,
        now: datetime,
    ) -> DerivedTables:
        """
        Build a complete derived table set in memory without touching storage.

        Only reads from the entry store, so calling it twice on unchanged
        entries yields identical rows.
        """
        today = local_date(now, self.tz)
        start = day_start(today - timedelta(days=settings.analysis_lookback_days), self.tz)

        meals = self.entry_store.list_meals(user_id, start, now)
        symptoms = self.entry_store.list_symptoms(user_id, start, now)

        coverage = regenerate_coverage(
            user_id,
            meals,
            symptoms,
            now=now,
            threshold=analysis_settings.coverage_threshold,
            tz=self.tz,
        )
        valid_days = {row.date for row in coverage}

        tables = DerivedTables(coverage=coverage)
        for window in analysis_settings.windows:
            links = link_meals_to_symptoms(meals, symptoms, window)
            daily_severity = aggregate(
                user_id, window, valid_days, meals, symptoms, links, self.tz
            )
            exposures = derive_exposures(
                user_id, window, valid_days, meals, daily_severity, self.tz
            )
            tables.links.extend(links)
            tables.daily_severity.extend(daily_severity)
            tables.exposures.extend(exposures)

            logger.debug(
                "Window %dh: %d links, %d severity days, %d exposure rows",
                window,
                len(links),
                len(daily_severity),
                len(exposures),
            )

        logger.info(
            "Built derived tables for user %s: %d meals, %d symptoms, %d valid days",
            user_id,
            len(meals),
            len(symptoms),
            len(valid_days),
        )
        return tables

    def regenerate(
        self,
        user_id: str,
        analysis_settings: CorrelationAnalysisSettings,
        now: Optional[datetime] = None,
    ) -> DerivedTables:
        """Rebuild and atomically swap in every derived table for the user."""
        now = to_utc(now or datetime.now(timezone.utc))
        tables = self.build_derived(user_id, analysis_settings, now)
        self.derived_store.replace_derived(user_id, tables)
        return tables

    def run_analysis(
        self,
        user_id: str,
        analysis_settings: CorrelationAnalysisSettings,
        now: Optional[datetime] = None,
    ) -> CorrelationResponse:
        """
        Regenerate derived tables and rank food tags.

        Runs for the same user never overlap. Any failure is raised as
        AnalysisFailedError after the store has rolled back.
        """
        if analysis_settings.aggregation == "max":
            logger.info("aggregation='max' requested; severity shares are sum-based")

        with get_user_lock(user_id):
            try:
                self.regenerate(user_id, analysis_settings, now)
                exposures_by_window = {
                    window: self.derived_store.list_tag_exposures(user_id, window)
                    for window in analysis_settings.windows
                }
                results = analyze_exposures(
                    exposures_by_window,
                    windows=analysis_settings.windows,
                    min_exposures=analysis_settings.min_exposures,
                )
            except Exception as e:
                logger.exception("Correlation analysis failed for user %s", user_id)
                raise AnalysisFailedError("Analysis failed") from e

        logger.info(
            "Correlation analysis for user %s: %d tags ranked across windows %s",
            user_id,
            len(results),
            analysis_settings.windows,
        )

        return CorrelationResponse(
            results=results,
            settings=analysis_settings,
            generated_at=datetime.now(timezone.utc),
            recommendations=get_recommendations(results),
        )

    def get_coverage(
        self,
        user_id: str,
        days: int = 30,
        threshold: Optional[float] = None,
        now: Optional[datetime] = None,
    ) -> CoverageResponse:
        """Per-day coverage for the last `days` days, today included."""
        if days < 1:
            raise ValueError("days must be at least 1")
        if threshold is None:
            threshold = settings.analysis_coverage_threshold

        now = to_utc(now or datetime.now(timezone.utc))
        today = local_date(now, self.tz)
        first_day = today - timedelta(days=days - 1)
        start = day_start(first_day, self.tz)

        meals = self.entry_store.list_meals(user_id, start, now)
        symptoms = self.entry_store.list_symptoms(user_id, start, now)

        metrics = measure_range(first_day, today, meals, symptoms, self.tz)
        coverage = [
            CoverageDay(
                date=day.date,
                meal_coverage=day.meal_coverage,
                bm_coverage=day.bm_coverage,
                total_coverage=day.total_coverage,
                is_valid=day.is_valid(threshold),
            )
            for day in metrics
        ]
        valid_days = sum(1 for day in coverage if day.is_valid)
        average = sum(day.total_coverage for day in coverage) / len(coverage)

        return CoverageResponse(
            coverage=coverage,
            valid_days=valid_days,
            total_days=len(coverage),
            average_coverage=average,
            coverage_threshold=threshold,
        )
