"""Export of raw meal and symptom entries as JSON-ready data or CSV."""
import csv
import io
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from digesttrack.analysis.time_utils import to_utc
from digesttrack.repositories.base import EntryStore

logger = logging.getLogger(__name__)

CSV_HEADER = ["Type", "Date", "Name/Description", "Details"]


@dataclass
class ExportData:
    export_date: datetime
    start: datetime
    end: datetime
    meals: List
    symptoms: List


class ExportService:
    def __init__(self, store: EntryStore):
        self.store = store

    def collect(
        self, user_id: str, days: int = 30, now: Optional[datetime] = None
    ) -> ExportData:
        """Entries from the last `days` days, oldest first."""
        if days < 1:
            raise ValueError("days must be at least 1")

        end = to_utc(now or datetime.now(timezone.utc))
        start = end - timedelta(days=days)
        meals = list(reversed(self.store.list_meals(user_id, start, end)))
        symptoms = list(reversed(self.store.list_symptoms(user_id, start, end)))

        logger.info(
            "Exporting %d meals and %d symptom events for user %s",
            len(meals),
            len(symptoms),
            user_id,
        )
        return ExportData(
            export_date=end, start=start, end=end, meals=meals, symptoms=symptoms
        )

    @staticmethod
    def to_csv(data: ExportData) -> str:
        """One row per entry: meals first, then symptom events."""
        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(CSV_HEADER)

        for meal in data.meals:
            writer.writerow(
                [
                    "Food",
                    to_utc(meal.meal_time).isoformat(),
                    meal.dish_name,
                    ", ".join(meal.ingredients or []),
                ]
            )

        for symptom in data.symptoms:
            details = (
                f"Urgency: {symptom.urgency or 0}, Pain: {symptom.pain or 0}, "
                f"Blood: {symptom.blood or 0}, Symptoms: {', '.join(symptom.symptoms or [])}"
            )
            writer.writerow(
                [
                    "Symptom",
                    to_utc(symptom.occurred_at).isoformat(),
                    f"Bristol Type {symptom.bristol_type}",
                    details,
                ]
            )

        return buffer.getvalue()
