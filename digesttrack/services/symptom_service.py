"""Business logic for symptom event management."""
from datetime import datetime, timezone
from typing import List, Optional

from digesttrack.analysis.time_utils import to_utc
from digesttrack.models import SymptomEvent
from digesttrack.repositories.base import EntryStore


def _check_range(name: str, value: Optional[int], low: int, high: int) -> None:
    if value is not None and not low <= value <= high:
        raise ValueError(f"{name} must be between {low} and {high}")


class SymptomService:
    """Service for symptom-related operations."""

    def __init__(self, store: EntryStore):
        self.store = store

    def create_symptom(
        self,
        user_id: str,
        bristol_type: int,
        symptoms: Optional[List[str]] = None,
        severity: Optional[int] = None,
        urgency: int = 0,
        blood: int = 0,
        pain: int = 0,
        occurred_at: Optional[datetime] = None,
        notes: Optional[str] = None,
    ) -> SymptomEvent:
        """
        Create a new symptom event.

        Args:
            user_id: Owning user
            bristol_type: Bristol stool type 1-7
            symptoms: Free-text symptom labels (e.g., "cramping")
            severity: Legacy overall severity 1-10
            urgency: 0-3
            blood: 0-3, any non-zero value means blood present
            pain: 0-3
            occurred_at: When it happened (defaults to now)
            notes: Optional notes

        Returns:
            Created SymptomEvent object
        """
        _check_range("bristol_type", bristol_type, 1, 7)
        _check_range("severity", severity, 1, 10)
        _check_range("urgency", urgency, 0, 3)
        _check_range("blood", blood, 0, 3)
        _check_range("pain", pain, 0, 3)

        symptom = SymptomEvent(
            user_id=user_id,
            bristol_type=bristol_type,
            symptoms=[s.strip() for s in symptoms or [] if s and s.strip()],
            severity=severity,
            urgency=urgency,
            blood=blood,
            pain=pain,
            occurred_at=to_utc(occurred_at or datetime.now(timezone.utc)),
            notes=notes,
        )
        return self.store.add_symptom(symptom)

    def list_symptoms(
        self,
        user_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[SymptomEvent]:
        """Symptom events for a user, newest first."""
        if start is not None and end is not None and start > end:
            raise ValueError("start must not be after end")
        return self.store.list_symptoms(user_id, start, end)

    def delete_symptom(self, symptom_id: int, user_id: str) -> bool:
        return self.store.delete_symptom(symptom_id, user_id)
