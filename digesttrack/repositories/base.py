"""Abstract storage interfaces consumed by the analysis services."""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from digesttrack.models import (
    Meal,
    SymptomEvent,
    SavedDish,
    DayCoverage,
    MealSymptomLink,
    DailyWindowSeverity,
    TagExposure,
)


@dataclass
class DerivedTables:
    """A complete, freshly built set of derived rows for one user."""

    coverage: List[DayCoverage] = field(default_factory=list)
    links: List[MealSymptomLink] = field(default_factory=list)
    daily_severity: List[DailyWindowSeverity] = field(default_factory=list)
    exposures: List[TagExposure] = field(default_factory=list)


class EntryStore(ABC):
    """
    Raw meal and symptom entries.

    This abstraction keeps the analysis pipeline storage-agnostic: the API
    wires in the SQLAlchemy implementation, tests can pass an in-memory one.
    """

    @abstractmethod
    def list_meals(
        self,
        user_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Meal]:
        """Meals owned by user_id, newest first, optionally within [start, end]."""
        pass

    @abstractmethod
    def list_symptoms(
        self,
        user_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[SymptomEvent]:
        """Symptom events owned by user_id, newest first, optionally within [start, end]."""
        pass

    @abstractmethod
    def get_meal(self, meal_id: int, user_id: str) -> Optional[Meal]:
        pass

    @abstractmethod
    def get_symptom(self, symptom_id: int, user_id: str) -> Optional[SymptomEvent]:
        pass

    @abstractmethod
    def add_meal(self, meal: Meal) -> Meal:
        """Persist a new meal and return it with its id assigned."""
        pass

    @abstractmethod
    def add_symptom(self, symptom: SymptomEvent) -> SymptomEvent:
        """Persist a new symptom event and return it with its id assigned."""
        pass

    @abstractmethod
    def delete_meal(self, meal_id: int, user_id: str) -> bool:
        """Returns True if deleted, False if not found for this user."""
        pass

    @abstractmethod
    def delete_symptom(self, symptom_id: int, user_id: str) -> bool:
        """Returns True if deleted, False if not found for this user."""
        pass

    @abstractmethod
    def list_saved_dishes(self, user_id: str) -> List[SavedDish]:
        """Saved dishes, most used first."""
        pass

    @abstractmethod
    def get_saved_dish(self, dish_id: int, user_id: str) -> Optional[SavedDish]:
        pass

    @abstractmethod
    def add_saved_dish(self, dish: SavedDish) -> SavedDish:
        pass

    @abstractmethod
    def mark_saved_dish_used(
        self, dish_id: int, user_id: str, used_at: datetime
    ) -> Optional[SavedDish]:
        """Bump the usage counter. Returns None if not found for this user."""
        pass

    @abstractmethod
    def delete_saved_dish(self, dish_id: int, user_id: str) -> bool:
        pass


class DerivedStore(ABC):
    """Regenerable analysis tables, swapped as a whole per user."""

    @abstractmethod
    def replace_derived(self, user_id: str, tables: DerivedTables) -> None:
        """
        Atomically replace every derived row for user_id.

        Readers must see either the previous set or the new one, never a mix.
        On failure nothing changes.
        """
        pass

    @abstractmethod
    def list_day_coverage(self, user_id: str) -> List[DayCoverage]:
        pass

    @abstractmethod
    def list_links(self, user_id: str, window_hours: int) -> List[MealSymptomLink]:
        pass

    @abstractmethod
    def list_daily_window_severity(
        self, user_id: str, window_hours: int
    ) -> List[DailyWindowSeverity]:
        pass

    @abstractmethod
    def list_tag_exposures(self, user_id: str, window_hours: int) -> List[TagExposure]:
        pass
