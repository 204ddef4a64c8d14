"""SQLAlchemy-backed entry and derived stores."""
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from digesttrack.analysis.time_utils import to_utc
from digesttrack.models import (
    Meal,
    SymptomEvent,
    SavedDish,
    DayCoverage,
    MealSymptomLink,
    DailyWindowSeverity,
    TagExposure,
)
from digesttrack.repositories.base import DerivedStore, DerivedTables, EntryStore

logger = logging.getLogger(__name__)

DERIVED_MODELS = (DayCoverage, MealSymptomLink, DailyWindowSeverity, TagExposure)


class SqlAlchemyStore(EntryStore, DerivedStore):
    """Both store interfaces over a single SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    # =========================================================================
    # Entries
    # =========================================================================

    def list_meals(
        self,
        user_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Meal]:
        query = self.db.query(Meal).filter(Meal.user_id == user_id)
        if start is not None:
            query = query.filter(Meal.meal_time >= to_utc(start))
        if end is not None:
            query = query.filter(Meal.meal_time <= to_utc(end))
        return query.order_by(Meal.meal_time.desc(), Meal.id.desc()).all()

    def list_symptoms(
        self,
        user_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[SymptomEvent]:
        query = self.db.query(SymptomEvent).filter(SymptomEvent.user_id == user_id)
        if start is not None:
            query = query.filter(SymptomEvent.occurred_at >= to_utc(start))
        if end is not None:
            query = query.filter(SymptomEvent.occurred_at <= to_utc(end))
        return query.order_by(
            SymptomEvent.occurred_at.desc(), SymptomEvent.id.desc()
        ).all()

    def get_meal(self, meal_id: int, user_id: str) -> Optional[Meal]:
        return (
            self.db.query(Meal)
            .filter(Meal.id == meal_id, Meal.user_id == user_id)
            .first()
        )

    def get_symptom(self, symptom_id: int, user_id: str) -> Optional[SymptomEvent]:
        return (
            self.db.query(SymptomEvent)
            .filter(SymptomEvent.id == symptom_id, SymptomEvent.user_id == user_id)
            .first()
        )

    def add_meal(self, meal: Meal) -> Meal:
        self.db.add(meal)
        self.db.commit()
        self.db.refresh(meal)
        return meal

    def add_symptom(self, symptom: SymptomEvent) -> SymptomEvent:
        self.db.add(symptom)
        self.db.commit()
        self.db.refresh(symptom)
        return symptom

    def delete_meal(self, meal_id: int, user_id: str) -> bool:
        meal = self.get_meal(meal_id, user_id)
        if meal:
            self.db.delete(meal)
            self.db.commit()
            return True
        return False

    def delete_symptom(self, symptom_id: int, user_id: str) -> bool:
        symptom = self.get_symptom(symptom_id, user_id)
        if symptom:
            self.db.delete(symptom)
            self.db.commit()
            return True
        return False

    def list_saved_dishes(self, user_id: str) -> List[SavedDish]:
        return (
            self.db.query(SavedDish)
            .filter(SavedDish.user_id == user_id)
            .order_by(SavedDish.times_used.desc(), SavedDish.dish_name, SavedDish.id)
            .all()
        )

    def get_saved_dish(self, dish_id: int, user_id: str) -> Optional[SavedDish]:
        return (
            self.db.query(SavedDish)
            .filter(SavedDish.id == dish_id, SavedDish.user_id == user_id)
            .first()
        )

    def add_saved_dish(self, dish: SavedDish) -> SavedDish:
        self.db.add(dish)
        self.db.commit()
        self.db.refresh(dish)
        return dish

    def mark_saved_dish_used(
        self, dish_id: int, user_id: str, used_at: datetime
    ) -> Optional[SavedDish]:
        dish = self.get_saved_dish(dish_id, user_id)
        if dish is None:
            return None
        dish.times_used = (dish.times_used or 0) + 1
        dish.last_used_at = to_utc(used_at)
        self.db.commit()
        self.db.refresh(dish)
        return dish

    def delete_saved_dish(self, dish_id: int, user_id: str) -> bool:
        dish = self.get_saved_dish(dish_id, user_id)
        if dish:
            self.db.delete(dish)
            self.db.commit()
            return True
        return False

    # =========================================================================
    # Derived tables
    # =========================================================================

    def replace_derived(self, user_id: str, tables: DerivedTables) -> None:
        """Delete-and-insert inside one transaction; rolled back on any error."""
        try:
            for model in DERIVED_MODELS:
                self.db.query(model).filter(model.user_id == user_id).delete(
                    synchronize_session=False
                )
            self.db.add_all(tables.coverage)
            self.db.add_all(tables.links)
            self.db.add_all(tables.daily_severity)
            self.db.add_all(tables.exposures)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            "Replaced derived tables for user %s: %d coverage, %d links, "
            "%d daily severity, %d exposures",
            user_id,
            len(tables.coverage),
            len(tables.links),
            len(tables.daily_severity),
            len(tables.exposures),
        )

    def list_day_coverage(self, user_id: str) -> List[DayCoverage]:
        return (
            self.db.query(DayCoverage)
            .filter(DayCoverage.user_id == user_id)
            .order_by(DayCoverage.date)
            .all()
        )

    def list_links(self, user_id: str, window_hours: int) -> List[MealSymptomLink]:
        return (
            self.db.query(MealSymptomLink)
            .filter(
                MealSymptomLink.user_id == user_id,
                MealSymptomLink.window_hours == window_hours,
            )
            .order_by(MealSymptomLink.meal_id, MealSymptomLink.symptom_id)
            .all()
        )

    def list_daily_window_severity(
        self, user_id: str, window_hours: int
    ) -> List[DailyWindowSeverity]:
        return (
            self.db.query(DailyWindowSeverity)
            .filter(
                DailyWindowSeverity.user_id == user_id,
                DailyWindowSeverity.window_hours == window_hours,
            )
            .order_by(DailyWindowSeverity.date)
            .all()
        )

    def list_tag_exposures(self, user_id: str, window_hours: int) -> List[TagExposure]:
        return (
            self.db.query(TagExposure)
            .filter(
                TagExposure.user_id == user_id,
                TagExposure.window_hours == window_hours,
            )
            .order_by(TagExposure.date, TagExposure.tag)
            .all()
        )
