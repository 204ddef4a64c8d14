"""Business logic for meal management."""
from datetime import datetime, timezone
from typing import List, Optional

from digesttrack.analysis.time_utils import to_utc
from digesttrack.models import Meal
from digesttrack.repositories.base import EntryStore


def normalize_ingredients(names: Optional[List[str]]) -> List[str]:
    """Trim names and drop blanks and repeats, keeping first-seen order."""
    seen = set()
    result = []
    for name in names or []:
        cleaned = (name or "").strip()
        if cleaned and cleaned.lower() not in seen:
            seen.add(cleaned.lower())
            result.append(cleaned)
    return result


class MealService:
    """Service for meal-related operations."""

    def __init__(self, store: EntryStore):
        self.store = store

    def create_meal(
        self,
        user_id: str,
        dish_name: str,
        ingredients: Optional[List[str]] = None,
        trigger_ingredients: Optional[List[str]] = None,
        meal_time: Optional[datetime] = None,
        portion: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Meal:
        """
        Create a new meal entry.

        Args:
            user_id: Owning user
            dish_name: Name of the dish or drink
            ingredients: Ingredient names, in the order given
            trigger_ingredients: Ingredients flagged as likely triggers
            meal_time: When the meal was eaten (defaults to now)
            portion: Optional portion description
            notes: Optional free-text notes

        Returns:
            Created Meal object
        """
        dish_name = (dish_name or "").strip()
        if not dish_name:
            raise ValueError("Dish name is required")

        meal = Meal(
            user_id=user_id,
            dish_name=dish_name,
            ingredients=normalize_ingredients(ingredients),
            trigger_ingredients=normalize_ingredients(trigger_ingredients),
            meal_time=to_utc(meal_time or datetime.now(timezone.utc)),
            portion=portion,
            notes=notes,
        )
        return self.store.add_meal(meal)

    def list_meals(
        self,
        user_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Meal]:
        """Meals for a user, newest first."""
        if start is not None and end is not None and start > end:
            raise ValueError("start must not be after end")
        return self.store.list_meals(user_id, start, end)

    def delete_meal(self, meal_id: int, user_id: str) -> bool:
        return self.store.delete_meal(meal_id, user_id)
