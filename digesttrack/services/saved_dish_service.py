"""Business logic for saved dish templates."""
from datetime import datetime, timezone
from typing import List, Optional

from digesttrack.models import SavedDish
from digesttrack.repositories.base import EntryStore
from digesttrack.services.meal_service import normalize_ingredients


class SavedDishService:
    """Service for saving and reusing dishes."""

    def __init__(self, store: EntryStore):
        self.store = store

    def create_saved_dish(
        self,
        user_id: str,
        dish_name: str,
        ingredients: Optional[List[str]] = None,
        trigger_ingredients: Optional[List[str]] = None,
        ai_detected_ingredients: Optional[List[str]] = None,
    ) -> SavedDish:
        dish_name = (dish_name or "").strip()
        if not dish_name:
            raise ValueError("Dish name is required")

        dish = SavedDish(
            user_id=user_id,
            dish_name=dish_name,
            ingredients=normalize_ingredients(ingredients),
            trigger_ingredients=normalize_ingredients(trigger_ingredients),
            ai_detected_ingredients=normalize_ingredients(ai_detected_ingredients),
            times_used=0,
        )
        return self.store.add_saved_dish(dish)

    def list_saved_dishes(self, user_id: str) -> List[SavedDish]:
        return self.store.list_saved_dishes(user_id)

    def use_saved_dish(
        self, dish_id: int, user_id: str, used_at: Optional[datetime] = None
    ) -> Optional[SavedDish]:
        """Record that the dish was picked again. None if it does not exist."""
        return self.store.mark_saved_dish_used(
            dish_id, user_id, used_at or datetime.now(timezone.utc)
        )

    def delete_saved_dish(self, dish_id: int, user_id: str) -> bool:
        return self.store.delete_saved_dish(dish_id, user_id)
