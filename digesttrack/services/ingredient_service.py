"""
Ingredient catalog built from the user's own meals.

Every tag that ever appeared in a meal (as an ingredient or a declared
trigger) is an entry; there is no separate ingredient table to maintain.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional

from digesttrack.analysis.time_utils import to_utc
from digesttrack.repositories.base import EntryStore


@dataclass
class IngredientSummary:
    name: str
    times_eaten: int
    is_trigger: bool
    last_eaten_at: datetime


class IngredientService:
    def __init__(self, store: EntryStore):
        self.store = store

    def list_ingredients(self, user_id: str) -> List[IngredientSummary]:
        """All tags seen in the user's meals, most eaten first, then by name."""
        catalog: Dict[str, IngredientSummary] = {}
        for meal in self.store.list_meals(user_id):
            eaten_at = to_utc(meal.meal_time)
            triggers = {
                (name or "").strip().lower() for name in meal.trigger_ingredients or []
            }
            for tag in meal.tags:
                entry = catalog.get(tag)
                if entry is None:
                    catalog[tag] = IngredientSummary(
                        name=tag,
                        times_eaten=1,
                        is_trigger=tag in triggers,
                        last_eaten_at=eaten_at,
                    )
                    continue
                entry.times_eaten += 1
                entry.is_trigger = entry.is_trigger or tag in triggers
                if eaten_at > entry.last_eaten_at:
                    entry.last_eaten_at = eaten_at

        return sorted(catalog.values(), key=lambda e: (-e.times_eaten, e.name))

    def search_ingredients(
        self, user_id: str, query: str, limit: Optional[int] = None
    ) -> List[IngredientSummary]:
        """
        Case-insensitive substring search over the catalog.

        Names starting with the query rank ahead of other matches.
        """
        needle = (query or "").strip().lower()
        if not needle:
            raise ValueError("Search query is required")

        matches = [e for e in self.list_ingredients(user_id) if needle in e.name]
        matches.sort(key=lambda e: not e.name.startswith(needle))
        return matches[:limit] if limit else matches
