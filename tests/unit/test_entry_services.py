"""Unit tests for MealService and SymptomService."""
from datetime import date, datetime, timezone

import pytest

from digesttrack.services.meal_service import MealService, normalize_ingredients
from digesttrack.services.symptom_service import SymptomService
from tests.factories import USER_ID, at

DAY = date(2024, 6, 10)


class TestNormalizeIngredients:
    def test_trims_and_drops_blanks_and_repeats(self):
        assert normalize_ingredients([" Milk ", "", "milk", "Oats", None]) == ["Milk", "Oats"]

    def test_none(self):
        assert normalize_ingredients(None) == []


class TestMealService:
    def test_create_meal(self, memory_store):
        meal = MealService(memory_store).create_meal(
            USER_ID,
            dish_name="  Mac and cheese ",
            ingredients=["pasta", " cheese"],
            trigger_ingredients=["cheese"],
            meal_time=at(DAY, 12),
            portion="large",
        )

        assert meal.id is not None
        assert meal.dish_name == "Mac and cheese"
        assert meal.ingredients == ["pasta", "cheese"]
        assert meal.tags == {"pasta", "cheese"}
        assert meal.portion == "large"

    def test_naive_meal_time_is_taken_as_utc(self, memory_store):
        meal = MealService(memory_store).create_meal(
            USER_ID, dish_name="Toast", meal_time=datetime(2024, 6, 10, 7, 0)
        )

        assert meal.meal_time == datetime(2024, 6, 10, 7, 0, tzinfo=timezone.utc)

    def test_blank_dish_name_rejected(self, memory_store):
        with pytest.raises(ValueError, match="Dish name is required"):
            MealService(memory_store).create_meal(USER_ID, dish_name="   ")

    def test_list_rejects_inverted_range(self, memory_store):
        with pytest.raises(ValueError):
            MealService(memory_store).list_meals(USER_ID, at(DAY, 12), at(DAY, 8))

    def test_delete(self, memory_store):
        service = MealService(memory_store)
        meal = service.create_meal(USER_ID, dish_name="Toast", meal_time=at(DAY, 7))

        assert service.delete_meal(meal.id, USER_ID) is True
        assert service.delete_meal(meal.id, USER_ID) is False


class TestSymptomService:
    def test_create_symptom(self, memory_store):
        symptom = SymptomService(memory_store).create_symptom(
            USER_ID,
            bristol_type=6,
            symptoms=["bloating", " ", "cramps "],
            urgency=2,
            blood=0,
            pain=1,
            occurred_at=at(DAY, 18),
        )

        assert symptom.id is not None
        assert symptom.symptoms == ["bloating", "cramps"]
        assert symptom.urgency == 2

    @pytest.mark.parametrize(
        "field,value",
        [("bristol_type", 0), ("bristol_type", 8), ("urgency", 4), ("blood", -1), ("pain", 5), ("severity", 11)],
    )
    def test_out_of_range_values_rejected(self, memory_store, field, value):
        kwargs = {"bristol_type": 4, "occurred_at": at(DAY, 9)}
        kwargs[field] = value

        with pytest.raises(ValueError, match=field):
            SymptomService(memory_store).create_symptom(USER_ID, **kwargs)

    def test_list_and_delete(self, memory_store):
        service = SymptomService(memory_store)
        first = service.create_symptom(USER_ID, bristol_type=4, occurred_at=at(DAY, 9))
        second = service.create_symptom(USER_ID, bristol_type=5, occurred_at=at(DAY, 15))

        assert [s.id for s in service.list_symptoms(USER_ID)] == [second.id, first.id]
        assert service.delete_symptom(first.id, USER_ID) is True
        assert [s.id for s in service.list_symptoms(USER_ID)] == [second.id]
