"""Integration tests for the meals API."""
from fastapi.testclient import TestClient


def _create(client: TestClient, **overrides):
    payload = {
        "dish_name": "Pasta carbonara",
        "ingredients": ["pasta", " Egg ", "", "bacon"],
        "trigger_ingredients": ["egg"],
        "meal_time": "2024-06-10T12:00:00Z",
    }
    payload.update(overrides)
    return client.post("/meals", json=payload)


class TestCreateMeal:
    def test_create(self, client):
        response = _create(client)

        assert response.status_code == 201
        data = response.json()
        assert data["id"] > 0
        assert data["dish_name"] == "Pasta carbonara"
        assert data["ingredients"] == ["pasta", "Egg", "bacon"]
        assert data["trigger_ingredients"] == ["egg"]
        assert data["meal_time"].startswith("2024-06-10T12:00:00")

    def test_missing_dish_name(self, client):
        assert _create(client, dish_name="").status_code == 422

    def test_whitespace_dish_name(self, client):
        response = _create(client, dish_name="   ")

        assert response.status_code == 400
        assert response.json()["detail"] == "Dish name is required"

    def test_invalid_meal_time(self, client):
        assert _create(client, meal_time="yesterday").status_code == 422


class TestListMeals:
    def test_newest_first(self, client):
        _create(client, dish_name="Breakfast", meal_time="2024-06-10T08:00:00Z")
        _create(client, dish_name="Dinner", meal_time="2024-06-10T19:00:00Z")

        response = client.get("/meals")

        assert response.status_code == 200
        assert [m["dish_name"] for m in response.json()] == ["Dinner", "Breakfast"]

    def test_filter_by_range(self, client):
        _create(client, dish_name="Breakfast", meal_time="2024-06-10T08:00:00Z")
        _create(client, dish_name="Lunch", meal_time="2024-06-10T12:00:00Z")

        response = client.get(
            "/meals",
            params={"start": "2024-06-10T10:00:00Z", "end": "2024-06-10T23:00:00Z"},
        )

        assert [m["dish_name"] for m in response.json()] == ["Lunch"]

    def test_inverted_range(self, client):
        response = client.get(
            "/meals",
            params={"start": "2024-06-11T00:00:00Z", "end": "2024-06-10T00:00:00Z"},
        )

        assert response.status_code == 400


class TestDeleteMeal:
    def test_delete(self, client):
        meal_id = _create(client).json()["id"]

        assert client.delete(f"/meals/{meal_id}").status_code == 200
        assert client.get("/meals").json() == []

    def test_delete_missing(self, client):
        response = client.delete("/meals/9999")

        assert response.status_code == 404
        assert response.json()["detail"] == "Meal not found"
