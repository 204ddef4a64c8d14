"""API endpoints for meal logging."""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from digesttrack.api.dependencies import get_current_user_id, get_store
from digesttrack.repositories.base import EntryStore
from digesttrack.schemas import MealCreate, MealRead
from digesttrack.services.meal_service import MealService

router = APIRouter(prefix="/meals", tags=["meals"])


@router.get("", response_model=List[MealRead])
def list_meals(
    start: Optional[datetime] = Query(None),
    end: Optional[datetime] = Query(None),
    user_id: str = Depends(get_current_user_id),
    store: EntryStore = Depends(get_store),
):
    """Meals newest first, optionally limited to [start, end]."""
    try:
        return MealService(store).list_meals(user_id, start, end)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("", response_model=MealRead, status_code=201)
def create_meal(
    request: MealCreate,
    user_id: str = Depends(get_current_user_id),
    store: EntryStore = Depends(get_store),
):
    try:
        return MealService(store).create_meal(
            user_id,
            dish_name=request.dish_name,
            ingredients=request.ingredients,
            trigger_ingredients=request.trigger_ingredients,
            meal_time=request.meal_time,
            portion=request.portion,
            notes=request.notes,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{meal_id}")
def delete_meal(
    meal_id: int,
    user_id: str = Depends(get_current_user_id),
    store: EntryStore = Depends(get_store),
):
    if not MealService(store).delete_meal(meal_id, user_id):
        raise HTTPException(status_code=404, detail="Meal not found")
    return {"message": "Meal deleted successfully"}
