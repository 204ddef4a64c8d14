"""API endpoints for saved dish templates."""
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from digesttrack.api.dependencies import get_current_user_id, get_store
from digesttrack.repositories.base import EntryStore
from digesttrack.schemas import SavedDishCreate, SavedDishRead
from digesttrack.services.saved_dish_service import SavedDishService

router = APIRouter(prefix="/saved-dishes", tags=["saved-dishes"])


@router.get("", response_model=List[SavedDishRead])
def list_saved_dishes(
    user_id: str = Depends(get_current_user_id),
    store: EntryStore = Depends(get_store),
):
    """Saved dishes, most used first."""
    return SavedDishService(store).list_saved_dishes(user_id)


@router.post("", response_model=SavedDishRead, status_code=201)
def create_saved_dish(
    request: SavedDishCreate,
    user_id: str = Depends(get_current_user_id),
    store: EntryStore = Depends(get_store),
):
    try:
        return SavedDishService(store).create_saved_dish(user_id, **request.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/{dish_id}/use", response_model=SavedDishRead)
def use_saved_dish(
    dish_id: int,
    user_id: str = Depends(get_current_user_id),
    store: EntryStore = Depends(get_store),
):
    """Bump the usage counter when a saved dish is picked for a new meal."""
    dish = SavedDishService(store).use_saved_dish(dish_id, user_id)
    if dish is None:
        raise HTTPException(status_code=404, detail="Saved dish not found")
    return dish


@router.delete("/{dish_id}")
def delete_saved_dish(
    dish_id: int,
    user_id: str = Depends(get_current_user_id),
    store: EntryStore = Depends(get_store),
):
    if not SavedDishService(store).delete_saved_dish(dish_id, user_id):
        raise HTTPException(status_code=404, detail="Saved dish not found")
    return {"message": "Saved dish deleted successfully"}
