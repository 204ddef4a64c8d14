"""Ingredient catalog endpoints."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from digesttrack.api.dependencies import get_current_user_id, get_store
from digesttrack.repositories.base import EntryStore
from digesttrack.schemas import IngredientRead
from digesttrack.services.ingredient_service import IngredientService

router = APIRouter(prefix="/ingredients", tags=["ingredients"])


@router.get("", response_model=List[IngredientRead])
def list_ingredients(
    user_id: str = Depends(get_current_user_id),
    store: EntryStore = Depends(get_store),
):
    """Every ingredient or trigger seen in logged meals."""
    return IngredientService(store).list_ingredients(user_id)


@router.get("/search", response_model=List[IngredientRead])
def search_ingredients(
    q: Optional[str] = Query(None),
    limit: int = Query(10, ge=1, le=100),
    user_id: str = Depends(get_current_user_id),
    store: EntryStore = Depends(get_store),
):
    """
    Autocomplete search over the ingredient catalog.

    Query params:
        q: Search query string
        limit: Maximum number of matches
    """
    try:
        return IngredientService(store).search_ingredients(user_id, q, limit=limit)
    except ValueError:
        raise HTTPException(status_code=400, detail="Query parameter 'q' is required")
