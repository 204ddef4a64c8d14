"""API endpoints for symptom event logging."""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from digesttrack.api.dependencies import get_current_user_id, get_store
from digesttrack.repositories.base import EntryStore
from digesttrack.schemas import SymptomCreate, SymptomRead
from digesttrack.services.symptom_service import SymptomService

router = APIRouter(prefix="/symptoms", tags=["symptoms"])


@router.get("", response_model=List[SymptomRead])
def list_symptoms(
    start: Optional[datetime] = Query(None),
    end: Optional[datetime] = Query(None),
    user_id: str = Depends(get_current_user_id),
    store: EntryStore = Depends(get_store),
):
    """Symptom events newest first, optionally limited to [start, end]."""
    try:
        return SymptomService(store).list_symptoms(user_id, start, end)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("", response_model=SymptomRead, status_code=201)
def create_symptom(
    request: SymptomCreate,
    user_id: str = Depends(get_current_user_id),
    store: EntryStore = Depends(get_store),
):
    try:
        return SymptomService(store).create_symptom(user_id, **request.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{symptom_id}")
def delete_symptom(
    symptom_id: int,
    user_id: str = Depends(get_current_user_id),
    store: EntryStore = Depends(get_store),
):
    if not SymptomService(store).delete_symptom(symptom_id, user_id):
        raise HTTPException(status_code=404, detail="Symptom not found")
    return {"message": "Symptom deleted successfully"}
