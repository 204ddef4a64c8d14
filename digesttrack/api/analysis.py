"""Correlation analysis and coverage endpoints."""
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from digesttrack.api.dependencies import get_current_user_id, get_store
from digesttrack.repositories.sql import SqlAlchemyStore
from digesttrack.schemas import (
    CorrelationAnalysisSettings,
    CorrelationResponse,
    CoverageResponse,
)
from digesttrack.services.correlation_service import (
    AnalysisFailedError,
    CorrelationService,
)

router = APIRouter(prefix="/analysis", tags=["analysis"])


@router.post("/multi-lag-correlation", response_model=CorrelationResponse)
def run_correlation_analysis(
    analysis_settings: CorrelationAnalysisSettings = Body(...),
    user_id: str = Depends(get_current_user_id),
    store: SqlAlchemyStore = Depends(get_store),
):
    """
    Regenerate derived tables and rank food tags across lag windows.

    Settings are validated by FastAPI before this runs, so invalid settings
    return 422 without touching any derived table.
    """
    service = CorrelationService(store, store)
    try:
        return service.run_analysis(user_id, analysis_settings)
    except AnalysisFailedError:
        raise HTTPException(status_code=500, detail="Analysis failed")


@router.get("/coverage", response_model=CoverageResponse)
def get_coverage(
    days: int = Query(30, ge=1, le=365),
    threshold: Optional[float] = Query(None, gt=0, le=100),
    user_id: str = Depends(get_current_user_id),
    store: SqlAlchemyStore = Depends(get_store),
):
    """Logging coverage for the last `days` days."""
    service = CorrelationService(store, store)
    return service.get_coverage(user_id, days=days, threshold=threshold)
