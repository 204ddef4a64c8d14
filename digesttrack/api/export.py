"""Data export endpoint."""
from typing import Literal

from fastapi import APIRouter, Depends, Query, Response

from digesttrack.api.dependencies import get_current_user_id, get_store
from digesttrack.repositories.base import EntryStore
from digesttrack.schemas import DataExportResponse, DateRange, MealRead, SymptomRead
from digesttrack.services.export_service import ExportService

router = APIRouter(tags=["export"])


@router.get("/export", response_model=DataExportResponse)
def export_data(
    format: Literal["json", "csv"] = Query("json"),
    days: int = Query(30, ge=1, le=3650),
    user_id: str = Depends(get_current_user_id),
    store: EntryStore = Depends(get_store),
):
    """Meals and symptom events from the last `days` days as JSON or a CSV download."""
    service = ExportService(store)
    data = service.collect(user_id, days=days)

    if format == "csv":
        return Response(
            content=service.to_csv(data),
            media_type="text/csv",
            headers={
                "Content-Disposition": 'attachment; filename="digesttrack-export.csv"'
            },
        )

    return DataExportResponse(
        export_date=data.export_date,
        date_range=DateRange(start=data.start, end=data.end),
        meals=[MealRead.model_validate(meal) for meal in data.meals],
        symptoms=[SymptomRead.model_validate(symptom) for symptom in data.symptoms],
    )
