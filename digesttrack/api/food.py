"""AI-assisted ingredient and trigger detection endpoints."""
from fastapi import APIRouter, Depends

from digesttrack.api.dependencies import get_detector
from digesttrack.schemas import (
    DishAnalysisRequest,
    IngredientAnalysisSchema,
    TriggerAnalysisRequest,
    TriggerAnalysisSchema,
)
from digesttrack.services.ai_service import IngredientDetector

router = APIRouter(prefix="/food", tags=["food"])


@router.post("/analyze", response_model=IngredientAnalysisSchema)
async def analyze_dish(
    request: DishAnalysisRequest,
    detector: IngredientDetector = Depends(get_detector),
):
    """Suggest ingredients and likely triggers for a dish. Empty on AI failure."""
    return await detector.detect_ingredients(request.dish_name.strip())


@router.post("/analyze-triggers", response_model=TriggerAnalysisSchema)
async def analyze_triggers(
    request: TriggerAnalysisRequest,
    detector: IngredientDetector = Depends(get_detector),
):
    triggers = await detector.detect_triggers(request.ingredients)
    return {"trigger_ingredients": triggers}
