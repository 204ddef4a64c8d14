"""
Pydantic request/response models.

CorrelationAnalysisSettings is validated before any derived table is touched,
so a malformed request never triggers a partial regeneration.
"""
from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from digesttrack.config import settings

Reliability = Literal["Low", "Medium", "High"]
WindowComparisonLabel = Literal["higher", "lower", "similar", "unclear"]


# --- Entries ---


class MealCreate(BaseModel):
    dish_name: str = Field(min_length=1, max_length=255)
    ingredients: List[str] = []
    trigger_ingredients: List[str] = []
    meal_time: datetime
    portion: Optional[str] = None
    notes: Optional[str] = None


class MealRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    dish_name: str
    ingredients: List[str]
    trigger_ingredients: List[str]
    meal_time: datetime
    portion: Optional[str] = None
    notes: Optional[str] = None


class SymptomCreate(BaseModel):
    bristol_type: int = Field(ge=1, le=7)
    symptoms: List[str] = []
    severity: Optional[int] = Field(default=None, ge=1, le=10)
    urgency: int = Field(default=0, ge=0, le=3)
    blood: int = Field(default=0, ge=0, le=3)
    pain: int = Field(default=0, ge=0, le=3)
    occurred_at: datetime
    notes: Optional[str] = None


class SymptomRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    bristol_type: int
    symptoms: List[str]
    severity: Optional[int] = None
    urgency: int
    blood: int
    pain: int
    occurred_at: datetime
    notes: Optional[str] = None


# --- Saved dishes and ingredient catalog ---


class SavedDishCreate(BaseModel):
    dish_name: str = Field(min_length=1, max_length=255)
    ingredients: List[str] = []
    trigger_ingredients: List[str] = []
    ai_detected_ingredients: List[str] = []


class SavedDishRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    dish_name: str
    ingredients: List[str]
    trigger_ingredients: List[str]
    ai_detected_ingredients: List[str]
    times_used: int
    last_used_at: Optional[datetime] = None


class IngredientRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    times_eaten: int
    is_trigger: bool
    last_eaten_at: datetime


# --- Export ---


class DateRange(BaseModel):
    start: datetime
    end: datetime


class DataExportResponse(BaseModel):
    export_date: datetime
    date_range: DateRange
    meals: List[MealRead]
    symptoms: List[SymptomRead]


# --- AI ingredient/trigger detection ---


class TriggerIngredientSchema(BaseModel):
    ingredient: str
    category: str = "other"
    confidence: float = Field(ge=0, le=1, default=0.5)
    reason: str = ""


class IngredientAnalysisSchema(BaseModel):
    ingredients: List[str] = []
    trigger_ingredients: List[TriggerIngredientSchema] = []


class TriggerAnalysisSchema(BaseModel):
    trigger_ingredients: List[TriggerIngredientSchema] = []


class DishAnalysisRequest(BaseModel):
    dish_name: str = Field(min_length=1, max_length=255)


class TriggerAnalysisRequest(BaseModel):
    ingredients: List[str]


# --- Correlation analysis ---


class CorrelationAnalysisSettings(BaseModel):
    windows: List[int] = Field(default_factory=lambda: list(settings.analysis_windows))
    aggregation: Literal["sum", "max"] = "sum"  # reserved: shares are always sum-based
    coverage_threshold: float = Field(
        default_factory=lambda: settings.analysis_coverage_threshold, gt=0, le=100
    )
    min_exposures: int = Field(
        default_factory=lambda: settings.analysis_min_exposures, ge=1
    )

    @field_validator("windows")
    @classmethod
    def validate_windows(cls, windows: List[int]) -> List[int]:
        if not windows:
            raise ValueError("at least one lag window is required")
        if any(window <= 0 for window in windows):
            raise ValueError("lag windows must be positive hours")
        return sorted(set(windows))


class WindowComparison(BaseModel):
    window: int
    effect: float
    reliability: Reliability
    comparison: WindowComparisonLabel
    n_exposures: int
    mean_exposed: float
    mean_control: float
    uplift_ratio: float


class TagCorrelationResult(BaseModel):
    tag: str
    primary_window: int
    effect: float
    uplift_ratio: float
    reliability: Reliability
    n_exposures: int
    n_control: int
    mean_exposed: float
    mean_control: float
    other_windows: List[WindowComparison] = []
    co_occurring_tags: List[str] = []


class CorrelationResponse(BaseModel):
    results: List[TagCorrelationResult]
    settings: CorrelationAnalysisSettings
    generated_at: datetime
    recommendations: List[str] = []


# --- Coverage ---


class CoverageDay(BaseModel):
    date: date
    meal_coverage: float
    bm_coverage: float
    total_coverage: int
    is_valid: bool


class CoverageResponse(BaseModel):
    coverage: List[CoverageDay]
    valid_days: int
    total_days: int
    average_coverage: float
    coverage_threshold: float
