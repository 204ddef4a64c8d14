"""
Database models for DigestTrack.

Import all models here so metadata.create_all() sees every table.
"""

from digesttrack.database import Base
from digesttrack.models.meal import Meal
from digesttrack.models.symptom_event import SymptomEvent
from digesttrack.models.saved_dish import SavedDish
from digesttrack.models.derived import (
    DayCoverage,
    MealSymptomLink,
    DailyWindowSeverity,
    TagExposure,
)

__all__ = [
    "Base",
    "Meal",
    "SymptomEvent",
    "SavedDish",
    "DayCoverage",
    "MealSymptomLink",
    "DailyWindowSeverity",
    "TagExposure",
]
