"""Shared FastAPI dependencies."""
from fastapi import Depends
from sqlalchemy.orm import Session

from digesttrack.config import settings
from digesttrack.database import get_db
from digesttrack.repositories.sql import SqlAlchemyStore
from digesttrack.services.ai_service import IngredientDetector


def get_store(db: Session = Depends(get_db)) -> SqlAlchemyStore:
    return SqlAlchemyStore(db)


def get_current_user_id() -> str:
    """Single-user context: every request acts as the configured default user."""
    return settings.default_user_id


_detector = None


def get_detector() -> IngredientDetector:
    global _detector
    if _detector is None:
        _detector = IngredientDetector()
    return _detector
