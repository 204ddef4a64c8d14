from sqlalchemy import Column, Integer, String, DateTime, Index, JSON
from sqlalchemy.sql import func

from digesttrack.database import Base


class SavedDish(Base):
    """A reusable dish template for quick meal logging."""

    __tablename__ = "saved_dishes"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(36), nullable=False)
    dish_name = Column(String(255), nullable=False)
    ingredients = Column(JSON, nullable=False, default=list)
    trigger_ingredients = Column(JSON, nullable=False, default=list)
    ai_detected_ingredients = Column(JSON, nullable=False, default=list)  # as suggested by the detector
    times_used = Column(Integer, nullable=False, default=0)
    last_used_at = Column(DateTime(timezone=True))  # null until first reuse
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (Index("idx_saved_dishes_user_id", "user_id"),)
