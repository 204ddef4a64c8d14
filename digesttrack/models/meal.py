from sqlalchemy import Column, Integer, String, Text, DateTime, Index, JSON
from sqlalchemy.sql import func

from digesttrack.database import Base


class Meal(Base):
    """A logged meal with its ingredient list and declared trigger ingredients."""

    __tablename__ = "meals"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(36), nullable=False)
    dish_name = Column(String(255), nullable=False)
    ingredients = Column(JSON, nullable=False, default=list)  # ordered ingredient names
    trigger_ingredients = Column(
        JSON, nullable=False, default=list
    )  # ingredient names flagged as likely triggers (shared tag namespace)
    meal_time = Column(DateTime(timezone=True), nullable=False)
    portion = Column(String(100))  # e.g. "large", "half plate"
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def tags(self) -> set:
        """Normalised union of ingredients and trigger ingredients."""
        tags = set()
        for name in list(self.ingredients or []) + list(self.trigger_ingredients or []):
            normalized = (name or "").strip().lower()
            if normalized:
                tags.add(normalized)
        return tags

    __table_args__ = (
        Index("idx_meals_user_id", "user_id"),
        Index("idx_meals_user_meal_time", "user_id", "meal_time"),
    )
