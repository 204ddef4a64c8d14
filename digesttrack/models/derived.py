"""
Derived analysis tables.

Every row here is regenerated wholesale from meals and symptom events on each
analysis run. Nothing in these tables is ever edited by hand.
"""
from sqlalchemy import Column, Integer, String, Date, Boolean, Float, Index

from digesttrack.database import Base


class DayCoverage(Base):
    """Estimated logging completeness for a calendar day (valid days only)."""

    __tablename__ = "day_coverage"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(36), nullable=False)
    date = Column(Date, nullable=False)
    meal_coverage = Column(Float, nullable=False)  # percent, capped at 100
    bm_coverage = Column(Float, nullable=False)  # percent, capped at 100
    total_coverage = Column(Integer, nullable=False)  # rounded mean of the two

    __table_args__ = (Index("idx_day_coverage_user_date", "user_id", "date", unique=True),)


class MealSymptomLink(Base):
    """Symptom event occurring within `window_hours` after a meal."""

    __tablename__ = "meal_symptom_links"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(36), nullable=False)
    window_hours = Column(Integer, nullable=False)
    meal_id = Column(Integer, nullable=False)
    symptom_id = Column(Integer, nullable=False)
    time_diff = Column(Integer, nullable=False)  # minutes from meal to symptom

    __table_args__ = (
        Index("idx_links_user_window", "user_id", "window_hours"),
        Index(
            "idx_links_unique", "user_id", "window_hours", "meal_id", "symptom_id", unique=True
        ),
    )


class DailyWindowSeverity(Base):
    """Severity of symptom events linked to a day's meals for one lag window."""

    __tablename__ = "daily_window_severity"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(36), nullable=False)
    date = Column(Date, nullable=False)
    window_hours = Column(Integer, nullable=False)
    severity_sum = Column(Integer, nullable=False)
    severity_max = Column(Integer, nullable=False)
    bm_count = Column(Integer, nullable=False)

    __table_args__ = (
        Index("idx_dws_user_window_date", "user_id", "window_hours", "date", unique=True),
    )


class TagExposure(Base):
    """Per-day, per-window exposure of a food tag and its attributed severity."""

    __tablename__ = "tag_exposures"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(36), nullable=False)
    date = Column(Date, nullable=False)
    tag = Column(String(255), nullable=False)
    window_hours = Column(Integer, nullable=False)
    exposed = Column(Boolean, nullable=False)
    severity_share = Column(Integer, nullable=False)

    __table_args__ = (
        Index("idx_tag_exposures_user_window", "user_id", "window_hours"),
        Index(
            "idx_tag_exposures_unique", "user_id", "window_hours", "date", "tag", unique=True
        ),
    )
