from sqlalchemy import Column, Integer, String, Text, DateTime, Index, JSON
from sqlalchemy.sql import func

from digesttrack.database import Base


class SymptomEvent(Base):
    """A bowel movement / symptom log entry."""

    __tablename__ = "symptom_events"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(36), nullable=False)
    bristol_type = Column(Integer, nullable=False)  # Bristol stool scale 1-7, 4 is normal
    symptoms = Column(JSON, nullable=False, default=list)  # free-text labels
    severity = Column(Integer)  # legacy overall 1-10, not used by correlation analysis
    urgency = Column(Integer, nullable=False, default=0)  # 0-3
    blood = Column(Integer, nullable=False, default=0)  # 0-3 range, treated as present/absent
    pain = Column(Integer, nullable=False, default=0)  # 0-3
    occurred_at = Column(DateTime(timezone=True), nullable=False)
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index("idx_symptom_events_user_id", "user_id"),
        Index("idx_symptom_events_user_occurred_at", "user_id", "occurred_at"),
    )
