"""
Per-request cost tracking model.
"""
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Float, Integer, String, Text

from app.database import Base


class CostRecordModel(Base):
    """One row per /upload call, written on success and on failure."""
    __tablename__ = "cost_tracking"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(String, nullable=False, index=True)
    elevenlabs_cost = Column(Float)
    openai_cost = Column(Float)
    total_cost = Column(Float)
    audio_size_bytes = Column(Integer)
    estimated_duration_minutes = Column(Float)
    transcription_attempts = Column(Integer)
    translation_used = Column(Boolean, default=False)
    error_message = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
