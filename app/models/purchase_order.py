"""
SQLAlchemy model for purchase orders extracted from voice memos.
"""
from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String, Text

from app.database import Base


class PurchaseOrderModel(Base):
    __tablename__ = "purchase_orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(String, nullable=False)  # YYYY-MM-DD
    time = Column(String, nullable=False)  # HH:MM:SS
    description = Column(Text)
    unit_number = Column(Text)
    customer = Column(Text)
    vendor_supplier = Column(Text)
    raw_transcription = Column(Text)  # final text, after translation if any
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
