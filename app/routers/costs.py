"""
Cost reporting.

GET /costs  overall totals plus a per-day breakdown
"""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.repository import PurchaseOrderRepository
from app.schemas import CostReport

router = APIRouter()


@router.get("/costs", response_model=CostReport)
def cost_report(db: Session = Depends(get_db)):
    repo = PurchaseOrderRepository(db)
    return CostReport(summary=repo.cost_summary(), daily_breakdown=repo.daily_cost_breakdown())
