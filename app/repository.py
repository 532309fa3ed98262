"""
Persistence gateway for purchase orders and cost tracking.

Single-row writes commit on their own. An upload's purchase order and cost
record share one transaction. A failed write rolls the session back and
re-raises.
"""
from __future__ import annotations

import logging
from datetime import date as date_type, datetime
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models import CostRecordModel, PurchaseOrderModel
from app.schemas import CostSummary, CostTracker, DailyCost, ExtractedFields

logger = logging.getLogger(__name__)


class PurchaseOrderRepository:
    def __init__(self, db: Session):
        self.db = db

    def _commit(self, row) -> int:
        try:
            self.db.add(row)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return row.id

    # ── row builders ─────────────────────────────────────────────────────
    def _purchase_order_row(
        self,
        fields: ExtractedFields,
        raw_transcription: str,
        timestamp: Optional[datetime] = None,
    ) -> PurchaseOrderModel:
        timestamp = timestamp or datetime.now()
        return PurchaseOrderModel(
            date=timestamp.strftime("%Y-%m-%d"),
            time=timestamp.strftime("%H:%M:%S"),
            description=fields.description,
            unit_number=fields.unit_number,
            customer=fields.customer,
            vendor_supplier=fields.vendor_supplier,
            raw_transcription=raw_transcription,
        )

    def _cost_row(self, costs: CostTracker, day: Optional[date_type] = None) -> CostRecordModel:
        day = day or date_type.today()
        return CostRecordModel(
            date=day.isoformat(),
            elevenlabs_cost=costs.elevenlabs_cost,
            openai_cost=costs.openai_cost,
            total_cost=costs.total_cost,
            audio_size_bytes=costs.audio_size_bytes,
            estimated_duration_minutes=costs.estimated_duration_minutes,
            transcription_attempts=costs.transcription_attempts,
            translation_used=costs.translation_used,
            error_message=costs.error,
        )

    # ── writes ───────────────────────────────────────────────────────────
    def create_purchase_order(
        self,
        fields: ExtractedFields,
        raw_transcription: str,
        timestamp: Optional[datetime] = None,
    ) -> int:
        po_id = self._commit(self._purchase_order_row(fields, raw_transcription, timestamp))
        logger.info("Stored purchase order %s", po_id)
        return po_id

    def create_cost_record(self, costs: CostTracker, day: Optional[date_type] = None) -> int:
        record_id = self._commit(self._cost_row(costs, day))
        logger.info("Stored cost record %s (total=%.4f)", record_id, costs.total_cost)
        return record_id

    def save_upload(
        self,
        fields: ExtractedFields,
        raw_transcription: str,
        costs: CostTracker,
    ) -> int:
        """Store a purchase order and its cost record in one transaction.

        Either both rows are committed or neither is.
        """
        try:
            po_row = self._purchase_order_row(fields, raw_transcription)
            self.db.add(po_row)
            self.db.flush()
            self.db.add(self._cost_row(costs))
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("Stored purchase order %s (total=%.4f)", po_row.id, costs.total_cost)
        return po_row.id

    def delete_purchase_order(self, po_id: int) -> bool:
        row = self.get_purchase_order(po_id)
        if row is None:
            return False
        try:
            self.db.delete(row)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("Deleted purchase order %s", po_id)
        return True

    # ── reads ────────────────────────────────────────────────────────────
    def list_purchase_orders(self) -> list[PurchaseOrderModel]:
        return (
            self.db.query(PurchaseOrderModel)
            .order_by(PurchaseOrderModel.created_at.desc(), PurchaseOrderModel.id.desc())
            .all()
        )

    def purchase_orders_for_export(self) -> list[PurchaseOrderModel]:
        return (
            self.db.query(PurchaseOrderModel)
            .order_by(PurchaseOrderModel.date.desc(), PurchaseOrderModel.time.desc())
            .all()
        )

    def get_purchase_order(self, po_id: int) -> Optional[PurchaseOrderModel]:
        return self.db.query(PurchaseOrderModel).filter(PurchaseOrderModel.id == po_id).first()

    def cost_summary(self) -> CostSummary:
        row = self.db.query(
            func.sum(CostRecordModel.total_cost),
            func.sum(CostRecordModel.elevenlabs_cost),
            func.sum(CostRecordModel.openai_cost),
            func.count(CostRecordModel.id),
        ).one()
        total, elevenlabs, openai, count = row
        return CostSummary(
            total_cost=total or 0.0,
            total_elevenlabs_cost=elevenlabs or 0.0,
            total_openai_cost=openai or 0.0,
            total_requests=count or 0,
        )

    def daily_cost_breakdown(self) -> list[DailyCost]:
        rows = (
            self.db.query(
                CostRecordModel.date,
                func.sum(CostRecordModel.total_cost),
                func.count(CostRecordModel.id),
            )
            .group_by(CostRecordModel.date)
            .order_by(CostRecordModel.date.desc())
            .all()
        )
        return [
            DailyCost(date=day, daily_cost=cost or 0.0, daily_requests=count)
            for day, cost, count in rows
        ]
