"""
Purchase order endpoints.

GET    /purchase-orders               list all, newest first
GET    /purchase-orders/{id}          get one
DELETE /purchase-orders/{id}          delete one
GET    /export/purchase-orders.csv    CSV download
"""
from __future__ import annotations

import csv
import io
import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.orm import Session

from app.database import get_db
from app.models import PurchaseOrderModel
from app.repository import PurchaseOrderRepository
from app.schemas import MessageResponse, PurchaseOrderList, PurchaseOrderResponse

logger = logging.getLogger(__name__)
router = APIRouter()

CSV_HEADER = ["Date", "Time", "Description", "Unit Number", "Customer", "Vendor/Supplier"]


def get_repository(db: Session = Depends(get_db)) -> PurchaseOrderRepository:
    return PurchaseOrderRepository(db)


def render_csv(rows: list[PurchaseOrderModel]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    buf.write(",".join(CSV_HEADER) + "\n")
    for row in rows:
        writer.writerow([
            row.date or "",
            row.time or "",
            row.description or "",
            row.unit_number or "",
            row.customer or "",
            row.vendor_supplier or "",
        ])
    return buf.getvalue()


# ── GET /purchase-orders ─────────────────────────────────────────────────
@router.get("/purchase-orders", response_model=PurchaseOrderList)
def list_purchase_orders(repo: PurchaseOrderRepository = Depends(get_repository)):
    rows = repo.list_purchase_orders()
    logger.info("Found %d purchase orders in database", len(rows))
    return PurchaseOrderList(
        purchaseOrders=[PurchaseOrderResponse.model_validate(r) for r in rows]
    )


# ── GET /export/purchase-orders.csv ──────────────────────────────────────
@router.get("/export/purchase-orders.csv")
def export_purchase_orders(repo: PurchaseOrderRepository = Depends(get_repository)):
    rows = repo.purchase_orders_for_export()
    logger.info("Exporting %d purchase orders as CSV", len(rows))
    return Response(
        content=render_csv(rows),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="purchase_orders.csv"'},
    )


# ── GET /purchase-orders/{po_id} ─────────────────────────────────────────
@router.get("/purchase-orders/{po_id}", response_model=PurchaseOrderResponse)
def get_purchase_order(po_id: int, repo: PurchaseOrderRepository = Depends(get_repository)):
    row = repo.get_purchase_order(po_id)
    if not row:
        logger.warning("Purchase order not found: %s", po_id)
        raise HTTPException(status_code=404, detail="Purchase order not found")
    return PurchaseOrderResponse.model_validate(row)


# ── DELETE /purchase-orders/{po_id} ──────────────────────────────────────
@router.delete("/purchase-orders/{po_id}", response_model=MessageResponse)
def delete_purchase_order(po_id: int, repo: PurchaseOrderRepository = Depends(get_repository)):
    if not repo.delete_purchase_order(po_id):
        raise HTTPException(status_code=404, detail="Purchase order not found")
    return MessageResponse(message="Purchase order deleted successfully")
