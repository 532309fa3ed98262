"""
HTTP request / response envelopes.

Field names follow the JSON contract consumed by the recorder front-end,
which mixes camelCase (upload) and snake_case (records, costs).
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from app.schemas.pipeline import ExtractedFields, PipelineResult


# ---------------------------------------------------------------------------
# Upload
# ---------------------------------------------------------------------------

class CostTrackingOut(BaseModel):
    elevenLabsCost: str
    openaiCost: str
    totalCost: str


class UploadResponse(BaseModel):
    transcription: str
    finalText: str
    wasSpanish: bool
    wasTranslated: bool
    extractedData: ExtractedFields
    purchaseOrderId: Optional[int]
    costTracking: CostTrackingOut

    @classmethod
    def from_result(cls, result: PipelineResult) -> "UploadResponse":
        costs = result.costs
        return cls(
            transcription=result.transcription,
            finalText=result.final_text,
            wasSpanish=result.was_spanish,
            wasTranslated=result.was_translated,
            extractedData=result.extracted,
            purchaseOrderId=result.purchase_order_id,
            costTracking=CostTrackingOut(
                elevenLabsCost=f"{costs.elevenlabs_cost:.4f}",
                openaiCost=f"{costs.openai_cost:.4f}",
                totalCost=f"{costs.total_cost:.4f}",
            ),
        )


class UploadError(BaseModel):
    error: str
    details: str


# ---------------------------------------------------------------------------
# Purchase orders
# ---------------------------------------------------------------------------

class PurchaseOrderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    date: str
    time: str
    description: Optional[str] = None
    unit_number: Optional[str] = None
    customer: Optional[str] = None
    vendor_supplier: Optional[str] = None
    raw_transcription: Optional[str] = None
    created_at: datetime


class PurchaseOrderList(BaseModel):
    purchaseOrders: List[PurchaseOrderResponse]


class MessageResponse(BaseModel):
    message: str


# ---------------------------------------------------------------------------
# Costs
# ---------------------------------------------------------------------------

class CostSummary(BaseModel):
    total_cost: float = 0.0
    total_elevenlabs_cost: float = 0.0
    total_openai_cost: float = 0.0
    total_requests: int = 0


class DailyCost(BaseModel):
    date: str
    daily_cost: float
    daily_requests: int


class CostReport(BaseModel):
    summary: CostSummary
    daily_breakdown: List[DailyCost]
