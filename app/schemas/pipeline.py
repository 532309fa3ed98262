"""
Value types passed between the upload pipeline stages.

All stages produce and consume these Pydantic v2 models; none of them is
shared across requests.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class ExtractedFields(BaseModel):
    """The four purchase-order fields pulled out of a memo."""
    description: Optional[str] = Field(None, description="Part or item picked up")
    unit_number: Optional[str] = Field(None, description="Equipment unit number")
    customer: Optional[str] = Field(None, description="Customer / company name")
    vendor_supplier: Optional[str] = Field(None, description="Where the part is picked up")


class CostTracker(BaseModel):
    """Request-scoped cost accumulator, persisted as one cost_tracking row."""
    elevenlabs_cost: float = 0.0
    openai_cost: float = 0.0
    total_cost: float = 0.0
    audio_size_bytes: int = 0
    estimated_duration_minutes: float = 0.0
    transcription_attempts: int = 0
    translation_used: bool = False
    error: Optional[str] = None

    def add_openai(self, amount: float) -> None:
        self.openai_cost += amount

    def finalize(self) -> None:
        self.total_cost = self.elevenlabs_cost + self.openai_cost


class PipelineResult(BaseModel):
    transcription: str
    final_text: str
    was_spanish: bool
    was_translated: bool
    extracted: ExtractedFields = Field(default_factory=ExtractedFields)
    purchase_order_id: Optional[int] = None
    costs: CostTracker = Field(default_factory=CostTracker)
