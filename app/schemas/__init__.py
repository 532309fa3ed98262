from app.schemas.api import (
    CostReport,
    CostSummary,
    CostTrackingOut,
    DailyCost,
    MessageResponse,
    PurchaseOrderList,
    PurchaseOrderResponse,
    UploadError,
    UploadResponse,
)
from app.schemas.pipeline import CostTracker, ExtractedFields, PipelineResult

__all__ = [
    "CostReport",
    "CostSummary",
    "CostTracker",
    "CostTrackingOut",
    "DailyCost",
    "ExtractedFields",
    "MessageResponse",
    "PipelineResult",
    "PurchaseOrderList",
    "PurchaseOrderResponse",
    "UploadError",
    "UploadResponse",
]
