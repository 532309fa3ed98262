from app.models.cost_record import CostRecordModel
from app.models.purchase_order import PurchaseOrderModel

__all__ = ["CostRecordModel", "PurchaseOrderModel"]
