"""
Engine actions

Each action validates its input, runs one unit of work and returns an ActionResult.
"""

from fleet_maintenance.services.action_result import ActionResult
from fleet_maintenance.services.maintenance.service_order_service import ServiceOrderService
from fleet_maintenance.services.purchasing.purchase_service import PurchaseService

add_line_item = ServiceOrderService.add_line_item
set_service_order_status = ServiceOrderService.set_service_order_status
create_service_order = ServiceOrderService.create_service_order
update_service_order = ServiceOrderService.update_service_order
update_line_item_quantity = ServiceOrderService.update_line_item_quantity
remove_line_item = ServiceOrderService.remove_line_item

create_purchase_request = PurchaseService.create_purchase_request
set_purchase_status = PurchaseService.set_purchase_status
update_purchase_request = PurchaseService.update_purchase_request
confirm_purchase_receipt = PurchaseService.confirm_purchase_receipt

__all__ = [
    "ActionResult",
    "ServiceOrderService",
    "PurchaseService",
    "add_line_item",
    "set_service_order_status",
    "create_service_order",
    "update_service_order",
    "update_line_item_quantity",
    "remove_line_item",
    "create_purchase_request",
    "set_purchase_status",
    "update_purchase_request",
    "confirm_purchase_receipt",
]
