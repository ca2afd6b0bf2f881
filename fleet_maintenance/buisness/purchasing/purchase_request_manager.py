"""
PurchaseRequestManager - Business logic for purchase requests

Responsibilities:
- Create purchase requests with the next PR number
- Snapshot the total amount from the inventory item's current unit cost
- Record the service order need a purchase is sourcing as a linked line item
- Re-snapshot totals when a request is edited

Status changes are handled by PurchaseLifecycleController.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from fleet_maintenance import db
from fleet_maintenance.buisness.core.errors import NotFoundError, ValidationError
from fleet_maintenance.buisness.core.numeric import to_decimal, to_money
from fleet_maintenance.buisness.core.unit_of_work import unit_of_work
from fleet_maintenance.buisness.maintenance.service_order_item_manager import ServiceOrderItemManager
from fleet_maintenance.data.core.sequences import PurchaseRequestNumberManager
from fleet_maintenance.data.maintenance.service_order import ServiceOrder
from fleet_maintenance.data.maintenance.service_order_item import ServiceOrderItem
from fleet_maintenance.data.purchasing.purchase_request import PurchaseRequest
from fleet_maintenance.data.supply.inventory_item import InventoryItem
from fleet_maintenance.data.supply.supplier import Supplier
from fleet_maintenance.logger import get_logger

logger = get_logger("fleet_maintenance.buisness.purchasing.purchase_request_manager")


class PurchaseRequestManager:
    """Handles purchase request creation and edits"""

    _line_items = ServiceOrderItemManager()

    @staticmethod
    def _load_inventory_item(inventory_item_id: int) -> InventoryItem:
        item = db.session.get(InventoryItem, inventory_item_id)
        if item is None:
            raise NotFoundError("inventory_item", inventory_item_id)
        return item

    @staticmethod
    def _check_references(service_order_id: Optional[int], supplier_id: Optional[int]) -> None:
        if service_order_id is not None and db.session.get(ServiceOrder, service_order_id) is None:
            raise NotFoundError("service_order", service_order_id)
        if supplier_id is not None and db.session.get(Supplier, supplier_id) is None:
            raise NotFoundError("supplier", supplier_id)

    @staticmethod
    def calculate_total(quantity, inventory_item: InventoryItem):
        """Point-in-time total: quantity × the item's current unit cost (unknown cost counts as 0)"""
        return to_money(to_decimal(quantity) * to_decimal(inventory_item.unit_cost))

    def create(
        self,
        *,
        inventory_item_id: int,
        quantity,
        urgency: str,
        service_order_id: Optional[int] = None,
        supplier_id: Optional[int] = None,
        notes: Optional[str] = None,
        line_item_id: Optional[int] = None,
        user_id: Optional[int] = None,
    ) -> int:
        """
        Create a pending purchase request.

        With `line_item_id` the purchase sources that existing line item's need
        (its service order is taken from the line item). Otherwise, when raised
        for a service order, the order gets a new line item for the requested
        quantity linked to this purchase, and its cost is recomputed.
        """
        with unit_of_work("create_purchase_request"):
            inventory_item = self._load_inventory_item(inventory_item_id)

            if line_item_id is not None:
                line_item = db.session.get(ServiceOrderItem, line_item_id)
                if line_item is None:
                    raise NotFoundError("service_order_item", line_item_id)
                if service_order_id is not None and service_order_id != line_item.service_order_id:
                    raise ValidationError(
                        "service_order_id",
                        f"line item {line_item.id} belongs to service order {line_item.service_order_id}"
                    )
                service_order_id = line_item.service_order_id

            self._check_references(service_order_id, supplier_id)

            purchase_request = PurchaseRequest(
                number=PurchaseRequestNumberManager.next_number(),
                inventory_item_id=inventory_item.id,
                service_order_id=service_order_id,
                supplier_id=supplier_id,
                urgency=urgency,
                quantity=quantity,
                status=PurchaseRequest.PENDING,
                total_amount=self.calculate_total(quantity, inventory_item),
                purchase_date=datetime.utcnow(),
                notes=notes or None,
                created_by_id=user_id,
                updated_by_id=user_id,
            )
            db.session.add(purchase_request)
            db.session.flush()

            logger.info(
                f"Created purchase request {purchase_request.number} for {quantity} x '{inventory_item.name}' "
                f"(total {purchase_request.total_amount})"
            )

            if line_item_id is not None:
                self._line_items.link_existing_line_item(
                    line_item_id=line_item_id,
                    purchase_request=purchase_request,
                    user_id=user_id,
                )
            elif service_order_id is not None:
                self._line_items.add_purchase_linked_line_item(
                    purchase_request=purchase_request,
                    user_id=user_id,
                )

            return purchase_request.id

    def update(
        self,
        *,
        purchase_request_id: int,
        inventory_item_id: int,
        quantity,
        urgency: str,
        service_order_id: Optional[int] = None,
        supplier_id: Optional[int] = None,
        notes: Optional[str] = None,
        user_id: Optional[int] = None,
    ) -> int:
        """
        Edit a purchase request and re-snapshot its total from the current unit cost.

        A request that is sourcing a service order line item cannot be moved to
        another inventory item or order while that link is open.
        """
        with unit_of_work("update_purchase_request"):
            purchase_request = db.session.get(PurchaseRequest, purchase_request_id)
            if purchase_request is None:
                raise NotFoundError("purchase_request", purchase_request_id)
            inventory_item = self._load_inventory_item(inventory_item_id)
            self._check_references(service_order_id, supplier_id)

            linked_item = ServiceOrderItemManager.find_linked_to_purchase(purchase_request)
            if linked_item is not None:
                if inventory_item.id != linked_item.inventory_item_id:
                    raise ValidationError(
                        "inventory_item_id",
                        f"purchase request is sourcing line item {linked_item.id} for another inventory item"
                    )
                if service_order_id != linked_item.service_order_id:
                    raise ValidationError(
                        "service_order_id",
                        f"purchase request is sourcing line item {linked_item.id} of service order "
                        f"{linked_item.service_order_id}"
                    )

            purchase_request.inventory_item_id = inventory_item.id
            purchase_request.service_order_id = service_order_id
            purchase_request.supplier_id = supplier_id
            purchase_request.urgency = urgency
            purchase_request.quantity = quantity
            purchase_request.total_amount = self.calculate_total(quantity, inventory_item)
            purchase_request.notes = notes or None
            purchase_request.touch(user_id)
            db.session.flush()

            logger.info(f"Updated purchase request {purchase_request.number} (total {purchase_request.total_amount})")
            return purchase_request.id
