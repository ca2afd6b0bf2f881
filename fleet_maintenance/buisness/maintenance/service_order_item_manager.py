"""
ServiceOrderItemManager

Business-layer manager for service order line items. Every write path ends
with a cost recompute so the order's estimated cost matches its line items.
"""

from __future__ import annotations

from typing import Optional

from fleet_maintenance import db
from fleet_maintenance.buisness.core.errors import NotFoundError, ValidationError
from fleet_maintenance.buisness.core.unit_of_work import unit_of_work
from fleet_maintenance.buisness.inventory.stock_ledger import StockLedger
from fleet_maintenance.buisness.maintenance.cost_aggregator import CostAggregator
from fleet_maintenance.data.maintenance.service_order import ServiceOrder
from fleet_maintenance.data.maintenance.service_order_item import ServiceOrderItem
from fleet_maintenance.data.purchasing.purchase_request import PurchaseRequest
from fleet_maintenance.data.supply.inventory_item import InventoryItem
from fleet_maintenance.logger import get_logger

logger = get_logger("fleet_maintenance.buisness.maintenance.service_order_item_manager")


class ServiceOrderItemManager:
    """
    Handles line item creation and edits for service orders.

    Returns the line item id for the calling layer.
    """

    @staticmethod
    def _load_service_order(service_order_id: int) -> ServiceOrder:
        service_order = db.session.get(ServiceOrder, service_order_id)
        if service_order is None:
            raise NotFoundError("service_order", service_order_id)
        return service_order

    @staticmethod
    def _load_inventory_item(inventory_item_id: int) -> InventoryItem:
        item = db.session.get(InventoryItem, inventory_item_id)
        if item is None:
            raise NotFoundError("inventory_item", inventory_item_id)
        return item

    @staticmethod
    def _load_line_item(line_item_id: int) -> ServiceOrderItem:
        line_item = db.session.get(ServiceOrderItem, line_item_id)
        if line_item is None:
            raise NotFoundError("service_order_item", line_item_id)
        return line_item

    def add_line_item(
        self,
        *,
        service_order_id: int,
        inventory_item_id: int,
        required_quantity,
        user_id: Optional[int] = None,
    ) -> int:
        """
        Add a part from stock to a service order.

        Consumes the required quantity from the inventory item (when it has stock)
        and recomputes the order's estimated cost.
        """
        with unit_of_work("add_line_item"):
            inventory_item = self._load_inventory_item(inventory_item_id)
            service_order = self._load_service_order(service_order_id)

            line_item = ServiceOrderItem(
                service_order_id=service_order.id,
                inventory_item_id=inventory_item.id,
                description=inventory_item.name,
                required_quantity=required_quantity,
                created_by_id=user_id,
                updated_by_id=user_id,
            )
            db.session.add(line_item)
            db.session.flush()

            StockLedger.consume(inventory_item.id, required_quantity, user_id=user_id)
            CostAggregator.recompute_estimated_cost(service_order.id, user_id=user_id)

            logger.info(
                f"Added {required_quantity} x '{inventory_item.name}' to service order {service_order.number} "
                f"(line item {line_item.id})"
            )
            return line_item.id

    def add_purchase_linked_line_item(
        self,
        *,
        purchase_request: PurchaseRequest,
        user_id: Optional[int] = None,
    ) -> int:
        """
        Record a service order need that is being sourced through a purchase request.

        No stock is consumed; the need is netted when the purchase is received.
        """
        with unit_of_work("add_purchase_linked_line_item"):
            service_order = self._load_service_order(purchase_request.service_order_id)
            inventory_item = self._load_inventory_item(purchase_request.inventory_item_id)

            line_item = ServiceOrderItem(
                service_order_id=service_order.id,
                inventory_item_id=inventory_item.id,
                description=inventory_item.name,
                required_quantity=purchase_request.quantity,
                created_by_id=user_id,
                updated_by_id=user_id,
            )
            line_item.link_purchase_request(purchase_request)
            db.session.add(line_item)
            db.session.flush()

            CostAggregator.recompute_estimated_cost(service_order.id, user_id=user_id)

            logger.info(
                f"Service order {service_order.number} needs {purchase_request.quantity} x '{inventory_item.name}' "
                f"via purchase request {purchase_request.number} (line item {line_item.id})"
            )
            return line_item.id

    def link_existing_line_item(
        self,
        *,
        line_item_id: int,
        purchase_request: PurchaseRequest,
        user_id: Optional[int] = None,
    ) -> int:
        """
        Source an existing line item's need through `purchase_request`.

        The line item must be for the same inventory item and service order and
        must not already be waiting on another purchase.
        """
        with unit_of_work("link_existing_line_item"):
            line_item = self._load_line_item(line_item_id)
            if line_item.is_awaiting_purchase and line_item.purchase_request_id != purchase_request.id:
                raise ValidationError(
                    "line_item_id",
                    f"line item {line_item.id} is already sourced by purchase request {line_item.purchase_request_id}"
                )
            try:
                line_item.link_purchase_request(purchase_request)
            except ValueError as e:
                raise ValidationError("line_item_id", str(e)) from e
            line_item.touch(user_id)
            db.session.flush()

            logger.info(f"Line item {line_item.id} linked to purchase request {purchase_request.number}")
            return line_item.id

    def update_quantity(self, *, line_item_id: int, required_quantity, user_id: Optional[int] = None) -> int:
        """Change a line item's required quantity; stock is not re-consumed"""
        with unit_of_work("update_line_item_quantity"):
            line_item = self._load_line_item(line_item_id)
            line_item.required_quantity = required_quantity
            line_item.touch(user_id)
            db.session.flush()

            CostAggregator.recompute_estimated_cost(line_item.service_order_id, user_id=user_id)
            return line_item.id

    def remove(self, *, line_item_id: int, user_id: Optional[int] = None) -> int:
        """
        Delete a line item.

        Returns:
            The owning service order id
        """
        with unit_of_work("remove_line_item"):
            line_item = self._load_line_item(line_item_id)
            service_order_id = line_item.service_order_id
            db.session.delete(line_item)
            db.session.flush()

            CostAggregator.recompute_estimated_cost(service_order_id, user_id=user_id)
            logger.info(f"Removed line item {line_item_id} from service order {service_order_id}")
            return service_order_id

    @staticmethod
    def find_linked_to_purchase(purchase_request: PurchaseRequest) -> Optional[ServiceOrderItem]:
        """The line item whose need this purchase request is sourcing, if any"""
        return ServiceOrderItem.query.filter_by(purchase_request_id=purchase_request.id).first()

    @staticmethod
    def unlink_purchase_request(line_item: ServiceOrderItem, user_id: Optional[int] = None) -> None:
        """Clear the line item's purchase request link once the need is sourced or the purchase is cancelled"""
        purchase_request_id = line_item.purchase_request_id
        line_item.clear_purchase_request_link()
        line_item.touch(user_id)
        db.session.flush()
        logger.info(f"Line item {line_item.id} unlinked from purchase request {purchase_request_id}")
