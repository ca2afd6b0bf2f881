"""
CostAggregator - keeps a service order's estimated cost equal to the sum of its line items

Called synchronously at the end of every write path that changes a line item's
quantity or inventory linkage, so the stored cost is never stale once the
operation returns.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from fleet_maintenance import db
from fleet_maintenance.buisness.core.errors import NotFoundError
from fleet_maintenance.buisness.core.numeric import ZERO, to_decimal, to_money
from fleet_maintenance.data.maintenance.service_order import ServiceOrder
from fleet_maintenance.data.maintenance.service_order_item import ServiceOrderItem
from fleet_maintenance.data.supply.inventory_item import InventoryItem
from fleet_maintenance.logger import get_logger

logger = get_logger("fleet_maintenance.buisness.maintenance.cost_aggregator")


class CostAggregator:
    """Recomputes estimated costs from current line items and unit costs"""

    @staticmethod
    def line_items_total(service_order_id: int) -> Decimal:
        """
        Σ required_quantity × unit_cost over the order's line items.

        Lines without an inventory item, a unit cost or a parseable quantity add zero.
        """
        rows = (
            db.session.query(ServiceOrderItem.required_quantity, InventoryItem.unit_cost)
            .outerjoin(InventoryItem, ServiceOrderItem.inventory_item_id == InventoryItem.id)
            .filter(ServiceOrderItem.service_order_id == service_order_id)
            .all()
        )
        total = ZERO
        for required_quantity, unit_cost in rows:
            total += to_decimal(required_quantity) * to_decimal(unit_cost)
        return to_money(total)

    @staticmethod
    def recompute_estimated_cost(service_order_id: int, user_id: Optional[int] = None) -> Decimal:
        """
        Write the line items total to the order's estimated cost.

        Returns:
            The new estimated cost
        """
        service_order = db.session.get(ServiceOrder, service_order_id)
        if service_order is None:
            raise NotFoundError("service_order", service_order_id)

        total = CostAggregator.line_items_total(service_order_id)

        previous = service_order.estimated_cost
        service_order.estimated_cost = total
        service_order.touch(user_id)
        db.session.flush()

        logger.debug(f"Service order {service_order.number} estimated cost {previous} -> {total}")
        return total
