"""
StockLedger - on-hand quantity changes driven by service orders and purchases

Responsibilities:
- Consume stock when a part is added to a service order
- Replenish stock when a purchase request is received, netting the
  quantity already earmarked for the service order that triggered it
- Never persist a negative quantity

The ledger does not deduplicate; callers apply each logical event once.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from fleet_maintenance import db
from fleet_maintenance.buisness.core.errors import NotFoundError
from fleet_maintenance.buisness.core.numeric import ZERO, to_decimal
from fleet_maintenance.data.supply.inventory_item import InventoryItem
from fleet_maintenance.logger import get_logger

logger = get_logger("fleet_maintenance.buisness.inventory.stock_ledger")


class StockLedger:
    """Applies consumption and replenishment to inventory items"""

    @staticmethod
    def _load_item(inventory_item_id: int) -> InventoryItem:
        item = db.session.get(InventoryItem, inventory_item_id)
        if item is None:
            raise NotFoundError("inventory_item", inventory_item_id)
        return item

    @staticmethod
    def consume(inventory_item_id: int, quantity, user_id: Optional[int] = None) -> Decimal:
        """
        Take `quantity` out of stock.

        Only applied while the item has stock; the result is floored at zero.
        Consuming from an empty item is a no-op.

        Returns:
            The item's quantity after the call
        """
        item = StockLedger._load_item(inventory_item_id)
        current = to_decimal(item.quantity)

        if current <= ZERO:
            logger.info(f"Inventory item {item.id} has no stock to consume; quantity stays {current}")
            return current

        new_quantity = max(ZERO, current - to_decimal(quantity))
        item.quantity = new_quantity
        item.touch(user_id)
        db.session.flush()

        logger.info(f"Consumed {quantity} of inventory item {item.id}: {current} -> {new_quantity}")
        if item.is_low_stock:
            logger.warning(f"Inventory item {item.id} is at or below its minimum of {item.min_quantity}")
        return new_quantity

    @staticmethod
    def replenish(
        inventory_item_id: int,
        purchased_quantity,
        linked_required_quantity=None,
        receipt_date: Optional[datetime] = None,
        user_id: Optional[int] = None,
    ) -> Decimal:
        """
        Add received stock.

        With a linked service order need, the received quantity is netted against
        that requirement: max(0, current + purchased - required). Without one the
        purchased quantity is added as is. Stamps the item's last purchase date.

        Returns:
            The item's quantity after the call
        """
        item = StockLedger._load_item(inventory_item_id)
        current = to_decimal(item.quantity)
        purchased = to_decimal(purchased_quantity)

        if linked_required_quantity is not None:
            required = to_decimal(linked_required_quantity)
            new_quantity = max(ZERO, current + purchased - required)
        else:
            new_quantity = current + purchased

        item.quantity = new_quantity
        item.last_purchase = receipt_date or datetime.utcnow()
        item.touch(user_id)
        db.session.flush()

        if linked_required_quantity is not None:
            logger.info(
                f"Replenished inventory item {item.id} with {purchased} netted against {linked_required_quantity}: "
                f"{current} -> {new_quantity}"
            )
        else:
            logger.info(f"Replenished inventory item {item.id} with {purchased}: {current} -> {new_quantity}")
        return new_quantity
