"""
Tests for transactional scoping of controller operations
"""
from decimal import Decimal

import pytest
from sqlalchemy import text

from fleet_maintenance import db
from fleet_maintenance.buisness.core.errors import ConcurrencyError
from fleet_maintenance.buisness.core.unit_of_work import unit_of_work
from fleet_maintenance.buisness.inventory.stock_ledger import StockLedger
from fleet_maintenance.buisness.maintenance.service_order_item_manager import ServiceOrderItemManager
from fleet_maintenance.data.maintenance.service_order_item import ServiceOrderItem
from fleet_maintenance.data.supply.inventory_item import InventoryItem


def test_failure_mid_operation_rolls_back_everything(inventory_item):
    with pytest.raises(RuntimeError):
        with unit_of_work("test_operation"):
            StockLedger.consume(inventory_item.id, Decimal('4'))
            raise RuntimeError("boom")

    db.session.expire_all()
    assert db.session.get(InventoryItem, inventory_item.id).quantity == Decimal('10')


def test_nested_scope_failure_rolls_back_outer_writes(service_order, inventory_item):
    with pytest.raises(RuntimeError):
        with unit_of_work("outer"):
            ServiceOrderItemManager().add_line_item(
                service_order_id=service_order.id,
                inventory_item_id=inventory_item.id,
                required_quantity=Decimal('3'),
            )
            raise RuntimeError("boom")

    db.session.expire_all()
    assert ServiceOrderItem.query.count() == 0, "Inner scopes must not commit on their own"
    assert db.session.get(InventoryItem, inventory_item.id).quantity == Decimal('10')


def test_add_line_item_to_missing_order_consumes_nothing(inventory_item):
    from fleet_maintenance.buisness.core.errors import NotFoundError

    with pytest.raises(NotFoundError):
        ServiceOrderItemManager().add_line_item(
            service_order_id=555,
            inventory_item_id=inventory_item.id,
            required_quantity=Decimal('3'),
        )

    db.session.expire_all()
    assert db.session.get(InventoryItem, inventory_item.id).quantity == Decimal('10')


def test_stale_row_raises_conflict(inventory_item):
    item = db.session.get(InventoryItem, inventory_item.id)
    assert item.quantity == Decimal('10')

    # another writer bumps the row version behind this session's back
    db.session.execute(
        text("UPDATE inventory_items SET version_id = version_id + 1 WHERE id = :id"),
        {"id": item.id}
    )

    with pytest.raises(ConcurrencyError) as exc_info:
        with unit_of_work("consume_stale"):
            StockLedger.consume(item.id, Decimal('1'))

    assert exc_info.value.kind == 'conflict'
