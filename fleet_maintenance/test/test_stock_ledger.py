"""
Tests for stock consumption and replenishment
"""
from datetime import datetime
from decimal import Decimal

import pytest

from fleet_maintenance.buisness.core.errors import NotFoundError
from fleet_maintenance.buisness.inventory.stock_ledger import StockLedger


def test_consume_decrements(inventory_item):
    assert StockLedger.consume(inventory_item.id, Decimal('3')) == Decimal('7')
    assert inventory_item.quantity == Decimal('7')


def test_consume_floors_at_zero(inventory_item):
    StockLedger.consume(inventory_item.id, Decimal('25'))
    assert inventory_item.quantity == Decimal('0'), "Quantity must never go negative"


def test_consume_from_empty_item_is_noop(make_inventory_item):
    item = make_inventory_item(quantity=Decimal('0'))
    assert StockLedger.consume(item.id, Decimal('4')) == Decimal('0')
    assert item.quantity == Decimal('0')


def test_consume_down_to_minimum_flags_low_stock(make_inventory_item):
    item = make_inventory_item(min_quantity=Decimal('8'))
    assert not item.is_low_stock

    StockLedger.consume(item.id, Decimal('3'))

    assert item.is_low_stock, "7 on hand is below the minimum of 8"


def test_replenish_without_link_adds(make_inventory_item):
    item = make_inventory_item(quantity=Decimal('2'))
    assert StockLedger.replenish(item.id, Decimal('5')) == Decimal('7')


def test_replenish_nets_linked_requirement(make_inventory_item):
    item = make_inventory_item(quantity=Decimal('7'))
    new_quantity = StockLedger.replenish(item.id, Decimal('20'), linked_required_quantity=Decimal('3'))
    assert new_quantity == Decimal('24')


def test_replenish_netting_floors_at_zero(make_inventory_item):
    item = make_inventory_item(quantity=Decimal('0'))
    new_quantity = StockLedger.replenish(item.id, Decimal('2'), linked_required_quantity=Decimal('5'))
    assert new_quantity == Decimal('0')


def test_replenish_stamps_last_purchase(inventory_item):
    received_on = datetime(2024, 3, 15, 10, 30)
    StockLedger.replenish(inventory_item.id, Decimal('1'), receipt_date=received_on)
    assert inventory_item.last_purchase == received_on


def test_quantity_never_negative_over_a_sequence(make_inventory_item):
    item = make_inventory_item(quantity=Decimal('4'))
    StockLedger.consume(item.id, Decimal('3'))
    StockLedger.consume(item.id, Decimal('3'))
    StockLedger.consume(item.id, Decimal('3'))
    StockLedger.replenish(item.id, Decimal('1'), linked_required_quantity=Decimal('6'))
    StockLedger.consume(item.id, Decimal('1'))
    assert item.quantity >= Decimal('0')


def test_missing_item_raises(app):
    with pytest.raises(NotFoundError):
        StockLedger.consume(9999, Decimal('1'))
