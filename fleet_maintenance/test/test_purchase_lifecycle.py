"""
Tests for purchase request creation and receipt
"""
from datetime import datetime
from decimal import Decimal

import pytest

from fleet_maintenance import db
from fleet_maintenance.buisness.core.errors import InvalidTransitionError, NotFoundError, ValidationError
from fleet_maintenance.buisness.maintenance.service_order_item_manager import ServiceOrderItemManager
from fleet_maintenance.buisness.purchasing.purchase_lifecycle import PurchaseLifecycleController
from fleet_maintenance.buisness.purchasing.purchase_request_manager import PurchaseRequestManager
from fleet_maintenance.data.maintenance.service_order_item import ServiceOrderItem
from fleet_maintenance.data.purchasing.purchase_request import PurchaseRequest
from fleet_maintenance.data.supply.inventory_item import InventoryItem


def _purchase(purchase_request_id):
    return db.session.get(PurchaseRequest, purchase_request_id)


def test_create_snapshots_total_and_number(inventory_item):
    purchase_id = PurchaseRequestManager().create(
        inventory_item_id=inventory_item.id,
        quantity=Decimal('4'),
        urgency='high',
    )
    purchase = _purchase(purchase_id)

    assert purchase.number == 'PR-001'
    assert purchase.status == PurchaseRequest.PENDING
    assert purchase.total_amount == Decimal('20.00')
    assert purchase.purchase_date is not None


def test_create_with_unknown_cost_totals_zero(make_inventory_item):
    item = make_inventory_item(unit_cost=None)
    purchase_id = PurchaseRequestManager().create(inventory_item_id=item.id, quantity=Decimal('3'), urgency='low')
    assert _purchase(purchase_id).total_amount == Decimal('0.00')


def test_create_for_missing_item_writes_nothing(app):
    with pytest.raises(NotFoundError):
        PurchaseRequestManager().create(inventory_item_id=4242, quantity=Decimal('1'), urgency='low')
    assert PurchaseRequest.query.count() == 0


def test_create_for_service_order_adds_linked_line_item(service_order, inventory_item):
    purchase_id = PurchaseRequestManager().create(
        inventory_item_id=inventory_item.id,
        quantity=Decimal('6'),
        urgency='urgent',
        service_order_id=service_order.id,
    )

    line_item = ServiceOrderItem.query.filter_by(purchase_request_id=purchase_id).one()
    assert line_item.service_order_id == service_order.id
    assert line_item.inventory_item_id == inventory_item.id
    assert line_item.required_quantity == Decimal('6')
    assert service_order.estimated_cost == Decimal('30.00')
    assert inventory_item.quantity == Decimal('10'), "A purchase-linked need does not consume stock"


def test_receipt_nets_against_existing_line_item(service_order, inventory_item):
    """10 in stock, 3 used by the order, 20 bought for that need -> 24"""
    line_item_id = ServiceOrderItemManager().add_line_item(
        service_order_id=service_order.id,
        inventory_item_id=inventory_item.id,
        required_quantity=Decimal('3'),
    )
    assert inventory_item.quantity == Decimal('7')
    assert service_order.estimated_cost == Decimal('15.00')

    purchase_id = PurchaseRequestManager().create(
        inventory_item_id=inventory_item.id,
        quantity=Decimal('20'),
        urgency='medium',
        line_item_id=line_item_id,
    )
    line_item = db.session.get(ServiceOrderItem, line_item_id)
    assert line_item.purchase_request_id == purchase_id
    assert ServiceOrderItem.query.count() == 1, "Sourcing an existing need adds no new line"

    PurchaseLifecycleController().set_status(purchase_request_id=purchase_id, new_status=PurchaseRequest.RECEIVED)

    assert inventory_item.quantity == Decimal('24')
    assert line_item.purchase_request_id is None
    assert inventory_item.last_purchase is not None


def test_receipt_without_service_order_adds(make_inventory_item):
    item = make_inventory_item(quantity=Decimal('2'))
    purchase_id = PurchaseRequestManager().create(inventory_item_id=item.id, quantity=Decimal('5'), urgency='low')

    PurchaseLifecycleController().set_status(purchase_request_id=purchase_id, new_status=PurchaseRequest.RECEIVED)

    assert item.quantity == Decimal('7')


def test_received_twice_applies_stock_once(inventory_item):
    controller = PurchaseLifecycleController()
    purchase_id = PurchaseRequestManager().create(
        inventory_item_id=inventory_item.id, quantity=Decimal('5'), urgency='low'
    )

    controller.set_status(purchase_request_id=purchase_id, new_status=PurchaseRequest.RECEIVED)
    controller.set_status(purchase_request_id=purchase_id, new_status=PurchaseRequest.RECEIVED)

    assert inventory_item.quantity == Decimal('15')
    assert _purchase(purchase_id).status == PurchaseRequest.RECEIVED


def test_approval_date_becomes_last_purchase(inventory_item):
    approved_on = datetime(2024, 5, 2, 9, 0)
    purchase_id = PurchaseRequestManager().create(
        inventory_item_id=inventory_item.id, quantity=Decimal('1'), urgency='low'
    )

    PurchaseLifecycleController().set_status(
        purchase_request_id=purchase_id,
        new_status=PurchaseRequest.RECEIVED,
        approved_by='M. Costa',
        approval_date=approved_on,
    )

    assert inventory_item.last_purchase == approved_on
    assert _purchase(purchase_id).approved_by == 'M. Costa'


def test_omitted_approver_keeps_stored_value(inventory_item):
    controller = PurchaseLifecycleController()
    approved_on = datetime(2024, 5, 2, 9, 0)
    purchase_id = PurchaseRequestManager().create(
        inventory_item_id=inventory_item.id, quantity=Decimal('1'), urgency='low'
    )

    controller.set_status(purchase_request_id=purchase_id, new_status=PurchaseRequest.APPROVED,
                          approved_by='M. Costa', approval_date=approved_on)
    controller.set_status(purchase_request_id=purchase_id, new_status=PurchaseRequest.RECEIVED)

    purchase = _purchase(purchase_id)
    assert purchase.approved_by == 'M. Costa'
    assert purchase.approval_date == approved_on


def test_invalid_transition_leaves_purchase_untouched(inventory_item):
    controller = PurchaseLifecycleController()
    purchase_id = PurchaseRequestManager().create(
        inventory_item_id=inventory_item.id, quantity=Decimal('5'), urgency='low'
    )
    controller.set_status(purchase_request_id=purchase_id, new_status=PurchaseRequest.CANCELLED)

    with pytest.raises(InvalidTransitionError):
        controller.set_status(purchase_request_id=purchase_id, new_status=PurchaseRequest.RECEIVED)

    assert _purchase(purchase_id).status == PurchaseRequest.CANCELLED
    assert inventory_item.quantity == Decimal('10')


def test_receipt_with_missing_inventory_item_skips_stock(app):
    purchase = PurchaseRequest.create_from_dict({
        'number': 'PR-050',
        'inventory_item_id': 999,
        'quantity': Decimal('3'),
        'status': PurchaseRequest.APPROVED,
    })

    PurchaseLifecycleController().set_status(purchase_request_id=purchase.id, new_status=PurchaseRequest.RECEIVED)

    assert _purchase(purchase.id).status == PurchaseRequest.RECEIVED
    assert InventoryItem.query.count() == 0


def test_missing_purchase_raises(app):
    with pytest.raises(NotFoundError):
        PurchaseLifecycleController().set_status(purchase_request_id=77, new_status=PurchaseRequest.RECEIVED)


def test_confirm_receipt_records_delivery(inventory_item):
    received_on = datetime(2024, 6, 1, 14, 0)
    purchase_id = PurchaseRequestManager().create(
        inventory_item_id=inventory_item.id, quantity=Decimal('2'), urgency='medium'
    )

    PurchaseLifecycleController().confirm_receipt(
        purchase_request_id=purchase_id,
        receipt_date=received_on,
        receiver_name='A. Souza',
        invoice_number='NF-8812',
    )

    purchase = _purchase(purchase_id)
    assert purchase.status == PurchaseRequest.RECEIVED
    assert purchase.delivery_date == received_on
    assert purchase.receiver_name == 'A. Souza'
    assert purchase.invoice_number == 'NF-8812'
    assert inventory_item.quantity == Decimal('12')
    assert inventory_item.last_purchase == received_on


def test_repeated_confirm_keeps_first_delivery(inventory_item):
    first_receipt = datetime(2024, 6, 1, 9, 0)
    purchase_id = PurchaseRequestManager().create(
        inventory_item_id=inventory_item.id, quantity=Decimal('2'), urgency='medium'
    )
    controller = PurchaseLifecycleController()
    controller.confirm_receipt(purchase_request_id=purchase_id, receipt_date=first_receipt,
                               receiver_name='A. Souza', invoice_number='NF-1')

    controller.confirm_receipt(purchase_request_id=purchase_id, receipt_date=datetime(2024, 7, 1, 9, 0),
                               receiver_name='B. Lima', invoice_number='NF-2')

    purchase = _purchase(purchase_id)
    assert purchase.invoice_number == 'NF-1', "A second confirmation must not rewrite the delivery"
    assert purchase.receiver_name == 'A. Souza'
    assert purchase.delivery_date == first_receipt
    assert inventory_item.quantity == Decimal('12')
    assert inventory_item.last_purchase == first_receipt


def test_cancel_releases_line_item_for_a_new_purchase(service_order, inventory_item):
    line_item_id = ServiceOrderItemManager().add_line_item(
        service_order_id=service_order.id,
        inventory_item_id=inventory_item.id,
        required_quantity=Decimal('3'),
    )
    manager = PurchaseRequestManager()
    first_id = manager.create(inventory_item_id=inventory_item.id, quantity=Decimal('5'), urgency='low',
                              line_item_id=line_item_id)

    PurchaseLifecycleController().set_status(purchase_request_id=first_id, new_status=PurchaseRequest.CANCELLED)

    line_item = db.session.get(ServiceOrderItem, line_item_id)
    assert line_item.purchase_request_id is None, "A cancelled purchase no longer sources the line"
    assert inventory_item.quantity == Decimal('7'), "Cancelling does not touch stock"

    second_id = manager.create(inventory_item_id=inventory_item.id, quantity=Decimal('20'), urgency='high',
                               line_item_id=line_item_id)
    assert line_item.purchase_request_id == second_id

    PurchaseLifecycleController().set_status(purchase_request_id=second_id, new_status=PurchaseRequest.RECEIVED)
    assert inventory_item.quantity == Decimal('24')


def test_update_resnapshots_total(make_inventory_item):
    item = make_inventory_item(unit_cost=Decimal('5.00'))
    manager = PurchaseRequestManager()
    purchase_id = manager.create(inventory_item_id=item.id, quantity=Decimal('2'), urgency='low')

    item.unit_cost = Decimal('8.00')
    db.session.commit()

    manager.update(purchase_request_id=purchase_id, inventory_item_id=item.id,
                   quantity=Decimal('3'), urgency='high')

    purchase = _purchase(purchase_id)
    assert purchase.total_amount == Decimal('24.00')
    assert purchase.urgency == 'high'


def test_update_cannot_move_linked_purchase(service_order, make_inventory_item):
    oil = make_inventory_item(name='Oil')
    other = make_inventory_item(name='Grease')
    manager = PurchaseRequestManager()
    purchase_id = manager.create(inventory_item_id=oil.id, quantity=Decimal('2'), urgency='low',
                                 service_order_id=service_order.id)

    with pytest.raises(ValidationError):
        manager.update(purchase_request_id=purchase_id, inventory_item_id=other.id,
                       quantity=Decimal('2'), urgency='low', service_order_id=service_order.id)

    assert _purchase(purchase_id).inventory_item_id == oil.id


def test_line_item_link_matches_purchase(service_order, inventory_item):
    """A linked line item always shares the purchase's inventory item and service order"""
    purchase_id = PurchaseRequestManager().create(
        inventory_item_id=inventory_item.id, quantity=Decimal('2'), urgency='low',
        service_order_id=service_order.id,
    )
    purchase = _purchase(purchase_id)

    for line_item in ServiceOrderItem.query.filter(ServiceOrderItem.purchase_request_id.isnot(None)):
        linked = db.session.get(PurchaseRequest, line_item.purchase_request_id)
        assert linked.inventory_item_id == line_item.inventory_item_id
        assert linked.service_order_id == line_item.service_order_id
    assert purchase.linked_items.count() == 1
