"""
Pytest configuration and fixtures for the reconciliation engine tests
"""
from decimal import Decimal

import pytest
from sqlalchemy import text

from fleet_maintenance import create_app
from fleet_maintenance import db as _db
from fleet_maintenance.buisness.maintenance.service_order_manager import ServiceOrderManager
from fleet_maintenance.data.core.virtual_sequence_generator import VirtualSequenceGenerator
from fleet_maintenance.data.fleet.vehicle import Vehicle
from fleet_maintenance.data.maintenance.service_order import ServiceOrder
from fleet_maintenance.data.supply.inventory_item import InventoryItem


@pytest.fixture(scope='function')
def app():
    """Create Flask application with a fresh in-memory database"""
    app = create_app({
        'TESTING': True,
        'SECRET_KEY': 'test_secret_key',
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
    })

    with app.app_context():
        _db.create_all()
        VirtualSequenceGenerator.create_sequence_table_if_not_exists()
        yield app
        _db.session.remove()
        _db.session.execute(text(f"DROP TABLE IF EXISTS {VirtualSequenceGenerator.SEQUENCE_TABLE_NAME}"))
        _db.session.commit()
        _db.drop_all()


@pytest.fixture
def vehicle(app):
    return Vehicle.create_from_dict({
        'plate': 'ABC-1234',
        'brand': 'Volvo',
        'model': 'FH 540',
        'year': 2021,
        'mileage': 120000,
    })


@pytest.fixture
def make_inventory_item(app):
    """Factory for inventory items; defaults to 10 units at 5.00"""
    def _make(name='Oil filter', quantity=Decimal('10'), unit_cost=Decimal('5.00'), **extra):
        data = {'name': name, 'quantity': quantity, 'unit_cost': unit_cost, 'unit': 'un'}
        data.update(extra)
        return InventoryItem.create_from_dict(data)
    return _make


@pytest.fixture
def inventory_item(make_inventory_item):
    return make_inventory_item()


@pytest.fixture
def service_order(app, vehicle):
    service_order_id = ServiceOrderManager().create(
        vehicle_id=vehicle.id,
        description='Brake pads replacement',
        order_type=ServiceOrder.PREVENTIVE,
        current_mileage=Decimal('120500'),
        mechanic='J. Silva',
    )
    return _db.session.get(ServiceOrder, service_order_id)
