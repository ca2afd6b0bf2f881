"""
Tests for OS-NNN / PR-NNN number allocation
"""
from datetime import datetime

import pytest

from fleet_maintenance.data.core.sequences import (
    PurchaseRequestNumberManager,
    ServiceOrderNumberManager,
    next_number,
)
from fleet_maintenance.data.maintenance.service_order import ServiceOrder


def test_first_number_on_empty_history(app):
    assert next_number("OS") == "OS-001"
    assert next_number("PR") == "PR-001"


def test_numbers_increase_per_prefix(app):
    assert next_number("OS") == "OS-001"
    assert next_number("OS") == "OS-002"
    assert next_number("PR") == "PR-001", "Each prefix has its own counter"


def test_continues_after_existing_history(app, vehicle):
    ServiceOrder.create_from_dict({
        'number': 'OS-007',
        'vehicle_id': vehicle.id,
        'description': 'Imported order',
        'start_date': datetime(2023, 1, 10),
    })
    assert next_number("OS") == "OS-008"


def test_width_grows_past_padding(app):
    ServiceOrderNumberManager.reset_sequence(start_value=1000)
    assert ServiceOrderNumberManager.next_number() == "OS-1000"


def test_parse_number():
    assert PurchaseRequestNumberManager.parse_number("PR-042") == 42
    assert PurchaseRequestNumberManager.parse_number("OS-042") is None
    assert PurchaseRequestNumberManager.parse_number(None) is None


def test_unknown_prefix(app):
    with pytest.raises(KeyError):
        next_number("XX")
