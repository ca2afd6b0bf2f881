"""
Business Number Managers
Allocate human-facing sequential numbers (OS-001, PR-001) per entity type
"""

import re

from flask import current_app

from fleet_maintenance.data.core.virtual_sequence_generator import VirtualSequenceGenerator


class BusinessNumberManager(VirtualSequenceGenerator):
    """
    Allocates PREFIX-NNN numbers from a per-prefix counter.

    The first allocation for a prefix seeds the counter from the newest
    existing entity's number, so numbering continues after data imported
    before the counter existed.
    """

    PREFIX = None
    DEFAULT_WIDTH = 3

    @classmethod
    def get_model(cls):
        raise NotImplementedError

    @classmethod
    def get_sequence_key(cls):
        return f"business_number:{cls.PREFIX}"

    @classmethod
    def parse_number(cls, number):
        """Trailing integer of a PREFIX-NNN number, None when the pattern does not match"""
        if not number:
            return None
        match = re.search(rf"{re.escape(cls.PREFIX)}-(\d+)", number)
        if not match:
            return None
        return int(match.group(1))

    @classmethod
    def format_number(cls, value):
        width = current_app.config.get('BUSINESS_NUMBER_WIDTH', cls.DEFAULT_WIDTH)
        return f"{cls.PREFIX}-{value:0{width}d}"

    @classmethod
    def seed_value(cls):
        model = cls.get_model()
        last = model.query.order_by(model.created_at.desc(), model.id.desc()).first()
        if last is None:
            return 0
        return cls.parse_number(last.number) or 0

    @classmethod
    def next_number(cls):
        return cls.format_number(cls.get_next_id())


class ServiceOrderNumberManager(BusinessNumberManager):
    """OS-NNN numbers for service orders"""

    PREFIX = "OS"

    @classmethod
    def get_model(cls):
        from fleet_maintenance.data.maintenance.service_order import ServiceOrder
        return ServiceOrder


class PurchaseRequestNumberManager(BusinessNumberManager):
    """PR-NNN numbers for purchase requests"""

    PREFIX = "PR"

    @classmethod
    def get_model(cls):
        from fleet_maintenance.data.purchasing.purchase_request import PurchaseRequest
        return PurchaseRequest


_MANAGERS = {
    ServiceOrderNumberManager.PREFIX: ServiceOrderNumberManager,
    PurchaseRequestNumberManager.PREFIX: PurchaseRequestNumberManager,
}


def next_number(prefix):
    """
    Allocate the next business number for a prefix ("OS" or "PR")

    Raises:
        KeyError: Unknown prefix
    """
    try:
        manager = _MANAGERS[prefix]
    except KeyError:
        raise KeyError(f"No business number sequence for prefix {prefix!r}")
    return manager.next_number()
