"""
Sequence managers
Manages counter rows for business numbers
"""

from fleet_maintenance.data.core.sequences.business_number_managers import (
    BusinessNumberManager,
    ServiceOrderNumberManager,
    PurchaseRequestNumberManager,
    next_number,
)

__all__ = [
    'BusinessNumberManager',
    'ServiceOrderNumberManager',
    'PurchaseRequestNumberManager',
    'next_number',
]
