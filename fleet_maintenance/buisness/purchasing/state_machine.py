from typing import Dict, Set

from fleet_maintenance.buisness.core.state_machine import StatusStateMachine
from fleet_maintenance.data.purchasing.purchase_request import PurchaseRequest


class PurchaseRequestStateMachine(StatusStateMachine):
    """
    Purchase request lifecycle: pending → approved → received, cancellable until received.

    pending → received is allowed for purchases bought and delivered without a
    separate approval step.
    """

    ENTITY = 'purchase_request'

    PENDING = PurchaseRequest.PENDING
    APPROVED = PurchaseRequest.APPROVED
    RECEIVED = PurchaseRequest.RECEIVED
    CANCELLED = PurchaseRequest.CANCELLED

    TERMINAL_STATES = {RECEIVED, CANCELLED}

    TRANSITIONS: Dict[str, Set[str]] = {
        PENDING: {APPROVED, RECEIVED, CANCELLED},
        APPROVED: {RECEIVED, CANCELLED},
        # RECEIVED and CANCELLED are terminal
    }
