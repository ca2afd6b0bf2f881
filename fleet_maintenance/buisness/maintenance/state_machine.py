from typing import Dict, Set

from fleet_maintenance.buisness.core.state_machine import StatusStateMachine
from fleet_maintenance.data.maintenance.service_order import ServiceOrder


class ServiceOrderStateMachine(StatusStateMachine):
    """
    Service order lifecycle: open → in_progress → completed, cancellable until finished.
    """

    ENTITY = 'service_order'

    OPEN = ServiceOrder.OPEN
    IN_PROGRESS = ServiceOrder.IN_PROGRESS
    COMPLETED = ServiceOrder.COMPLETED
    CANCELLED = ServiceOrder.CANCELLED

    TERMINAL_STATES = {COMPLETED, CANCELLED}

    TRANSITIONS: Dict[str, Set[str]] = {
        OPEN: {IN_PROGRESS, COMPLETED, CANCELLED},
        IN_PROGRESS: {COMPLETED, CANCELLED},
        # COMPLETED and CANCELLED are terminal
    }
