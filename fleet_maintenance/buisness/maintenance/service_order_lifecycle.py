"""
ServiceOrderLifecycleController

Owns service order status changes. Finishing an order (completed or cancelled)
writes a derived maintenance record for the vehicle, at most once.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from fleet_maintenance import db
from fleet_maintenance.buisness.core.errors import NotFoundError
from fleet_maintenance.buisness.core.unit_of_work import unit_of_work
from fleet_maintenance.buisness.maintenance.maintenance_record_factory import MaintenanceRecordFactory
from fleet_maintenance.buisness.maintenance.state_machine import ServiceOrderStateMachine
from fleet_maintenance.data.maintenance.service_order import ServiceOrder
from fleet_maintenance.logger import get_logger

logger = get_logger("fleet_maintenance.buisness.maintenance.service_order_lifecycle")


class ServiceOrderLifecycleController:
    """Validates and applies service order status transitions"""

    state_machine = ServiceOrderStateMachine

    def set_status(
        self,
        *,
        service_order_id: int,
        new_status: str,
        validated_by: Optional[str] = None,
        validation_date: Optional[datetime] = None,
        user_id: Optional[int] = None,
    ) -> Optional[int]:
        """
        Move a service order to `new_status`.

        Validator and validation date are only overwritten when supplied. The end
        date is stamped on completion and cleared for any other status.

        Returns:
            id of the maintenance record created, None when none was created
        """
        with unit_of_work("set_service_order_status"):
            service_order = db.session.get(ServiceOrder, service_order_id)
            if service_order is None:
                raise NotFoundError("service_order", service_order_id)

            old_status = service_order.status
            self.state_machine.validate_transition(old_status, new_status)

            service_order.status = new_status
            if validated_by is not None:
                service_order.validated_by = validated_by
            if validation_date is not None:
                service_order.validation_date = validation_date
            service_order.end_date = datetime.utcnow() if service_order.is_completed else None
            service_order.touch(user_id)
            db.session.flush()

            logger.info(f"Service order {service_order.number}: {old_status} -> {new_status}")

            if not service_order.is_terminal:
                return None

            record = MaintenanceRecordFactory.create_for_service_order(
                service_order,
                validation_date=validation_date,
                user_id=user_id,
            )
            return record.id if record is not None else None
