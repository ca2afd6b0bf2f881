"""
ServiceOrderManager - creation and descriptive edits of service orders

Status changes are handled by ServiceOrderLifecycleController.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from fleet_maintenance import db
from fleet_maintenance.buisness.core.errors import NotFoundError
from fleet_maintenance.buisness.core.unit_of_work import unit_of_work
from fleet_maintenance.buisness.maintenance.cost_aggregator import CostAggregator
from fleet_maintenance.data.core.sequences import ServiceOrderNumberManager
from fleet_maintenance.data.fleet.driver import Driver
from fleet_maintenance.data.fleet.vehicle import Vehicle
from fleet_maintenance.data.maintenance.service_order import ServiceOrder
from fleet_maintenance.logger import get_logger

logger = get_logger("fleet_maintenance.buisness.maintenance.service_order_manager")


class ServiceOrderManager:
    """Handles service order creation and edits"""

    @staticmethod
    def _check_references(vehicle_id: int, driver_id: Optional[int]) -> None:
        if db.session.get(Vehicle, vehicle_id) is None:
            raise NotFoundError("vehicle", vehicle_id)
        if driver_id is not None and db.session.get(Driver, driver_id) is None:
            raise NotFoundError("driver", driver_id)

    def create(
        self,
        *,
        vehicle_id: int,
        description: str,
        order_type: str = ServiceOrder.CORRECTIVE,
        priority: str = 'medium',
        current_mileage=None,
        mechanic: Optional[str] = None,
        scheduled_date: Optional[datetime] = None,
        estimated_cost=None,
        driver_id: Optional[int] = None,
        user_id: Optional[int] = None,
    ) -> int:
        """
        Open a new service order with the next OS number.

        The order starts at its scheduled date when one is given, otherwise now.
        """
        with unit_of_work("create_service_order"):
            self._check_references(vehicle_id, driver_id)

            service_order = ServiceOrder(
                number=ServiceOrderNumberManager.next_number(),
                vehicle_id=vehicle_id,
                driver_id=driver_id,
                description=description,
                type=order_type,
                priority=priority,
                current_mileage=current_mileage,
                mechanic=mechanic,
                scheduled_date=scheduled_date,
                estimated_cost=estimated_cost,
                start_date=scheduled_date or datetime.utcnow(),
                status=ServiceOrder.OPEN,
                created_by_id=user_id,
                updated_by_id=user_id,
            )
            db.session.add(service_order)
            db.session.flush()

            logger.info(f"Created service order {service_order.number} for vehicle {vehicle_id}")
            return service_order.id

    def update(
        self,
        *,
        service_order_id: int,
        vehicle_id: int,
        description: str,
        order_type: str,
        priority: str,
        current_mileage=None,
        mechanic: Optional[str] = None,
        scheduled_date: Optional[datetime] = None,
        estimated_cost=None,
        user_id: Optional[int] = None,
    ) -> int:
        """
        Edit an order's descriptive fields.

        Once an order has line items its estimated cost is derived from them and
        the submitted value is ignored.
        """
        with unit_of_work("update_service_order"):
            service_order = db.session.get(ServiceOrder, service_order_id)
            if service_order is None:
                raise NotFoundError("service_order", service_order_id)
            self._check_references(vehicle_id, None)

            service_order.vehicle_id = vehicle_id
            service_order.description = description
            service_order.type = order_type
            service_order.priority = priority
            service_order.current_mileage = current_mileage
            service_order.mechanic = mechanic
            service_order.scheduled_date = scheduled_date
            service_order.touch(user_id)

            if service_order.items_count > 0:
                CostAggregator.recompute_estimated_cost(service_order.id, user_id=user_id)
            else:
                service_order.estimated_cost = estimated_cost
            db.session.flush()

            logger.info(f"Updated service order {service_order.number}")
            return service_order.id
