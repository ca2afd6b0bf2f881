"""
Service Order Service
Action entry points for service orders and their line items.
"""

from typing import Optional

from fleet_maintenance.buisness.maintenance.service_order_item_manager import ServiceOrderItemManager
from fleet_maintenance.buisness.maintenance.service_order_lifecycle import ServiceOrderLifecycleController
from fleet_maintenance.buisness.maintenance.service_order_manager import ServiceOrderManager
from fleet_maintenance.data.maintenance.service_order import ServiceOrder
from fleet_maintenance.logger import get_logger
from fleet_maintenance.services.action_result import ActionResult, run_action
from fleet_maintenance.services.validation import (
    optional_datetime,
    optional_decimal,
    optional_id,
    require_choice,
    require_id,
    require_positive_quantity,
    require_text,
)

logger = get_logger("fleet_maintenance.services.maintenance.service_order_service")


class ServiceOrderService:
    """
    Service for service order actions.

    Provides methods for:
    - Opening and editing service orders
    - Adding, re-quantifying and removing line items
    - Moving orders through their lifecycle
    """

    @staticmethod
    def add_line_item(
        service_order_id,
        inventory_item_id,
        required_quantity,
        user_id: Optional[int] = None,
    ) -> ActionResult:
        """
        Add a stock part to a service order.

        Args:
            service_order_id: Service order ID
            inventory_item_id: Inventory item ID
            required_quantity: Quantity needed (> 0)
            user_id: Acting user

        Returns:
            ActionResult with the new line item id
        """
        def operation():
            so_id = require_id('service_order_id', service_order_id)
            item_id = require_id('inventory_item_id', inventory_item_id)
            quantity = require_positive_quantity('required_quantity', required_quantity)
            return ServiceOrderItemManager().add_line_item(
                service_order_id=so_id,
                inventory_item_id=item_id,
                required_quantity=quantity,
                user_id=user_id,
            )

        return run_action("add_line_item", operation, logger)

    @staticmethod
    def set_service_order_status(
        service_order_id,
        status,
        validated_by: Optional[str] = None,
        validation_date=None,
        user_id: Optional[int] = None,
    ) -> ActionResult:
        """
        Change a service order's status.

        Completing or cancelling the order writes a maintenance record for its vehicle.

        Returns:
            ActionResult carrying the service order id
        """
        def operation():
            so_id = require_id('service_order_id', service_order_id)
            new_status = require_choice('status', status, ServiceOrder.STATUSES)
            validated_on = optional_datetime('validation_date', validation_date)
            record_id = ServiceOrderLifecycleController().set_status(
                service_order_id=so_id,
                new_status=new_status,
                validated_by=validated_by,
                validation_date=validated_on,
                user_id=user_id,
            )
            if record_id is not None:
                logger.info(f"Service order {so_id} produced maintenance record {record_id}")
            return so_id

        return run_action("set_service_order_status", operation, logger)

    @staticmethod
    def create_service_order(
        vehicle_id,
        description,
        order_type=ServiceOrder.CORRECTIVE,
        priority='medium',
        current_mileage=None,
        mechanic: Optional[str] = None,
        scheduled_date=None,
        estimated_cost=None,
        driver_id=None,
        user_id: Optional[int] = None,
    ) -> ActionResult:
        """Open a service order numbered OS-NNN"""
        def operation():
            return ServiceOrderManager().create(
                vehicle_id=require_id('vehicle_id', vehicle_id),
                description=require_text('description', description),
                order_type=require_choice('type', order_type, ServiceOrder.TYPES),
                priority=require_choice('priority', priority, ServiceOrder.PRIORITIES),
                current_mileage=optional_decimal('current_mileage', current_mileage),
                mechanic=mechanic,
                scheduled_date=optional_datetime('scheduled_date', scheduled_date),
                estimated_cost=optional_decimal('estimated_cost', estimated_cost),
                driver_id=optional_id('driver_id', driver_id),
                user_id=user_id,
            )

        return run_action("create_service_order", operation, logger)

    @staticmethod
    def update_service_order(
        service_order_id,
        vehicle_id,
        description,
        order_type,
        priority,
        current_mileage=None,
        mechanic: Optional[str] = None,
        scheduled_date=None,
        estimated_cost=None,
        user_id: Optional[int] = None,
    ) -> ActionResult:
        """Edit a service order; estimated cost is derived once it has line items"""
        def operation():
            return ServiceOrderManager().update(
                service_order_id=require_id('service_order_id', service_order_id),
                vehicle_id=require_id('vehicle_id', vehicle_id),
                description=require_text('description', description),
                order_type=require_choice('type', order_type, ServiceOrder.TYPES),
                priority=require_choice('priority', priority, ServiceOrder.PRIORITIES),
                current_mileage=optional_decimal('current_mileage', current_mileage),
                mechanic=mechanic,
                scheduled_date=optional_datetime('scheduled_date', scheduled_date),
                estimated_cost=optional_decimal('estimated_cost', estimated_cost),
                user_id=user_id,
            )

        return run_action("update_service_order", operation, logger)

    @staticmethod
    def update_line_item_quantity(line_item_id, required_quantity, user_id: Optional[int] = None) -> ActionResult:
        def operation():
            return ServiceOrderItemManager().update_quantity(
                line_item_id=require_id('line_item_id', line_item_id),
                required_quantity=require_positive_quantity('required_quantity', required_quantity),
                user_id=user_id,
            )

        return run_action("update_line_item_quantity", operation, logger)

    @staticmethod
    def remove_line_item(line_item_id, user_id: Optional[int] = None) -> ActionResult:
        """
        Remove a line item.

        Returns:
            ActionResult carrying the owning service order id
        """
        def operation():
            return ServiceOrderItemManager().remove(
                line_item_id=require_id('line_item_id', line_item_id),
                user_id=user_id,
            )

        return run_action("remove_line_item", operation, logger)
