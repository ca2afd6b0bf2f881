"""
Purchase Service
Action entry points for purchase requests.
"""

from typing import Optional

from fleet_maintenance.buisness.purchasing.purchase_lifecycle import PurchaseLifecycleController
from fleet_maintenance.buisness.purchasing.purchase_request_manager import PurchaseRequestManager
from fleet_maintenance.data.purchasing.purchase_request import PurchaseRequest
from fleet_maintenance.logger import get_logger
from fleet_maintenance.services.action_result import ActionResult, run_action
from fleet_maintenance.services.validation import (
    optional_datetime,
    optional_id,
    require_choice,
    require_datetime,
    require_id,
    require_positive_quantity,
    require_text,
)

logger = get_logger("fleet_maintenance.services.purchasing.purchase_service")


class PurchaseService:
    """
    Service for purchase request actions.

    Provides methods for:
    - Raising and editing purchase requests
    - Approving, receiving and cancelling them
    """

    @staticmethod
    def create_purchase_request(
        inventory_item_id,
        quantity,
        urgency,
        service_order_id=None,
        supplier_id=None,
        notes: Optional[str] = None,
        line_item_id=None,
        user_id: Optional[int] = None,
    ) -> ActionResult:
        """
        Raise a pending purchase request numbered PR-NNN.

        Args:
            inventory_item_id: Inventory item to purchase
            quantity: Quantity to purchase (> 0)
            urgency: One of PurchaseRequest.URGENCIES
            service_order_id: Service order this purchase sources, if any
            supplier_id: Preferred supplier
            notes: Free text
            line_item_id: Existing service order line item this purchase sources
            user_id: Acting user

        Returns:
            ActionResult with the new purchase request id
        """
        def operation():
            return PurchaseRequestManager().create(
                inventory_item_id=require_id('inventory_item_id', inventory_item_id),
                quantity=require_positive_quantity('quantity', quantity),
                urgency=require_choice('urgency', urgency, PurchaseRequest.URGENCIES),
                service_order_id=optional_id('service_order_id', service_order_id),
                supplier_id=optional_id('supplier_id', supplier_id),
                notes=notes,
                line_item_id=optional_id('line_item_id', line_item_id),
                user_id=user_id,
            )

        return run_action("create_purchase_request", operation, logger)

    @staticmethod
    def set_purchase_status(
        purchase_request_id,
        status,
        approved_by: Optional[str] = None,
        approval_date=None,
        user_id: Optional[int] = None,
    ) -> ActionResult:
        """
        Change a purchase request's status.

        Receiving the purchase replenishes stock once; repeating the receipt is a no-op.
        """
        def operation():
            return PurchaseLifecycleController().set_status(
                purchase_request_id=require_id('purchase_request_id', purchase_request_id),
                new_status=require_choice('status', status, PurchaseRequest.STATUSES),
                approved_by=approved_by,
                approval_date=optional_datetime('approval_date', approval_date),
                user_id=user_id,
            )

        return run_action("set_purchase_status", operation, logger)

    @staticmethod
    def update_purchase_request(
        purchase_request_id,
        inventory_item_id,
        quantity,
        urgency,
        service_order_id=None,
        supplier_id=None,
        notes: Optional[str] = None,
        user_id: Optional[int] = None,
    ) -> ActionResult:
        def operation():
            return PurchaseRequestManager().update(
                purchase_request_id=require_id('purchase_request_id', purchase_request_id),
                inventory_item_id=require_id('inventory_item_id', inventory_item_id),
                quantity=require_positive_quantity('quantity', quantity),
                urgency=require_choice('urgency', urgency, PurchaseRequest.URGENCIES),
                service_order_id=optional_id('service_order_id', service_order_id),
                supplier_id=optional_id('supplier_id', supplier_id),
                notes=notes,
                user_id=user_id,
            )

        return run_action("update_purchase_request", operation, logger)

    @staticmethod
    def confirm_purchase_receipt(
        purchase_request_id,
        receipt_date,
        receiver_name,
        invoice_number,
        user_id: Optional[int] = None,
    ) -> ActionResult:
        """Record delivery details and receive the purchase"""
        def operation():
            return PurchaseLifecycleController().confirm_receipt(
                purchase_request_id=require_id('purchase_request_id', purchase_request_id),
                receipt_date=require_datetime('receipt_date', receipt_date),
                receiver_name=require_text('receiver_name', receiver_name),
                invoice_number=require_text('invoice_number', invoice_number),
                user_id=user_id,
            )

        return run_action("confirm_purchase_receipt", operation, logger)
