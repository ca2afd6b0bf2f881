"""
PurchaseLifecycleController

Owns purchase request status changes. Receiving a purchase replenishes stock
and releases the service order line item it was sourcing; both effects are
gated on the request not already being received, so they run at most once.
Cancelling a purchase releases its line item without touching stock.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from fleet_maintenance import db
from fleet_maintenance.buisness.core.errors import NotFoundError
from fleet_maintenance.buisness.core.unit_of_work import unit_of_work
from fleet_maintenance.buisness.inventory.stock_ledger import StockLedger
from fleet_maintenance.buisness.maintenance.service_order_item_manager import ServiceOrderItemManager
from fleet_maintenance.buisness.purchasing.state_machine import PurchaseRequestStateMachine
from fleet_maintenance.data.purchasing.purchase_request import PurchaseRequest
from fleet_maintenance.data.supply.inventory_item import InventoryItem
from fleet_maintenance.logger import get_logger

logger = get_logger("fleet_maintenance.buisness.purchasing.purchase_lifecycle")


class PurchaseLifecycleController:
    """Validates and applies purchase request status transitions"""

    state_machine = PurchaseRequestStateMachine

    @staticmethod
    def _load(purchase_request_id: int) -> PurchaseRequest:
        purchase_request = db.session.get(PurchaseRequest, purchase_request_id)
        if purchase_request is None:
            raise NotFoundError("purchase_request", purchase_request_id)
        return purchase_request

    def _apply_receipt(
        self,
        purchase_request: PurchaseRequest,
        receipt_date: Optional[datetime],
        user_id: Optional[int],
    ) -> None:
        """Replenish stock, netting and unlinking the line item this purchase was sourcing"""
        if purchase_request.inventory_item_id is None:
            return

        inventory_item = db.session.get(InventoryItem, purchase_request.inventory_item_id)
        if inventory_item is None:
            logger.warning(
                f"Purchase request {purchase_request.number} references missing inventory item "
                f"{purchase_request.inventory_item_id}; stock not updated"
            )
            return

        line_item = ServiceOrderItemManager.find_linked_to_purchase(purchase_request)

        StockLedger.replenish(
            inventory_item.id,
            purchase_request.quantity,
            linked_required_quantity=line_item.required_quantity if line_item is not None else None,
            receipt_date=receipt_date,
            user_id=user_id,
        )

        if line_item is not None:
            ServiceOrderItemManager.unlink_purchase_request(line_item, user_id=user_id)

    @staticmethod
    def _release_line_item(purchase_request: PurchaseRequest, user_id: Optional[int]) -> None:
        """A cancelled purchase no longer sources its line item; the need can be sourced again"""
        line_item = ServiceOrderItemManager.find_linked_to_purchase(purchase_request)
        if line_item is not None:
            ServiceOrderItemManager.unlink_purchase_request(line_item, user_id=user_id)

    def _transition(
        self,
        purchase_request: PurchaseRequest,
        new_status: str,
        approved_by: Optional[str],
        approval_date: Optional[datetime],
        receipt_date: Optional[datetime],
        user_id: Optional[int],
    ) -> None:
        old_status = purchase_request.status
        self.state_machine.validate_transition(old_status, new_status)

        if new_status == PurchaseRequest.RECEIVED and not purchase_request.is_received:
            self._apply_receipt(purchase_request, receipt_date, user_id)
        elif new_status == PurchaseRequest.CANCELLED and not purchase_request.is_cancelled:
            self._release_line_item(purchase_request, user_id)

        purchase_request.status = new_status
        if approved_by is not None:
            purchase_request.approved_by = approved_by
        if approval_date is not None:
            purchase_request.approval_date = approval_date
        purchase_request.touch(user_id)
        db.session.flush()

        logger.info(f"Purchase request {purchase_request.number}: {old_status} -> {new_status}")

    def set_status(
        self,
        *,
        purchase_request_id: int,
        new_status: str,
        approved_by: Optional[str] = None,
        approval_date: Optional[datetime] = None,
        user_id: Optional[int] = None,
    ) -> int:
        """
        Move a purchase request to `new_status`.

        Approver and approval date are only overwritten when supplied. The
        approval date doubles as the receipt date for stock purposes.
        """
        with unit_of_work("set_purchase_status"):
            purchase_request = self._load(purchase_request_id)
            self._transition(
                purchase_request,
                new_status,
                approved_by=approved_by,
                approval_date=approval_date,
                receipt_date=approval_date,
                user_id=user_id,
            )
            return purchase_request.id

    def confirm_receipt(
        self,
        *,
        purchase_request_id: int,
        receipt_date: datetime,
        receiver_name: str,
        invoice_number: str,
        user_id: Optional[int] = None,
    ) -> int:
        """Record delivery details and receive the purchase; the receipt date is stamped as last purchase"""
        with unit_of_work("confirm_purchase_receipt"):
            purchase_request = self._load(purchase_request_id)
            self.state_machine.validate_transition(purchase_request.status, PurchaseRequest.RECEIVED)

            # delivery details belong to the first receipt
            if not purchase_request.is_received:
                purchase_request.delivery_date = receipt_date
                purchase_request.receiver_name = receiver_name
                purchase_request.invoice_number = invoice_number

            self._transition(
                purchase_request,
                PurchaseRequest.RECEIVED,
                approved_by=None,
                approval_date=None,
                receipt_date=receipt_date,
                user_id=user_id,
            )
            return purchase_request.id
