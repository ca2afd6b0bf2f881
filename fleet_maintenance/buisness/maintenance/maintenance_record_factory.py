"""
MaintenanceRecordFactory

Derives vehicle maintenance history entries from finished service orders.
A record is inserted only when the vehicle has no record with the same
description starting within one second of the order's start date, so setting
a terminal status repeatedly never produces duplicates.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from fleet_maintenance import db
from fleet_maintenance.buisness.core.numeric import to_decimal
from fleet_maintenance.data.maintenance.maintenance_record import MaintenanceRecord
from fleet_maintenance.data.maintenance.service_order import ServiceOrder
from fleet_maintenance.logger import get_logger

logger = get_logger("fleet_maintenance.buisness.maintenance.maintenance_record_factory")

DUPLICATE_START_TOLERANCE = timedelta(milliseconds=1000)

# Service order type -> maintenance record type; predictive work is recorded as preventive
TYPE_MAPPING = {
    ServiceOrder.PREVENTIVE: MaintenanceRecord.PREVENTIVE,
    ServiceOrder.CORRECTIVE: MaintenanceRecord.CORRECTIVE,
    ServiceOrder.PREDICTIVE: MaintenanceRecord.PREVENTIVE,
}


class MaintenanceRecordFactory:
    """Builds and inserts derived maintenance records"""

    @staticmethod
    def map_type(service_order_type: Optional[str]) -> str:
        return TYPE_MAPPING.get(service_order_type, MaintenanceRecord.CORRECTIVE)

    @staticmethod
    def _mileage(service_order: ServiceOrder) -> int:
        return int(to_decimal(service_order.current_mileage))

    @staticmethod
    def build_candidate(
        service_order: ServiceOrder,
        validation_date: Optional[datetime] = None,
        user_id: Optional[int] = None,
    ) -> MaintenanceRecord:
        """Maintenance record for a completed or cancelled order (not added to the session)"""
        end_date = None
        if service_order.is_completed:
            end_date = validation_date or datetime.utcnow()

        return MaintenanceRecord(
            vehicle_id=service_order.vehicle_id,
            type=MaintenanceRecordFactory.map_type(service_order.type),
            description=service_order.description,
            cost=service_order.estimated_cost,
            mileage=MaintenanceRecordFactory._mileage(service_order),
            start_date=service_order.start_date,
            end_date=end_date,
            mechanic=service_order.mechanic,
            provider=None,
            created_by_id=user_id,
        )

    @staticmethod
    def find_duplicate(candidate: MaintenanceRecord) -> Optional[MaintenanceRecord]:
        existing = MaintenanceRecord.query.filter_by(vehicle_id=candidate.vehicle_id).all()
        for record in existing:
            if record.description != candidate.description:
                continue
            if record.start_date is None or candidate.start_date is None:
                continue
            if abs(record.start_date - candidate.start_date) < DUPLICATE_START_TOLERANCE:
                return record
        return None

    @staticmethod
    def create_for_service_order(
        service_order: ServiceOrder,
        validation_date: Optional[datetime] = None,
        user_id: Optional[int] = None,
    ) -> Optional[MaintenanceRecord]:
        """
        Insert the derived record unless an equivalent one exists.

        Returns:
            The new record, or None when a duplicate was found
        """
        candidate = MaintenanceRecordFactory.build_candidate(service_order, validation_date, user_id)

        duplicate = MaintenanceRecordFactory.find_duplicate(candidate)
        if duplicate is not None:
            logger.info(
                f"Maintenance record {duplicate.id} already covers service order {service_order.number}; "
                f"skipping creation"
            )
            return None

        db.session.add(candidate)
        db.session.flush()
        logger.info(f"Created maintenance record {candidate.id} from service order {service_order.number}")
        return candidate
