from fleet_maintenance.data.core.user_created_base import UserCreatedBase
from fleet_maintenance import db


class MaintenanceRecord(UserCreatedBase):
    """Vehicle maintenance history entry, derived from finished service orders"""
    __tablename__ = 'maintenance_records'

    # Types
    PREVENTIVE = 'preventive'
    CORRECTIVE = 'corrective'
    INSPECTION = 'inspection'
    TYPES = (PREVENTIVE, CORRECTIVE, INSPECTION)

    vehicle_id = db.Column(db.Integer, db.ForeignKey('vehicles.id'), nullable=False)
    type = db.Column(db.String(20), nullable=False)
    description = db.Column(db.Text, nullable=False)
    cost = db.Column(db.Numeric(10, 2), nullable=True)
    mileage = db.Column(db.Integer, nullable=False, default=0)
    start_date = db.Column(db.DateTime, nullable=False)
    end_date = db.Column(db.DateTime, nullable=True)
    provider = db.Column(db.String(200), nullable=True)
    mechanic = db.Column(db.String(200), nullable=True)

    # Relationships
    vehicle = db.relationship('Vehicle', back_populates='maintenance_records')

    def __repr__(self):
        return f'<MaintenanceRecord {self.id}: Vehicle {self.vehicle_id} {self.type}>'
