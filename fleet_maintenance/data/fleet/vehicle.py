from fleet_maintenance.data.core.user_created_base import UserCreatedBase
from fleet_maintenance import db


class Vehicle(UserCreatedBase):
    __tablename__ = 'vehicles'

    # Statuses
    AVAILABLE = 'available'
    IN_USE = 'in_use'
    IN_MAINTENANCE = 'maintenance'
    INACTIVE = 'inactive'

    plate = db.Column(db.String(20), unique=True, nullable=False)
    brand = db.Column(db.String(100), nullable=False)
    model = db.Column(db.String(100), nullable=False)
    year = db.Column(db.Integer, nullable=False)
    color = db.Column(db.String(50), nullable=True)
    category = db.Column(db.String(100), nullable=True)
    chassis = db.Column(db.String(50), unique=True, nullable=True)
    status = db.Column(db.String(20), nullable=False, default=AVAILABLE)
    mileage = db.Column(db.Integer, nullable=False, default=0)
    fuel_type = db.Column(db.String(50), nullable=True)
    current_driver_id = db.Column(db.Integer, db.ForeignKey('drivers.id'), nullable=True)

    # Relationships
    current_driver = db.relationship('Driver', foreign_keys=[current_driver_id])
    service_orders = db.relationship('ServiceOrder', back_populates='vehicle', lazy='dynamic')
    maintenance_records = db.relationship('MaintenanceRecord', back_populates='vehicle', lazy='dynamic')

    def __repr__(self):
        return f'<Vehicle {self.plate}: {self.brand} {self.model}>'
