from fleet_maintenance.data.core.user_created_base import UserCreatedBase
from fleet_maintenance import db
from datetime import datetime


class ServiceOrder(UserCreatedBase):
    """Service order (OS) for a vehicle - the estimated cost is derived from its line items"""
    __tablename__ = 'service_orders'

    # Statuses
    OPEN = 'open'
    IN_PROGRESS = 'in_progress'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'
    STATUSES = (OPEN, IN_PROGRESS, COMPLETED, CANCELLED)

    # Types
    PREVENTIVE = 'preventive'
    CORRECTIVE = 'corrective'
    PREDICTIVE = 'predictive'
    TYPES = (PREVENTIVE, CORRECTIVE, PREDICTIVE)

    PRIORITIES = ('low', 'medium', 'high', 'urgent')

    # Basic Fields
    number = db.Column(db.String(20), unique=True, nullable=False)
    vehicle_id = db.Column(db.Integer, db.ForeignKey('vehicles.id'), nullable=False)
    driver_id = db.Column(db.Integer, db.ForeignKey('drivers.id'), nullable=True)
    description = db.Column(db.Text, nullable=False)
    status = db.Column(db.String(20), nullable=False, default=OPEN)
    priority = db.Column(db.String(20), nullable=False, default='medium')
    type = db.Column(db.String(20), nullable=False, default=CORRECTIVE)
    current_mileage = db.Column(db.Numeric(10, 2), nullable=True)
    mechanic = db.Column(db.String(200), nullable=True)

    # Costs
    estimated_cost = db.Column(db.Numeric(10, 2), nullable=True)

    # Validation
    validated_by = db.Column(db.String(200), nullable=True)
    validation_date = db.Column(db.DateTime, nullable=True)

    # Dates
    scheduled_date = db.Column(db.DateTime, nullable=True)
    start_date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    end_date = db.Column(db.DateTime, nullable=True)

    # Relationships
    vehicle = db.relationship('Vehicle', back_populates='service_orders')
    driver = db.relationship('Driver')
    items = db.relationship(
        'ServiceOrderItem',
        back_populates='service_order',
        lazy='dynamic',
        cascade='all, delete-orphan'
    )

    def __repr__(self):
        return f'<ServiceOrder {self.number}: {self.status}>'

    # Properties
    @property
    def is_completed(self):
        return self.status == self.COMPLETED

    @property
    def is_terminal(self):
        return self.status in (self.COMPLETED, self.CANCELLED)

    @property
    def items_count(self):
        return self.items.count()
