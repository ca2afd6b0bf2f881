from fleet_maintenance.data.core.user_created_base import UserCreatedBase
from fleet_maintenance import db
from datetime import datetime


class PurchaseRequest(UserCreatedBase):
    """Purchase request (PR) for one inventory item, optionally sourcing a service order need"""
    __tablename__ = 'purchase_requests'

    # Statuses
    PENDING = 'pending'
    APPROVED = 'approved'
    RECEIVED = 'received'
    CANCELLED = 'cancelled'
    STATUSES = (PENDING, APPROVED, RECEIVED, CANCELLED)

    URGENCIES = ('low', 'medium', 'high', 'urgent')

    # Basic Fields
    number = db.Column(db.String(20), unique=True, nullable=False)
    status = db.Column(db.String(20), nullable=False, default=PENDING)
    urgency = db.Column(db.String(20), nullable=False, default='medium')

    # Foreign Keys
    inventory_item_id = db.Column(db.Integer, db.ForeignKey('inventory_items.id'), nullable=True)
    service_order_id = db.Column(db.Integer, db.ForeignKey('service_orders.id'), nullable=True)
    supplier_id = db.Column(db.Integer, db.ForeignKey('suppliers.id'), nullable=True)

    # Quantities and Costs
    quantity = db.Column(db.Numeric(10, 2), nullable=True)
    total_amount = db.Column(db.Numeric(10, 2), nullable=False, default=0)  # snapshot at create/update

    # Dates and receipt
    purchase_date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    delivery_date = db.Column(db.DateTime, nullable=True)
    receiver_name = db.Column(db.String(200), nullable=True)
    invoice_number = db.Column(db.String(100), nullable=True)

    # Approval
    approved_by = db.Column(db.String(200), nullable=True)
    approval_date = db.Column(db.DateTime, nullable=True)

    notes = db.Column(db.Text, nullable=True)

    # Optimistic concurrency
    version_id = db.Column(db.Integer, nullable=False)

    __mapper_args__ = {'version_id_col': version_id}

    # Relationships
    inventory_item = db.relationship('InventoryItem', back_populates='purchase_requests')
    service_order = db.relationship('ServiceOrder')
    supplier = db.relationship('Supplier')
    linked_items = db.relationship('ServiceOrderItem', back_populates='purchase_request', lazy='dynamic')

    def __repr__(self):
        return f'<PurchaseRequest {self.number}: {self.status}>'

    # Properties
    @property
    def is_received(self):
        return self.status == self.RECEIVED

    @property
    def is_cancelled(self):
        return self.status == self.CANCELLED
