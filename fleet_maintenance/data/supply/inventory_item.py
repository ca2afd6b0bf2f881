from fleet_maintenance.data.core.user_created_base import UserCreatedBase
from fleet_maintenance import db

# this class defines a stocked part and its on-hand quantity
# quantity changes caused by service orders and purchases go through the
# stock ledger in the business layer; direct edits are plain column writes


class InventoryItem(UserCreatedBase):
    __tablename__ = 'inventory_items'

    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    code = db.Column(db.String(100), nullable=True)
    manufacturer_code = db.Column(db.String(100), nullable=True)
    observations = db.Column(db.Text, nullable=True)
    category = db.Column(db.String(100), nullable=True)
    unit = db.Column(db.String(20), nullable=False, default='un')

    # Quantities and Costs
    quantity = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    min_quantity = db.Column(db.Numeric(10, 2), nullable=True)
    max_quantity = db.Column(db.Numeric(10, 2), nullable=True)
    unit_cost = db.Column(db.Numeric(10, 2), nullable=True)  # None means unknown/free

    location = db.Column(db.String(200), nullable=True)
    supplier_id = db.Column(db.Integer, db.ForeignKey('suppliers.id'), nullable=True)
    last_purchase = db.Column(db.DateTime, nullable=True)

    # Optimistic concurrency
    version_id = db.Column(db.Integer, nullable=False)

    __mapper_args__ = {'version_id_col': version_id}

    # Relationships
    supplier = db.relationship('Supplier', back_populates='inventory_items')
    service_order_items = db.relationship('ServiceOrderItem', back_populates='inventory_item', lazy='dynamic')
    purchase_requests = db.relationship('PurchaseRequest', back_populates='inventory_item', lazy='dynamic')

    def __repr__(self):
        return f'<InventoryItem {self.id}: {self.name} Qty {self.quantity}>'

    @property
    def is_low_stock(self):
        if self.min_quantity is None:
            return False
        return (self.quantity or 0) <= self.min_quantity
