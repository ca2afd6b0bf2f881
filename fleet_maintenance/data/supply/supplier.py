from fleet_maintenance.data.core.user_created_base import UserCreatedBase
from fleet_maintenance import db


class Supplier(UserCreatedBase):
    __tablename__ = 'suppliers'

    name = db.Column(db.String(200), nullable=False)
    tax_id = db.Column(db.String(30), unique=True, nullable=True)
    phone = db.Column(db.String(30), nullable=True)
    email = db.Column(db.String(120), nullable=True)
    address = db.Column(db.Text, nullable=True)
    contact_person = db.Column(db.String(200), nullable=True)
    category = db.Column(db.String(100), nullable=True)
    payment_terms = db.Column(db.String(100), nullable=True)
    delivery_days = db.Column(db.Integer, nullable=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    # Relationships
    inventory_items = db.relationship('InventoryItem', back_populates='supplier', lazy='dynamic')

    def __repr__(self):
        return f'<Supplier {self.name}>'
