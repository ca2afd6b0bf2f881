from fleet_maintenance.data.core.user_created_base import UserCreatedBase
from fleet_maintenance import db


class ServiceOrderItem(UserCreatedBase):
    """
    A requirement for a quantity of one inventory item within one service order.

    purchase_request_id is present only while the need is being sourced through
    an open purchase request; it is cleared when that purchase is received.
    """
    __tablename__ = 'service_order_items'

    # Foreign Keys
    service_order_id = db.Column(db.Integer, db.ForeignKey('service_orders.id'), nullable=False)
    inventory_item_id = db.Column(db.Integer, db.ForeignKey('inventory_items.id'), nullable=True)
    purchase_request_id = db.Column(db.Integer, db.ForeignKey('purchase_requests.id'), nullable=True)

    # Line Details
    description = db.Column(db.String(200), nullable=False)
    required_quantity = db.Column(db.Numeric(10, 2), nullable=False)

    # Relationships
    service_order = db.relationship('ServiceOrder', back_populates='items')
    inventory_item = db.relationship('InventoryItem', back_populates='service_order_items')
    purchase_request = db.relationship('PurchaseRequest', back_populates='linked_items')

    def __repr__(self):
        return f'<ServiceOrderItem {self.id}: Item {self.inventory_item_id} x{self.required_quantity}>'

    @property
    def is_awaiting_purchase(self):
        return self.purchase_request_id is not None

    def link_purchase_request(self, purchase_request):
        """Link this need to the purchase request sourcing it"""
        if purchase_request.inventory_item_id != self.inventory_item_id:
            raise ValueError(
                f"Purchase request {purchase_request.id} is for inventory item "
                f"{purchase_request.inventory_item_id}, line item needs {self.inventory_item_id}"
            )
        if purchase_request.service_order_id != self.service_order_id:
            raise ValueError(
                f"Purchase request {purchase_request.id} belongs to service order "
                f"{purchase_request.service_order_id}, line item belongs to {self.service_order_id}"
            )
        self.purchase_request_id = purchase_request.id

    def clear_purchase_request_link(self):
        """Mark the need as sourced"""
        self.purchase_request_id = None
