from datetime import datetime
from enum import Enum

from storefront import db
from storefront.models.money import money_json


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES

    @property
    def next_status(self):
        """Canonical forward successor, None for terminal statuses"""
        return FORWARD_FLOW.get(self)

    def can_transition_to(self, new_status: 'OrderStatus') -> bool:
        if self.is_terminal or new_status == self:
            return False
        if new_status == OrderStatus.CANCELLED:
            return True
        return FORWARD_FLOW.get(self) == new_status


FORWARD_FLOW = {
    OrderStatus.PENDING: OrderStatus.PROCESSING,
    OrderStatus.PROCESSING: OrderStatus.SHIPPED,
    OrderStatus.SHIPPED: OrderStatus.DELIVERED,
}

TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})


class Order(db.Model):
    __tablename__ = 'orders'

    id = db.Column(db.Integer, primary_key=True)
    customer_name = db.Column(db.String(200), nullable=False)
    customer_email = db.Column(db.String(200), nullable=False)
    customer_phone = db.Column(db.String(50), nullable=False)
    total_amount = db.Column(db.Numeric(10, 2), nullable=False)
    status = db.Column(db.String(20), nullable=False, default=OrderStatus.PENDING.value, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    items = db.relationship(
        'OrderItem',
        backref='order',
        lazy=True,
        order_by='OrderItem.id',
        cascade='all, delete-orphan'
    )

    @property
    def order_status(self) -> OrderStatus:
        return OrderStatus(self.status)

    def to_dict(self, include_items=False):
        data = {
            'id': self.id,
            'customerName': self.customer_name,
            'customerEmail': self.customer_email,
            'customerPhone': self.customer_phone,
            'totalAmount': money_json(self.total_amount),
            'status': self.status,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
        if include_items:
            data['items'] = [item.to_dict(include_product=True) for item in self.items]
        return data

    def __repr__(self):
        return f'<Order {self.id} {self.status}>'


class OrderItem(db.Model):
    __tablename__ = 'order_items'
    __table_args__ = (
        db.CheckConstraint('quantity >= 1', name='ck_order_items_quantity_positive'),
    )

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey('orders.id'), nullable=False, index=True)
    product_id = db.Column(db.Integer, db.ForeignKey('products.id'), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    # Unit price charged when the order was placed; never recomputed from Product
    price = db.Column(db.Numeric(10, 2), nullable=False)

    @property
    def line_total(self):
        return self.price * self.quantity

    def to_dict(self, include_product=False):
        data = {
            'id': self.id,
            'orderId': self.order_id,
            'productId': self.product_id,
            'quantity': self.quantity,
            'price': money_json(self.price),
        }
        if include_product:
            data['product'] = self.product.to_dict()
        return data
