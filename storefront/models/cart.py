from datetime import datetime

from storefront import db


class CartItem(db.Model):
    __tablename__ = 'cart_items'
    __table_args__ = (
        # One row per product per cart; add-to-cart merges into it
        db.UniqueConstraint('cart_id', 'product_id', name='uq_cart_items_cart_product'),
        db.CheckConstraint('quantity >= 1', name='ck_cart_items_quantity_positive'),
    )

    id = db.Column(db.Integer, primary_key=True)
    cart_id = db.Column(db.String(100), nullable=False, index=True)
    product_id = db.Column(db.Integer, db.ForeignKey('products.id'), nullable=False)
    quantity = db.Column(db.Integer, nullable=False, default=1)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    @property
    def line_total(self):
        return self.product.effective_price * self.quantity

    def to_dict(self, include_product=False):
        data = {
            'id': self.id,
            'cartId': self.cart_id,
            'productId': self.product_id,
            'quantity': self.quantity,
        }
        if include_product:
            data['product'] = self.product.to_dict()
        return data

    def __repr__(self):
        return f'<CartItem {self.cart_id}:{self.product_id} x{self.quantity}>'
