from datetime import datetime
from enum import Enum

from flask import current_app, has_app_context
from sqlalchemy.orm import validates

from storefront import db
from storefront.models.money import money_json, to_money

DEFAULT_LOW_STOCK_THRESHOLD = 5


class StockLevel(Enum):
    IN_STOCK = "In Stock"
    LOW_STOCK = "Low Stock"
    OUT_OF_STOCK = "Out of Stock"

    @classmethod
    def for_quantity(cls, stock: int, low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> 'StockLevel':
        if stock <= 0:
            return cls.OUT_OF_STOCK
        if stock <= low_stock_threshold:
            return cls.LOW_STOCK
        return cls.IN_STOCK


class Product(db.Model):
    __tablename__ = 'products'
    __table_args__ = (
        db.CheckConstraint(
            'discount_price IS NULL OR discount_price < price',
            name='ck_products_discount_below_price'
        ),
        db.CheckConstraint('stock >= 0', name='ck_products_stock_non_negative'),
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), nullable=False, unique=True)
    description = db.Column(db.Text, nullable=False, default='')
    image_url = db.Column(db.String(500))
    price = db.Column(db.Numeric(10, 2), nullable=False)
    discount_price = db.Column(db.Numeric(10, 2))
    category_id = db.Column(db.Integer, db.ForeignKey('categories.id'), nullable=False, index=True)
    # Quantity on hand; in_stock and stock_level are derived from it
    stock = db.Column(db.Integer, nullable=False, default=0)
    is_new = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    order_items = db.relationship('OrderItem', backref='product', lazy=True)
    cart_items = db.relationship('CartItem', backref='product', lazy=True)

    @validates('price', 'discount_price')
    def validate_prices(self, key, value):
        if value is None:
            if key == 'price':
                raise ValueError('price is required')
            return None
        value = to_money(value)
        if value < 0:
            raise ValueError(f'{key} must not be negative')
        price = value if key == 'price' else self.price
        discount = value if key == 'discount_price' else self.discount_price
        if price is not None and discount is not None and to_money(discount) >= to_money(price):
            raise ValueError('discount_price must be less than price')
        return value

    @validates('stock')
    def validate_stock(self, key, value):
        if value is not None and value < 0:
            raise ValueError('stock must not be negative')
        return value

    @property
    def in_stock(self) -> bool:
        return (self.stock or 0) > 0

    @property
    def stock_level(self) -> StockLevel:
        threshold = DEFAULT_LOW_STOCK_THRESHOLD
        if has_app_context():
            threshold = current_app.config.get('LOW_STOCK_THRESHOLD', threshold)
        return StockLevel.for_quantity(self.stock or 0, threshold)

    @property
    def effective_price(self):
        """Unit price charged today: the discount price when one applies"""
        return self.discount_price if self.discount_price is not None else self.price

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'slug': self.slug,
            'description': self.description,
            'imageUrl': self.image_url,
            'price': money_json(self.price),
            'discountPrice': money_json(self.discount_price),
            'effectivePrice': money_json(self.effective_price),
            'categoryId': self.category_id,
            'inStock': self.in_stock,
            'stockLevel': self.stock_level.value,
            'isNew': self.is_new,
        }

    def __repr__(self):
        return f'<Product {self.name}>'
