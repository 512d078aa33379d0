from storefront.models.category import Category
from storefront.models.product import Product, StockLevel
from storefront.models.cart import CartItem
from storefront.models.order import Order, OrderItem, OrderStatus

__all__ = ['Category', 'Product', 'StockLevel', 'CartItem', 'Order', 'OrderItem', 'OrderStatus']
