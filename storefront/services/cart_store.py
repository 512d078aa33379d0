"""
Cart store: per-session line items and the totals derived from them
"""
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional

from flask import current_app
from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from storefront import db
from storefront.errors import EmptyOrder, InvalidReference, NotFound, ValidationError
from storefront.models import CartItem, Order, Product
from storefront.models.money import money_json, to_money
from storefront.schemas import CustomerDetails, OrderDraft, OrderItemDraft
from storefront.services.order_store import DEFAULT_TAX_RATE, OrderStore

logger = logging.getLogger(__name__)


@dataclass
class CartSummary:
    """Totals derived from a cart's current contents; never persisted"""
    item_count: int
    cart_total: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    final_total: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            'itemCount': self.item_count,
            'cartTotal': money_json(self.cart_total),
            'taxRate': float(self.tax_rate),
            'taxAmount': money_json(self.tax_amount),
            'finalTotal': money_json(self.final_total)
        }


def check_quantity(quantity) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValidationError(
            "Invalid quantity",
            errors=[{'field': 'quantity', 'message': 'must be a positive integer'}]
        )
    return quantity


class CartStore:
    """Line items grouped by an opaque, client-held cart id"""

    def __init__(self, tax_rate: Optional[Decimal] = None):
        if tax_rate is None:
            tax_rate = current_app.config.get('TAX_RATE', DEFAULT_TAX_RATE)
        self.tax_rate = Decimal(str(tax_rate))

    def get_cart_items(self, cart_id: str) -> List[CartItem]:
        """Items of a cart with their products; an unknown cart is simply empty"""
        statement = (
            select(CartItem)
            .where(CartItem.cart_id == cart_id)
            .options(selectinload(CartItem.product))
            .order_by(CartItem.id)
        )
        return db.session.scalars(statement).all()

    def add_item(self, cart_id: str, product_id: int, quantity: int = 1) -> CartItem:
        """
        Add a product to a cart, merging into the existing line if there is one

        The increment is a single UPDATE; only when no row matched is a new
        row inserted, inside a savepoint so that a concurrent insert of the
        same (cart_id, product_id) turns into another increment instead of a
        duplicate row.
        """
        check_quantity(quantity)
        product = db.session.get(Product, product_id)
        if product is None:
            raise InvalidReference(
                "Invalid cart item data",
                errors=[{'field': 'productId', 'message': f"unknown product id {product_id}"}]
            )

        item = self._increment(cart_id, product_id, quantity)
        if item is None:
            try:
                with db.session.begin_nested():
                    item = CartItem(cart_id=cart_id, product_id=product_id, quantity=quantity)
                    db.session.add(item)
                logger.info('New cart item created', extra={
                    'event_type': 'cart_item_created',
                    'cart_id': cart_id,
                    'product_id': product_id
                })
            except IntegrityError:
                logger.info('Concurrent insert detected, merging quantity', extra={
                    'event_type': 'cart_item_merge_retry',
                    'cart_id': cart_id,
                    'product_id': product_id
                })
                item = self._increment(cart_id, product_id, quantity)
                if item is None:
                    raise

        db.session.commit()

        logger.info(f'Product {product_id} added to cart {cart_id}, quantity now {item.quantity}', extra={
            'event_type': 'cart_add',
            'cart_id': cart_id,
            'product_id': product_id,
            'product_name': product.name,
            'quantity': quantity,
            'price': float(product.effective_price)
        })
        return item

    def update_quantity(self, item_id: int, quantity: int) -> CartItem:
        check_quantity(quantity)
        item = db.session.get(CartItem, item_id)
        if item is None:
            raise NotFound("Cart item not found")

        old_quantity = item.quantity
        item.quantity = quantity
        db.session.commit()

        logger.info(f'Updated cart item quantity from {old_quantity} to {quantity}', extra={
            'event_type': 'cart_update',
            'cart_id': item.cart_id,
            'cart_item_id': item.id
        })
        return item

    def remove_item(self, item_id: int) -> bool:
        """Delete one line item. Removing an unknown id is not an error."""
        result = db.session.execute(delete(CartItem).where(CartItem.id == item_id))
        db.session.commit()
        removed = result.rowcount > 0
        logger.info(f'Cart item {item_id} removed' if removed else f'Cart item {item_id} already absent', extra={
            'event_type': 'cart_remove',
            'cart_item_id': item_id
        })
        return removed

    def clear_cart(self, cart_id: str) -> int:
        count = self._delete_cart_rows(cart_id)
        db.session.commit()
        logger.info(f'Cart {cart_id} cleared ({count} items)', extra={
            'event_type': 'cart_clear',
            'cart_id': cart_id,
            'item_count': count
        })
        return count

    def summarize(self, cart_id: str) -> CartSummary:
        return self.summarize_items(self.get_cart_items(cart_id))

    def summarize_items(self, items: List[CartItem]) -> CartSummary:
        cart_total = sum((item.line_total for item in items), Decimal('0'))
        cart_total = to_money(cart_total)
        tax_amount = to_money(cart_total * self.tax_rate)
        return CartSummary(
            item_count=sum(item.quantity for item in items),
            cart_total=cart_total,
            tax_rate=self.tax_rate,
            tax_amount=tax_amount,
            final_total=cart_total + tax_amount
        )

    def checkout(self, cart_id: str, customer: CustomerDetails) -> Order:
        """
        Convert the cart into an order and empty it, in one transaction

        Each line's unit price is snapshotted from the product's current
        effective price; the order total is the cart's final total.
        """
        items = self.get_cart_items(cart_id)
        if not items:
            logger.warning('Checkout attempted with empty cart', extra={
                'event_type': 'checkout_error',
                'cart_id': cart_id,
                'error': 'empty_cart'
            })
            raise EmptyOrder("Cart is empty")

        summary = self.summarize_items(items)
        draft = OrderDraft(
            customer_name=customer.customer_name,
            customer_email=customer.customer_email,
            customer_phone=customer.customer_phone,
            total_amount=summary.final_total
        )
        line_items = [
            OrderItemDraft(
                product_id=item.product_id,
                quantity=item.quantity,
                price=to_money(item.product.effective_price)
            )
            for item in items
        ]

        try:
            order = OrderStore(tax_rate=self.tax_rate).create_order(draft, line_items, commit=False)
            self._delete_cart_rows(cart_id)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        logger.info(f'Checkout completed for cart {cart_id}: order {order.id}', extra={
            'event_type': 'checkout_success',
            'cart_id': cart_id,
            'order_id': order.id,
            'item_count': summary.item_count,
            'total_amount': float(summary.final_total)
        })
        return order

    def _increment(self, cart_id: str, product_id: int, quantity: int) -> Optional[CartItem]:
        result = db.session.execute(
            update(CartItem)
            .where(CartItem.cart_id == cart_id, CartItem.product_id == product_id)
            .values(quantity=CartItem.quantity + quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return None
        statement = (
            select(CartItem)
            .where(CartItem.cart_id == cart_id, CartItem.product_id == product_id)
            .execution_options(populate_existing=True)
        )
        return db.session.scalars(statement).one()

    def _delete_cart_rows(self, cart_id: str) -> int:
        result = db.session.execute(delete(CartItem).where(CartItem.cart_id == cart_id))
        return result.rowcount
