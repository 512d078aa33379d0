"""
Order store: immutable orders with price-snapshot line items, and the
order status workflow
"""
import logging
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Union

from flask import current_app
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from storefront import db
from storefront.errors import EmptyOrder, InvalidReference, InvalidTransition, NotFound, ValidationError
from storefront.models import Order, OrderItem, OrderStatus, Product
from storefront.models.money import to_money
from storefront.monitoring import record_custom_event
from storefront.schemas import OrderDraft, OrderItemDraft

logger = logging.getLogger(__name__)

DEFAULT_TAX_RATE = Decimal('0.08')


def parse_status(value: Union[str, OrderStatus]) -> OrderStatus:
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(value)
    except ValueError:
        allowed = ', '.join(status.value for status in OrderStatus)
        raise ValidationError(
            "Invalid order status",
            errors=[{'field': 'status', 'message': f"must be one of {allowed}"}]
        )


def next_status(status: Union[str, OrderStatus]) -> Optional[OrderStatus]:
    """Canonical forward successor of a status, None once terminal"""
    return parse_status(status).next_status


def derive_total(items: Iterable[OrderItemDraft], tax_rate: Decimal) -> Decimal:
    """Order total from snapshot prices: subtotal plus tax"""
    subtotal = to_money(sum((to_money(item.price) * item.quantity for item in items), Decimal('0')))
    return subtotal + to_money(subtotal * tax_rate)


class OrderStore:
    """Creates, reads and advances orders"""

    def __init__(self, tax_rate: Optional[Decimal] = None):
        if tax_rate is None:
            tax_rate = current_app.config.get('TAX_RATE', DEFAULT_TAX_RATE)
        self.tax_rate = Decimal(str(tax_rate))

    def create_order(
        self,
        draft: OrderDraft,
        items: Sequence[OrderItemDraft],
        commit: bool = True
    ) -> Order:
        """
        Insert an Order and one OrderItem per input item in one transaction

        Each OrderItem keeps the price supplied by the caller. Either the
        order and all of its items are persisted, or nothing is.

        Args:
            draft (OrderDraft): customer details, optional total and status
            items (Sequence[OrderItemDraft]): line items with snapshot prices
            commit (bool): False leaves the transaction open for the caller

        Returns:
            Order: the created order
        """
        if not items:
            logger.warning("Order rejected: no items", extra={
                'event_type': 'order_rejected',
                'reason': 'empty_order',
                'customer_email': draft.customer_email
            })
            raise EmptyOrder()

        self._check_products_exist(item.product_id for item in items)

        status = parse_status(draft.status) if draft.status is not None else OrderStatus.PENDING
        total = to_money(draft.total_amount) if draft.total_amount is not None else derive_total(items, self.tax_rate)

        order = Order(
            customer_name=draft.customer_name,
            customer_email=draft.customer_email,
            customer_phone=draft.customer_phone,
            total_amount=total,
            status=status.value,
        )
        order.items = [
            OrderItem(product_id=item.product_id, quantity=item.quantity, price=to_money(item.price))
            for item in items
        ]
        db.session.add(order)

        try:
            db.session.flush()
            if commit:
                db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            logger.error("Order creation rolled back", extra={
                'event_type': 'order_create_failed',
                'item_count': len(items)
            })
            raise

        logger.info(f"Order {order.id} created with {len(items)} items, total: {total}", extra={
            'event_type': 'order_created',
            'order_id': order.id,
            'item_count': len(items),
            'total_amount': float(total)
        })
        record_custom_event('OrderCreated', {
            'orderId': order.id,
            'itemCount': len(items),
            'totalAmount': float(total)
        })
        return order

    def get_order(self, order_id: int) -> Order:
        """Order with its items (and their products) in creation order"""
        statement = (
            select(Order)
            .where(Order.id == order_id)
            .options(selectinload(Order.items).selectinload(OrderItem.product))
        )
        order = db.session.scalars(statement).first()
        if order is None:
            raise NotFound("Order not found")
        return order

    def list_orders(self, status: Union[str, OrderStatus, None] = None) -> List[Order]:
        """All orders, newest first, optionally filtered by status"""
        statement = (
            select(Order)
            .options(selectinload(Order.items).selectinload(OrderItem.product))
            .order_by(Order.created_at.desc(), Order.id.desc())
        )
        if status is not None:
            statement = statement.where(Order.status == parse_status(status).value)
        return db.session.scalars(statement).all()

    def update_status(self, order_id: int, new_status: Union[str, OrderStatus]) -> Order:
        """
        Move an order to a new status

        pending -> processing -> shipped -> delivered is the forward path;
        cancelled is reachable from any non-terminal status. Delivered and
        cancelled orders never change again.
        """
        new_status = parse_status(new_status)
        order = db.session.get(Order, order_id)
        if order is None:
            raise NotFound("Order not found")

        current = order.order_status
        if not current.can_transition_to(new_status):
            raise InvalidTransition(
                f"Cannot change order status from {current.value} to {new_status.value}"
            )

        order.status = new_status.value
        db.session.commit()

        logger.info(f"Order {order.id} status changed: {current.value} -> {new_status.value}", extra={
            'event_type': 'order_status_changed',
            'order_id': order.id,
            'from_status': current.value,
            'to_status': new_status.value
        })
        record_custom_event('OrderStatusChanged', {
            'orderId': order.id,
            'fromStatus': current.value,
            'toStatus': new_status.value
        })
        return order

    def _check_products_exist(self, product_ids: Iterable[int]):
        wanted = set(product_ids)
        found = set(db.session.scalars(select(Product.id).where(Product.id.in_(wanted))))
        missing = sorted(wanted - found)
        if missing:
            raise InvalidReference(
                "Order references unknown products",
                errors=[{'field': 'items.productId', 'message': f"unknown product id {product_id}"}
                        for product_id in missing]
            )
