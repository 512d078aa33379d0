#!/usr/bin/env python3
"""
Cart store tests: merge-on-add, quantity validation, idempotent removal,
derived totals and checkout
"""
import sys
import os
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from decimal import Decimal
from unittest.mock import patch

from storefront import db
from storefront.errors import EmptyOrder, InvalidReference, NotFound, ValidationError
from storefront.models import CartItem, Order, OrderItem
from storefront.schemas import CustomerDetails
from storefront.services.cart_store import CartStore
from storefront.services.order_store import OrderStore
from testing_support import StorefrontTestCase


class TestCartStore(StorefrontTestCase):

    def setUp(self):
        super().setUp()
        self.cart = CartStore()

    def rows_for(self, cart_id, product_id):
        return CartItem.query.filter_by(cart_id=cart_id, product_id=product_id).all()

    def test_unknown_cart_is_empty(self):
        self.assertEqual(self.cart.get_cart_items('nobody'), [])

    def test_add_then_add_again_merges_into_one_row(self):
        first = self.cart.add_item('cartA', self.shirt.id, 2)
        self.assertEqual(first.quantity, 2)

        second = self.cart.add_item('cartA', self.shirt.id, 3)
        self.assertEqual(second.id, first.id)
        self.assertEqual(second.quantity, 5)
        self.assertEqual(len(self.rows_for('cartA', self.shirt.id)), 1)

    def test_same_product_in_different_carts_is_separate(self):
        self.cart.add_item('cartA', self.shirt.id, 1)
        self.cart.add_item('cartB', self.shirt.id, 4)
        self.assertEqual([item.quantity for item in self.cart.get_cart_items('cartA')], [1])
        self.assertEqual([item.quantity for item in self.cart.get_cart_items('cartB')], [4])

    def test_add_defaults_to_quantity_one(self):
        item = self.cart.add_item('cartA', self.scarf.id)
        self.assertEqual(item.quantity, 1)

    def test_add_rejects_unknown_product(self):
        with self.assertRaises(InvalidReference):
            self.cart.add_item('cartA', 9999, 1)
        self.assertEqual(CartItem.query.count(), 0)

    def test_add_rejects_non_positive_quantity(self):
        for quantity in (0, -2, True, 1.5):
            with self.subTest(quantity=quantity):
                with self.assertRaises(ValidationError):
                    self.cart.add_item('cartA', self.shirt.id, quantity)
        self.assertEqual(CartItem.query.count(), 0)

    def test_concurrent_insert_falls_back_to_merge(self):
        existing = self.cart.add_item('cartA', self.shirt.id, 2)
        real_increment = CartStore._increment
        calls = []

        def stale_then_real(store, cart_id, product_id, quantity):
            calls.append(quantity)
            if len(calls) == 1:
                return None
            return real_increment(store, cart_id, product_id, quantity)

        with patch.object(CartStore, '_increment', stale_then_real):
            merged = self.cart.add_item('cartA', self.shirt.id, 3)

        self.assertEqual(len(calls), 2)
        self.assertEqual(merged.id, existing.id)
        self.assertEqual(merged.quantity, 5)
        self.assertEqual(len(self.rows_for('cartA', self.shirt.id)), 1)

    def test_update_quantity_overwrites(self):
        item = self.cart.add_item('cartA', self.shirt.id, 2)
        updated = self.cart.update_quantity(item.id, 7)
        self.assertEqual(updated.quantity, 7)

    def test_update_quantity_rejects_non_positive_without_change(self):
        item = self.cart.add_item('cartA', self.shirt.id, 2)
        for quantity in (0, -1):
            with self.subTest(quantity=quantity):
                with self.assertRaises(ValidationError):
                    self.cart.update_quantity(item.id, quantity)
        self.assertEqual(db.session.get(CartItem, item.id).quantity, 2)

    def test_update_quantity_missing_item(self):
        with self.assertRaises(NotFound):
            self.cart.update_quantity(12345, 1)

    def test_remove_item_is_idempotent(self):
        item = self.cart.add_item('cartA', self.shirt.id, 2)
        self.cart.add_item('cartA', self.scarf.id, 1)

        self.assertTrue(self.cart.remove_item(item.id))
        after_first = [(i.product_id, i.quantity) for i in self.cart.get_cart_items('cartA')]
        self.assertFalse(self.cart.remove_item(item.id))
        after_second = [(i.product_id, i.quantity) for i in self.cart.get_cart_items('cartA')]

        self.assertEqual(after_first, [(self.scarf.id, 1)])
        self.assertEqual(after_first, after_second)

    def test_clear_cart_is_idempotent_and_scoped(self):
        self.cart.add_item('cartA', self.shirt.id, 2)
        self.cart.add_item('cartA', self.scarf.id, 1)
        self.cart.add_item('cartB', self.scarf.id, 1)

        self.assertEqual(self.cart.clear_cart('cartA'), 2)
        self.assertEqual(self.cart.clear_cart('cartA'), 0)
        self.assertEqual(self.cart.get_cart_items('cartA'), [])
        self.assertEqual(len(self.cart.get_cart_items('cartB')), 1)

    def test_summary_uses_discount_price_and_tax_rate(self):
        self.cart.add_item('cartA', self.shirt.id, 2)   # 2 x 29.99 (discounted)
        self.cart.add_item('cartA', self.scarf.id, 1)   # 1 x 19.99

        summary = self.cart.summarize('cartA')
        self.assertEqual(summary.item_count, 3)
        self.assertEqual(summary.cart_total, Decimal('79.97'))
        self.assertEqual(summary.tax_amount, Decimal('6.40'))
        self.assertEqual(summary.final_total, Decimal('86.37'))
        self.assertEqual(summary.to_dict()['finalTotal'], 86.37)

    def test_summary_of_empty_cart(self):
        summary = self.cart.summarize('empty')
        self.assertEqual(summary.item_count, 0)
        self.assertEqual(summary.final_total, Decimal('0.00'))

    def test_checkout_snapshots_prices_and_clears_cart(self):
        self.cart.add_item('cartA', self.shirt.id, 2)
        self.cart.add_item('cartA', self.scarf.id, 1)
        customer = CustomerDetails(customer_name='Ann', customer_email='a@b.com', customer_phone='555-0100')

        order = self.cart.checkout('cartA', customer)

        self.assertEqual(self.cart.get_cart_items('cartA'), [])
        fetched = OrderStore().get_order(order.id)
        self.assertEqual(fetched.status, 'pending')
        self.assertEqual(fetched.total_amount, Decimal('86.37'))
        self.assertEqual(
            [(item.product_id, item.quantity, item.price) for item in fetched.items],
            [(self.shirt.id, 2, Decimal('29.99')), (self.scarf.id, 1, Decimal('19.99'))]
        )

    def test_checkout_of_empty_cart_creates_nothing(self):
        customer = CustomerDetails(customer_name='Ann', customer_email='a@b.com', customer_phone='555-0100')
        with self.assertRaises(EmptyOrder):
            self.cart.checkout('cartA', customer)
        self.assertEqual(Order.query.count(), 0)
        self.assertEqual(OrderItem.query.count(), 0)
