#!/usr/bin/env python3
"""
Catalog read path tests
"""
import sys
import os
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from storefront.errors import NotFound, ValidationError
from storefront.services.catalog import CatalogStore
from testing_support import StorefrontTestCase


class TestCatalogStore(StorefrontTestCase):

    def setUp(self):
        super().setUp()
        self.catalog = CatalogStore()

    def test_list_categories_in_insertion_order(self):
        slugs = [category.slug for category in self.catalog.list_categories()]
        self.assertEqual(slugs, ['clothing', 'kitchen'])

    def test_get_category_by_slug(self):
        self.assertEqual(self.catalog.get_category_by_slug('kitchen').name, 'Kitchen')
        with self.assertRaises(NotFound):
            self.catalog.get_category_by_slug('garden')

    def test_products_by_category(self):
        products = self.catalog.list_products_by_category(self.kitchen.id)
        self.assertEqual([p.slug for p in products], ['cooking-pot-set', 'kitchen-knife-set'])
        self.assertEqual(self.catalog.list_products_by_category(999), [])

    def test_get_product_by_slug(self):
        self.assertEqual(self.catalog.get_product_by_slug('wool-scarf').id, self.scarf.id)
        with self.assertRaises(NotFound):
            self.catalog.get_product_by_slug('missing')

    def test_search_is_case_insensitive_over_name_and_description(self):
        by_description = self.catalog.search_products('WINTER')
        self.assertEqual([p.id for p in by_description], [self.scarf.id])

        by_name = self.catalog.search_products('kitchen')
        self.assertEqual([p.id for p in by_name], [self.knife.id])

        self.assertEqual(self.catalog.search_products('no-such-thing'), [])

    def test_search_treats_like_wildcards_literally(self):
        self.assertEqual(self.catalog.search_products('%'), [])
        self.assertEqual(self.catalog.search_products('_'), [])
        self.assertEqual(self.catalog.search_products('50%'), [])

        sale = self.add_product('Summer Sale Tote', '20.00', description='Now 50% off, limited_run')
        self.assertEqual([p.id for p in self.catalog.search_products('50%')], [sale.id])
        self.assertEqual([p.id for p in self.catalog.search_products('%')], [sale.id])
        self.assertEqual([p.id for p in self.catalog.search_products('limited_run')], [sale.id])
        self.assertEqual(self.catalog.search_products('5_%'), [])

    def test_search_requires_query(self):
        with self.assertRaises(ValidationError):
            self.catalog.search_products('   ')

    def test_featured_products_are_in_stock_and_discounted(self):
        featured = self.catalog.list_featured_products()
        self.assertEqual([p.id for p in featured], [self.shirt.id, self.pot.id])

    def test_featured_products_respect_limit(self):
        featured = CatalogStore(featured_limit=1).list_featured_products()
        self.assertEqual([p.id for p in featured], [self.shirt.id])

    def test_new_products(self):
        self.assertEqual([p.id for p in self.catalog.list_new_products()], [self.scarf.id, self.knife.id])
        self.assertEqual([p.id for p in self.catalog.list_new_products(limit=1)], [self.scarf.id])
        with self.assertRaises(ValidationError):
            self.catalog.list_new_products(limit=0)

    def test_clearance_sort_orders(self):
        expected = {
            'discount': [self.shirt.id, self.pot.id],
            'price-low-high': [self.shirt.id, self.pot.id],
            'price-high-low': [self.pot.id, self.shirt.id],
            'name-a-z': [self.shirt.id, self.pot.id],
            'name-z-a': [self.pot.id, self.shirt.id],
        }
        for sort, ids in expected.items():
            with self.subTest(sort=sort):
                products = self.catalog.list_discounted_products(sort=sort)
                self.assertEqual([p.id for p in products], ids)

    def test_clearance_rejects_unknown_sort(self):
        with self.assertRaises(ValidationError):
            self.catalog.list_discounted_products(sort='random')
