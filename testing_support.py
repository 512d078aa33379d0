"""
Shared setup for the storefront test modules
"""
import unittest
from decimal import Decimal

from storefront import create_app, db
from storefront.models import Category, Product

TEST_CONFIG = {
    'TESTING': True,
    'SQLALCHEMY_DATABASE_URI': 'sqlite://',
    'TAX_RATE': Decimal('0.08'),
    'FEATURED_LIMIT': 8,
    'LOW_STOCK_THRESHOLD': 5,
    'SEED_ON_STARTUP': False,
}


class StorefrontTestCase(unittest.TestCase):
    """Fresh app, in-memory database and a small catalog per test"""

    def setUp(self):
        self.app = create_app(TEST_CONFIG)
        self.app_context = self.app.app_context()
        self.app_context.push()

        db.create_all()
        self.client = self.app.test_client()

        self.clothing = Category(name='Clothing', slug='clothing', image_url='https://example.com/c.jpg')
        self.kitchen = Category(name='Kitchen', slug='kitchen', image_url='https://example.com/k.jpg')
        db.session.add_all([self.clothing, self.kitchen])
        db.session.flush()

        self.shirt = self.add_product('Blue Linen Shirt', price='49.99', discount_price='29.99', stock=25)
        self.scarf = self.add_product('Wool Scarf', price='19.99', stock=25, is_new=True,
                                      description='Soft wool scarf for the winter.')
        self.pot = self.add_product('Cooking Pot Set', price='89.99', discount_price='69.99', stock=3,
                                    category=self.kitchen)
        self.knife = self.add_product('Kitchen Knife Set', price='149.99', stock=0, is_new=True,
                                      category=self.kitchen)
        db.session.commit()

    def tearDown(self):
        db.session.remove()
        db.drop_all()
        self.app_context.pop()

    def add_product(self, name, price, discount_price=None, stock=10, is_new=False,
                    category=None, description=None):
        slug = name.lower().replace(' ', '-')
        product = Product(
            name=name,
            slug=slug,
            description=description or f'{name} description',
            image_url=f'https://example.com/{slug}.jpg',
            price=price,
            discount_price=discount_price,
            stock=stock,
            is_new=is_new,
            category_id=(category or self.clothing).id
        )
        db.session.add(product)
        db.session.flush()
        return product

    def money(self, value):
        return Decimal(value)
