"""
Sample catalog data and the CLI commands that load it
"""
import logging

import click
from flask import current_app

from storefront import db
from storefront.models import Category, Product

logger = logging.getLogger(__name__)

IMAGE_BASE = 'https://images.unsplash.com'

SAMPLE_CATEGORIES = [
    {'name': 'Clothing', 'slug': 'clothing', 'image_url': f'{IMAGE_BASE}/photo-1434389677669-e08b4cac3105?w=400'},
    {'name': 'Tableware', 'slug': 'tableware', 'image_url': f'{IMAGE_BASE}/photo-1578749556568-bc2c40e68b61?w=500'},
    {'name': 'Kitchen', 'slug': 'kitchen', 'image_url': f'{IMAGE_BASE}/photo-1565183928294-7063f23ce0f8?w=500'},
    {'name': 'Home Decor', 'slug': 'home-decor', 'image_url': f'{IMAGE_BASE}/photo-1567016432779-094069958ea5?w=400'},
]

# Stock on hand for the two seeded availability levels
IN_STOCK = 25
LOW_STOCK = 3

# (category slug, name, slug, description, price, discount price, stock, is new)
SAMPLE_PRODUCTS = [
    ('clothing', 'Blue Linen Shirt', 'blue-linen-shirt',
     'Comfortable blue linen shirt perfect for summer days.', '49.99', '29.99', IN_STOCK, False),
    ('clothing', 'Knit Sweater', 'knit-sweater',
     'Warm and cozy knit sweater for cold winter days.', '50.99', '35.99', LOW_STOCK, False),
    ('clothing', 'Wool Scarf', 'wool-scarf',
     'Soft wool scarf to keep you warm during the winter.', '19.99', None, IN_STOCK, True),
    ('clothing', 'Denim Jacket', 'denim-jacket',
     'Classic denim jacket for a timeless casual look.', '79.99', '59.99', IN_STOCK, False),
    ('clothing', 'Cotton T-Shirt', 'cotton-t-shirt',
     'Premium cotton t-shirt for everyday comfort.', '24.99', None, IN_STOCK, True),
    ('clothing', 'Leather Belt', 'leather-belt',
     'Genuine leather belt with classic buckle design.', '39.99', '29.99', IN_STOCK, False),
    ('clothing', 'Casual Pants', 'casual-pants',
     'Comfortable casual pants for relaxed style.', '64.99', '49.99', IN_STOCK, False),
    ('clothing', 'Winter Coat', 'winter-coat',
     'Warm winter coat for cold weather protection.', '129.99', None, IN_STOCK, True),
    ('tableware', 'Ceramic Dinner Set', 'ceramic-dinner-set',
     'Elegant ceramic dinner set for a family of four.', '59.99', '44.99', IN_STOCK, False),
    ('tableware', 'Crystal Glass Set', 'crystal-glass-set',
     'Elegant crystal glass set for your special occasions.', '29.99', None, IN_STOCK, True),
    ('tableware', 'Porcelain Tea Set', 'porcelain-tea-set',
     'Fine porcelain tea set with elegant floral design.', '79.99', '59.99', IN_STOCK, False),
    ('tableware', 'Stainless Steel Cutlery Set', 'stainless-steel-cutlery',
     'Professional-grade stainless steel cutlery set.', '89.99', '69.99', IN_STOCK, False),
    ('tableware', 'Bamboo Serving Tray', 'bamboo-serving-tray',
     'Eco-friendly bamboo serving tray for entertaining.', '34.99', None, IN_STOCK, True),
    ('tableware', 'Wine Glass Collection', 'wine-glass-collection',
     'Professional wine glass collection for connoisseurs.', '54.99', '39.99', LOW_STOCK, False),
    ('kitchen', 'Premium Cooking Pot Set', 'premium-cooking-pot-set',
     'High-quality stainless steel cooking pot set for all your kitchen needs.', '89.99', '69.99', IN_STOCK, False),
    ('kitchen', 'Glass Drinkware Collection', 'glass-drinkware-collection',
     'Elegant set of drinking glasses including water, wine, and cocktail glasses.', '39.99', None, IN_STOCK, True),
    ('kitchen', 'Ceramic Plate Set', 'ceramic-plate-set',
     'Beautiful ceramic plates for everyday use or special occasions.', '49.99', '34.99', LOW_STOCK, False),
    ('kitchen', 'Non-Stick Pan Set', 'non-stick-pan-set',
     'Professional non-stick pan set for perfect cooking.', '119.99', '89.99', IN_STOCK, False),
    ('kitchen', 'Kitchen Knife Set', 'kitchen-knife-set',
     'Professional chef knife set with wooden block.', '149.99', None, IN_STOCK, True),
    ('kitchen', 'Wooden Cutting Board', 'wooden-cutting-board',
     'Large bamboo cutting board with groove design.', '29.99', '19.99', IN_STOCK, False),
    ('kitchen', 'Electric Coffee Maker', 'electric-coffee-maker',
     'Programmable coffee maker for perfect morning brew.', '179.99', None, IN_STOCK, True),
    ('home-decor', 'Modern Lamp', 'modern-lamp',
     'Stylish modern lamp to light up your living space.', '49.99', '24.99', IN_STOCK, False),
    ('home-decor', 'Ceramic Vase Set', 'ceramic-vase-set',
     'Beautiful ceramic vase set for your home decor.', '34.99', None, IN_STOCK, True),
    ('home-decor', 'Cotton Throw Blanket', 'cotton-throw-blanket',
     'Soft cotton throw blanket for your cozy evenings.', '24.99', None, IN_STOCK, True),
    ('home-decor', 'Wall Art Canvas Set', 'wall-art-canvas-set',
     'Modern abstract wall art canvas set of three pieces.', '89.99', '69.99', IN_STOCK, False),
    ('home-decor', 'Decorative Mirror', 'decorative-mirror',
     'Round decorative mirror with golden frame.', '79.99', '59.99', IN_STOCK, False),
    ('home-decor', 'Scented Candle Set', 'scented-candle-set',
     'Luxury scented candle set with relaxing fragrances.', '44.99', None, IN_STOCK, True),
    ('home-decor', 'Indoor Plant Collection', 'indoor-plant-collection',
     'Set of three low-maintenance indoor plants with pots.', '54.99', None, IN_STOCK, True),
]


def seed_database():
    """Load the sample catalog. Does nothing when categories already exist."""
    if Category.query.first():
        logger.info('Database already seeded')
        return False

    categories = {}
    for data in SAMPLE_CATEGORIES:
        category = Category(**data)
        db.session.add(category)
        categories[category.slug] = category

    for category_slug, name, slug, description, price, discount_price, stock, is_new in SAMPLE_PRODUCTS:
        db.session.add(Product(
            category=categories[category_slug],
            name=name,
            slug=slug,
            description=description,
            image_url=f'https://via.placeholder.com/500x500?text={slug}',
            price=price,
            discount_price=discount_price,
            stock=stock,
            is_new=is_new
        ))

    db.session.commit()
    logger.info(f'Seeded {len(SAMPLE_CATEGORIES)} categories and {len(SAMPLE_PRODUCTS)} products', extra={
        'event_type': 'database_seeded',
        'category_count': len(SAMPLE_CATEGORIES),
        'product_count': len(SAMPLE_PRODUCTS)
    })
    return True


def register_commands(app):
    @app.cli.command('seed-db')
    @click.option('--create-tables/--no-create-tables', default=True,
                  help='Create missing tables before seeding')
    def seed_db_command(create_tables):
        """Create tables and load the sample catalog"""
        if create_tables:
            db.create_all()
        if seed_database():
            click.echo(f'Seeded {len(SAMPLE_PRODUCTS)} products.')
        else:
            click.echo('Database already initialized.')
        current_app.logger.info('seed-db finished')
