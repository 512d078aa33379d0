"""
Catalog read paths: categories and products
"""
import logging
from typing import List, Optional

from flask import current_app
from sqlalchemy import func, or_, select

from storefront import db
from storefront.errors import NotFound, ValidationError
from storefront.models import Category, Product

logger = logging.getLogger(__name__)

DEFAULT_FEATURED_LIMIT = 8


def _clearance_orderings():
    effective_price = func.coalesce(Product.discount_price, Product.price)
    discount_ratio = (Product.price - Product.discount_price) / Product.price
    return {
        'discount': [discount_ratio.desc(), Product.id],
        'price-low-high': [effective_price.asc(), Product.id],
        'price-high-low': [effective_price.desc(), Product.id],
        'name-a-z': [Product.name.asc(), Product.id],
        'name-z-a': [Product.name.desc(), Product.id],
    }


CLEARANCE_SORTS = ('discount', 'price-low-high', 'price-high-low', 'name-a-z', 'name-z-a')


class CatalogStore:
    """Read-only access to categories and products. Nothing here writes."""

    def __init__(self, featured_limit: Optional[int] = None):
        if featured_limit is None:
            featured_limit = current_app.config.get('FEATURED_LIMIT', DEFAULT_FEATURED_LIMIT)
        self.featured_limit = featured_limit

    # Categories

    def list_categories(self) -> List[Category]:
        return db.session.scalars(select(Category).order_by(Category.id)).all()

    def get_category_by_slug(self, slug: str) -> Category:
        category = db.session.scalars(select(Category).filter_by(slug=slug)).first()
        if category is None:
            raise NotFound("Category not found")
        return category

    # Products

    def list_products(self) -> List[Product]:
        return db.session.scalars(select(Product).order_by(Product.id)).all()

    def list_products_by_category(self, category_id: int) -> List[Product]:
        query = select(Product).filter_by(category_id=category_id).order_by(Product.id)
        return db.session.scalars(query).all()

    def get_product_by_slug(self, slug: str) -> Product:
        product = db.session.scalars(select(Product).filter_by(slug=slug)).first()
        if product is None:
            raise NotFound("Product not found")
        return product

    def search_products(self, query: str) -> List[Product]:
        """Case-insensitive substring match over name or description"""
        query = (query or '').strip()
        if not query:
            raise ValidationError("Search query is required")

        statement = (
            select(Product)
            .where(or_(
                Product.name.icontains(query, autoescape=True),
                Product.description.icontains(query, autoescape=True)
            ))
            .order_by(Product.id)
        )
        products = db.session.scalars(statement).all()
        logger.debug(f"Search '{query}' matched {len(products)} products")
        return products

    def list_featured_products(self, limit: Optional[int] = None) -> List[Product]:
        """First N products that are in stock and carry a discount"""
        statement = (
            select(Product)
            .where(Product.stock > 0, Product.discount_price.is_not(None))
            .order_by(Product.id)
            .limit(limit or self.featured_limit)
        )
        return db.session.scalars(statement).all()

    def list_new_products(self, limit: Optional[int] = None) -> List[Product]:
        if limit is not None and limit <= 0:
            raise ValidationError("limit must be a positive integer")

        statement = select(Product).where(Product.is_new.is_(True)).order_by(Product.id)
        if limit is not None:
            statement = statement.limit(limit)
        return db.session.scalars(statement).all()

    def list_discounted_products(self, sort: str = 'discount') -> List[Product]:
        """Clearance listing: every discounted product in the requested order"""
        orderings = _clearance_orderings()
        if sort not in orderings:
            raise ValidationError(
                "Invalid sort option",
                errors=[{'field': 'sort', 'message': f"must be one of {', '.join(CLEARANCE_SORTS)}"}]
            )

        statement = (
            select(Product)
            .where(Product.discount_price.is_not(None))
            .order_by(*orderings[sort])
        )
        return db.session.scalars(statement).all()
