from flask import Blueprint, current_app, jsonify, request

from storefront.errors import ValidationError
from storefront.routes import parse_id
from storefront.services.catalog import CatalogStore

bp = Blueprint('products', __name__, url_prefix='/api/products')


def _product_list(products):
    return jsonify([product.to_dict() for product in products])


@bp.route('', methods=['GET'])
def list_products():
    products = CatalogStore().list_products()

    current_app.logger.info(f'Displaying {len(products)} products', extra={
        'event_type': 'data_loaded',
        'product_count': len(products)
    })

    return _product_list(products)


@bp.route('/featured', methods=['GET'])
def featured_products():
    return _product_list(CatalogStore().list_featured_products())


@bp.route('/new', methods=['GET'])
def new_products():
    limit = request.args.get('limit')
    if limit is not None:
        limit = parse_id(limit, 'limit')
    return _product_list(CatalogStore().list_new_products(limit=limit))


@bp.route('/clearance', methods=['GET'])
def clearance_products():
    sort = request.args.get('sort', 'discount')
    return _product_list(CatalogStore().list_discounted_products(sort=sort))


@bp.route('/category/<category_id>', methods=['GET'])
def products_by_category(category_id):
    # Unknown numeric ids, zero included, list nothing
    category_id = parse_id(category_id, 'category ID', minimum=None)

    current_app.logger.info(f'Filtering products by category: {category_id}', extra={
        'event_type': 'page_view',
        'page': 'products_by_category',
        'category_id': category_id
    })

    return _product_list(CatalogStore().list_products_by_category(category_id))


@bp.route('/search', methods=['GET'])
def search_products():
    query = request.args.get('q', '').strip()
    if not query:
        raise ValidationError("Search query is required")

    products = CatalogStore().search_products(query)

    current_app.logger.info(f'Search for "{query}" returned {len(products)} products', extra={
        'event_type': 'product_search',
        'query': query,
        'product_count': len(products)
    })

    return _product_list(products)


@bp.route('/<slug>', methods=['GET'])
def product_detail(slug):
    product = CatalogStore().get_product_by_slug(slug)

    current_app.logger.info(f'Product found: {product.name}', extra={
        'event_type': 'product_viewed',
        'product_id': product.id,
        'product_name': product.name,
        'price': float(product.price),
        'stock': product.stock
    })

    return jsonify(product.to_dict())
