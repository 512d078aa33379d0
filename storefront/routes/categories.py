from flask import Blueprint, current_app, jsonify

from storefront.services.catalog import CatalogStore

bp = Blueprint('categories', __name__, url_prefix='/api/categories')


@bp.route('', methods=['GET'])
def list_categories():
    categories = CatalogStore().list_categories()

    current_app.logger.info(f'Displaying {len(categories)} categories', extra={
        'event_type': 'data_loaded',
        'category_count': len(categories)
    })

    return jsonify([category.to_dict() for category in categories])


@bp.route('/<slug>', methods=['GET'])
def get_category(slug):
    category = CatalogStore().get_category_by_slug(slug)
    return jsonify(category.to_dict())
