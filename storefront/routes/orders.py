from flask import Blueprint, current_app, jsonify

from storefront.routes import json_body, parse_id
from storefront.schemas import OrderCreate, StatusUpdate
from storefront.services.order_store import OrderStore

bp = Blueprint('orders', __name__, url_prefix='/api/orders')


@bp.route('', methods=['POST'])
def create_order():
    """
    Place an order

    Expected JSON payload:
    {
        "order": {"customerName": "...", "customerEmail": "...", "customerPhone": "...",
                  "totalAmount": 64.78},
        "items": [{"productId": 1, "quantity": 2, "price": 29.99}]
    }
    """
    payload = OrderCreate.model_validate(json_body())

    current_app.logger.info(f'Creating order with {len(payload.items)} items', extra={
        'event_type': 'order_create',
        'item_count': len(payload.items)
    })

    order = OrderStore().create_order(payload.order, payload.items)
    return jsonify(order.to_dict()), 201


@bp.route('/<order_id>', methods=['GET'])
def get_order(order_id):
    order = OrderStore().get_order(parse_id(order_id, 'order ID'))
    return jsonify(order.to_dict(include_items=True))


@bp.route('/<order_id>/status', methods=['PATCH'])
def update_order_status(order_id):
    order_id = parse_id(order_id, 'order ID')
    payload = StatusUpdate.model_validate(json_body())
    order = OrderStore().update_status(order_id, payload.status)
    return jsonify(order.to_dict())
