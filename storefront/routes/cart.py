from flask import Blueprint, current_app, jsonify

from storefront.routes import json_body, parse_id
from storefront.schemas import CartItemCreate, CustomerDetails, QuantityUpdate
from storefront.services.cart_store import CartStore

bp = Blueprint('cart', __name__, url_prefix='/api/cart')


@bp.route('/<cart_id>', methods=['GET'])
def view_cart(cart_id):
    cart_items = CartStore().get_cart_items(cart_id)

    current_app.logger.info(f'Cart {cart_id} contains {len(cart_items)} items', extra={
        'event_type': 'cart_viewed',
        'cart_id': cart_id,
        'item_count': len(cart_items)
    })

    return jsonify([item.to_dict(include_product=True) for item in cart_items])


@bp.route('/<cart_id>/summary', methods=['GET'])
def cart_summary(cart_id):
    summary = CartStore().summarize(cart_id)
    return jsonify(summary.to_dict())


@bp.route('', methods=['POST'])
def add_to_cart():
    payload = CartItemCreate.model_validate(json_body())
    cart_item = CartStore().add_item(payload.cart_id, payload.product_id, payload.quantity)
    return jsonify(cart_item.to_dict()), 201


@bp.route('/<item_id>', methods=['PUT'])
def update_cart_item(item_id):
    item_id = parse_id(item_id, 'cart item ID')
    payload = QuantityUpdate.model_validate(json_body())
    cart_item = CartStore().update_quantity(item_id, payload.quantity)
    return jsonify(cart_item.to_dict())


@bp.route('/<item_id>', methods=['DELETE'])
def remove_from_cart(item_id):
    item_id = parse_id(item_id, 'cart item ID')
    CartStore().remove_item(item_id)
    return '', 204


@bp.route('/clear/<cart_id>', methods=['DELETE'])
def clear_cart(cart_id):
    CartStore().clear_cart(cart_id)
    return '', 204


@bp.route('/<cart_id>/checkout', methods=['POST'])
def checkout(cart_id):
    current_app.logger.info(f'Checkout initiated for cart {cart_id}', extra={
        'event_type': 'checkout_start',
        'cart_id': cart_id
    })

    customer = CustomerDetails.model_validate(json_body())
    order = CartStore().checkout(cart_id, customer)
    return jsonify(order.to_dict(include_items=True)), 201
