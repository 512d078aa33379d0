from flask import Blueprint, jsonify, request

from storefront.services.order_store import OrderStore, next_status

bp = Blueprint('admin', __name__, url_prefix='/api/admin')


@bp.route('/orders', methods=['GET'])
def list_orders():
    """Orders for the admin dashboard, newest first, with the next forward status"""
    orders = OrderStore().list_orders(status=request.args.get('status'))

    response = []
    for order in orders:
        data = order.to_dict(include_items=True)
        following = next_status(order.status)
        data['nextStatus'] = following.value if following else None
        response.append(data)
    return jsonify(response)
