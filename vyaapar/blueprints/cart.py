"""Cart blueprint - salesperson cart management and checkout."""
from flask import Blueprint, jsonify, g, current_app

from vyaapar.database import get_session
from vyaapar.decorators.permissions import salesperson_only
from vyaapar.middleware import require_login
from vyaapar.services import cart_service, checkout_service
from vyaapar.utils import formatters
from vyaapar.utils.request_parsing import json_body, required_str, optional_notes

cart_bp = Blueprint('cart', __name__, url_prefix='/cart')


def _cart_response(status_code=200, message=None):
    db_session = get_session()
    cart = cart_service.get_cart(db_session, g.user_id)
    db_session.commit()
    body = {'status': 'success', 'data': formatters.cart(cart)}
    if message:
        body['message'] = message
    return jsonify(body), status_code


@cart_bp.route('', methods=['GET'])
@require_login
@salesperson_only
def get_cart():
    """Current cart with buyer, supplier, items and total."""
    return _cart_response()


@cart_bp.route('', methods=['DELETE'])
@require_login
@salesperson_only
def clear_cart():
    db_session = get_session()
    cart_service.clear_cart(db_session, g.user_id)
    db_session.commit()
    return jsonify({'status': 'success', 'message': 'Cart cleared'})


@cart_bp.route('/items', methods=['POST'])
@require_login
@salesperson_only
def add_item():
    """Add a product (merging into an existing line)."""
    payload = json_body()
    product_id = required_str(payload, 'product_id')

    db_session = get_session()
    item = cart_service.add_item(db_session, g.user_id, product_id, payload.get('quantity'))
    db_session.commit()
    return jsonify({'status': 'success', 'data': formatters.cart_item(item)})


@cart_bp.route('/items/<item_id>', methods=['PATCH', 'PUT'])
@require_login
@salesperson_only
def update_item(item_id):
    payload = json_body()

    db_session = get_session()
    item = cart_service.update_item_quantity(db_session, g.user_id, item_id, payload.get('quantity'))
    db_session.commit()
    return jsonify({'status': 'success', 'data': formatters.cart_item(item)})


@cart_bp.route('/items/<item_id>', methods=['DELETE'])
@require_login
@salesperson_only
def remove_item(item_id):
    db_session = get_session()
    cart_service.remove_item(db_session, g.user_id, item_id)
    db_session.commit()
    return jsonify({'status': 'success', 'message': 'Item removed from cart'})


@cart_bp.route('/buyer', methods=['PUT'])
@require_login
@salesperson_only
def set_buyer():
    buyer_id = required_str(json_body(), 'buyer_id')

    db_session = get_session()
    cart_service.set_buyer(db_session, g.user_id, buyer_id)
    db_session.commit()
    return _cart_response()


@cart_bp.route('/supplier', methods=['PUT'])
@require_login
@salesperson_only
def set_supplier():
    supplier_id = required_str(json_body(), 'supplier_id')

    db_session = get_session()
    cart_service.set_supplier(db_session, g.user_id, supplier_id)
    db_session.commit()
    return _cart_response()


@cart_bp.route('/checkout', methods=['POST'])
@require_login
@salesperson_only
def checkout():
    """Create an order from the cart. The cart is emptied on success."""
    notes = optional_notes(json_body())

    order = checkout_service.checkout(
        get_session(),
        g.user_id,
        notes=notes,
        max_attempts=current_app.config['ORDER_NUMBER_MAX_ATTEMPTS']
    )
    return jsonify({
        'status': 'success',
        'message': 'Order created successfully',
        'data': formatters.order(order)
    }), 201
