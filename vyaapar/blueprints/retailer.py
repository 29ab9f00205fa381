"""Retailer blueprint - direct orders without a salesperson."""
from flask import Blueprint, jsonify, g, current_app

from vyaapar.database import get_session
from vyaapar.decorators.permissions import retailer_only
from vyaapar.exceptions import BusinessLogicError
from vyaapar.middleware import require_login
from vyaapar.services import retailer_order_service
from vyaapar.utils import formatters
from vyaapar.utils.request_parsing import json_body, required_str, optional_notes

retailer_bp = Blueprint('retailer', __name__, url_prefix='/retailer')


@retailer_bp.route('/orders', methods=['POST'])
@require_login
@retailer_only
def create_order():
    """
    Place an order directly. The logged-in retailer is the buyer.

    Body: {supplier_id, items: [{product_id, quantity}], notes?}
    """
    payload = json_body()
    supplier_id = required_str(payload, 'supplier_id')
    items = payload.get('items')
    if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
        raise BusinessLogicError('items must be a list of {product_id, quantity} objects')

    order = retailer_order_service.create_order(
        get_session(),
        g.user_id,
        supplier_id,
        items,
        notes=optional_notes(payload),
        max_attempts=current_app.config['ORDER_NUMBER_MAX_ATTEMPTS']
    )
    return jsonify({
        'status': 'success',
        'message': 'Order placed successfully',
        'data': formatters.order(order)
    }), 201
