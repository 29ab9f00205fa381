"""Orders blueprint - single order view for participants and admins."""
from flask import Blueprint, jsonify, g

from vyaapar.database import get_session
from vyaapar.middleware import require_login
from vyaapar.services.order_query_service import get_order_for_user
from vyaapar.utils import formatters

orders_bp = Blueprint('orders', __name__, url_prefix='/orders')


@orders_bp.route('/<order_id>', methods=['GET'])
@require_login
def detail_order(order_id):
    order = get_order_for_user(get_session(), order_id, g.user)
    return jsonify({'status': 'success', 'data': formatters.order(order)})
