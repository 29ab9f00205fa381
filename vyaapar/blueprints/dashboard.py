"""
Dashboard blueprint - per-role order overviews.
Each dashboard is only open to its own role.
"""
from flask import Blueprint, jsonify, g

from vyaapar.database import get_session
from vyaapar.decorators.permissions import require_role
from vyaapar.middleware import require_login
from vyaapar.models import UserRole
from vyaapar.services.order_query_service import list_orders_for_participant
from vyaapar.utils import formatters

dashboard_bp = Blueprint('dashboard', __name__, url_prefix='/dashboard')


def _dashboard_response(title):
    orders = list_orders_for_participant(get_session(), g.user)
    return jsonify({
        'status': 'success',
        'message': f'{title} dashboard',
        'data': {
            'orders': [formatters.order_summary(o) for o in orders],
            'total_orders': len(orders),
        }
    })


@dashboard_bp.route('/salesperson', methods=['GET'])
@require_login
@require_role(UserRole.SALESPERSON)
def salesperson():
    """Orders checked out by the caller."""
    return _dashboard_response('Salesperson')


@dashboard_bp.route('/stockist', methods=['GET'])
@require_login
@require_role(UserRole.STOCKIST)
def stockist():
    """Orders the stockist placed with admins or received from distributors."""
    return _dashboard_response('Stockist')


@dashboard_bp.route('/distributor', methods=['GET'])
@require_login
@require_role(UserRole.DISTRIBUTOR)
def distributor():
    return _dashboard_response('Distributor')


@dashboard_bp.route('/retailer', methods=['GET'])
@require_login
@require_role(UserRole.RETAILER)
def retailer():
    return _dashboard_response('Retailer')


@dashboard_bp.route('/shared', methods=['GET'])
@require_login
def shared():
    """Open to every authenticated user."""
    return jsonify({
        'status': 'success',
        'message': 'This is a shared page accessible to all authenticated users',
        'data': formatters.user_summary(g.user),
    })
