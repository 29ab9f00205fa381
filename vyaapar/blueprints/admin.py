"""
Admin blueprint - order monitoring and user management.
Accessible to ADMIN and SUPER_ADMIN.
"""
from flask import Blueprint, jsonify, request, g, current_app

from vyaapar.database import get_session
from vyaapar.decorators.permissions import admin_only
from vyaapar.exceptions import BusinessLogicError
from vyaapar.middleware import require_login
from vyaapar.models import OrderStatus, UserRole
from vyaapar.services import user_service
from vyaapar.services.order_query_service import list_orders
from vyaapar.utils import formatters
from vyaapar.utils.request_parsing import json_body, query_date, query_int

admin_bp = Blueprint('admin', __name__, url_prefix='/admin')


@admin_bp.route('/orders', methods=['GET'])
@require_login
@admin_only
def orders():
    """
    All orders, newest first.

    Query Parameters:
    - status, buyer_id, supplier_id
    - salesperson_id ('null' selects retailer self-orders)
    - start_date, end_date (ISO dates, inclusive)
    - page (default 1), limit (default ADMIN_ORDERS_PAGE_SIZE, max 100)
    """
    status = None
    if request.args.get('status'):
        try:
            status = OrderStatus(request.args['status'].upper())
        except ValueError:
            raise BusinessLogicError(f"Invalid status: {request.args['status']}")

    salesperson_id = request.args.get('salesperson_id') or None
    self_orders_only = salesperson_id == 'null'

    result = list_orders(
        get_session(),
        status=status,
        buyer_id=request.args.get('buyer_id') or None,
        supplier_id=request.args.get('supplier_id') or None,
        salesperson_id=None if self_orders_only else salesperson_id,
        self_orders_only=self_orders_only,
        start_date=query_date('start_date'),
        end_date=query_date('end_date'),
        page=query_int('page', 1),
        limit=query_int('limit', current_app.config['ADMIN_ORDERS_PAGE_SIZE'],
                        maximum=current_app.config['ADMIN_ORDERS_MAX_PAGE_SIZE'])
    )

    return jsonify({
        'status': 'success',
        'data': {
            'orders': [formatters.order(o) for o in result['orders']],
            'pagination': result['pagination'],
        }
    })


@admin_bp.route('/salespersons', methods=['GET'])
@require_login
@admin_only
def salespersons():
    users = user_service.list_users_by_role(get_session(), UserRole.SALESPERSON)
    return jsonify({'status': 'success', 'data': [formatters.user_detail(u) for u in users]})


@admin_bp.route('/users', methods=['POST'])
@require_login
@admin_only
def create_user():
    payload = json_body()
    user = user_service.create_user(
        get_session(),
        login_id=payload.get('login_id'),
        email=payload.get('email'),
        password=payload.get('password'),
        role=payload.get('role'),
        name=payload.get('name'),
        phone=payload.get('phone'),
        address=payload.get('address'),
        created_by=g.user_id
    )
    return jsonify({'status': 'success', 'data': formatters.user_detail(user)}), 201
