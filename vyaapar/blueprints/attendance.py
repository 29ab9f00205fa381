"""Attendance blueprint - salesperson clock-in/out and admin reports."""
from flask import Blueprint, jsonify, g, request

from vyaapar.database import get_session
from vyaapar.decorators.permissions import salesperson_only, admin_only
from vyaapar.middleware import require_login
from vyaapar.services import attendance_service
from vyaapar.utils import formatters
from vyaapar.utils.request_parsing import query_date, query_int

attendance_bp = Blueprint('attendance', __name__, url_prefix='/attendance')


def _history_response(salesperson_id):
    page = query_int('page', 1)
    limit = query_int('limit', 20, maximum=100)
    logs, total = attendance_service.get_history(
        get_session(),
        salesperson_id=salesperson_id,
        start_date=query_date('start_date'),
        end_date=query_date('end_date'),
        limit=limit,
        offset=(page - 1) * limit
    )
    return jsonify({
        'status': 'success',
        'data': {
            'logs': [formatters.attendance(log) for log in logs],
            'pagination': {'page': page, 'limit': limit, 'total': total},
        }
    })


@attendance_bp.route('/login', methods=['POST'])
@require_login
@salesperson_only
def clock_in():
    log = attendance_service.record_login(get_session(), g.user_id)
    return jsonify({'status': 'success', 'data': formatters.attendance(log)}), 201


@attendance_bp.route('/logout', methods=['POST'])
@require_login
@salesperson_only
def clock_out():
    log = attendance_service.record_logout(get_session(), g.user_id)
    return jsonify({'status': 'success', 'data': formatters.attendance(log)})


@attendance_bp.route('/my-history', methods=['GET'])
@require_login
@salesperson_only
def my_history():
    return _history_response(g.user_id)


@attendance_bp.route('/all', methods=['GET'])
@require_login
@admin_only
def all_attendance():
    return _history_response(request.args.get('salesperson_id') or None)
