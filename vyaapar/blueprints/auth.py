"""Authentication blueprint - login and current user."""
from flask import Blueprint, jsonify, g

from vyaapar.database import get_session
from vyaapar.middleware import require_login
from vyaapar.services import auth_service
from vyaapar.utils import formatters
from vyaapar.utils.request_parsing import json_body

auth_bp = Blueprint('auth', __name__, url_prefix='/auth')


@auth_bp.route('/login', methods=['POST'])
def login():
    """Exchange login_id/password for a bearer token."""
    payload = json_body()
    result = auth_service.login(get_session(), payload.get('login_id'), payload.get('password'))
    return jsonify({
        'status': 'success',
        'data': {
            'token': result['token'],
            'user': formatters.user_detail(result['user']),
        }
    })


@auth_bp.route('/me', methods=['GET'])
@require_login
def me():
    return jsonify({'status': 'success', 'data': formatters.user_detail(g.user)})
