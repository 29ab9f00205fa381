"""Main blueprint - health check."""
from flask import Blueprint, jsonify
from sqlalchemy import text

from vyaapar.database import get_session

main_bp = Blueprint('main', __name__)


@main_bp.route('/health')
def health():
    """Liveness plus a trivial database round trip."""
    get_session().execute(text('SELECT 1'))
    return jsonify({'status': 'ok'})
