"""Middleware for bearer-token authentication."""
from functools import wraps
from flask import g, request
from vyaapar.database import get_session
from vyaapar.exceptions import AuthenticationError
from vyaapar.models import User
from vyaapar.services.auth_service import verify_token


def load_current_user():
    """
    Load current user into g (Flask's per-request global).

    Called before each request. Sets g.user, g.user_id and g.user_role when
    a valid `Authorization: Bearer <token>` header is present. A bad token
    is remembered in g.auth_error and reported by require_login, so public
    endpoints still work.
    """
    g.user = None
    g.user_id = None
    g.user_role = None
    g.auth_error = None

    auth_header = request.headers.get('Authorization', '')
    if not auth_header:
        return
    if not auth_header.startswith('Bearer '):
        g.auth_error = 'No token provided. Please login to access this resource.'
        return

    try:
        payload = verify_token(auth_header[len('Bearer '):].strip())
    except AuthenticationError as e:
        g.auth_error = e.message
        return

    user = get_session().query(User).filter_by(id=payload['user_id'], is_active=True).first()
    if not user:
        g.auth_error = 'User not found or deactivated'
        return

    g.user = user
    g.user_id = user.id
    g.user_role = user.role


def require_login(f):
    """
    Decorator: Require a valid bearer token.

    Raises AuthenticationError (401) when the caller is anonymous.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if g.get('user') is None:
            if g.get('auth_error'):
                raise AuthenticationError(g.auth_error)
            raise AuthenticationError()
        return f(*args, **kwargs)
    return decorated_function
