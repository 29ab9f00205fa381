"""
Permission decorators for role-based access control.
Extends require_login with role checks.
"""

from functools import wraps
from flask import g

from vyaapar.exceptions import AuthenticationError, UnauthorizedError
from vyaapar.models import UserRole, ADMIN_ROLES


def require_role(*allowed_roles):
    """
    Decorator to restrict access to specific roles.

    Usage:
        @require_role(UserRole.SALESPERSON)
        @require_role(UserRole.ADMIN, UserRole.SUPER_ADMIN)

    Args:
        *allowed_roles: Variable number of UserRole values

    Returns:
        Decorator function
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            # Must be logged in
            if not g.get('user'):
                raise AuthenticationError(g.get('auth_error') or
                                          'No token provided. Please login to access this resource.')

            # Check role
            user_role = g.get('user_role')

            if not user_role or user_role not in allowed_roles:
                allowed = ' or '.join(sorted(role.value for role in allowed_roles))
                raise UnauthorizedError(f'Access denied. This resource is only accessible to {allowed} users.')

            return f(*args, **kwargs)

        return decorated_function
    return decorator


def salesperson_only(f):
    """
    Shortcut decorator for SALESPERSON-only routes (cart and attendance).

    Usage:
        @salesperson_only
        def checkout():
            ...
    """
    return require_role(UserRole.SALESPERSON)(f)


def retailer_only(f):
    """Shortcut decorator for RETAILER-only routes (direct orders)."""
    return require_role(UserRole.RETAILER)(f)


def admin_only(f):
    """
    Shortcut decorator for ADMIN or SUPER_ADMIN access.

    Usage:
        @admin_only
        def list_orders():
            ...
    """
    return require_role(*ADMIN_ROLES)(f)
