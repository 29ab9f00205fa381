"""
Authentication service - password login and JWT bearer tokens.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, Any

import jwt
from flask import current_app
from sqlalchemy.orm import Session

from vyaapar.models import User, UserRole
from vyaapar.exceptions import AuthenticationError, UnauthorizedError

logger = logging.getLogger(__name__)


def generate_token(user: User) -> str:
    """Issue a signed token carrying the caller identity and role."""
    config = current_app.config
    payload = {
        'user_id': user.id,
        'login_id': user.login_id,
        'role': user.role.value,
        'exp': datetime.now(timezone.utc) + timedelta(hours=config['JWT_EXPIRES_HOURS'])
    }
    return jwt.encode(payload, config['JWT_SECRET_KEY'], algorithm=config['JWT_ALGORITHM'])


def verify_token(token: str) -> Dict[str, Any]:
    """Decode a token, mapping PyJWT failures to AuthenticationError."""
    config = current_app.config
    try:
        payload = jwt.decode(token, config['JWT_SECRET_KEY'], algorithms=[config['JWT_ALGORITHM']])
    except jwt.ExpiredSignatureError:
        raise AuthenticationError('Token expired')
    except jwt.InvalidTokenError:
        raise AuthenticationError('Invalid token')

    if not payload.get('user_id') or payload.get('role') not in UserRole.__members__:
        raise AuthenticationError('Invalid token')
    return payload


def login(session: Session, login_id: str, password: str) -> Dict[str, Any]:
    """Check credentials and return the user with a fresh token."""
    if not isinstance(login_id, str) or not isinstance(password, str) or not login_id or not password:
        raise AuthenticationError('Invalid login credentials')

    user = session.query(User).filter(User.login_id == login_id).first()
    if not user:
        raise AuthenticationError('Invalid login credentials')

    if not user.is_active:
        raise UnauthorizedError('Account is deactivated')

    if not user.check_password(password):
        logger.warning(f"Failed login attempt for {login_id}")
        raise AuthenticationError('Invalid login credentials')

    return {'user': user, 'token': generate_token(user)}
