"""User management service (admin back office and CLI)."""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from vyaapar.models import User, UserRole
from vyaapar.exceptions import BusinessLogicError, ConflictError

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def parse_role(value) -> UserRole:
    if isinstance(value, UserRole):
        return value
    try:
        return UserRole(str(value).upper())
    except ValueError:
        valid = ', '.join(r.value for r in UserRole)
        raise BusinessLogicError(f'Invalid role: {value}. Expected one of: {valid}')


def create_user(
    session: Session,
    login_id: str,
    email: str,
    password: str,
    role,
    name: Optional[str] = None,
    phone: Optional[str] = None,
    address: Optional[str] = None,
    created_by: Optional[str] = None
) -> User:
    """Create a user. Duplicate login id or email is a ConflictError."""
    for field, value in (('login_id', login_id), ('email', email), ('password', password),
                         ('name', name), ('phone', phone), ('address', address)):
        if value is not None and not isinstance(value, str):
            raise BusinessLogicError(f'{field} must be a string.')

    login_id = (login_id or '').strip()
    email = (email or '').strip().lower()

    if not login_id:
        raise BusinessLogicError('login_id is required.')
    if not email or '@' not in email:
        raise BusinessLogicError('A valid email is required.')
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise BusinessLogicError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters.')

    user = User(
        login_id=login_id,
        email=email,
        name=name,
        phone=phone,
        address=address,
        role=parse_role(role),
        is_active=True,
        created_by=created_by
    )
    user.set_password(password)

    try:
        session.add(user)
        session.commit()
    except IntegrityError as e:
        session.rollback()
        message = str(e.orig)
        if 'login_id' in message:
            raise ConflictError('Login ID already exists')
        if 'email' in message:
            raise ConflictError('Email already exists')
        raise ConflictError('User with this information already exists')

    logger.info(f"User {login_id} created with role {user.role.value}")
    return user


def list_users_by_role(session: Session, role: UserRole, active_only: bool = True):
    query = session.query(User).filter(User.role == role)
    if active_only:
        query = query.filter(User.is_active.is_(True))
    return query.order_by(User.name, User.login_id).all()
