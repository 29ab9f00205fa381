"""User model - every actor in the distribution chain."""
import enum
import uuid
from sqlalchemy import Column, String, Boolean, DateTime, Text, ForeignKey, Enum
from sqlalchemy.sql import func
from werkzeug.security import generate_password_hash, check_password_hash
from vyaapar.database import Base


class UserRole(enum.Enum):
    """Roles in the distribution hierarchy plus back-office roles."""
    SUPER_ADMIN = 'SUPER_ADMIN'
    ADMIN = 'ADMIN'
    SALESPERSON = 'SALESPERSON'
    STOCKIST = 'STOCKIST'
    DISTRIBUTOR = 'DISTRIBUTOR'
    RETAILER = 'RETAILER'


ADMIN_ROLES = frozenset({UserRole.ADMIN, UserRole.SUPER_ADMIN})


class User(Base):
    """User model - login credentials, contact details and role."""

    __tablename__ = 'users'

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    login_id = Column(String(100), nullable=False, unique=True)
    email = Column(String(255), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(200), nullable=True)
    phone = Column(String(30), nullable=True)
    address = Column(Text, nullable=True)
    role = Column(Enum(UserRole, name='user_role'), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_by = Column(String(36), ForeignKey('users.id'), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    def set_password(self, password):
        """Set password hash."""
        self.password_hash = generate_password_hash(password, method='scrypt')

    def check_password(self, password):
        """Check password against hash."""
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    @property
    def is_admin(self):
        return self.role in ADMIN_ROLES

    def __repr__(self):
        return f"<User(id={self.id}, login_id='{self.login_id}', role={self.role.value if self.role else None})>"
