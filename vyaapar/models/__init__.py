"""Models package - exports all SQLAlchemy models."""
from vyaapar.models.user import User, UserRole, ADMIN_ROLES
from vyaapar.models.product import Product
from vyaapar.models.cart import Cart
from vyaapar.models.cart_item import CartItem
from vyaapar.models.order import Order, OrderStatus
from vyaapar.models.order_line import OrderLine
from vyaapar.models.attendance_log import AttendanceLog, AttendanceStatus

__all__ = [
    'User', 'UserRole', 'ADMIN_ROLES',
    'Product',
    'Cart', 'CartItem',
    'Order', 'OrderStatus', 'OrderLine',
    'AttendanceLog', 'AttendanceStatus',
]
