"""Read side of the order store: single order access, role dashboards and admin monitoring."""
import math
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Dict, Any

from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from vyaapar.models import Order, OrderStatus, User, UserRole
from vyaapar.exceptions import NotFoundError, UnauthorizedError

DASHBOARD_ORDER_LIMIT = 50


def get_order_for_user(session: Session, order_id: str, user: User) -> Order:
    """
    Load an order the user may see: admins see everything, otherwise the
    caller must be the order's salesperson, buyer or supplier.
    """
    order = session.query(Order).options(
        selectinload(Order.lines)
    ).filter(Order.id == order_id).first()

    if not order:
        raise NotFoundError('Order not found')

    if not user.is_admin and user.id not in (order.salesperson_id, order.buyer_id, order.supplier_id):
        raise UnauthorizedError(
            'Access denied. You can only view orders you are part of, or have admin access.'
        )
    return order


def list_orders(
    session: Session,
    status: Optional[OrderStatus] = None,
    buyer_id: Optional[str] = None,
    supplier_id: Optional[str] = None,
    salesperson_id: Optional[str] = None,
    self_orders_only: bool = False,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    page: int = 1,
    limit: int = 20
) -> Dict[str, Any]:
    """Filtered, newest-first page of orders for the admin dashboard."""
    query = session.query(Order)

    if status:
        query = query.filter(Order.status == status)
    if buyer_id:
        query = query.filter(Order.buyer_id == buyer_id)
    if supplier_id:
        query = query.filter(Order.supplier_id == supplier_id)
    if self_orders_only:
        query = query.filter(Order.salesperson_id.is_(None))
    elif salesperson_id:
        query = query.filter(Order.salesperson_id == salesperson_id)
    if start_date:
        query = query.filter(Order.created_at >= datetime.combine(start_date, time.min, tzinfo=timezone.utc))
    if end_date:
        # Include the entire end date
        query = query.filter(Order.created_at < datetime.combine(end_date + timedelta(days=1), time.min,
                                                                 tzinfo=timezone.utc))

    total = query.count()
    orders = query.options(selectinload(Order.lines)).order_by(
        Order.created_at.desc()
    ).offset((page - 1) * limit).limit(limit).all()

    return {
        'orders': orders,
        'pagination': {
            'page': page,
            'limit': limit,
            'total': total,
            'total_pages': math.ceil(total / limit) if limit else 0,
        }
    }


def list_orders_for_participant(session: Session, user: User, limit: int = DASHBOARD_ORDER_LIMIT):
    """
    Newest orders for a role dashboard.

    Salespeople see the orders they checked out; everyone else sees orders
    where they are the buyer or the supplier.
    """
    query = session.query(Order).options(
        selectinload(Order.buyer),
        selectinload(Order.supplier)
    )

    if user.role == UserRole.SALESPERSON:
        query = query.filter(Order.salesperson_id == user.id)
    else:
        query = query.filter(or_(Order.buyer_id == user.id, Order.supplier_id == user.id))

    return query.order_by(Order.created_at.desc()).limit(limit).all()
