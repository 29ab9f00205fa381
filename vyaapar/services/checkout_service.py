"""
Checkout engine - converts a salesperson's cart into an order.

Handles validation, snapshot pricing, order-number allocation with retry
and the atomic order creation + cart reset.
"""
import logging
from decimal import Decimal
from typing import Callable, List, Dict, Any, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from vyaapar.models import Cart, Order, OrderLine, OrderStatus, User
from vyaapar.exceptions import (
    VyaaparError, EmptyCartError, MissingBuyerError, MissingSupplierError,
    InvalidRoleError, OrderNumberExhaustedError
)
from vyaapar.services import cart_service
from vyaapar.services.hierarchy import allowed_supplier_roles, describe_roles
from vyaapar.services.order_number_service import next_order_number, SequenceOverflowError
from vyaapar.blueprints.metrics import (
    orders_created_total, order_number_collisions_total, order_number_exhausted_total
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3
MONEY = Decimal('0.01')


def checkout(
    session: Session,
    salesperson_id: str,
    notes: Optional[str] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
) -> Order:
    """
    Create an order from the salesperson's cart and empty the cart.

    Either the order (with all its lines) is created and the cart is reset,
    or nothing changes and the cart keeps its items, buyer and supplier.
    """
    try:
        # 1. Validating
        cart = cart_service.get_or_create_cart(session, salesperson_id, lock=True)
        buyer, supplier = _validate_cart(session, cart)

        # 2. Pricing (stored snapshot prices, not the live catalog)
        lines_data, total_amount = price_cart(cart)

        # 3 + 4. Allocating and Committing
        order = create_order_with_retry(
            session,
            buyer_id=buyer.id,
            supplier_id=supplier.id,
            salesperson_id=salesperson_id,
            lines_data=lines_data,
            total_amount=total_amount,
            notes=notes,
            max_attempts=max_attempts,
            on_created=lambda created: cart_service.reset_cart(cart)
        )

        session.commit()
        orders_created_total.labels(source='cart').inc()
        logger.info(f"Checkout by salesperson {salesperson_id} created order {order.order_number} "
                    f"(total {order.total_amount})")
        return order

    except VyaaparError:
        session.rollback()
        raise
    except Exception:
        session.rollback()
        logger.exception(f"Checkout by salesperson {salesperson_id} failed")
        raise


def _validate_cart(session: Session, cart: Cart):
    """Check items, buyer and supplier; re-check the pairing against the hierarchy."""
    if not cart.items:
        raise EmptyCartError()

    if not cart.buyer_id:
        raise MissingBuyerError()
    buyer = session.query(User).filter(User.id == cart.buyer_id, User.is_active.is_(True)).first()
    if not buyer:
        raise MissingBuyerError('The selected buyer is no longer available. Please select a buyer.')

    if not cart.supplier_id:
        raise MissingSupplierError()
    supplier = session.query(User).filter(User.id == cart.supplier_id, User.is_active.is_(True)).first()
    if not supplier:
        raise MissingSupplierError('The selected supplier is no longer available. Please select a supplier.')

    # The cart may have been edited since the supplier was set
    allowed = allowed_supplier_roles(buyer.role)
    if supplier.role not in allowed:
        raise InvalidRoleError(
            f'Invalid supplier for {buyer.role.value} buyer. Expected: {describe_roles(allowed)}',
            expected_roles=allowed
        )

    return buyer, supplier


def price_cart(cart: Cart):
    """Build order line data from the cart's snapshot prices."""
    lines_data = []
    total_amount = Decimal('0.00')

    for item in cart.items:
        total_price = (item.unit_price * item.quantity).quantize(MONEY)
        lines_data.append({
            'product_id': item.product_id,
            'quantity': item.quantity,
            'unit_price': item.unit_price,
            'total_price': total_price,
        })
        total_amount += total_price

    return lines_data, total_amount.quantize(MONEY)


def is_order_number_collision(error: IntegrityError) -> bool:
    """True if the integrity error comes from the unique order number constraint."""
    return 'order_number' in str(error.orig)


def create_order_with_retry(
    session: Session,
    buyer_id: str,
    supplier_id: str,
    salesperson_id: Optional[str],
    lines_data: List[Dict[str, Any]],
    total_amount: Decimal,
    notes: Optional[str] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    on_created: Optional[Callable[[Order], None]] = None
) -> Order:
    """
    Allocate an order number and insert the order inside a savepoint.

    `on_created` runs in the same savepoint, so its effects are committed or
    discarded together with the order. Only an order-number uniqueness
    violation is retried; the caller commits.
    """
    for attempt in range(1, max_attempts + 1):
        try:
            order_number = next_order_number(session)
        except SequenceOverflowError as e:
            logger.error(f"Order number allocation failed: {e}")
            order_number_exhausted_total.inc()
            raise OrderNumberExhaustedError(attempt)

        try:
            with session.begin_nested():
                order = Order(
                    order_number=order_number,
                    buyer_id=buyer_id,
                    supplier_id=supplier_id,
                    salesperson_id=salesperson_id,
                    status=OrderStatus.PENDING,
                    total_amount=total_amount,
                    notes=notes or None,
                )
                for line in lines_data:
                    order.lines.append(OrderLine(
                        product_id=line['product_id'],
                        quantity=line['quantity'],
                        unit_price=line['unit_price'],
                        total_price=line['total_price'],
                    ))
                session.add(order)
                session.flush()

                if on_created:
                    on_created(order)
                    session.flush()

            return order

        except IntegrityError as e:
            if not is_order_number_collision(e):
                raise
            order_number_collisions_total.inc()
            logger.warning(f"Order number {order_number} already taken "
                           f"(attempt {attempt}/{max_attempts}), retrying")

    order_number_exhausted_total.inc()
    logger.error(f"Could not allocate a unique order number after {max_attempts} attempts "
                 f"(buyer={buyer_id}, supplier={supplier_id}, salesperson={salesperson_id})")
    raise OrderNumberExhaustedError(max_attempts)
