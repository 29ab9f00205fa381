"""Cart Service - Persistent cart operations for salespeople."""

import logging
from decimal import Decimal
from typing import Dict, Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from vyaapar.models import Cart, CartItem, Product, User
from vyaapar.exceptions import (
    BusinessLogicError, NotFoundError, InvalidRoleError, PreconditionFailedError
)
from vyaapar.services.hierarchy import (
    BUYER_ROLES, allowed_supplier_roles, is_buyer_role, describe_roles
)

logger = logging.getLogger(__name__)

MONEY = Decimal('0.01')


def validate_quantity(quantity) -> int:
    """Quantities are positive integers; bools and fractional values are rejected."""
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise BusinessLogicError('Quantity must be a positive integer.')
    return quantity


def get_or_create_cart(session: Session, salesperson_id: str, lock: bool = False) -> Cart:
    """
    Get existing cart or create an empty one for the salesperson.
    One cart per salesperson.

    With `lock=True` the cart row is selected FOR UPDATE so that mutations
    and checkout by the same salesperson run one at a time (databases
    without row locks ignore it).
    """
    query = session.query(Cart).filter(Cart.salesperson_id == salesperson_id)
    if lock:
        query = query.with_for_update()
    cart = query.first()

    if not cart:
        try:
            with session.begin_nested():
                cart = Cart(salesperson_id=salesperson_id)
                session.add(cart)
        except IntegrityError:
            # Another request created it first
            logger.info(f"Cart for salesperson {salesperson_id} created concurrently, reloading")
            query = session.query(Cart).filter(Cart.salesperson_id == salesperson_id)
            if lock:
                query = query.with_for_update()
            cart = query.one()

    return cart


def get_cart(session: Session, salesperson_id: str) -> Cart:
    return get_or_create_cart(session, salesperson_id)


def _get_active_product(session: Session, product_id: str) -> Product:
    product = session.query(Product).filter(
        Product.id == product_id,
        Product.active.is_(True)
    ).first()
    if not product:
        raise NotFoundError('Product not found')
    return product


def _get_cart_item(session: Session, cart: Cart, item_id: str) -> CartItem:
    item = session.query(CartItem).filter(
        CartItem.id == item_id,
        CartItem.cart_id == cart.id
    ).first()
    if not item:
        raise NotFoundError('Cart item not found')
    return item


def add_item(session: Session, salesperson_id: str, product_id: str, quantity: int) -> CartItem:
    """
    Add product to cart or merge into the existing line.

    A merge increments the quantity and refreshes unit_price to the
    product's current price.
    """
    validate_quantity(quantity)
    cart = get_or_create_cart(session, salesperson_id, lock=True)
    product = _get_active_product(session, product_id)

    line = session.query(CartItem).filter(
        CartItem.cart_id == cart.id,
        CartItem.product_id == product.id
    ).first()

    if line:
        line.quantity = line.quantity + quantity
        line.unit_price = product.price
    else:
        line = CartItem(product_id=product.id, quantity=quantity, unit_price=product.price)
        cart.items.append(line)

    session.flush()
    return line


def update_item_quantity(session: Session, salesperson_id: str, item_id: str, quantity: int) -> CartItem:
    """Set a line's quantity. The snapshot price is left untouched."""
    validate_quantity(quantity)
    cart = get_or_create_cart(session, salesperson_id, lock=True)
    item = _get_cart_item(session, cart, item_id)

    item.quantity = quantity
    session.flush()
    return item


def remove_item(session: Session, salesperson_id: str, item_id: str) -> None:
    """Remove line from cart. Removing an absent line is NotFound."""
    cart = get_or_create_cart(session, salesperson_id, lock=True)
    item = _get_cart_item(session, cart, item_id)

    cart.items.remove(item)
    session.flush()


def set_buyer(session: Session, salesperson_id: str, buyer_id: str) -> Cart:
    """Set buyer for cart. Buyer must be an active Retailer, Distributor or Stockist."""
    cart = get_or_create_cart(session, salesperson_id, lock=True)

    buyer = session.query(User).filter(User.id == buyer_id, User.is_active.is_(True)).first()
    if not buyer:
        raise NotFoundError('Buyer not found')

    if not is_buyer_role(buyer.role):
        raise InvalidRoleError(
            f'Buyer must be a Retailer, Distributor, or Stockist. Expected: {describe_roles(BUYER_ROLES)}',
            expected_roles=BUYER_ROLES
        )

    cart.buyer_id = buyer.id
    session.flush()
    return cart


def set_supplier(session: Session, salesperson_id: str, supplier_id: str) -> Cart:
    """Set supplier for cart, enforcing the buyer-supplier hierarchy."""
    cart = get_or_create_cart(session, salesperson_id, lock=True)

    if not cart.buyer_id:
        raise PreconditionFailedError('Please set buyer before setting supplier')

    buyer = session.query(User).filter(User.id == cart.buyer_id).first()
    if not buyer:
        raise NotFoundError('Buyer not found')

    supplier = session.query(User).filter(User.id == supplier_id, User.is_active.is_(True)).first()
    if not supplier:
        raise NotFoundError('Supplier not found')

    allowed = allowed_supplier_roles(buyer.role)
    if supplier.role not in allowed:
        raise InvalidRoleError(
            f'Invalid supplier for {buyer.role.value} buyer. Expected: {describe_roles(allowed)}',
            expected_roles=allowed
        )

    cart.supplier_id = supplier.id
    session.flush()
    return cart


def reset_cart(cart: Cart) -> None:
    """Empty the cart's items and unset buyer and supplier (caller flushes)."""
    cart.items.clear()
    cart.buyer_id = None
    cart.supplier_id = None


def clear_cart(session: Session, salesperson_id: str) -> None:
    """Clear all lines and the buyer/supplier. A missing cart is a no-op."""
    cart = session.query(Cart).filter(
        Cart.salesperson_id == salesperson_id
    ).with_for_update().first()
    if not cart:
        return

    reset_cart(cart)
    session.flush()


def calculate_cart_totals(cart: Cart) -> Dict[str, Any]:
    """Calculate line totals and grand total from the stored snapshot prices."""
    lines_details = []
    total = Decimal('0.00')

    for item in cart.items:
        line_total = (item.unit_price * item.quantity).quantize(MONEY)
        lines_details.append({
            'item_id': item.id,
            'product_id': item.product_id,
            'quantity': item.quantity,
            'unit_price': item.unit_price,
            'line_total': line_total,
        })
        total += line_total

    return {
        'total': total.quantize(MONEY),
        'lines': lines_details,
    }
