"""Direct retailer orders - no cart and no salesperson involved."""
import logging
from collections import OrderedDict
from decimal import Decimal
from typing import List, Dict, Any, Optional

from sqlalchemy.orm import Session

from vyaapar.models import Order, Product, User, UserRole
from vyaapar.exceptions import VyaaparError, BusinessLogicError, NotFoundError, InvalidRoleError
from vyaapar.services.cart_service import validate_quantity
from vyaapar.services.checkout_service import create_order_with_retry, DEFAULT_MAX_ATTEMPTS, MONEY
from vyaapar.services.hierarchy import allowed_supplier_roles, describe_roles
from vyaapar.blueprints.metrics import orders_created_total

logger = logging.getLogger(__name__)


def _merge_items(items: List[Dict[str, Any]]) -> "OrderedDict[str, int]":
    """Collapse repeated products into one quantity per product, keeping first-seen order."""
    if not items:
        raise BusinessLogicError('At least one item is required.')

    merged = OrderedDict()
    for item in items:
        product_id = item.get('product_id')
        if not isinstance(product_id, str) or not product_id:
            raise BusinessLogicError('product_id is required for each item.')
        quantity = validate_quantity(item.get('quantity'))
        merged[product_id] = merged.get(product_id, 0) + quantity
    return merged


def create_order(
    session: Session,
    retailer_id: str,
    supplier_id: str,
    items: List[Dict[str, Any]],
    notes: Optional[str] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
) -> Order:
    """
    Create an order where the retailer is the buyer, priced at live catalog prices.

    Retailers order one hop up the chain, from a distributor.
    """
    try:
        quantities = _merge_items(items)

        retailer = session.query(User).filter(User.id == retailer_id, User.is_active.is_(True)).first()
        if not retailer:
            raise NotFoundError('Retailer not found')
        if retailer.role != UserRole.RETAILER:
            raise InvalidRoleError('Only retailers can place direct orders.', expected_roles=[UserRole.RETAILER])

        supplier = session.query(User).filter(User.id == supplier_id, User.is_active.is_(True)).first()
        if not supplier:
            raise NotFoundError('Supplier not found')

        allowed = allowed_supplier_roles(UserRole.RETAILER)
        if supplier.role not in allowed:
            raise InvalidRoleError(
                f'Retailers can only order from {describe_roles(allowed)}',
                expected_roles=allowed
            )

        # Batch fetch products
        products = session.query(Product).filter(
            Product.id.in_(list(quantities.keys())),
            Product.active.is_(True)
        ).all()
        products_dict = {p.id: p for p in products}

        lines_data = []
        total_amount = Decimal('0.00')
        for product_id, quantity in quantities.items():
            product = products_dict.get(product_id)
            if not product:
                raise NotFoundError(f'Product not found: {product_id}')

            total_price = (product.price * quantity).quantize(MONEY)
            lines_data.append({
                'product_id': product.id,
                'quantity': quantity,
                'unit_price': product.price,
                'total_price': total_price,
            })
            total_amount += total_price

        order = create_order_with_retry(
            session,
            buyer_id=retailer.id,
            supplier_id=supplier.id,
            salesperson_id=None,
            lines_data=lines_data,
            total_amount=total_amount.quantize(MONEY),
            notes=notes,
            max_attempts=max_attempts
        )

        session.commit()
        orders_created_total.labels(source='retailer').inc()
        logger.info(f"Retailer {retailer_id} placed order {order.order_number} with {supplier_id}")
        return order

    except VyaaparError:
        session.rollback()
        raise
    except Exception:
        session.rollback()
        logger.exception(f"Direct order by retailer {retailer_id} failed")
        raise
