"""
Serialization helpers for JSON responses.
Money is rendered as a fixed two-decimal string, never as a float.
"""
from decimal import Decimal
from datetime import date, datetime
from typing import Union, Optional, Dict, Any

from vyaapar.services.cart_service import calculate_cart_totals


def money(value: Union[Decimal, int, str, None]) -> Optional[str]:
    """
    Format a currency amount.

    Examples:
        money(Decimal('41')) -> "41.00"
        money(Decimal('5.5')) -> "5.50"
        money(None) -> None
    """
    if value is None:
        return None
    return str(Decimal(str(value)).quantize(Decimal('0.01')))


def iso(value: Union[date, datetime, None]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat()


def user_summary(user) -> Optional[Dict[str, Any]]:
    if user is None:
        return None
    return {
        'id': user.id,
        'login_id': user.login_id,
        'name': user.name,
        'role': user.role.value,
    }


def user_detail(user) -> Dict[str, Any]:
    data = user_summary(user)
    data.update({
        'email': user.email,
        'phone': user.phone,
        'address': user.address,
        'is_active': user.is_active,
        'created_at': iso(user.created_at),
    })
    return data


def product_summary(product) -> Dict[str, Any]:
    return {
        'id': product.id,
        'name': product.name,
        'sku': product.sku,
        'unit': product.unit,
    }


def product_detail(product) -> Dict[str, Any]:
    data = product_summary(product)
    data.update({
        'price': money(product.price),
        'active': product.active,
    })
    return data


def cart_item(item) -> Dict[str, Any]:
    return {
        'id': item.id,
        'product_id': item.product_id,
        'product': product_summary(item.product),
        'quantity': item.quantity,
        'unit_price': money(item.unit_price),
        'line_total': money(item.unit_price * item.quantity),
    }


def cart(cart_obj) -> Dict[str, Any]:
    totals = calculate_cart_totals(cart_obj)
    return {
        'id': cart_obj.id,
        'salesperson_id': cart_obj.salesperson_id,
        'buyer': user_summary(cart_obj.buyer),
        'supplier': user_summary(cart_obj.supplier),
        'items': [cart_item(item) for item in cart_obj.items],
        'total': money(totals['total']),
    }


def order_line(line) -> Dict[str, Any]:
    return {
        'id': line.id,
        'product_id': line.product_id,
        'product': product_summary(line.product),
        'quantity': line.quantity,
        'unit_price': money(line.unit_price),
        'total_price': money(line.total_price),
    }


def order_summary(order_obj) -> Dict[str, Any]:
    """Dashboard row: no lines, no salesperson."""
    return {
        'id': order_obj.id,
        'order_number': order_obj.order_number,
        'status': order_obj.status.value,
        'buyer': user_summary(order_obj.buyer),
        'supplier': user_summary(order_obj.supplier),
        'total_amount': money(order_obj.total_amount),
        'created_at': iso(order_obj.created_at),
    }


def order(order_obj) -> Dict[str, Any]:
    data = order_summary(order_obj)
    data.update({
        'salesperson': user_summary(order_obj.salesperson),
        'notes': order_obj.notes,
        'order_lines': [order_line(line) for line in order_obj.lines],
    })
    return data


def attendance(log) -> Dict[str, Any]:
    return {
        'id': log.id,
        'salesperson': user_summary(log.salesperson),
        'date': iso(log.date),
        'login_time': iso(log.login_time),
        'logout_time': iso(log.logout_time),
        'total_hours': money(log.total_hours),
        'status': log.status.value,
    }
