"""Small helpers for reading JSON bodies and query strings."""
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

from flask import request

from vyaapar.exceptions import BusinessLogicError

# Numeric(12, 2)
MAX_PRICE = Decimal('9999999999.99')


def json_body() -> dict:
    """Request JSON object, or an empty dict for a missing/invalid body."""
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def required_str(payload: dict, field: str) -> str:
    value = payload.get(field)
    if not isinstance(value, str) or not value.strip():
        raise BusinessLogicError(f'{field} is required')
    return value.strip()


def optional_notes(payload: dict, max_length: int = 2000) -> Optional[str]:
    notes = payload.get('notes')
    if notes is None:
        return None
    if not isinstance(notes, str):
        raise BusinessLogicError('notes must be a string')
    if len(notes) > max_length:
        raise BusinessLogicError(f'Notes cannot exceed {max_length} characters')
    return notes.strip() or None


def parse_price(value) -> Decimal:
    """Parse a non-negative currency amount; floats go through str() to avoid binary noise."""
    try:
        price = Decimal(str(value)).quantize(Decimal('0.01'))
    except (InvalidOperation, ValueError, TypeError):
        raise BusinessLogicError('price must be a decimal amount')
    if not price.is_finite():
        raise BusinessLogicError('price must be a decimal amount')
    if price < 0:
        raise BusinessLogicError('price must be greater than or equal to 0')
    if price > MAX_PRICE:
        raise BusinessLogicError(f'price cannot exceed {MAX_PRICE}')
    return price


def query_date(name: str) -> Optional[date]:
    raw = request.args.get(name)
    if not raw:
        return None
    try:
        return date.fromisoformat(raw[:10])
    except ValueError:
        raise BusinessLogicError(f'{name} must be a valid ISO date')


def query_int(name: str, default: int, minimum: int = 1, maximum: Optional[int] = None) -> int:
    raw = request.args.get(name)
    if raw is None or raw == '':
        return default
    try:
        value = int(raw)
    except ValueError:
        raise BusinessLogicError(f'{name} must be an integer')
    if value < minimum or (maximum is not None and value > maximum):
        raise BusinessLogicError(f'{name} must be between {minimum} and {maximum or "unbounded"}')
    return value
