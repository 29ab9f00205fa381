"""
Order number allocation.

Numbers look like ORD-20260131-00042: the UTC allocation date plus a daily
sequence derived from the greatest existing number for that date. There is
no counter row, so two concurrent callers can derive the same number; the
unique constraint on orders.order_number decides, and the checkout engine
retries with a freshly derived number.
"""
import logging
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from vyaapar.models import Order

logger = logging.getLogger(__name__)

ORDER_NUMBER_PREFIX = 'ORD'
SEQUENCE_WIDTH = 5
MAX_SEQUENCE = 10 ** SEQUENCE_WIDTH - 1


class SequenceOverflowError(Exception):
    """Raised when a day's sequence would need more than SEQUENCE_WIDTH digits."""


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def order_number_prefix(day: date) -> str:
    return f"{ORDER_NUMBER_PREFIX}-{day.strftime('%Y%m%d')}-"


def format_order_number(day: date, sequence: int) -> str:
    return f"{order_number_prefix(day)}{str(sequence).zfill(SEQUENCE_WIDTH)}"


def parse_sequence(order_number: str, prefix: str) -> Optional[int]:
    """Return the numeric suffix of `order_number`, or None if it isn't one."""
    if not order_number or not order_number.startswith(prefix):
        return None
    suffix = order_number[len(prefix):]
    if not suffix.isdigit():
        return None
    return int(suffix)


def next_order_number(session: Session, day: Optional[date] = None) -> str:
    """
    Derive the next candidate order number for `day` (UTC today by default).

    The result is only a candidate: it is unique at read time, not at
    insert time.
    """
    day = day or utc_today()
    prefix = order_number_prefix(day)

    last_number = session.query(Order.order_number).filter(
        Order.order_number.like(f'{prefix}%')
    ).order_by(Order.order_number.desc()).limit(1).scalar()

    sequence = 1
    if last_number:
        last_sequence = parse_sequence(last_number, prefix)
        if last_sequence is not None:
            sequence = last_sequence + 1

    if sequence > MAX_SEQUENCE:
        raise SequenceOverflowError(f"Daily order sequence exhausted for {day.isoformat()}")

    return format_order_number(day, sequence)
