"""
Concurrent checkouts by different salespeople share the daily order
number sequence; every resulting order number must be unique.
"""

import re
import threading
from vyaapar.database import get_session
from vyaapar.models import Order, UserRole
from vyaapar.services import cart_service, checkout_service

ORDER_NUMBER_PATTERN = re.compile(r'^ORD-\d{8}-\d{5}$')
CONCURRENT_CHECKOUTS = 12


def test_concurrent_checkouts_get_distinct_order_numbers(session, make_user, make_product, retailer, distributor):
    product = make_product('7.25')
    product_id, buyer_id, supplier_id = product.id, retailer.id, distributor.id

    salesperson_ids = []
    for _ in range(CONCURRENT_CHECKOUTS):
        salesperson = make_user(UserRole.SALESPERSON)
        cart_service.add_item(session, salesperson.id, product_id, 2)
        cart_service.set_buyer(session, salesperson.id, buyer_id)
        cart_service.set_supplier(session, salesperson.id, supplier_id)
        session.commit()
        salesperson_ids.append(salesperson.id)
    session.remove()

    barrier = threading.Barrier(CONCURRENT_CHECKOUTS)
    order_numbers = []
    errors = []
    lock = threading.Lock()

    def worker(salesperson_id):
        db_session = get_session()
        try:
            barrier.wait()
            order = checkout_service.checkout(db_session, salesperson_id)
            number = order.order_number
            with lock:
                order_numbers.append(number)
        except Exception as e:
            with lock:
                errors.append(e)
        finally:
            db_session.remove()

    threads = [threading.Thread(target=worker, args=(sp_id,)) for sp_id in salesperson_ids]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=120)

    assert errors == []
    assert len(order_numbers) == CONCURRENT_CHECKOUTS
    assert len(set(order_numbers)) == CONCURRENT_CHECKOUTS
    assert all(ORDER_NUMBER_PATTERN.match(number) for number in order_numbers)

    stored = [row.order_number for row in session.query(Order.order_number).all()]
    assert sorted(stored) == sorted(order_numbers)
