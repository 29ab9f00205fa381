"""
Integration tests for direct retailer orders.
"""

import pytest
from decimal import Decimal
from vyaapar.blueprints.metrics import registry
from vyaapar.exceptions import (
    BusinessLogicError, InvalidRoleError, NotFoundError, OrderNumberExhaustedError
)
from vyaapar.models import Order, OrderStatus, Product, UserRole
from vyaapar.services import checkout_service, retailer_order_service


class TestRetailerOrder:

    def test_live_prices_and_no_salesperson(self, session, retailer, distributor, make_product):
        first = make_product('10.00')
        second = make_product('5.50')

        order = retailer_order_service.create_order(
            session,
            retailer.id,
            distributor.id,
            [{'product_id': first.id, 'quantity': 3}, {'product_id': second.id, 'quantity': 2}],
            notes='Urgent'
        )

        assert order.salesperson_id is None
        assert order.buyer_id == retailer.id
        assert order.supplier_id == distributor.id
        assert order.status == OrderStatus.PENDING
        assert order.total_amount == Decimal('41.00')
        assert order.notes == 'Urgent'
        assert len(order.lines) == 2

    def test_price_read_at_order_time(self, session, retailer, distributor, make_product):
        product = make_product('10.00')
        product_id = product.id
        session.query(Product).filter_by(id=product_id).update({'price': Decimal('11.00')})
        session.commit()

        order = retailer_order_service.create_order(
            session, retailer.id, distributor.id, [{'product_id': product_id, 'quantity': 1}]
        )
        assert order.total_amount == Decimal('11.00')

    def test_duplicate_products_are_merged(self, session, retailer, distributor, make_product):
        product = make_product('2.00')
        order = retailer_order_service.create_order(
            session,
            retailer.id,
            distributor.id,
            [{'product_id': product.id, 'quantity': 1}, {'product_id': product.id, 'quantity': 4}]
        )

        assert len(order.lines) == 1
        assert order.lines[0].quantity == 5
        assert order.total_amount == Decimal('10.00')

    @pytest.mark.parametrize('role', [UserRole.STOCKIST, UserRole.RETAILER, UserRole.ADMIN])
    def test_supplier_must_be_distributor(self, session, retailer, make_user, make_product, role):
        supplier = make_user(role)
        product = make_product('1.00')

        with pytest.raises(InvalidRoleError) as excinfo:
            retailer_order_service.create_order(
                session, retailer.id, supplier.id, [{'product_id': product.id, 'quantity': 1}]
            )
        assert excinfo.value.expected_roles == ['DISTRIBUTOR']
        assert session.query(Order).count() == 0

    def test_unknown_supplier(self, session, retailer, make_product):
        product = make_product('1.00')
        with pytest.raises(NotFoundError):
            retailer_order_service.create_order(
                session, retailer.id, 'nobody', [{'product_id': product.id, 'quantity': 1}]
            )

    def test_missing_product_names_the_id(self, session, retailer, distributor, make_product):
        product = make_product('1.00')
        with pytest.raises(NotFoundError) as excinfo:
            retailer_order_service.create_order(
                session,
                retailer.id,
                distributor.id,
                [{'product_id': product.id, 'quantity': 1}, {'product_id': 'ghost', 'quantity': 1}]
            )
        assert 'ghost' in excinfo.value.message
        assert session.query(Order).count() == 0

    @pytest.mark.parametrize('items', [
        [],
        [{'quantity': 1}],
        [{'product_id': 'p', 'quantity': 0}],
        [{'product_id': 'p', 'quantity': 2.5}],
        [{'product_id': ['p'], 'quantity': 1}],
        [{'product_id': {'id': 'p'}, 'quantity': 1}],
    ])
    def test_invalid_items(self, session, retailer, distributor, items):
        with pytest.raises(BusinessLogicError):
            retailer_order_service.create_order(session, retailer.id, distributor.id, items)

    def test_non_retailer_buyer(self, session, stockist, distributor, make_product):
        product = make_product('1.00')
        with pytest.raises(InvalidRoleError):
            retailer_order_service.create_order(
                session, stockist.id, distributor.id, [{'product_id': product.id, 'quantity': 1}]
            )

    def test_exhausted(self, session, retailer, distributor, make_product, monkeypatch):
        product = make_product('1.00')
        first = retailer_order_service.create_order(
            session, retailer.id, distributor.id, [{'product_id': product.id, 'quantity': 1}]
        )
        taken = first.order_number
        monkeypatch.setattr(checkout_service, 'next_order_number', lambda db_session, day=None: taken)

        with pytest.raises(OrderNumberExhaustedError):
            retailer_order_service.create_order(
                session, retailer.id, distributor.id, [{'product_id': product.id, 'quantity': 1}]
            )
        assert session.query(Order).count() == 1

    def test_counted_only_after_commit(self, session, retailer, distributor, make_product, monkeypatch):
        product_id = make_product('1.00').id
        created = registry.get_sample_value('orders_created_total', {'source': 'retailer'}) or 0

        retailer_order_service.create_order(
            session, retailer.id, distributor.id, [{'product_id': product_id, 'quantity': 1}]
        )
        assert registry.get_sample_value('orders_created_total', {'source': 'retailer'}) == created + 1

        def failing_commit():
            raise RuntimeError('simulated commit failure')

        monkeypatch.setattr(session(), 'commit', failing_commit)
        with pytest.raises(RuntimeError):
            retailer_order_service.create_order(
                session, retailer.id, distributor.id, [{'product_id': product_id, 'quantity': 1}]
            )
        monkeypatch.undo()

        assert registry.get_sample_value('orders_created_total', {'source': 'retailer'}) == created + 1
        assert session.query(Order).count() == 1
