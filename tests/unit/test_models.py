"""
Unit tests for SQLAlchemy models.
"""

import pytest
from decimal import Decimal
from sqlalchemy.exc import IntegrityError
from vyaapar.models import User, UserRole, Cart, CartItem, Order, OrderStatus


class TestUserModel:
    """Tests for User model."""

    def test_password_hashing(self):
        """Test password hashing and verification."""
        user = User(login_id='sp1', email='sp1@test.com', role=UserRole.SALESPERSON)
        user.set_password('mypassword')

        assert user.password_hash != 'mypassword'
        assert user.check_password('mypassword') is True
        assert user.check_password('wrongpassword') is False

    def test_is_admin(self):
        assert User(role=UserRole.ADMIN).is_admin
        assert User(role=UserRole.SUPER_ADMIN).is_admin
        assert not User(role=UserRole.STOCKIST).is_admin

    def test_login_id_unique(self, session, salesperson):
        """Test that login_id must be unique."""
        duplicate = User(
            login_id=salesperson.login_id,
            email='another@test.com',
            role=UserRole.SALESPERSON
        )
        duplicate.set_password('password123')
        session.add(duplicate)

        with pytest.raises(IntegrityError):
            session.commit()
        session.rollback()


class TestCartModel:
    """Tests for Cart and CartItem models."""

    def test_one_cart_per_salesperson(self, session, salesperson):
        session.add(Cart(salesperson_id=salesperson.id))
        session.commit()

        session.add(Cart(salesperson_id=salesperson.id))
        with pytest.raises(IntegrityError):
            session.commit()
        session.rollback()

    def test_one_line_per_product(self, session, salesperson, make_product):
        product = make_product('3.00')
        cart = Cart(salesperson_id=salesperson.id)
        cart.items.append(CartItem(product_id=product.id, quantity=1, unit_price=Decimal('3.00')))
        cart.items.append(CartItem(product_id=product.id, quantity=2, unit_price=Decimal('3.00')))
        session.add(cart)

        with pytest.raises(IntegrityError):
            session.commit()
        session.rollback()


class TestOrderModel:
    """Tests for Order model."""

    def test_order_number_unique(self, session, salesperson, retailer, distributor):
        for _ in range(2):
            session.add(Order(
                order_number='ORD-20260131-00001',
                buyer_id=retailer.id,
                supplier_id=distributor.id,
                salesperson_id=salesperson.id,
                total_amount=Decimal('0.00')
            ))

        with pytest.raises(IntegrityError) as excinfo:
            session.commit()
        session.rollback()
        assert 'order_number' in str(excinfo.value.orig)

    def test_defaults(self, session, retailer, distributor):
        order = Order(
            order_number='ORD-20260131-00007',
            buyer_id=retailer.id,
            supplier_id=distributor.id,
            total_amount=Decimal('12.50')
        )
        session.add(order)
        session.commit()

        assert order.status == OrderStatus.PENDING
        assert order.salesperson_id is None
        assert order.created_at is not None
        assert order.total_amount == Decimal('12.50')
