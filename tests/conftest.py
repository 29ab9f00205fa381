import pytest
import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import jwt

from vyaapar import create_app
from vyaapar.database import Base, create_all, drop_all, get_session
from vyaapar.models import User, UserRole, Product
from vyaapar.services import cart_service


@pytest.fixture(scope='session')
def app():
    """Create application instance for testing with a fresh schema."""
    app = create_app('config.TestingConfig')
    drop_all()
    create_all()
    yield app
    get_session().remove()
    drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def session(app):
    """
    Database session for testing.

    Every table is emptied afterwards, so tests may commit freely.
    """
    db_session = get_session()
    yield db_session
    db_session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        db_session.execute(table.delete())
    db_session.commit()
    db_session.remove()


@pytest.fixture(scope='function')
def make_user(session):
    """Factory for committed users. Attributes stay loaded after the session is removed."""
    def _make_user(role, name=None, password='password123', is_active=True):
        suffix = uuid.uuid4().hex[:8]
        prefix = role.value.lower()
        user = User(
            login_id=f'{prefix}-{suffix}',
            email=f'{prefix}-{suffix}@test.com',
            name=name or f'{role.value.title()} {suffix}',
            role=role,
            is_active=is_active
        )
        user.set_password(password)
        session.add(user)
        session.commit()
        session.refresh(user)
        return user
    return _make_user


@pytest.fixture(scope='function')
def make_product(session):
    def _make_product(price='10.00', name=None, active=True):
        suffix = uuid.uuid4().hex[:8]
        product = Product(
            name=name or f'Product {suffix}',
            sku=f'SKU-{suffix}',
            price=Decimal(price),
            unit='pcs',
            active=active
        )
        session.add(product)
        session.commit()
        session.refresh(product)
        return product
    return _make_product


@pytest.fixture(scope='function')
def salesperson(make_user):
    return make_user(UserRole.SALESPERSON)


@pytest.fixture(scope='function')
def retailer(make_user):
    return make_user(UserRole.RETAILER)


@pytest.fixture(scope='function')
def distributor(make_user):
    return make_user(UserRole.DISTRIBUTOR)


@pytest.fixture(scope='function')
def stockist(make_user):
    return make_user(UserRole.STOCKIST)


@pytest.fixture(scope='function')
def admin(make_user):
    return make_user(UserRole.ADMIN)


@pytest.fixture(scope='function')
def ready_cart(session, salesperson, retailer, distributor, make_product):
    """
    Salesperson cart with buyer, supplier and two lines:
    10.00 x 3 and 5.50 x 2.
    """
    first = make_product('10.00', name='Rice 1kg')
    second = make_product('5.50', name='Salt 500g')

    cart_service.add_item(session, salesperson.id, first.id, 3)
    cart_service.add_item(session, salesperson.id, second.id, 2)
    cart_service.set_buyer(session, salesperson.id, retailer.id)
    cart_service.set_supplier(session, salesperson.id, distributor.id)
    session.commit()

    return {
        'salesperson_id': salesperson.id,
        'buyer_id': retailer.id,
        'supplier_id': distributor.id,
        'product_ids': [first.id, second.id],
    }


@pytest.fixture(scope='function')
def auth_headers(app):
    """Bearer header for a user, signed with the test JWT key."""
    def _auth_headers(user):
        token = jwt.encode(
            {
                'user_id': user.id,
                'login_id': user.login_id,
                'role': user.role.value,
                'exp': datetime.now(timezone.utc) + timedelta(hours=1),
            },
            app.config['JWT_SECRET_KEY'],
            algorithm=app.config['JWT_ALGORITHM']
        )
        return {'Authorization': f'Bearer {token}'}
    return _auth_headers
