import pytest
from decimal import Decimal

from app import create_app
from app.database import create_all, drop_all, get_session
from app.models import Category, DiscountTier, Product, Sale, SaleLine, SaleStatus

CUSTOMER_A = 'customer-a'
CUSTOMER_B = 'customer-b'
ADMIN_ID = 'admin-1'


@pytest.fixture(scope='session')
def app():
    """Create application instance for testing (in-memory SQLite)."""
    return create_app('config.TestConfig')


@pytest.fixture(scope='function')
def client(app, session):
    """Create test client on top of a fresh schema."""
    return app.test_client()


@pytest.fixture(scope='function')
def session(app):
    """Create the schema, hand out the scoped session, drop everything afterwards."""
    create_all()
    db = get_session()
    yield db
    db.rollback()
    db.remove()
    drop_all()


@pytest.fixture(scope='function')
def category(session):
    """Create a test category."""
    category = Category(name='Electronics', description='Gadgets and devices.')
    session.add(category)
    session.commit()
    return category


def _product(session, category, name, price, discount, stock):
    product = Product(
        category_id=category.id,
        name=name,
        price=Decimal(price),
        discount=discount,
        stock_quantity=stock,
    )
    session.add(product)
    session.commit()
    return product


@pytest.fixture(scope='function')
def product_a(session, category):
    """44.37 with 5% off, 300 in stock."""
    return _product(session, category, 'Mechanical Keyboard', '44.37', DiscountTier.FIVE_PERCENT, 300)


@pytest.fixture(scope='function')
def product_b(session, category):
    """66.99 with 15% off, 600 in stock."""
    return _product(session, category, 'USB-C Dock', '66.99', DiscountTier.FIFTEEN_PERCENT, 600)


@pytest.fixture(scope='function')
def scarce_product(session, category):
    """Only 10 units left, no discount."""
    return _product(session, category, 'Limited Edition Headset', '120.00', DiscountTier.NONE, 10)


@pytest.fixture(scope='function')
def make_sale(session, product_a):
    """Factory persisting a one-line sale in the given status, bypassing checkout."""
    def _make(status=SaleStatus.PENDING, customer_id=CUSTOMER_A):
        sale = Sale(customer_id=customer_id, status=status, total_price=Decimal('42.15'))
        sale.lines.append(SaleLine(
            product_id=product_a.id,
            quantity=1,
            unit_price=Decimal('44.37'),
            discounted_unit_price=Decimal('42.1515'),
            gross_price=Decimal('44.37'),
            final_price=Decimal('42.15'),
        ))
        session.add(sale)
        session.commit()
        return sale
    return _make


@pytest.fixture
def customer_headers():
    return {'X-Customer-Id': CUSTOMER_A, 'X-User-Role': 'Customer'}


@pytest.fixture
def other_customer_headers():
    return {'X-Customer-Id': CUSTOMER_B, 'X-User-Role': 'Customer'}


@pytest.fixture
def admin_headers():
    return {'X-Customer-Id': ADMIN_ID, 'X-User-Role': 'Admin'}
