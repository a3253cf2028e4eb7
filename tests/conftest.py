import os
import uuid
from decimal import Decimal

import jwt
import pytest

# Set test environment variables before importing the app
os.environ['FLASK_ENV'] = 'testing'
os.environ['DATABASE_URL'] = 'sqlite:///:memory:'

from warehouse_service import create_app
from warehouse_service.database import db
from warehouse_service.models import Category, Product, Warehouse, StockEntry

TEST_JWT_SECRET = 'test-jwt-secret'


@pytest.fixture(scope='session')
def app():
    """Create application for the tests."""
    app = create_app('testing')

    with app.app_context():
        # Create all database tables
        db.create_all()
        yield app
        # Clean up
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """A test client for the app."""
    return app.test_client()


@pytest.fixture
def db_session(app):
    """Database session for a test; every table is emptied afterwards."""
    yield db.session

    # Clean up tables with Core deletes, movements refuse ORM deletes
    db.session.rollback()
    for table in reversed(db.metadata.sorted_tables):
        db.session.execute(table.delete())
    db.session.commit()


@pytest.fixture
def auth_enabled(app, monkeypatch):
    """Turn bearer-token authentication on for one test."""
    monkeypatch.setitem(app.config, 'AUTH_ENABLED', True)
    monkeypatch.setitem(app.config, 'JWT_SECRET', TEST_JWT_SECRET)
    return app


@pytest.fixture
def auth_headers():
    """Headers carrying a token for an operator."""
    return make_auth_headers('user-operator', ['Operador'])


def make_auth_headers(user_id, roles, realm_roles=None):
    payload = {'sub': user_id, 'roles': roles}
    if realm_roles:
        payload['realm_access'] = {'roles': realm_roles}
    token = jwt.encode(payload, TEST_JWT_SECRET, algorithm='HS256')
    return {
        'Authorization': f'Bearer {token}',
        'Content-Type': 'application/json'
    }


# Helper functions for tests
def create_test_category(db_session, **kwargs):
    """Create a test category with default values."""
    defaults = {
        'name': f'Category {uuid.uuid4().hex[:8]}',
        'description': 'Test category'
    }
    defaults.update(kwargs)

    category = Category(**defaults)
    db_session.add(category)
    db_session.commit()
    return category


def create_test_product(db_session, **kwargs):
    """Create a test product with default values."""
    defaults = {
        'code': f'P-{uuid.uuid4().hex[:8]}',  # Generate unique code
        'name': 'Test Product',
        'unit': 'pza',
        'min_stock': 0,
        'standard_cost': Decimal('2.00'),
        'is_active': True
    }
    defaults.update(kwargs)

    product = Product(**defaults)
    db_session.add(product)
    db_session.commit()
    return product


def create_test_warehouse(db_session, **kwargs):
    """Create a test warehouse with default values."""
    defaults = {
        'code': f'W-{uuid.uuid4().hex[:8]}',
        'name': 'Test Warehouse',
        'location': 'Dock 1',
        'is_active': True
    }
    defaults.update(kwargs)

    warehouse = Warehouse(**defaults)
    db_session.add(warehouse)
    db_session.commit()
    return warehouse


def create_test_stock(db_session, product, warehouse, quantity):
    """Seed a stock row directly, bypassing the posting engine."""
    entry = StockEntry(product_id=product.id, warehouse_id=warehouse.id, quantity=quantity)
    db_session.add(entry)
    db_session.commit()
    return entry


def stock_of(product, warehouse):
    """Current quantity of a pair as stored, 0 when there is no row."""
    db.session.expire_all()
    entry = StockEntry.query.filter_by(product_id=product.id, warehouse_id=warehouse.id).first()
    return entry.quantity if entry else 0


def generate_movement_data(movement_type, warehouse, lines, **kwargs):
    """Generate a movement request body."""
    data = {
        'type': movement_type,
        'warehouse_id': warehouse.id,
        'details': [
            {'product_id': product.id, 'quantity': quantity}
            for product, quantity in lines
        ]
    }
    data.update(kwargs)
    return data
