"""
Shared fixtures for the Cart API tests.

The app is pointed at an in-memory SQLite database before it is imported;
tables are created for every test and dropped afterwards.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ENVIRONMENT"] = "test"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ADMIN_EMAIL"] = ""
os.environ["ADMIN_PASSWORD"] = ""

import pytest
from fastapi.testclient import TestClient

from app.core import security
from app.db.base import Base
from app.db.session import SessionLocal, engine
from app.main import app
from app.models.cart import CartItem
from app.models.product import Product
from app.models.user import RoleEnum, User

PASSWORD = "secret123"


@pytest.fixture
def test_client():
    Base.metadata.create_all(bind=engine)
    with TestClient(app) as client:
        yield client
    Base.metadata.drop_all(bind=engine)


def _save(obj):
    with SessionLocal() as session:
        session.add(obj)
        session.commit()
        session.refresh(obj)
    return obj


@pytest.fixture
def make_user(test_client):
    def _make_user(email="alice@example.com", name="Alice", role=RoleEnum.user, password=PASSWORD):
        return _save(User(
            email=email,
            name=name,
            role=role,
            hashed_password=security.get_password_hash(password),
        ))
    return _make_user


@pytest.fixture
def make_product(test_client):
    def _make_product(name="Apple", price=2.5, stock=10, category="fruit", image=None):
        return _save(Product(name=name, price=price, stock=stock, category=category, image=image))
    return _make_product


@pytest.fixture
def make_cart_item(test_client):
    def _make_cart_item(user, product, quantity=1):
        return _save(CartItem(user_id=user.id, product_id=product.id, quantity=quantity))
    return _make_cart_item


@pytest.fixture
def auth_headers():
    def _auth_headers(user):
        return {"Authorization": f"Bearer {security.create_user_token(user)}"}
    return _auth_headers


@pytest.fixture
def alice(make_user):
    return make_user()


@pytest.fixture
def bob(make_user):
    return make_user(email="bob@example.com", name="Bob")


@pytest.fixture
def admin(make_user):
    return make_user(email="admin@example.com", name="Zed Admin", role=RoleEnum.admin)


@pytest.fixture
def cart_rows():
    """Reads the carts table with a fresh session."""
    def _cart_rows(user_id=None):
        with SessionLocal() as session:
            query = session.query(CartItem)
            if user_id is not None:
                query = query.filter(CartItem.user_id == user_id)
            return [(row.user_id, row.product_id, row.quantity) for row in query.order_by(CartItem.id)]
    return _cart_rows
