"""
Model-level tests: the cart quantity validator, subtotal and cascade delete.
"""
import pytest

from app.crud import cart as cart_crud
from app.db.session import SessionLocal
from app.models.cart import CartItem
from app.models.product import Product
from app.models.user import User


@pytest.mark.parametrize("quantity", [0, -5])
def test_quantity_must_be_at_least_one(quantity):
    with pytest.raises(ValueError, match="Quantity must be at least 1"):
        CartItem(user_id=1, product_id=1, quantity=quantity)


@pytest.mark.parametrize("quantity", ["2", 1.5, True])
def test_quantity_must_be_an_integer(quantity):
    with pytest.raises(ValueError, match="Quantity must be an integer"):
        CartItem(user_id=1, product_id=1, quantity=quantity)


def test_subtotal_and_total():
    apple = Product(name="Apple", price=0.1, stock=10)
    pear = Product(name="Pear", price=0.2, stock=10)
    items = [CartItem(quantity=1, product=apple), CartItem(quantity=1, product=pear)]

    assert items[0].subtotal == pytest.approx(0.1)
    assert cart_crud.cart_total(items) == 0.3
    assert cart_crud.cart_total([]) == 0


def test_deleting_user_removes_cart_rows(test_client, alice, make_product, make_cart_item, cart_rows):
    make_cart_item(alice, make_product(), quantity=2)

    with SessionLocal() as session:
        session.delete(session.get(User, alice.id))
        session.commit()

    assert cart_rows() == []


def test_add_product_to_cart_merges_rows(test_client, alice, make_product):
    apple = make_product(stock=4)

    with SessionLocal() as session:
        first = cart_crud.add_product_to_cart(session, alice.id, apple.id, 1)
        second = cart_crud.add_product_to_cart(session, alice.id, apple.id, 3)

        assert first.id == second.id
        assert second.quantity == 4
        assert len(cart_crud.list_cart_items(session, alice.id)) == 1
