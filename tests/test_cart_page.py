"""
Tests for the console cart page and its API client.

The client talks to the real app: TestClient is injected as the HTTP session,
so every page action goes through the routes and the database.
"""
import io

import pytest
import requests
from rich.console import Console

from app.client import cart_page
from app.client.api import CartApiClient
from app.client.cart_page import CartPage

from conftest import PASSWORD


def make_console():
    return Console(file=io.StringIO(), record=True, width=140)


@pytest.fixture
def api_client(test_client):
    def _api_client(user=None):
        client = CartApiClient(base_url="http://testserver", session=test_client)
        if user is not None:
            client.login(user.email, PASSWORD)
        return client
    return _api_client


class TestCartApiClient:

    def test_login_stores_token(self, api_client, alice):
        client = api_client()

        body = client.login(alice.email, PASSWORD)

        assert body["success"] is True
        assert client.token == body["data"]["token"]
        assert client.check_token()["data"]["email"] == alice.email

    def test_failed_login_keeps_no_token(self, api_client, alice):
        client = api_client()

        body = client.login(alice.email, "wrong-pass")

        assert body["success"] is False
        assert client.token is None

    def test_error_envelope_is_returned_not_raised(self, api_client, alice):
        client = api_client(alice)

        body = client.add_to_cart(999)

        assert body == {"success": False, "message": "Product not found", "data": {}}

    def test_cart_round_trip(self, api_client, alice, make_product):
        client = api_client(alice)
        apple = make_product()

        added = client.add_to_cart(apple.id, 2)
        item_id = added["data"]["id"]
        assert client.update_cart_item(item_id, 3)["data"]["quantity"] == 3
        assert client.fetch_cart()["data"]["total"] == pytest.approx(7.5)
        assert client.remove_from_cart(item_id)["success"] is True
        assert client.fetch_cart()["data"]["items"] == []

    def test_transport_error_returns_none(self, monkeypatch):
        session = requests.Session()

        def refuse(*args, **kwargs):
            raise requests.ConnectionError("connection refused")

        monkeypatch.setattr(session, "get", refuse)
        client = CartApiClient(base_url="http://localhost:1", token="t", session=session)

        assert client.fetch_cart() is None


class TestCartPage:

    def test_render_cart(self, api_client, alice, make_product, make_cart_item):
        make_cart_item(alice, make_product(name="Apple", price=2.5), quantity=2)
        console = make_console()
        page = CartPage(api_client(alice), console=console)

        page.load()
        page.render()

        output = console.export_text()
        assert "Apple" in output
        assert "$5.00" in output
        assert "Total: $5.00" in output

    def test_render_empty_cart(self, api_client, alice):
        console = make_console()
        page = CartPage(api_client(alice), console=console)

        page.load()
        page.render()

        assert "Your cart is empty" in console.export_text()

    def test_admin_loads_users_and_switches_cart(self, api_client, admin, bob, make_product, make_cart_item):
        make_cart_item(bob, make_product(name="Pear", price=1.0), quantity=4)
        console = make_console()
        page = CartPage(api_client(admin), console=console, is_admin=True)

        page.load()
        assert [u["email"] for u in page.users] == [bob.email, admin.email]
        assert page.cart["items"] == []

        page.handle_user_change(bob.email)
        assert page.cart["total"] == pytest.approx(4.0)

        page.handle_user_change("")
        assert page.cart["items"] == []

    def test_non_admin_does_not_load_users(self, api_client, alice):
        page = CartPage(api_client(alice), console=make_console())

        page.load()

        assert page.users == []

    def test_update_quantity_reloads_cart(self, api_client, alice, make_product, make_cart_item):
        item = make_cart_item(alice, make_product(stock=5), quantity=1)
        console = make_console()
        page = CartPage(api_client(alice), console=console)
        page.load()

        assert page.handle_update_quantity(item.id, 3) is True
        assert page.cart["items"][0]["quantity"] == 3
        assert "Quantity updated" in console.export_text()

    def test_update_quantity_below_one_is_ignored(self, api_client, alice, make_product, make_cart_item, cart_rows):
        item = make_cart_item(alice, make_product(), quantity=2)
        page = CartPage(api_client(alice), console=make_console())

        assert page.handle_update_quantity(item.id, 0) is False
        assert cart_rows() == [(alice.id, item.product_id, 2)]

    def test_update_failure_shows_server_message(self, api_client, alice, make_product, make_cart_item):
        item = make_cart_item(alice, make_product(stock=2), quantity=1)
        console = make_console()
        page = CartPage(api_client(alice), console=console)

        assert page.handle_update_quantity(item.id, 9) is False
        assert "Insufficient stock" in console.export_text()

    def test_remove_item(self, api_client, alice, make_product, make_cart_item):
        item = make_cart_item(alice, make_product())
        page = CartPage(api_client(alice), console=make_console())
        page.load()

        assert page.handle_remove_item(item.id) is True
        assert page.cart["items"] == []

    def test_clear_cart_requires_confirmation(self, api_client, alice, make_product, make_cart_item, cart_rows):
        make_cart_item(alice, make_product())
        page = CartPage(api_client(alice), console=make_console())

        assert page.handle_clear_cart(confirm=lambda: False) is False
        assert len(cart_rows()) == 1

        assert page.handle_clear_cart(confirm=lambda: True) is True
        assert cart_rows() == []


class TestCartPageCli:

    def test_view(self, api_client, alice, auth_headers, make_product, make_cart_item):
        make_cart_item(alice, make_product(name="Kiwi", price=0.5), quantity=4)
        console = make_console()
        token = auth_headers(alice)["Authorization"].split()[1]

        code = cart_page.main(["--token", token, "view"], client=api_client(), console=console)

        assert code == 0
        assert "Kiwi" in console.export_text()

    def test_add_then_clear(self, api_client, alice, make_product, cart_rows):
        apple = make_product()
        client = api_client(alice)

        assert cart_page.main(["add", str(apple.id), "--qty", "2"], client=client, console=make_console()) == 0
        assert cart_rows() == [(alice.id, apple.id, 2)]

        assert cart_page.main(["clear", "--yes"], client=client, console=make_console()) == 0
        assert cart_rows() == []

    def test_users_forbidden_for_non_admin(self, api_client, alice):
        console = make_console()

        code = cart_page.main(["users"], client=api_client(alice), console=console)

        assert code == 1
        assert "Access denied" in console.export_text()

    def test_not_logged_in(self, api_client):
        console = make_console()

        code = cart_page.main(["view"], client=api_client(), console=console)

        assert code == 1
        assert "Not logged in" in console.export_text()
