# app/client/api.py
# HTTP-клиент к Cart API. Возвращает конверт {success, message, data} как есть,
# в том числе для 4xx/5xx, чтобы вызывающий код показал message пользователю.
import logging
from typing import Any, Optional

import requests

logger = logging.getLogger(__name__)


class CartApiClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        token: Optional[str] = None,
        timeout: int = 10,
        session: Any = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    def _headers(self) -> dict:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def _request(self, method: str, path: str, action: str, **kwargs) -> Optional[dict]:
        url = f"{self.base_url}{path}"
        try:
            r = getattr(self.session, method)(url, headers=self._headers(), timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"Error {action}: {e}")
            return None
        try:
            return r.json()
        except ValueError:
            logger.error(f"Error {action}: HTTP {r.status_code} with non-JSON body")
            return {"success": False, "message": f"HTTP {r.status_code}", "data": r.text}

    # Auth
    def login(self, email: str, password: str) -> Optional[dict]:
        body = self._request("post", "/auth/login", "logging in", json={"email": email, "password": password})
        if body and body.get("success"):
            self.token = body["data"]["token"]
        return body

    def check_token(self) -> Optional[dict]:
        return self._request("get", "/auth/check", "checking token")

    # Cart
    def add_to_cart(self, product_id: int, quantity: int = 1) -> Optional[dict]:
        return self._request("post", "/cart", "adding to cart", json={"productId": product_id, "quantity": quantity})

    def fetch_cart(self, user_email: Optional[str] = None) -> Optional[dict]:
        params = {"userEmail": user_email} if user_email else None
        return self._request("get", "/cart", "fetching cart", params=params)

    def update_cart_item(self, item_id: int, quantity: int) -> Optional[dict]:
        return self._request("put", f"/cart/{item_id}", "updating cart item", json={"quantity": quantity})

    def remove_from_cart(self, item_id: int) -> Optional[dict]:
        return self._request("delete", f"/cart/{item_id}", "removing from cart")

    def clear_cart(self) -> Optional[dict]:
        return self._request("delete", "/cart", "clearing cart")

    def fetch_users(self) -> Optional[dict]:
        return self._request("get", "/cart/users/list", "fetching users")
