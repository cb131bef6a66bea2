# app/client/cart_page.py
# Консольная страница корзины: таблица товаров, итог, выбор пользователя для админа.
import argparse
import os
import sys
from typing import Any, Callable, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm
from rich.table import Table
from rich.text import Text

from app.client.api import CartApiClient


def _money(value: float) -> str:
    return f"${value:.2f}"


class CartPage:
    """Состояние страницы корзины и обработчики действий пользователя."""

    def __init__(self, client: CartApiClient, console: Optional[Console] = None, is_admin: bool = False):
        self.client = client
        self.console = console or Console()
        self.is_admin = is_admin
        self.cart: Dict[str, Any] = {"items": [], "total": 0}
        self.users: List[Dict[str, Any]] = []
        self.selected_user_email = ""

    # Уведомления
    def notify_success(self, message: str) -> None:
        self.console.print(f"[green]✔ {message}[/green]")

    def notify_error(self, message: str) -> None:
        self.console.print(f"[red]✖ {message}[/red]")

    def load(self) -> None:
        if self.is_admin:
            self.load_users()
        self.load_cart()

    def load_users(self) -> None:
        response = self.client.fetch_users()
        if response and response.get("success"):
            self.users = response["data"]

    def load_cart(self, user_email: Optional[str] = None) -> bool:
        response = self.client.fetch_cart(user_email)
        if response and response.get("success"):
            self.cart = response["data"]
            return True
        self.notify_error("Failed to load cart")
        return False

    def _reload(self) -> None:
        self.load_cart(self.selected_user_email or None)

    def _run_action(self, action: Callable[[], Optional[dict]], success_message: str, failure_message: str) -> bool:
        response = action()
        if response and response.get("success"):
            self.notify_success(success_message)
            self._reload()
            return True
        self.notify_error((response or {}).get("message") or failure_message)
        return False

    def handle_user_change(self, email: str) -> None:
        self.selected_user_email = email
        self.load_cart(email or None)

    def handle_update_quantity(self, item_id: int, new_quantity: int) -> bool:
        if new_quantity < 1:
            return False
        return self._run_action(
            lambda: self.client.update_cart_item(item_id, new_quantity),
            "Quantity updated",
            "Failed to update quantity",
        )

    def handle_remove_item(self, item_id: int) -> bool:
        return self._run_action(
            lambda: self.client.remove_from_cart(item_id),
            "Item removed from cart",
            "Failed to remove item",
        )

    def handle_clear_cart(self, confirm: Optional[Callable[[], bool]] = None) -> bool:
        confirm = confirm or (lambda: Confirm.ask("Are you sure you want to clear your cart?", console=self.console))
        if not confirm():
            return False
        return self._run_action(self.client.clear_cart, "Cart cleared", "Failed to clear cart")

    def render(self) -> None:
        items = self.cart.get("items", [])
        title = Text("🛒 Shopping Cart", style="bold")
        if self.selected_user_email:
            title.append(f" - {self.selected_user_email}", style="bold cyan")

        if not items:
            self.console.print(Panel("Your cart is empty", title=title, style="blue"))
            return

        table = Table(box=box.ROUNDED, header_style="bold blue", show_lines=True)
        table.add_column("ID", style="dim", justify="right")
        table.add_column("Product", style="bold")
        table.add_column("Category")
        table.add_column("Price", justify="right")
        table.add_column("Qty", justify="right")
        table.add_column("In stock", justify="right")
        table.add_column("Subtotal", justify="right")

        for item in items:
            product = item.get("product") or {}
            price = product.get("price", 0)
            table.add_row(
                str(item["id"]),
                product.get("name", "Unknown"),
                product.get("category") or "-",
                _money(price),
                str(item["quantity"]),
                str(product.get("stock", "-")),
                _money(price * item["quantity"]),
            )

        self.console.print(Panel(table, title=title, border_style="blue"))
        self.console.print(
            f"Items: [bold]{len(items)}[/bold]   Total: [bold green]{_money(self.cart.get('total', 0))}[/bold green]"
        )

    def render_users(self) -> None:
        if not self.users:
            self.console.print("[italic yellow]No users found[/italic yellow]")
            return
        table = Table(title="Users", box=box.ROUNDED, header_style="bold cyan")
        table.add_column("ID", justify="right")
        table.add_column("Name")
        table.add_column("Email")
        for u in self.users:
            table.add_row(str(u["id"]), u["name"], u["email"])
        self.console.print(table)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cart-page", description="Shopping cart console")
    parser.add_argument("--base-url", default=os.getenv("CART_API_URL", "http://localhost:8000"), help="API base URL")
    parser.add_argument("--token", default=os.getenv("CART_API_TOKEN"), help="Bearer token")
    subparsers = parser.add_subparsers(dest="command", required=True)

    lg = subparsers.add_parser("login", help="Log in and print a token")
    lg.add_argument("--email", required=True)
    lg.add_argument("--password", required=True)

    vc = subparsers.add_parser("view", help="Show the cart")
    vc.add_argument("--user", default="", help="User email (admins only)")

    add = subparsers.add_parser("add", help="Add a product to the cart")
    add.add_argument("product_id", type=int)
    add.add_argument("--qty", type=int, default=1)

    up = subparsers.add_parser("update", help="Set the quantity of a cart item")
    up.add_argument("item_id", type=int)
    up.add_argument("quantity", type=int)

    rm = subparsers.add_parser("remove", help="Remove a cart item")
    rm.add_argument("item_id", type=int)

    cl = subparsers.add_parser("clear", help="Clear the cart")
    cl.add_argument("--yes", action="store_true", help="Do not ask for confirmation")

    subparsers.add_parser("users", help="List users (admins only)")
    return parser


def main(argv: Optional[List[str]] = None, client: Optional[CartApiClient] = None, console: Optional[Console] = None) -> int:
    args = build_parser().parse_args(argv)
    console = console or Console()
    client = client or CartApiClient(base_url=args.base_url, token=args.token)
    if args.token:
        client.token = args.token

    if args.command == "login":
        response = client.login(args.email, args.password)
        if not response or not response.get("success"):
            console.print(f"[red]{(response or {}).get('message', 'Login failed')}[/red]")
            return 1
        console.print(client.token)
        return 0

    check = client.check_token()
    if not check or not check.get("success"):
        console.print("[red]Not logged in: pass --token or set CART_API_TOKEN[/red]")
        return 1
    page = CartPage(client, console=console, is_admin=check["data"].get("role") == "admin")

    if args.command == "view":
        if args.user and not page.is_admin:
            console.print("[yellow]Only admins can view other users' carts[/yellow]")
        page.selected_user_email = args.user if page.is_admin else ""
        if not page.load_cart(page.selected_user_email or None):
            return 1
        page.render()
        return 0

    if args.command == "users":
        if not page.is_admin:
            console.print("[red]Access denied[/red]")
            return 1
        page.load_users()
        page.render_users()
        return 0

    if args.command == "add":
        response = client.add_to_cart(args.product_id, args.qty)
        ok = bool(response and response.get("success"))
        if ok:
            page.notify_success("Product added to cart")
            page.load_cart()
        else:
            page.notify_error((response or {}).get("message") or "Failed to add product")
    elif args.command == "update":
        if args.quantity < 1:
            page.notify_error("Quantity must be at least 1")
        ok = page.handle_update_quantity(args.item_id, args.quantity)
    elif args.command == "remove":
        ok = page.handle_remove_item(args.item_id)
    else:
        ok = page.handle_clear_cart((lambda: True) if args.yes else None)

    if ok:
        page.render()
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
