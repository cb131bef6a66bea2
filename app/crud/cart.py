# app/crud/cart.py
# Операции с корзиной поверх сессии SQLAlchemy.
# Проверки остатка делаются в коде, без блокировок строк товара.
import logging

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, joinedload

from app.core.errors import ApiError
from app.models.cart import CartItem
from app.models.product import Product

logger = logging.getLogger(__name__)

INSUFFICIENT_STOCK = "Insufficient stock"


def get_cart_item(db: Session, item_id: int, with_product: bool = False) -> CartItem | None:
    stmt = select(CartItem).where(CartItem.id == item_id)
    if with_product:
        stmt = stmt.options(joinedload(CartItem.product))
    return db.execute(stmt).scalar_one_or_none()


def get_user_cart_item(db: Session, user_id: int, product_id: int) -> CartItem | None:
    """Строка корзины пользователя для конкретного товара, если есть."""
    stmt = select(CartItem).where(CartItem.user_id == user_id, CartItem.product_id == product_id)
    return db.execute(stmt).scalars().first()


def list_cart_items(db: Session, user_id: int) -> list[CartItem]:
    """Все строки корзины пользователя вместе с товарами, новые сверху."""
    stmt = (
        select(CartItem)
        .where(CartItem.user_id == user_id)
        .options(joinedload(CartItem.product))
        .order_by(CartItem.created_at.desc(), CartItem.id.desc())
    )
    return list(db.execute(stmt).scalars().all())


def cart_total(items: list[CartItem]) -> float:
    return round(sum(item.subtotal for item in items), 2)


def add_product_to_cart(db: Session, user_id: int, product_id: int, quantity: int = 1) -> CartItem:
    """
    Добавляет товар в корзину.
    Если товар уже лежит в корзине, количество суммируется в существующей строке,
    новая строка не создаётся. Остаток проверяется до и после слияния.
    """
    product = db.get(Product, product_id)
    if product is None:
        raise ApiError(404, "Product not found")

    if product.stock < quantity:
        raise ApiError(400, INSUFFICIENT_STOCK)

    cart_item = get_user_cart_item(db, user_id, product_id)
    if cart_item is not None:
        new_quantity = cart_item.quantity + quantity
        if product.stock < new_quantity:
            raise ApiError(400, INSUFFICIENT_STOCK)
        cart_item.quantity = new_quantity
    else:
        cart_item = CartItem(user_id=user_id, product_id=product_id, quantity=quantity)
        db.add(cart_item)

    db.commit()
    logger.info(f"User {user_id} cart: product {product_id} -> quantity {cart_item.quantity}")
    return get_cart_item(db, cart_item.id, with_product=True)


def update_cart_item_quantity(db: Session, cart_item: CartItem, quantity: int) -> CartItem:
    if cart_item.product.stock < quantity:
        raise ApiError(400, INSUFFICIENT_STOCK)
    cart_item.quantity = quantity
    db.commit()
    db.refresh(cart_item)
    logger.info(f"Cart item {cart_item.id} quantity set to {quantity}")
    return cart_item


def remove_cart_item(db: Session, cart_item: CartItem) -> None:
    item_id = cart_item.id
    db.delete(cart_item)
    db.commit()
    logger.info(f"Cart item {item_id} removed")


def clear_cart(db: Session, user_id: int) -> int:
    """Удаляет все строки корзины пользователя, возвращает их количество."""
    result = db.execute(delete(CartItem).where(CartItem.user_id == user_id))
    db.commit()
    logger.info(f"User {user_id} cart cleared ({result.rowcount} items)")
    return result.rowcount
