# app/api/cart.py
# Роуты корзины: добавление, просмотр, изменение количества, удаление, очистка
# и список пользователей для админского просмотра чужих корзин.
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core import security
from app.core.errors import ApiError, route_errors
from app.crud import cart as cart_crud
from app.crud import user as user_crud
from app.models.user import User, RoleEnum
from app.schemas.cart import CartItemCreate, CartItemOut, CartItemUpdate, CartOut
from app.schemas.common import ok
from app.schemas.user import UserListItem

router = APIRouter()


def _parse_item_id(raw_id: str) -> int:
    # только ASCII-цифры: isdigit() пропускает "²", а int() его не принимает
    if not (raw_id.isascii() and raw_id.isdigit()):
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Invalid cart item id")
    return int(raw_id)


def _check_quantity(quantity: Optional[int]) -> None:
    if not quantity or quantity < 1:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Quantity must be at least 1")


def _get_owned_item(db: Session, item_id: int, user: User, with_product: bool = False):
    """Строка корзины текущего пользователя: 404 если нет, 403 если чужая."""
    cart_item = cart_crud.get_cart_item(db, item_id, with_product=with_product)
    if cart_item is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, "Cart item not found")
    if cart_item.user_id != user.id:
        raise ApiError(status.HTTP_403_FORBIDDEN, "Access denied")
    return cart_item


@router.post("", status_code=status.HTTP_201_CREATED)
def add_to_cart(
    payload: CartItemCreate,
    current_user: User = Depends(security.get_current_user),
    db: Session = Depends(security.get_db),
):
    """Добавить товар в корзину (или увеличить количество уже лежащего)."""
    with route_errors("Error adding product to cart", db):
        _check_quantity(payload.quantity)
        cart_item = cart_crud.add_product_to_cart(db, current_user.id, payload.product_id, payload.quantity)
        return ok("Product added to cart", CartItemOut.model_validate(cart_item))


@router.get("")
def get_cart(
    userEmail: Optional[str] = None,
    current_user: User = Depends(security.get_current_user),
    db: Session = Depends(security.get_db),
):
    """
    Корзина текущего пользователя.
    Админ может передать userEmail и посмотреть корзину другого пользователя.
    """
    with route_errors("Error fetching cart", db):
        user_id = current_user.id
        if current_user.role == RoleEnum.admin and userEmail:
            user = user_crud.get_user_by_email(db, userEmail)
            if user is None:
                raise ApiError(status.HTTP_404_NOT_FOUND, "User not found")
            user_id = user.id

        items = cart_crud.list_cart_items(db, user_id)
        cart = CartOut(
            items=[CartItemOut.model_validate(item) for item in items],
            total=cart_crud.cart_total(items),
        )
        return ok("Cart retrieved successfully", cart)


@router.get("/users/list")
def list_users(
    current_user: User = Depends(security.require_role(RoleEnum.admin)),
    db: Session = Depends(security.get_db),
):
    with route_errors("Error fetching users", db):
        users = user_crud.list_users(db)
        return ok("Users retrieved successfully", [UserListItem.model_validate(u) for u in users])


@router.put("/{item_id}")
def update_cart_item(
    item_id: str,
    payload: CartItemUpdate,
    current_user: User = Depends(security.get_current_user),
    db: Session = Depends(security.get_db),
):
    with route_errors("Error updating cart item", db):
        cart_item_id = _parse_item_id(item_id)
        _check_quantity(payload.quantity)
        cart_item = _get_owned_item(db, cart_item_id, current_user, with_product=True)
        cart_item = cart_crud.update_cart_item_quantity(db, cart_item, payload.quantity)
        return ok("Cart item updated", CartItemOut.model_validate(cart_item))


@router.delete("/{item_id}")
def remove_cart_item(
    item_id: str,
    current_user: User = Depends(security.get_current_user),
    db: Session = Depends(security.get_db),
):
    with route_errors("Error removing cart item", db):
        cart_item = _get_owned_item(db, _parse_item_id(item_id), current_user)
        cart_crud.remove_cart_item(db, cart_item)
        return ok("Cart item removed")


@router.delete("")
def clear_cart(
    current_user: User = Depends(security.get_current_user),
    db: Session = Depends(security.get_db),
):
    with route_errors("Error clearing cart", db):
        cart_crud.clear_cart(db, current_user.id)
        return ok("Cart cleared")
