# app/api/products.py
# Каталог товаров, на которые ссылается корзина.
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core import security
from app.core.errors import ApiError, route_errors
from app.crud import product as product_crud
from app.models.user import User, RoleEnum
from app.schemas.common import ok
from app.schemas.product import ProductCreate, ProductOut

router = APIRouter()


@router.get("")
def list_products(category: Optional[str] = None, db: Session = Depends(security.get_db)):
    with route_errors("Error fetching products", db):
        products = product_crud.list_products(db, category)
        return ok("Products retrieved successfully", [ProductOut.model_validate(p) for p in products])


@router.get("/{product_id}")
def get_product(product_id: int, db: Session = Depends(security.get_db)):
    with route_errors("Error fetching product", db):
        product = product_crud.get_product(db, product_id)
        if product is None:
            raise ApiError(status.HTTP_404_NOT_FOUND, "Product not found")
        return ok("Product retrieved successfully", ProductOut.model_validate(product))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_product(
    payload: ProductCreate,
    current_user: User = Depends(security.require_role(RoleEnum.admin)),
    db: Session = Depends(security.get_db),
):
    with route_errors("Error creating product", db):
        product = product_crud.create_product(db, payload)
        return ok("Product created", ProductOut.model_validate(product))
