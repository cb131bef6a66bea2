# app/schemas/cart.py
# Схемы корзины. Имена полей на проводе: productId/userId, как у фронтенда.
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.product import ProductOut


class CartItemCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: int = Field(..., alias="productId")
    quantity: int = 1


class CartItemUpdate(BaseModel):
    # Без ограничений на уровне схемы: проверка quantity в эндпоинте отдаёт своё сообщение
    quantity: Optional[int] = None


class CartItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int = Field(..., serialization_alias="userId")
    product_id: int = Field(..., serialization_alias="productId")
    quantity: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    product: Optional[ProductOut] = None


class CartOut(BaseModel):
    items: List[CartItemOut]
    total: float
