# app/models/cart.py
# Модель CartItem: одна строка корзины (пользователь + товар + количество).
from sqlalchemy import Column, Integer, ForeignKey, DateTime
from sqlalchemy.orm import relationship, validates
from datetime import datetime
from app.db.base import Base

class CartItem(Base):
    __tablename__ = "carts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="cart_items")
    product = relationship("Product", back_populates="cart_items")

    @validates("quantity")
    def validate_quantity(self, key, value):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError("Quantity must be an integer")
        if value < 1:
            raise ValueError("Quantity must be at least 1")
        return value

    @property
    def subtotal(self) -> float:
        return self.product.price * self.quantity
