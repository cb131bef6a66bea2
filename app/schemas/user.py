# app/schemas/user.py
# Схемы пользователя: регистрация, логин, публичный профиль без хеша пароля.
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.models.user import RoleEnum


class UserCreate(BaseModel):
    email: EmailStr
    name: str = Field(..., min_length=1)
    password: str = Field(..., min_length=6)


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    role: RoleEnum


class UserListItem(BaseModel):
    """Короткая карточка пользователя для выпадающего списка админа."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str


class LoginRequest(BaseModel):
    email: EmailStr
    password: str
