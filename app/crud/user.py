# app/crud/user.py
# Пользователи: поиск по email, список для админа, создание и проверка пароля.
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core import security
from app.models.user import User, RoleEnum


def normalize_email(email: str) -> str:
    """Email хранится и ищется в одном виде: без пробелов по краям, в нижнем регистре."""
    return email.strip().lower()


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.execute(select(User).where(User.email == normalize_email(email))).scalar_one_or_none()


def list_users(db: Session) -> list[User]:
    """Пользователи по имени (для выпадающего списка админа)."""
    return list(db.execute(select(User).order_by(User.name.asc(), User.id.asc())).scalars().all())


def create_user(db: Session, email: str, name: str, password: str, role: RoleEnum = RoleEnum.user) -> User:
    user = User(
        email=normalize_email(email),
        name=name,
        hashed_password=security.get_password_hash(password),
        role=role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def authenticate(db: Session, email: str, password: str) -> User | None:
    user = get_user_by_email(db, email)
    if not user or not security.verify_password(password, user.hashed_password):
        return None
    return user
