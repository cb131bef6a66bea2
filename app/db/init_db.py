# app/db/init_db.py
# Создание таблиц с повторными попытками и начальный администратор.

import logging
import time

from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.base import Base
from app.db.session import engine, SessionLocal

# Импорт моделей, чтобы SQLAlchemy видел их определения
import app.models.user
import app.models.product
import app.models.cart
from app.crud import user as user_crud
from app.models.user import RoleEnum

logger = logging.getLogger(__name__)


def try_create_tables(retries: int = 5, delay: int = 2) -> bool:
    """
    Пытаемся создать таблицы с повторными попытками.
    Если БД недоступна, логируем ошибку и пробуем снова.

    Args:
        retries: Количество попыток подключения
        delay: Задержка между попытками в секундах

    Returns:
        True если таблицы созданы/существуют, False если все попытки исчерпаны
    """
    for attempt in range(1, retries + 1):
        try:
            logger.info(f"Creating tables (attempt {attempt}/{retries})...")
            Base.metadata.create_all(bind=engine)
            logger.info("✅ Database tables created (or already exist).")
            return True
        except Exception as e:
            logger.warning(f"❌ Attempt {attempt}/{retries} failed to create tables: {e}")
            if attempt < retries:
                logger.info(f"⏳ Waiting {delay}s before retry...")
                time.sleep(delay)
    logger.error(f"❌ Could not create tables after {retries} retries.")
    return False


def seed_admin(db: Session) -> bool:
    """
    Создаёт администратора из ADMIN_EMAIL/ADMIN_PASSWORD, если его ещё нет.
    Существующему пользователю с этим email выдаётся роль admin.
    """
    if not settings.ADMIN_EMAIL or not settings.ADMIN_PASSWORD:
        return False
    existing = user_crud.get_user_by_email(db, settings.ADMIN_EMAIL)
    if existing:
        if existing.role != RoleEnum.admin:
            existing.role = RoleEnum.admin
            db.commit()
            logger.info(f"👑 User {existing.email} promoted to admin")
        return True
    user_crud.create_user(
        db,
        email=settings.ADMIN_EMAIL,
        name=settings.ADMIN_NAME,
        password=settings.ADMIN_PASSWORD,
        role=RoleEnum.admin,
    )
    logger.info(f"👑 Admin {settings.ADMIN_EMAIL} created")
    return True


def init_db() -> bool:
    if not try_create_tables():
        return False
    with SessionLocal() as db:
        seed_admin(db)
    return True
