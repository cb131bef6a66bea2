# app/api/users.py
# Регистрация пользователя. Роль при самостоятельной регистрации всегда user.
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core import security
from app.core.errors import ApiError, route_errors
from app.crud import user as user_crud
from app.schemas.common import ok
from app.schemas.user import UserCreate, UserOut

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, db: Session = Depends(security.get_db)):
    with route_errors("Error creating user", db):
        if user_crud.get_user_by_email(db, payload.email):
            raise ApiError(status.HTTP_400_BAD_REQUEST, "User already exists")
        user = user_crud.create_user(db, email=payload.email, name=payload.name, password=payload.password)
        logger.info(f"User {user.id} registered")
        return ok("User created", UserOut.model_validate(user))
