# app/api/auth.py
# Роуты для получения JWT токена и проверки токена клиентом.
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from fastapi.security import OAuth2PasswordRequestForm

from app.core import security
from app.crud import user as user_crud
from app.models.user import User
from app.schemas.common import ok
from app.schemas.user import LoginRequest, UserOut

router = APIRouter()

@router.post("/login")
def login(payload: LoginRequest, db: Session = Depends(security.get_db)):
    """Логин по email + password: возвращает токен и профиль в общем конверте."""
    user = user_crud.authenticate(db, payload.email, payload.password)
    if user is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Incorrect credentials")
    return ok("Login successful", {"token": security.create_user_token(user), "user": UserOut.model_validate(user)})

@router.post("/token")
def token(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(security.get_db)):
    """
    OAuth2-логин для интерактивной документации.
    OAuth2PasswordRequestForm ожидает username и password, используем email как username.
    """
    user = user_crud.authenticate(db, form_data.username, form_data.password)
    if user is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Incorrect credentials")
    return {"access_token": security.create_user_token(user), "token_type": "bearer"}

@router.get("/check")
def check_token(current_user: User = Depends(security.get_current_user)):
    return ok("Token is valid", UserOut.model_validate(current_user))
