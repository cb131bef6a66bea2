# app/core/errors.py
# Единый формат ответов об ошибках {success, message, data} и обработчики исключений.

import logging
from contextlib import contextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings

logger = logging.getLogger(__name__)


class ApiError(HTTPException):
    """HTTP-ошибка с полезной нагрузкой для поля data."""

    def __init__(self, status_code: int, message: str, data: Any = None, headers: dict | None = None):
        super().__init__(status_code=status_code, detail=message, headers=headers)
        self.data = {} if data is None else data


def error_body(message: str, data: Any = None) -> dict:
    return {"success": False, "message": message, "data": {} if data is None else data}


@contextmanager
def route_errors(message: str, db: Session | None = None):
    """
    Оборачивает тело эндпоинта: HTTP-ошибки пропускаются как есть,
    всё остальное превращается в 500 с текстом исключения в data.
    """
    try:
        yield
    except HTTPException:
        raise
    except Exception as exc:
        logger.error(f"{message}: {exc}", exc_info=True)
        if db is not None:
            db.rollback()
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, message, data=str(exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    data = getattr(exc, "data", None)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail), jsonable_encoder(data)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    logger.info(f"Validation failed for {request.method} {request.url.path}: {message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(message, jsonable_encoder(errors)),
    )


async def global_exception_handler(request: Request, exc: Exception):
    """Глобальный обработчик непойманных ошибок."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    detail = str(exc) if settings.ENVIRONMENT == "development" else "An error occurred"
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error", detail),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
