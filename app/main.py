# app/main.py
# Точка входа FastAPI. Создание таблиц и начальный админ выполняются в lifespan.

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import auth as auth_router
from app.api import cart as cart_router
from app.api import products as products_router
from app.api import users as users_router
from app.core.config import settings
from app.core.errors import register_exception_handlers
from app.db.init_db import init_db
from app.db.session import engine

# Настройка логирования
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Управление жизненным циклом приложения.
    Запускается при старте и завершении приложения.
    """
    logger.info("🚀 Cart API starting up...")
    if not init_db():
        logger.error("⚠️ Failed to create database tables. Application may not work correctly.")
        if settings.is_production:
            raise RuntimeError("Cannot start application: database tables creation failed")

    yield

    logger.info("🛑 Cart API shutting down...")
    engine.dispose()
    logger.info("✅ Database connection closed")


app = FastAPI(
    title="Cart API",
    description="Shopping cart API: users, products and cart items",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth_router.router, prefix="/auth", tags=["auth"])
app.include_router(users_router.router, prefix="/users", tags=["users"])
app.include_router(products_router.router, prefix="/products", tags=["products"])
app.include_router(cart_router.router, prefix="/cart", tags=["cart"])


@app.get("/", tags=["health"])
async def root():
    """Базовый health check."""
    return {
        "status": "ok",
        "service": "Cart API",
        "environment": settings.ENVIRONMENT
    }


@app.get("/health", tags=["health"])
async def health():
    return {
        "status": "healthy",
        "version": app.version
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.ENVIRONMENT == "development",
        log_level=settings.LOG_LEVEL.lower()
    )
