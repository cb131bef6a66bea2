# app/core/config.py
# Конфигурация приложения с валидацией переменных окружения.
# Загружает .env через python-dotenv и берёт переменные окружения.
# Экземпляр settings импортируется в других модулях.

import os
import warnings
from pathlib import Path

from dotenv import load_dotenv

project_root = Path(__file__).resolve().parent.parent.parent
env_path = project_root / ".env"
if env_path.exists():
    load_dotenv(dotenv_path=env_path)


class Settings:
    """Основные настройки приложения с валидацией."""

    # URL базы данных: sqlite для локального запуска, postgresql://... в проде
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./cart.db")

    # Секрет для JWT, обязательно заменить в продакшене
    SECRET_KEY: str = os.getenv("SECRET_KEY", "change_this_secret_in_prod")
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24 * 7)))

    # Стоимость bcrypt (10 раундов соли по умолчанию)
    BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "10"))

    # Окружение (development, staging, production)
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # Логирование
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Разрешённые источники для CORS, через запятую
    CORS_ORIGINS: list[str] = [
        origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
    ]

    # Администратор, создаваемый при старте (если заданы email и пароль)
    ADMIN_EMAIL: str | None = os.getenv("ADMIN_EMAIL")
    ADMIN_PASSWORD: str | None = os.getenv("ADMIN_PASSWORD")
    ADMIN_NAME: str = os.getenv("ADMIN_NAME", "Admin")

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() in ("production", "prod")

    def __post_init_checks__(self) -> None:
        """Проверяет конфигурацию на потенциальные проблемы."""
        if self.SECRET_KEY == "change_this_secret_in_prod":
            raise ValueError(
                "SECRET_KEY is the default value. "
                "Provide a unique value via the SECRET_KEY environment variable"
            )
        if self.is_production:
            if self.DATABASE_URL.startswith("sqlite"):
                raise ValueError(
                    "SQLite DATABASE_URL is not allowed in production. "
                    "Set DATABASE_URL to a server database"
                )

    def validate(self) -> None:
        """Выполняется один раз при создании settings."""
        try:
            self.__post_init_checks__()
        except ValueError as e:
            if self.is_production:
                raise
            warnings.warn(str(e))


# Создаём глобальный экземпляр settings
settings = Settings()
settings.validate()
