# app/schemas/common.py
# Конверт ответа API: {success, message, data}.
from typing import Any

from fastapi.encoders import jsonable_encoder


def ok(message: str, data: Any = None) -> dict:
    """Успешный ответ в общем конверте; модели сериализуются по алиасам."""
    return {"success": True, "message": message, "data": jsonable_encoder({} if data is None else data)}
