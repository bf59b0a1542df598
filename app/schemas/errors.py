"""
Схема тела ответа об ошибке.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """
    Одна запись об ошибке.

    Ответ с ошибкой всегда является списком таких записей: для ошибок
    валидации по одной записи на поле, для остальных одна запись.
    """

    timestamp: datetime = Field(..., description="Время возникновения ошибки")
    field: Optional[str] = Field(None, description="Поле запроса, если применимо")
    details: str = Field(..., description="Описание ошибки")
    error: str = Field(..., description="Код ошибки")
    path: str = Field(..., description="Путь запроса")
