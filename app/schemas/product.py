"""
Pydantic схемы для товаров.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator

from .validators import optional_text, require_text

# Цена хранится как Decimal, в JSON отдается числом
Price = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class ProductFields(BaseModel):
    """Скалярные поля товара, общие для создания."""

    name: str = Field(..., max_length=255, description="Название товара")
    description: str = Field(..., description="Описание товара")
    price: float = Field(..., gt=0, description="Цена, больше нуля")
    image_url: Optional[str] = Field(None, description="URL изображения")
    date: Optional[datetime] = Field(None, description="Дата товара (по умолчанию сейчас)")

    @field_validator("name", "description", mode="before")
    @classmethod
    def not_blank(cls, value):
        if isinstance(value, str):
            return require_text(value)
        return value

    @field_validator("image_url", mode="before")
    @classmethod
    def strip_image_url(cls, value):
        if isinstance(value, str):
            return optional_text(value)
        return value


class ProductCreate(ProductFields):
    """Схема для создания товара по id категорий."""

    category_ids: List[int] = Field(default_factory=list, description="ID категорий")


class ProductCreateByNames(ProductFields):
    """Схема для создания товара по названиям категорий."""

    category_names: List[str] = Field(
        ..., description="Названия категорий (могут быть пустым списком)"
    )

    @field_validator("category_names")
    @classmethod
    def names_not_blank(cls, value: List[str]) -> List[str]:
        for name in value:
            if not name.strip():
                raise ValueError("category names must not be blank")
        return value


class ProductUpdate(BaseModel):
    """
    Схема для обновления товара.

    Поля со значением None не изменяются. category_ids, если передан
    (в том числе пустым списком), полностью заменяет категории товара.
    """

    name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    price: Optional[float] = Field(None, gt=0)
    image_url: Optional[str] = None
    date: Optional[datetime] = None
    category_ids: Optional[List[int]] = None

    @field_validator("name", "description", mode="before")
    @classmethod
    def not_blank(cls, value):
        if isinstance(value, str):
            return require_text(value)
        return value

    @field_validator("image_url", mode="before")
    @classmethod
    def strip_image_url(cls, value):
        if isinstance(value, str):
            return optional_text(value)
        return value


class ProductOut(BaseModel):
    """Схема для вывода товара с названиями категорий."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    price: Price
    image_url: Optional[str] = None
    date: datetime
    categories: List[str] = Field(default_factory=list)

    @field_validator("categories", mode="before")
    @classmethod
    def category_names(cls, value):
        return [getattr(category, "name", category) for category in value or []]
