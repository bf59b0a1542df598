"""
Модель товара.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin
from .category import Category

# Связь товаров и категорий (многие ко многим).
# Категорию, на которую ссылается товар, удалить нельзя (RESTRICT).
product_category = Table(
    "product_category",
    Base.metadata,
    Column(
        "product_id",
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "category_id",
        Integer,
        ForeignKey("categories.id", ondelete="RESTRICT"),
        primary_key=True,
    ),
)


class Product(TimestampMixin, Base):
    """
    Модель товара.

    Attributes:
        id: Уникальный идентификатор товара
        name: Название товара
        description: Описание товара
        price: Цена (фиксированная точка, 2 знака)
        image_url: URL изображения товара
        date: Дата товара
        categories: Категории товара
    """

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    categories: Mapped[List[Category]] = relationship(
        secondary=product_category,
        order_by=Category.id,
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name='{self.name}')>"
