"""
Модель категории товаров.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, validates

from .base import Base, TimestampMixin


def category_identity_key(name: str) -> str:
    """Ключ идентичности категории: обрезанное имя в нижнем регистре."""
    return name.strip().lower()


class Category(TimestampMixin, Base):
    """
    Модель категории товаров.

    Attributes:
        id: Уникальный идентификатор категории
        name: Отображаемое название категории
        name_key: Название в нижнем регистре, уникально

    Note:
        Уникальность без учета регистра обеспечивается колонкой name_key,
        а не функцией LOWER(): в SQLite она работает только для ASCII.
    """

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    name_key: Mapped[str] = mapped_column(
        String(255), unique=True, index=True, nullable=False
    )

    @validates("name")
    def _sync_name_key(self, key: str, value: str) -> str:
        value = value.strip()
        self.name_key = category_identity_key(value)
        return value

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name='{self.name}')>"
