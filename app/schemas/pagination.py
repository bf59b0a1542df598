"""
Схемы для пагинации.
"""

from dataclasses import dataclass
from typing import Generic, List, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class PageMeta(BaseModel):
    """
    Метаданные пагинации.

    Attributes:
        page: Номер текущей страницы (начиная с 0)
        page_size: Размер страницы
        total: Общее количество записей
        total_pages: Общее количество страниц (0, если записей нет)
    """

    page: int
    page_size: int
    total: int
    total_pages: int

    @classmethod
    def create(cls, page: int, page_size: int, total: int) -> "PageMeta":
        """
        Создает экземпляр PageMeta с автоматическим расчетом total_pages.

        Args:
            page: Номер текущей страницы
            page_size: Размер страницы
            total: Общее количество записей

        Returns:
            PageMeta: Экземпляр с рассчитанными метаданными
        """
        total_pages = (total + page_size - 1) // page_size if total > 0 else 0
        return cls(page=page, page_size=page_size, total=total, total_pages=total_pages)

    @property
    def has_previous(self) -> bool:
        return self.page > 0

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages


@dataclass(frozen=True)
class Page(Generic[T]):
    """
    Страница записей вместе с метаданными.

    Attributes:
        items: Записи текущей страницы в порядке id
        meta: Метаданные пагинации
    """

    items: List[T]
    meta: PageMeta

    @classmethod
    def of(cls, items: List[T], page: int, size: int, total: int) -> "Page[T]":
        return cls(items=items, meta=PageMeta.create(page=page, page_size=size, total=total))
