"""
Замена набора категорий товара.

Набор категорий товара никогда не дополняется: целевой набор
вычисляется полностью и затем заменяет текущий целиком.
"""

from typing import Iterable, List, Optional, Sequence

from app.core.exceptions import UnknownReferenceError
from app.db.models import Category, Product
from app.db.repositories import CategoryRepository
from app.services.category_resolver import CategoryResolver


def normalize_category_names(names: Iterable[Optional[str]]) -> List[str]:
    """
    Нормализовать названия категорий.

    Отбрасывает пустые значения, обрезает пробелы, приводит к нижнему
    регистру и убирает дубликаты с сохранением порядка первого появления.
    """
    seen = {}
    for name in names:
        if name is None:
            continue
        key = name.strip().lower()
        if key and key not in seen:
            seen[key] = None
    return list(seen)


def _replace_categories(product: Product, target: List[Category]) -> None:
    product.categories.clear()
    product.categories.extend(target)


class CategoryReconciler:
    """
    Сервис замены категорий товара.

    По id работает в закрытом режиме (категории должны существовать),
    по названиям в открытом (неизвестные категории создаются).
    """

    def __init__(self, categories: CategoryRepository, resolver: CategoryResolver):
        self.categories = categories
        self.resolver = resolver

    def reconcile_by_ids(self, product: Product, ids: Optional[Sequence[int]]) -> None:
        """
        Заменить категории товара категориями с указанными id.

        Args:
            product: Товар
            ids: Идентификаторы категорий (пустой список убирает все категории)

        Raises:
            UnknownReferenceError: Если хотя бы одна категория не найдена
        """
        if not ids:
            _replace_categories(product, [])
            return

        found = self.categories.find_all_by_ids(ids)
        missing = set(ids) - {category.id for category in found}
        if missing:
            raise UnknownReferenceError("Category", missing)

        _replace_categories(product, found)

    def reconcile_by_names(self, product: Product, names: Iterable[Optional[str]]) -> None:
        """
        Заменить категории товара категориями с указанными названиями.

        Неизвестные названия создаются через CategoryResolver.
        """
        target: List[Category] = []
        for name in normalize_category_names(names):
            category = self.resolver.resolve(name)
            if all(category.id != existing.id for existing in target):
                target.append(category)

        _replace_categories(product, target)
