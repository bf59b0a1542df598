"""
Разрешение категорий по названию.

Находит существующую категорию без учета регистра или создает новую.
Гонка двух запросов, создающих одну и ту же категорию, не считается
ошибкой: проигравший перечитывает уже созданную запись.
"""

import logging

from app.db.models import Category
from app.db.models.category import category_identity_key
from app.db.repositories import CategoryRepository, StorageFailure
from app.services.conflicts import translate_failure

logger = logging.getLogger(__name__)


def capitalize_first(value: str) -> str:
    """
    Перевести в верхний регистр только первый символ.

    Example:
        "informática acessórios" -> "Informática acessórios"
    """
    return value[:1].upper() + value[1:]


class CategoryResolver:
    """
    Сервис разрешения категорий по названию.

    Args:
        categories: Репозиторий категорий
    """

    def __init__(self, categories: CategoryRepository):
        self.categories = categories

    def resolve(self, raw_name: str) -> Category:
        """
        Получить категорию по названию, создав ее при необходимости.

        Существующая категория возвращается как есть, с сохраненным
        регистром. Новая создается с заглавной первой буквой.

        Args:
            raw_name: Название категории (не пустое)

        Returns:
            Category: Существующая или новая категория
        """
        key = category_identity_key(raw_name)

        existing = self.categories.find_by_name_case_insensitive(key)
        if existing is not None:
            return existing

        candidate = Category(name=capitalize_first(key))
        result = self.categories.save(candidate)
        if result.ok:
            logger.info(f"Category created: id={candidate.id} name='{candidate.name}'")
            return candidate

        if result.failure is StorageFailure.UNIQUE_VIOLATION:
            # Категорию создал параллельный запрос: одна повторная попытка чтения
            recovered = self.categories.find_by_name_case_insensitive(key)
            if recovered is not None:
                logger.info(f"Category '{key}' created concurrently, reusing id={recovered.id}")
                return recovered

        raise translate_failure(result.failure, "Category")
