"""
Перевод отказов хранилища в доменные ошибки.

Чистые функции без обращения к БД: получают вид отказа
из WriteResult и возвращают исключение для сервиса.
"""

from app.core.exceptions import CatalogError, ConflictError, DuplicateEntryError, NotFoundError
from app.db.repositories import StorageFailure, WriteResult


def translate_failure(failure: StorageFailure, entity: str) -> CatalogError:
    """
    Сопоставить отказ хранилища доменной ошибке.

    Args:
        failure: Вид отказа хранилища
        entity: Название сущности для сообщения (Product, Category, User)

    Returns:
        CatalogError: DuplicateEntryError или ConflictError
    """
    if failure is StorageFailure.UNIQUE_VIOLATION:
        return DuplicateEntryError(f"Duplicate entry for {entity}.")
    if failure is StorageFailure.FOREIGN_KEY_VIOLATION:
        return ConflictError(f"Integrity violation: {entity} is still referenced.")
    raise ValueError(f"Unsupported storage failure: {failure!r}")


def ensure_written(result: WriteResult, entity: str) -> None:
    """Поднять доменную ошибку, если запись не удалась."""
    if not result.ok:
        raise translate_failure(result.failure, entity)


def not_found(entity: str, identifier: object) -> NotFoundError:
    return NotFoundError(entity, identifier)
