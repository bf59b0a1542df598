"""
Доменные исключения каталога.

Сервисы поднимают эти исключения, глобальные обработчики в
app/api/error_handlers.py переводят их в HTTP ответы единого формата.
"""

from typing import Iterable, List, Optional, Tuple


class CatalogError(Exception):
    """
    Базовое исключение каталога.

    Attributes:
        message: Человекочитаемое описание ошибки
        code: Машиночитаемый код ошибки
        status_code: HTTP статус для ответа
    """

    code = "CATALOG_ERROR"
    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(CatalogError):
    """Запрошенная запись не найдена."""

    code = "RESOURCE_NOT_FOUND"
    status_code = 404

    def __init__(self, entity: str, identifier: object):
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} not found: {identifier}")


class DuplicateEntryError(CatalogError):
    """Нарушение ограничения уникальности при записи."""

    code = "DUPLICATE_ENTRY"
    status_code = 409


class ConflictError(CatalogError):
    """Нарушение ссылочной целостности (например, удаление используемой категории)."""

    code = "DATA_INTEGRITY_VIOLATION"
    status_code = 409


class UnknownReferenceError(CatalogError):
    """Одна или несколько запрошенных категорий не существуют."""

    code = "UNKNOWN_REFERENCE"
    status_code = 404

    def __init__(self, entity: str, missing_ids: Iterable[int]):
        self.entity = entity
        self.missing_ids = sorted(set(missing_ids))
        super().__init__(f"Unknown {entity} ids: {self.missing_ids}")


class ValidationError(CatalogError):
    """
    Данные не прошли проверку.

    Содержит по одной записи на каждое некорректное поле.
    """

    code = "VALIDATION_ERROR"
    status_code = 400

    def __init__(self, field_errors: List[Tuple[str, str]]):
        self.field_errors = list(field_errors)
        message = "; ".join(f"{field}: {msg}" for field, msg in self.field_errors)
        super().__init__(message or "Validation failed")

    @classmethod
    def single(cls, field: Optional[str], message: str) -> "ValidationError":
        return cls([(field or "", message)])


class AccessDeniedError(CatalogError):
    """Пользователь не имеет права на операцию."""

    code = "ACCESS_DENIED"
    status_code = 403


class AuthenticationError(CatalogError):
    """Неверные учетные данные при входе."""

    code = "UNAUTHORIZED"
    status_code = 401


class StorageError(CatalogError):
    """Хранилище файлов не приняло файл."""

    code = "STORAGE_ERROR"
    status_code = 502
