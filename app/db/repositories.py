"""
Репозитории доступа к данным.

Инкапсулируют запросы SQLAlchemy для категорий, товаров, ролей и
пользователей. Операции записи не пробрасывают IntegrityError:
нарушения ограничений возвращаются явным результатом WriteResult
с видом отказа хранилища.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Generic, List, Optional, Sequence, Tuple, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.db.models import Category, Product, Role, User
from app.db.models.category import category_identity_key

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")

# SQLSTATE коды PostgreSQL
_PG_UNIQUE_VIOLATION = "23505"
_PG_FOREIGN_KEY_VIOLATION = "23503"


class StorageFailure(str, enum.Enum):
    """Классифицированные отказы хранилища при записи."""

    UNIQUE_VIOLATION = "unique_violation"
    FOREIGN_KEY_VIOLATION = "foreign_key_violation"


@dataclass(frozen=True)
class WriteResult:
    """
    Результат операции записи.

    Attributes:
        failure: Вид отказа или None при успехе
        detail: Сообщение драйвера БД (только для логов)
    """

    failure: Optional[StorageFailure] = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.failure is None


def classify_integrity_error(exc: IntegrityError) -> Optional[StorageFailure]:
    """
    Определить вид нарушения ограничения по исключению драйвера.

    Поддерживает SQLSTATE (psycopg2 / psycopg) и текст ошибок SQLite.

    Returns:
        StorageFailure или None, если нарушение не классифицировано
    """
    orig = exc.orig
    sqlstate = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if sqlstate == _PG_UNIQUE_VIOLATION:
        return StorageFailure.UNIQUE_VIOLATION
    if sqlstate == _PG_FOREIGN_KEY_VIOLATION:
        return StorageFailure.FOREIGN_KEY_VIOLATION

    message = str(orig).lower()
    if "unique constraint" in message or "duplicate" in message:
        return StorageFailure.UNIQUE_VIOLATION
    if "foreign key constraint" in message:
        return StorageFailure.FOREIGN_KEY_VIOLATION
    return None


class Repository(Generic[ModelT]):
    """
    Базовый репозиторий с операциями по первичному ключу.

    Каждая запись выполняется в SAVEPOINT: при нарушении ограничения
    откатывается только она, внешняя транзакция остается рабочей.
    """

    model: Type[ModelT]

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, entity_id: int) -> Optional[ModelT]:
        return self.db.get(self.model, entity_id)

    def find_all(self) -> List[ModelT]:
        return list(self.db.scalars(select(self.model).order_by(self.model.id)).all())

    def find_page(self, page: int, size: int) -> Tuple[List[ModelT], int]:
        """
        Получить страницу записей, отсортированных по id.

        Args:
            page: Номер страницы (начиная с 0)
            size: Размер страницы

        Returns:
            Tuple[List, int]: Записи страницы и общее количество
        """
        total = self.db.scalar(select(func.count()).select_from(self.model)) or 0
        stmt = select(self.model).order_by(self.model.id).offset(page * size).limit(size)
        return list(self.db.scalars(stmt).all()), total

    def save(self, entity: ModelT) -> WriteResult:
        """Сохранить сущность и сбросить изменения в БД."""
        return self._write(lambda: self.db.add(entity))

    def delete(self, entity: ModelT) -> WriteResult:
        """Удалить сущность."""
        return self._write(lambda: self.db.delete(entity))

    def _write(self, action) -> WriteResult:
        try:
            with self.db.begin_nested():
                action()
                self.db.flush()
        except IntegrityError as exc:
            failure = classify_integrity_error(exc)
            if failure is None:
                raise
            logger.debug(f"{self.model.__name__} write rejected: {failure.value}: {exc.orig}")
            return WriteResult(failure=failure, detail=str(exc.orig))
        return WriteResult()


class CategoryRepository(Repository[Category]):
    """Репозиторий категорий."""

    model = Category

    def find_all_by_ids(self, ids: Sequence[int]) -> List[Category]:
        if not ids:
            return []
        stmt = select(Category).where(Category.id.in_(set(ids))).order_by(Category.id)
        return list(self.db.scalars(stmt).all())

    def find_by_name_case_insensitive(self, name: str) -> Optional[Category]:
        stmt = select(Category).where(Category.name_key == category_identity_key(name))
        return self.db.scalar(stmt)

    def exists_by_name_case_insensitive(
        self, name: str, exclude_id: Optional[int] = None
    ) -> bool:
        stmt = select(Category.id).where(Category.name_key == category_identity_key(name))
        if exclude_id is not None:
            stmt = stmt.where(Category.id != exclude_id)
        return self.db.scalar(stmt.limit(1)) is not None


class ProductRepository(Repository[Product]):
    """Репозиторий товаров."""

    model = Product


class RoleRepository(Repository[Role]):
    """Репозиторий ролей."""

    model = Role

    def find_by_authority(self, authority: str) -> Optional[Role]:
        return self.db.scalar(select(Role).where(Role.authority == authority))


class UserRepository(Repository[User]):
    """Репозиторий пользователей."""

    model = User

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.scalar(select(User).where(User.email == email))

    def exists_by_email_and_id_not(self, email: str, user_id: int) -> bool:
        stmt = select(User.id).where(
            func.lower(User.email) == email.lower(), User.id != user_id
        )
        return self.db.scalar(stmt.limit(1)) is not None
