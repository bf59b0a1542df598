"""
Сервис каталога: товары и категории.

Каждая изменяющая операция выполняется в одной транзакции: либо все
изменения (товар, новые категории, связи) фиксируются вместе, либо
транзакция откатывается и наружу выходит доменная ошибка.
"""

import logging
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Union

from sqlalchemy.orm import Session

from app.core.exceptions import DuplicateEntryError, ValidationError
from app.db.database import transaction
from app.db.models import Category, Product
from app.db.repositories import CategoryRepository, ProductRepository
from app.schemas.category import CategoryCreate
from app.schemas.pagination import Page
from app.schemas.product import (
    ProductCreate,
    ProductCreateByNames,
    ProductOut,
    ProductUpdate,
)
from app.services.category_reconciler import CategoryReconciler
from app.services.category_resolver import CategoryResolver
from app.services.conflicts import ensure_written, not_found

logger = logging.getLogger(__name__)

_CENT = Decimal("0.01")


def to_price(value: Union[int, float, str, Decimal]) -> Decimal:
    """
    Привести цену к Decimal с двумя знаками после запятой.

    Конвертация через str, чтобы 19.99 не превращалось в 19.989999...

    Raises:
        ValidationError: Если после округления цена не больше нуля
    """
    price = Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP)
    if price <= 0:
        raise ValidationError.single("price", "must be greater than 0")
    return price


class CatalogService:
    """
    Сервис операций над товарами и категориями.

    Args:
        db: Сессия базы данных
    """

    def __init__(self, db: Session):
        self.db = db
        self.products = ProductRepository(db)
        self.categories = CategoryRepository(db)
        self.resolver = CategoryResolver(self.categories)
        self.reconciler = CategoryReconciler(self.categories, self.resolver)

    # ==================== ТОВАРЫ ====================

    def get_product(self, product_id: int) -> Product:
        product = self.products.find_by_id(product_id)
        if product is None:
            raise not_found("Product", product_id)
        return product

    def list_products(self, page: int, size: int) -> Page[Product]:
        items, total = self.products.find_page(page, size)
        return Page.of(items, page, size, total)

    def list_all_products(self) -> List[Product]:
        return self.products.find_all()

    def create_product(self, data: ProductCreate) -> Product:
        """
        Создать товар с категориями по id.

        Args:
            data: Данные товара

        Returns:
            Product: Созданный товар

        Raises:
            UnknownReferenceError: Если какой-то категории не существует
            DuplicateEntryError: При нарушении уникальности
        """
        with transaction(self.db):
            product = self._new_product(data)
            self.reconciler.reconcile_by_ids(product, data.category_ids)
            ensure_written(self.products.save(product), "Product")

        logger.info(
            f"Product created: id={product.id} categories={[c.id for c in product.categories]}"
        )
        return product

    def create_product_by_names(self, data: ProductCreateByNames) -> Product:
        """
        Создать товар с категориями по названиям.

        Неизвестные категории создаются в той же транзакции. Если запись
        товара не удалась, созданные категории тоже откатываются.
        """
        with transaction(self.db):
            product = self._new_product(data)
            self.reconciler.reconcile_by_names(product, data.category_names)
            ensure_written(self.products.save(product), "Product")

        logger.info(
            f"Product created by names: id={product.id} "
            f"categories={[c.name for c in product.categories]}"
        )
        return product

    def update_product(self, product_id: int, data: ProductUpdate) -> Product:
        """
        Частично обновить товар.

        Поля со значением None не изменяются. Если передан category_ids,
        набор категорий заменяется целиком (пустой список очищает его).
        """
        with transaction(self.db):
            product = self.get_product(product_id)

            if data.name is not None:
                product.name = data.name
            if data.description is not None:
                product.description = data.description
            if data.price is not None:
                product.price = to_price(data.price)
            if data.image_url is not None:
                product.image_url = data.image_url
            if data.date is not None:
                product.date = data.date
            if data.category_ids is not None:
                self.reconciler.reconcile_by_ids(product, data.category_ids)

            ensure_written(self.products.save(product), "Product")

        logger.info(f"Product updated: id={product.id}")
        return product

    def delete_product(self, product_id: int) -> ProductOut:
        """
        Удалить товар.

        Returns:
            ProductOut: Состояние товара до удаления
        """
        with transaction(self.db):
            product = self.get_product(product_id)
            snapshot = ProductOut.model_validate(product)
            ensure_written(self.products.delete(product), "Product")

        logger.info(f"Product deleted: id={product_id}")
        return snapshot

    def attach_product_image(self, product_id: int, image_url: str) -> Product:
        """Привязать загруженное изображение к товару."""
        with transaction(self.db):
            product = self.get_product(product_id)
            product.image_url = image_url
            ensure_written(self.products.save(product), "Product")

        logger.info(f"Product image attached: id={product_id} url={image_url}")
        return product

    def _new_product(self, data: Union[ProductCreate, ProductCreateByNames]) -> Product:
        return Product(
            name=data.name,
            description=data.description,
            price=to_price(data.price),
            image_url=data.image_url,
            date=data.date or datetime.now(timezone.utc),
        )

    # ==================== КАТЕГОРИИ ====================

    def get_category(self, category_id: int) -> Category:
        category = self.categories.find_by_id(category_id)
        if category is None:
            raise not_found("Category", category_id)
        return category

    def list_categories(self, page: int, size: int) -> Page[Category]:
        items, total = self.categories.find_page(page, size)
        return Page.of(items, page, size, total)

    def create_category(self, data: CategoryCreate) -> Category:
        """
        Создать категорию.

        Название сохраняется как передано (после обрезки пробелов),
        уникальность проверяется без учета регистра.
        """
        with transaction(self.db):
            self._ensure_name_available(data.name)
            category = Category(name=data.name)
            ensure_written(self.categories.save(category), "Category")

        logger.info(f"Category created: id={category.id} name='{category.name}'")
        return category

    def update_category(self, category_id: int, data: CategoryCreate) -> Category:
        """Переименовать категорию."""
        with transaction(self.db):
            category = self.get_category(category_id)
            self._ensure_name_available(data.name, exclude_id=category_id)
            category.name = data.name
            ensure_written(self.categories.save(category), "Category")

        logger.info(f"Category renamed: id={category.id} name='{category.name}'")
        return category

    def delete_category(self, category_id: int) -> None:
        """
        Удалить категорию.

        Raises:
            NotFoundError: Если категории нет
            ConflictError: Если категория используется товарами
        """
        with transaction(self.db):
            category = self.get_category(category_id)
            ensure_written(self.categories.delete(category), "Category")

        logger.info(f"Category deleted: id={category_id}")

    def _ensure_name_available(self, name: str, exclude_id: Optional[int] = None) -> None:
        if self.categories.exists_by_name_case_insensitive(name, exclude_id=exclude_id):
            raise DuplicateEntryError(f"Category already exists: {name}")
