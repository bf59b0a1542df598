"""
Общие зависимости endpoint'ов.
"""

from fastapi import Depends, Query
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.database import get_db
from app.services.catalog_service import CatalogService
from app.services.user_service import UserService

# page * size должно помещаться в 32-битный OFFSET
MAX_PAGE_NUMBER = (2**31 - 1) // settings.MAX_PAGE_SIZE


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    return CatalogService(db)


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)


class PageParams:
    """
    Параметры пагинации из query string.

    Attributes:
        page: Номер страницы (начиная с 0)
        size: Размер страницы
    """

    def __init__(
        self,
        page: int = Query(0, ge=0, le=MAX_PAGE_NUMBER, description="Номер страницы (с 0)"),
        size: int = Query(
            settings.DEFAULT_PAGE_SIZE,
            ge=1,
            le=settings.MAX_PAGE_SIZE,
            description="Размер страницы",
        ),
    ):
        self.page = page
        self.size = size
