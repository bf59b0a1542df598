"""
API endpoints для работы с категориями товаров.

Чтение доступно всем, создание, переименование и удаление только
администраторам.
"""

from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from app.api.deps import PageParams, get_catalog_service
from app.core.auth import require_admin
from app.schemas.category import CategoryCreate, CategoryOut
from app.services.catalog_service import CatalogService
from app.services.pagination import build_pagination_headers

router = APIRouter()


@router.get("", response_model=List[CategoryOut])
def list_categories(
    request: Request,
    response: Response,
    params: PageParams = Depends(),
    service: CatalogService = Depends(get_catalog_service),
):
    """
    Получить страницу категорий, отсортированных по id.

    Метаданные пагинации передаются в заголовках X-Page-Number,
    X-Page-Size, X-Total-Count и Link.

    Args:
        params: Номер и размер страницы
        service: Сервис каталога

    Returns:
        List[CategoryOut]: Категории страницы
    """
    page = service.list_categories(params.page, params.size)
    response.headers.update(build_pagination_headers(page.meta, str(request.url)).as_dict())
    return page.items


@router.get("/{category_id}", response_model=CategoryOut)
def get_category(category_id: int, service: CatalogService = Depends(get_catalog_service)):
    """
    Получить категорию по ID.

    Raises:
        NotFoundError: Если категория не найдена
    """
    return service.get_category(category_id)


@router.post(
    "",
    response_model=CategoryOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_category(
    payload: CategoryCreate,
    request: Request,
    response: Response,
    service: CatalogService = Depends(get_catalog_service),
):
    """
    Создать категорию.

    Название уникально без учета регистра. Адрес новой категории
    возвращается в заголовке Location.
    """
    category = service.create_category(payload)
    response.headers["Location"] = str(
        request.url_for("get_category", category_id=category.id)
    )
    return category


@router.put(
    "/{category_id}", response_model=CategoryOut, dependencies=[Depends(require_admin)]
)
def update_category(
    category_id: int,
    payload: CategoryCreate,
    service: CatalogService = Depends(get_catalog_service),
):
    return service.update_category(category_id, payload)


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
def delete_category(category_id: int, service: CatalogService = Depends(get_catalog_service)):
    """
    Удалить категорию.

    Raises:
        NotFoundError: Если категория не найдена
        ConflictError: Если категория используется товарами
    """
    service.delete_category(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
