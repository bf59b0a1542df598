"""
API endpoints для работы с товарами.

Содержит CRUD операции над товарами, создание товара по названиям
категорий и загрузку изображения товара.
"""

from typing import List

from fastapi import APIRouter, Depends, File, Request, Response, UploadFile, status

from app.api.deps import PageParams, get_catalog_service
from app.core.auth import require_admin
from app.schemas.product import ProductCreate, ProductCreateByNames, ProductOut, ProductUpdate
from app.services.catalog_service import CatalogService
from app.services.pagination import build_pagination_headers
from app.services.storage_service import (
    StorageProvider,
    discard_product_image,
    get_storage,
    read_image_upload,
    store_product_image,
)

router = APIRouter()


def _set_location(request: Request, response: Response, product_id: int) -> None:
    response.headers["Location"] = str(request.url_for("get_product", product_id=product_id))


@router.get("", response_model=List[ProductOut])
def list_products(
    request: Request,
    response: Response,
    params: PageParams = Depends(),
    service: CatalogService = Depends(get_catalog_service),
):
    """
    Получить страницу товаров, отсортированных по id.

    Метаданные пагинации передаются в заголовках X-Page-Number,
    X-Page-Size, X-Total-Count и Link.

    Args:
        params: Номер и размер страницы
        service: Сервис каталога

    Returns:
        List[ProductOut]: Товары страницы с названиями категорий
    """
    page = service.list_products(params.page, params.size)
    response.headers.update(build_pagination_headers(page.meta, str(request.url)).as_dict())
    return page.items


@router.get("/without-pagination", response_model=List[ProductOut])
def list_all_products(service: CatalogService = Depends(get_catalog_service)):
    """Получить все товары без пагинации."""
    return service.list_all_products()


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int, service: CatalogService = Depends(get_catalog_service)):
    """
    Получить товар по ID.

    Raises:
        NotFoundError: Если товар не найден
    """
    return service.get_product(product_id)


@router.post(
    "",
    response_model=ProductOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_product(
    payload: ProductCreate,
    request: Request,
    response: Response,
    service: CatalogService = Depends(get_catalog_service),
):
    """
    Создать товар с категориями по id.

    Все категории должны существовать, иначе товар не создается
    и возвращается 404 со списком отсутствующих id.
    """
    product = service.create_product(payload)
    _set_location(request, response, product.id)
    return product


@router.post(
    "/by-names",
    response_model=ProductOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_product_by_names(
    payload: ProductCreateByNames,
    request: Request,
    response: Response,
    service: CatalogService = Depends(get_catalog_service),
):
    """
    Создать товар с категориями по названиям.

    Названия сравниваются без учета регистра, отсутствующие категории
    создаются с заглавной первой буквой.
    """
    product = service.create_product_by_names(payload)
    _set_location(request, response, product.id)
    return product


@router.put("/{product_id}", response_model=ProductOut, dependencies=[Depends(require_admin)])
def update_product(
    product_id: int,
    payload: ProductUpdate,
    service: CatalogService = Depends(get_catalog_service),
):
    return service.update_product(product_id, payload)


@router.delete(
    "/{product_id}", response_model=ProductOut, dependencies=[Depends(require_admin)]
)
def delete_product(product_id: int, service: CatalogService = Depends(get_catalog_service)):
    """Удалить товар и вернуть его последнее состояние."""
    return service.delete_product(product_id)


@router.post(
    "/{product_id}/image",
    response_model=ProductOut,
    dependencies=[Depends(require_admin)],
)
async def upload_product_image(
    product_id: int,
    file: UploadFile = File(...),
    service: CatalogService = Depends(get_catalog_service),
    storage: StorageProvider = Depends(get_storage),
):
    """
    Загрузить изображение товара.

    Файл сохраняется в хранилище (локальное или S3), его URL
    записывается в image_url товара. Если привязать изображение
    не удалось, сохраненный файл удаляется.

    Args:
        product_id: ID товара
        file: Загружаемый файл
        service: Сервис каталога
        storage: Провайдер хранилища

    Returns:
        ProductOut: Товар с новым image_url
    """
    service.get_product(product_id)
    content = await read_image_upload(file)
    image = store_product_image(storage, product_id, file.filename, content, file.content_type)
    try:
        return service.attach_product_image(product_id, image.url)
    except Exception:
        discard_product_image(storage, image)
        raise
