"""
Глобальные обработчики ошибок API.

Любая ошибка возвращается списком записей ErrorDetail:
    - CatalogError → одна запись с кодом и статусом исключения
    - RequestValidationError / ValidationError → по одной записи на поле, 400
    - HTTPException → одна запись со статусом исключения
    - Exception → одна запись INTERNAL_SERVER_ERROR без внутренних деталей
"""

import logging
from datetime import datetime, timezone
from http import HTTPStatus
from typing import List, Optional, Tuple

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import CatalogError, ValidationError
from app.schemas.errors import ErrorDetail

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Зарегистрировать глобальные обработчики ошибок."""
    _register_catalog_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def error_response(
    request: Request,
    status_code: int,
    code: str,
    entries: List[Tuple[Optional[str], str]],
    headers: Optional[dict] = None,
) -> JSONResponse:
    """
    Сформировать ответ с ошибкой.

    Args:
        request: Текущий запрос
        status_code: HTTP статус
        code: Код ошибки
        entries: Пары (поле, описание), по одной на запись

    Returns:
        JSONResponse: Список ErrorDetail
    """
    timestamp = datetime.now(timezone.utc)
    body = [
        ErrorDetail(
            timestamp=timestamp,
            field=field or None,
            details=details,
            error=code,
            path=request.url.path,
        )
        for field, details in entries
    ]
    return JSONResponse(
        status_code=status_code, content=jsonable_encoder(body), headers=headers
    )


def _register_catalog_error_handler(app: FastAPI) -> None:
    @app.exception_handler(CatalogError)
    async def catalog_error_handler(request: Request, exc: CatalogError):
        logger.warning(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
        if isinstance(exc, ValidationError):
            entries = exc.field_errors or [(None, exc.message)]
        else:
            entries = [(None, exc.message)]
        return error_response(request, exc.status_code, exc.code, entries)


def _register_validation_error_handler(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")
        return error_response(
            request,
            status.HTTP_400_BAD_REQUEST,
            ValidationError.code,
            [(_field_name(error["loc"]), error["msg"]) for error in exc.errors()],
        )


def _register_http_error_handler(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        code = HTTPStatus(exc.status_code).name
        return error_response(
            request,
            exc.status_code,
            code,
            [(None, str(exc.detail))],
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return error_response(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "INTERNAL_SERVER_ERROR",
            [(None, "An unexpected error occurred")],
        )


def _field_name(loc) -> str:
    # ("body", "price") -> "price"; ("query", "page") -> "page"
    parts = [str(part) for part in loc]
    if len(parts) > 1 and parts[0] in ("body", "query", "path", "header"):
        parts = parts[1:]
    return ".".join(parts)
