"""
Главный модуль FastAPI приложения DSCatalog API.

Содержит конфигурацию приложения, логирования, middleware,
обработчики ошибок и роутеры.
"""

import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.api.error_handlers import register_error_handlers
from app.api.v1.routers import api_router
from app.core.config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Создание экземпляра FastAPI приложения
app = FastAPI(
    title="DSCatalog API",
    description="API каталога товаров и категорий",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Настройка CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Location", "Link", "X-Page-Number", "X-Page-Size", "X-Total-Count"],
)

register_error_handlers(app)

# Статические файлы для локального хранилища изображений
if settings.STORAGE_TYPE == "local":
    uploads_path = Path(settings.STORAGE_PATH).resolve()
    uploads_path.mkdir(parents=True, exist_ok=True)
    app.mount("/static", StaticFiles(directory=str(uploads_path)), name="static")
    logger.info(f"Static files mounted at /static from {uploads_path}")


@app.get("/healthz")
def healthz():
    """
    Health check endpoint для мониторинга состояния приложения.

    Returns:
        dict: Статус приложения
    """
    return {"status": "ok", "service": "DSCatalog API", "version": "1.0.0"}


# Подключение API роутеров
app.include_router(api_router, prefix="/api/v1")
