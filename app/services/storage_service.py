"""
Сервис для работы с хранилищами файлов.

Поддерживает локальное хранилище и Amazon S3 (или совместимые сервисы).
Обеспечивает единый интерфейс для работы с файлами
независимо от типа хранилища.
"""

import logging
import shutil
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import lru_cache
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import UploadFile

from app.core.config import settings
from app.core.exceptions import StorageError, ValidationError

logger = logging.getLogger(__name__)


class StorageProvider(ABC):
    """
    Абстрактный базовый класс для провайдеров хранилища.
    """

    @abstractmethod
    def save_file(
        self, file_path: str, file_data: BinaryIO, content_type: Optional[str] = None
    ) -> bool:
        pass

    @abstractmethod
    def get_file_url(self, file_path: str) -> str:
        pass

    @abstractmethod
    def delete_file(self, file_path: str) -> bool:
        pass



class LocalStorageProvider(StorageProvider):
    """
    Локальное хранилище файлов.
    """

    def __init__(self, base_path: Optional[str] = None):
        self.base_path = Path(base_path or settings.STORAGE_PATH)
        self.base_path.mkdir(parents=True, exist_ok=True)

    def save_file(
        self, file_path: str, file_data: BinaryIO, content_type: Optional[str] = None
    ) -> bool:
        full_path = self.base_path / file_path
        try:
            full_path.parent.mkdir(parents=True, exist_ok=True)
            with open(full_path, "wb") as f:
                shutil.copyfileobj(file_data, f)
        except OSError as e:
            logger.error(f"Local storage: error saving {full_path}: {e}")
            return False

        logger.info(f"Local storage: file saved to {full_path}")
        return True

    def get_file_url(self, file_path: str) -> str:
        if settings.CDN_BASE_URL:
            return f"{settings.CDN_BASE_URL.rstrip('/')}/{file_path.lstrip('/')}"
        return f"/static/{file_path}"

    def delete_file(self, file_path: str) -> bool:
        full_path = self.base_path / file_path
        try:
            if full_path.exists():
                full_path.unlink()
                return True
        except OSError as e:
            logger.error(f"Local storage: error deleting {full_path}: {e}")
        return False


class S3StorageProvider(StorageProvider):
    """
    Amazon S3 хранилище (или совместимые сервисы, например MinIO).
    """

    def __init__(
        self, bucket_name: str, region: Optional[str] = None, endpoint_url: Optional[str] = None
    ):
        self.bucket_name = bucket_name
        self.region = region or "us-east-1"
        self.endpoint_url = endpoint_url or None

        config = Config(
            retries={"max_attempts": 3, "mode": "adaptive"},
            connect_timeout=10,
            read_timeout=30,
            s3={"addressing_style": "path"},
            signature_version="s3v4",
        )

        self.s3_client = boto3.client(
            "s3",
            region_name=self.region,
            endpoint_url=self.endpoint_url,
            aws_access_key_id=settings.AWS_ACCESS_KEY_ID or None,
            aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY or None,
            config=config,
        )

    def save_file(
        self, file_path: str, file_data: BinaryIO, content_type: Optional[str] = None
    ) -> bool:
        extra_args = {}
        if content_type:
            extra_args["ContentType"] = content_type

        # ContentLength обязателен для MinIO
        file_data.seek(0)
        content = file_data.read()
        extra_args["ContentLength"] = len(content)

        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=file_path,
                Body=BytesIO(content),
                **extra_args,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"S3 storage: error uploading {file_path} to {self.bucket_name}: {e}")
            return False

        logger.info(f"S3 storage: uploaded {file_path} to bucket {self.bucket_name}")
        return True

    def get_file_url(self, file_path: str) -> str:
        key = file_path.lstrip("/")
        if settings.CDN_BASE_URL:
            return f"{settings.CDN_BASE_URL.rstrip('/')}/{key}"
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket_name}/{key}"
        return f"https://{self.bucket_name}.s3.{self.region}.amazonaws.com/{key}"

    def delete_file(self, file_path: str) -> bool:
        try:
            self.s3_client.delete_object(Bucket=self.bucket_name, Key=file_path)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"S3 storage: error deleting {file_path}: {e}")
            return False
        return True


@lru_cache
def get_storage() -> StorageProvider:
    """
    Dependency для получения провайдера хранилища.

    Тип провайдера определяется настройкой STORAGE_TYPE.
    """
    if settings.STORAGE_TYPE == "s3":
        logger.info(f"Using S3 storage: bucket={settings.S3_BUCKET_NAME}")
        return S3StorageProvider(
            bucket_name=settings.S3_BUCKET_NAME,
            region=settings.AWS_REGION,
            endpoint_url=settings.S3_ENDPOINT_URL,
        )
    logger.info(f"Using local storage: path={settings.STORAGE_PATH}")
    return LocalStorageProvider()


def product_image_path(product_id: int, filename: str) -> str:
    """
    Сгенерировать путь для изображения товара.

    Example:
        product_image_path(7, "Phone.PNG") -> "products/7/3f2a....png"
    """
    extension = Path(filename).suffix.lower()
    return f"products/{product_id}/{uuid.uuid4().hex}{extension}"


def validate_image(filename: Optional[str], size: int) -> None:
    """
    Проверить загружаемое изображение.

    Raises:
        ValidationError: Если формат не поддерживается или файл слишком большой
    """
    extension = Path(filename or "").suffix.lower().lstrip(".")
    if extension not in settings.allowed_image_types:
        raise ValidationError.single(
            "file",
            f"Unsupported file format: '{extension}'. "
            f"Supported: {', '.join(settings.allowed_image_types)}",
        )
    if size == 0:
        raise ValidationError.single("file", "File is empty")
    if size > settings.MAX_IMAGE_SIZE:
        raise ValidationError.single(
            "file", f"File size exceeds maximum allowed size of {settings.MAX_IMAGE_SIZE} bytes"
        )


@dataclass(frozen=True)
class StoredImage:
    """
    Сохраненное изображение.

    Attributes:
        path: Путь (ключ) в хранилище
        url: Публичный URL
    """

    path: str
    url: str


async def read_image_upload(file: UploadFile) -> bytes:
    """
    Прочитать загруженный файл, не превышая лимит размера.

    Если размер известен заранее, файл проверяется до чтения. Иначе
    читается не более MAX_IMAGE_SIZE + 1 байт, и превышение выявляет
    validate_image.

    Raises:
        ValidationError: Если формат не поддерживается или файл слишком большой
    """
    if file.size is not None:
        validate_image(file.filename, file.size)
    content = await file.read(settings.MAX_IMAGE_SIZE + 1)
    validate_image(file.filename, len(content))
    return content


def store_product_image(
    storage: StorageProvider,
    product_id: int,
    filename: Optional[str],
    content: bytes,
    content_type: Optional[str] = None,
) -> StoredImage:
    """
    Сохранить изображение товара в хранилище.

    Args:
        storage: Провайдер хранилища
        product_id: ID товара
        filename: Имя загруженного файла
        content: Содержимое файла
        content_type: MIME тип

    Returns:
        StoredImage: Путь и URL сохраненного изображения

    Raises:
        ValidationError: Если файл не прошел проверку
        StorageError: Если хранилище не приняло файл
    """
    validate_image(filename, len(content))

    path = product_image_path(product_id, filename or "")
    if not storage.save_file(path, BytesIO(content), content_type):
        raise StorageError("Failed to save file to storage")
    return StoredImage(path=path, url=storage.get_file_url(path))


def discard_product_image(storage: StorageProvider, image: StoredImage) -> None:
    """Удалить изображение, которое не удалось привязать к товару."""
    if not storage.delete_file(image.path):
        logger.warning(f"Orphaned product image left in storage: {image.path}")
