"""
Тесты хранилища изображений.
"""

import asyncio
from io import BytesIO

import pytest
from fastapi import UploadFile

from app.core.config import settings
from app.core.exceptions import StorageError, ValidationError
from app.services.storage_service import (
    LocalStorageProvider,
    discard_product_image,
    product_image_path,
    read_image_upload,
    store_product_image,
    validate_image,
)


class BrokenStorage(LocalStorageProvider):
    def save_file(self, file_path, file_data, content_type=None):
        return False


def test_product_image_path_keeps_lowercase_extension():
    path = product_image_path(7, "Phone.JPEG")

    assert path.startswith("products/7/")
    assert path.endswith(".jpeg")


@pytest.mark.parametrize("filename", ["photo.png", "photo.JPG", "photo.webp"])
def test_validate_image_accepts_allowed_types(filename):
    validate_image(filename, 1024)


@pytest.mark.parametrize(
    "filename, size",
    [("script.exe", 10), ("noextension", 10), (None, 10), ("photo.png", 0), ("photo.png", 10**9)],
)
def test_validate_image_rejects(filename, size):
    with pytest.raises(ValidationError) as exc_info:
        validate_image(filename, size)

    assert exc_info.value.field_errors[0][0] == "file"


def test_local_provider_stores_and_discards_image(tmp_path):
    storage = LocalStorageProvider(str(tmp_path))

    image = store_product_image(storage, 3, "photo.png", b"image-bytes", "image/png")

    assert image.url == f"/static/{image.path}"
    assert (tmp_path / image.path).read_bytes() == b"image-bytes"

    discard_product_image(storage, image)

    assert not (tmp_path / image.path).exists()


def test_store_product_image_raises_when_storage_rejects(tmp_path):
    with pytest.raises(StorageError):
        store_product_image(BrokenStorage(str(tmp_path)), 3, "photo.png", b"image-bytes")


class UnreadableFile(BytesIO):
    def read(self, *args):
        raise AssertionError("file must not be read")


def test_read_image_upload_checks_declared_size_before_reading():
    upload = UploadFile(UnreadableFile(), filename="photo.png", size=10**9)

    with pytest.raises(ValidationError):
        asyncio.run(read_image_upload(upload))


def test_read_image_upload_stops_after_limit(monkeypatch):
    monkeypatch.setattr(settings, "MAX_IMAGE_SIZE", 4)
    upload = UploadFile(BytesIO(b"0123456789"), filename="photo.png")

    with pytest.raises(ValidationError) as exc_info:
        asyncio.run(read_image_upload(upload))

    assert "4 bytes" in exc_info.value.field_errors[0][1]


def test_read_image_upload_returns_content():
    upload = UploadFile(BytesIO(b"image-bytes"), filename="photo.png")

    assert asyncio.run(read_image_upload(upload)) == b"image-bytes"
