import io
from datetime import datetime, UTC

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from circles.services.storage import UPLOAD_REJECTED_MESSAGE, PhotoStorage
from circles.utils.errors import NotFound, ValidationFailed


def _upload(data: bytes, content_type: str = "image/jpeg") -> UploadFile:
    return UploadFile(file=io.BytesIO(data), filename="photo.jpg",
                      headers=Headers({"content-type": content_type}))


def test_save_jpeg_under_dated_category(storage, jpeg_bytes):
    now = datetime(2024, 5, 17, 12, 0, tzinfo=UTC)
    relative = storage.save(_upload(jpeg_bytes), "event", now=now)
    assert relative.startswith("images/event/2024-05-17/")
    assert relative.endswith(".jpg")
    assert storage.resolve(relative).read_bytes() == jpeg_bytes


def test_rejects_wrong_content_type(storage, jpeg_bytes):
    with pytest.raises(ValidationFailed) as exc:
        storage.save(_upload(jpeg_bytes, "image/png"), "event")
    assert exc.value.message == UPLOAD_REJECTED_MESSAGE


def test_rejects_jpeg_content_type_without_jpeg_bytes(storage):
    with pytest.raises(ValidationFailed) as exc:
        storage.save(_upload(b"\x89PNG\r\n\x1a\n" + b"\x00" * 16), "event")
    assert exc.value.message == UPLOAD_REJECTED_MESSAGE


def test_rejects_missing_upload(storage):
    with pytest.raises(ValidationFailed):
        storage.save(None, "event")


def test_rejects_oversized_upload(app_config, jpeg_bytes):
    app_config.upload_max_bytes = 32
    storage = PhotoStorage(app_config)
    with pytest.raises(ValidationFailed):
        storage.save(_upload(jpeg_bytes), "shoppingList")


def test_resolve_refuses_escaping_paths(storage):
    with pytest.raises(NotFound):
        storage.resolve("../../etc/passwd")
    with pytest.raises(NotFound):
        storage.resolve("images/event/2024-01-01/missing.jpg")


def test_remove_deletes_stored_photo_and_tolerates_missing(storage, jpeg_bytes):
    relative = storage.save(_upload(jpeg_bytes), "shopping")
    storage.remove(relative)
    with pytest.raises(NotFound):
        storage.resolve(relative)
    storage.remove(relative)
