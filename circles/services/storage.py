"""
Photo upload storage on the local filesystem.

Photos land under ``<UPLOAD_ROOT>/images/<category>/<YYYY-MM-DD>/<uuid4>.jpg``
and are referenced by their path relative to ``UPLOAD_ROOT``.
"""

import logging
import uuid
from datetime import datetime, UTC
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from circles.utils.config import AppConfig, get_config
from circles.utils.errors import Internal, NotFound, ValidationFailed

logger = logging.getLogger(__name__)

UPLOAD_REJECTED_MESSAGE = "Only JPEG images up to 2MB are allowed."
ALLOWED_CONTENT_TYPES = ("image/jpeg",)
_JPEG_MAGIC = b"\xff\xd8\xff"
_CHUNK = 64 * 1024


class PhotoStorage:
    def __init__(self, config: Optional[AppConfig] = None):
        self.config = config or get_config()
        self.root = Path(self.config.upload_root).resolve()

    def save(self, upload: Optional[UploadFile], category: str, now: Optional[datetime] = None) -> str:
        """Validate and persist an uploaded JPEG; returns the stored relative path."""
        if upload is None or (upload.content_type or "").lower() not in ALLOWED_CONTENT_TYPES:
            raise ValidationFailed(UPLOAD_REJECTED_MESSAGE)

        data = bytearray()
        while True:
            chunk = upload.file.read(_CHUNK)
            if not chunk:
                break
            data.extend(chunk)
            if len(data) > self.config.upload_max_bytes:
                raise ValidationFailed(UPLOAD_REJECTED_MESSAGE)
        if not data.startswith(_JPEG_MAGIC):
            raise ValidationFailed(UPLOAD_REJECTED_MESSAGE)

        day = (now or datetime.now(UTC)).strftime("%Y-%m-%d")
        relative = Path("images") / category / day / f"{uuid.uuid4()}.jpg"
        target = self.root / relative
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(bytes(data))
        except OSError as e:
            logger.exception("photo_store_failed: category=%s", category)
            raise Internal() from e
        return relative.as_posix()

    def resolve(self, relative_path: str) -> Path:
        """Absolute path of a stored photo; refuses paths outside the upload root."""
        candidate = (self.root / relative_path).resolve()
        if not candidate.is_relative_to(self.root) or not candidate.is_file():
            raise NotFound("Photo not found")
        return candidate

    def remove(self, relative_path: str) -> None:
        """Delete a stored photo whose row was never written."""
        target = self.root / relative_path
        try:
            target.unlink(missing_ok=True)
        except OSError:
            logger.exception("photo_remove_failed: path=%s", relative_path)
        else:
            logger.info("photo_removed: path=%s", relative_path)
