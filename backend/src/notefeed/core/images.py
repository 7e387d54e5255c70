"""Local file storage for note images."""

import asyncio
import logging
import uuid
from pathlib import Path, PurePosixPath
from typing import List, Optional

from fastapi import UploadFile

from ..config import get_settings
from .exceptions import StorageError, ValidationError

logger = logging.getLogger(__name__)

# URL path stored images are served under
IMAGE_URL_PREFIX = "images"

_EXTENSIONS = {
    "image/png": ".png",
    "image/jpg": ".jpg",
    "image/jpeg": ".jpeg",
}


class ImageStorage:
    """Saves uploaded images under ``root`` and releases them on request.

    Stored references are URL paths such as ``images/3f2c....png``; only the
    file name maps onto ``root``, wherever ``root`` lives.
    """

    def __init__(
        self,
        root: Optional[str] = None,
        max_bytes: Optional[int] = None,
        allowed_types: Optional[List[str]] = None,
    ):
        settings = get_settings()
        self.root = Path(root or settings.image_dir)
        self.max_bytes = max_bytes or settings.max_file_size_mb * 1024 * 1024
        self.allowed_types = allowed_types or settings.allowed_image_types

    async def save(self, upload: UploadFile) -> str:
        """Validate and persist an upload; returns the stored reference."""
        content_type = (upload.content_type or "").lower()
        if content_type not in self.allowed_types:
            raise ValidationError.for_field(
                "image", f"Unsupported image type '{content_type}'", upload.filename
            )

        data = await upload.read()
        if not data:
            raise ValidationError.for_field("image", "Image file is empty", upload.filename)
        if len(data) > self.max_bytes:
            raise ValidationError.for_field(
                "image", f"Image exceeds {self.max_bytes} bytes", upload.filename
            )

        name = f"{uuid.uuid4().hex}{_EXTENSIONS.get(content_type, '')}"
        target = self.root / name
        try:
            await asyncio.to_thread(self._write, target, data)
        except OSError as e:
            raise StorageError(f"Failed to store image: {e}") from e

        logger.info(f"Stored image {target} ({len(data)} bytes)")
        return f"{IMAGE_URL_PREFIX}/{name}"

    def _write(self, target: Path, data: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)

    async def release(self, reference: str) -> bool:
        """Remove a stored image. Never raises; failures are logged."""
        path = self.path_for(reference)
        if path is None:
            logger.error(f"Refusing to delete file outside image storage - {reference}")
            return False
        try:
            await asyncio.to_thread(path.unlink)
        except OSError as e:
            logger.error(f"Failed to delete file - {path}, error message: {e}")
            return False
        logger.info(f"Released image {path}")
        return True

    def path_for(self, reference: str) -> Optional[Path]:
        """File behind a stored reference; ``None`` if it points elsewhere."""
        ref = PurePosixPath(reference.lstrip("/"))
        if ref.parent not in (PurePosixPath("."), PurePosixPath(IMAGE_URL_PREFIX)):
            return None
        if ref.name in ("", ".", ".."):
            return None
        return self.root / ref.name


_image_storage: Optional[ImageStorage] = None


def get_image_storage() -> ImageStorage:
    """FastAPI dependency returning the process image storage."""
    global _image_storage
    if _image_storage is None:
        _image_storage = ImageStorage()
    return _image_storage
