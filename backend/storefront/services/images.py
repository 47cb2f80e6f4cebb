# backend/storefront/services/images.py

import logging
import random
import time
from io import BytesIO
from pathlib import Path
from typing import BinaryIO

from PIL import Image, UnidentifiedImageError

from ..errors import StorageError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif"}


class ImageStorage:
    """Menu images saved to disk and served under /images."""

    def __init__(self, images_dir: Path, public_base_url: str, max_bytes: int):
        self.images_dir = Path(images_dir)
        self.public_base_url = public_base_url.rstrip("/")
        self.max_bytes = max_bytes

    def read_upload(self, fileobj: BinaryIO) -> bytes:
        """Read at most one byte past the limit so oversized uploads fail in save."""
        return fileobj.read(self.max_bytes + 1)

    def save(self, filename: str | None, content: bytes) -> str:
        """Validate and store one upload, returning its public URL."""
        ext = Path(filename or "").suffix.lower()
        if ext not in ALLOWED_EXTENSIONS:
            raise ValidationError("Only image files are allowed!")
        if len(content) > self.max_bytes:
            raise ValidationError(
                f"Image exceeds the {self.max_bytes // (1024 * 1024)} MB size limit"
            )

        try:
            with Image.open(BytesIO(content)) as img:
                img.verify()
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError):
            raise ValidationError(f"{filename} is not a valid image") from None

        name = f"menu-image-{int(time.time() * 1000)}-{random.randint(0, 10**9)}{ext}"
        try:
            self.images_dir.mkdir(parents=True, exist_ok=True)
            (self.images_dir / name).write_bytes(content)
        except OSError as e:
            raise StorageError(f"Failed to store image: {e}") from e

        logger.info("Stored image %s (%d bytes)", name, len(content))
        return f"{self.public_base_url}/images/{name}"
