"""Image intake — stores uploaded product images on local disk."""

import os
import uuid
from dataclasses import dataclass

import structlog

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class StoredImage:
    filename: str
    path: str
    url: str


class ImageStorage:
    """
    Writes uploaded bytes under `upload_dir` and returns a public reference.

    Filenames are `<uuid4 hex><original extension>`, so two uploads of the
    same file in the same instant never collide.
    """

    def __init__(self, upload_dir: str, url_prefix: str = "/uploads"):
        self.upload_dir = upload_dir
        self.url_prefix = url_prefix.rstrip("/")

    @staticmethod
    def generate_filename(original_name: str | None) -> str:
        ext = os.path.splitext(original_name or "")[1].lower()
        return f"{uuid.uuid4().hex}{ext}"

    def store(self, content: bytes, original_name: str | None) -> StoredImage:
        os.makedirs(self.upload_dir, exist_ok=True)
        filename = self.generate_filename(original_name)
        file_path = os.path.join(self.upload_dir, filename)

        with open(file_path, "wb") as f:
            f.write(content)

        logger.info("Image stored", filename=filename, size=len(content))
        return StoredImage(
            filename=filename,
            path=file_path,
            url=f"{self.url_prefix}/{filename}",
        )

    def discard(self, image: StoredImage) -> None:
        """Remove a stored image, e.g. after the product that owned it failed to save."""
        try:
            os.remove(image.path)
        except FileNotFoundError:
            return
        logger.info("Image discarded", filename=image.filename)
