"""
Product image storage on the local filesystem.

Images are written under ``UPLOAD_DIR/products`` and served at ``MEDIA_URL``.
"""

import logging
import re
from datetime import datetime
from pathlib import Path

from app.config import settings

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


class LocalImageStorage:
    def __init__(self, root: str | Path, url_prefix: str):
        self.root = Path(root)
        self.url_prefix = url_prefix.rstrip("/")
        (self.root / "products").mkdir(parents=True, exist_ok=True)

    def upload(self, filename: str, content: bytes) -> str:
        """Store an image and return its public URL."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        safe_name = _UNSAFE_CHARS.sub("_", Path(filename or "image").name)
        relative = f"products/{timestamp}_{safe_name}"

        with open(self.root / relative, "wb") as f:
            f.write(content)

        logger.info(f"Stored product image {relative} ({len(content)} bytes)")
        return f"{self.url_prefix}/{relative}"

    def path_for(self, url: str) -> Path | None:
        """Filesystem path of an image URL issued by this storage, else None."""
        if not url or not url.startswith(self.url_prefix + "/"):
            return None
        relative = url[len(self.url_prefix) + 1:]
        path = (self.root / relative).resolve()
        if self.root.resolve() not in path.parents:
            return None
        return path

    def delete(self, url: str) -> None:
        """Remove an image. Failures are logged, never raised."""
        path = self.path_for(url)
        if path is None:
            logger.warning(f"Not deleting image outside storage: {url}")
            return
        try:
            path.unlink()
            logger.info(f"Deleted product image {path.name}")
        except OSError as e:
            logger.error(f"Error deleting image {url}: {e}")


def get_storage() -> LocalImageStorage:
    return LocalImageStorage(settings.UPLOAD_DIR, settings.MEDIA_URL)
