"""Image storage: deterministic object paths plus Supabase and filesystem stores."""

import logging
from pathlib import Path
from typing import Protocol


CONTENT_TYPE_JPEG = "image/jpeg"

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when an image cannot be stored."""

    pass


def get_item_image_path(volume: int, item_number: int, label: str) -> str:
    """Return deterministic object path for one item image, e.g. vol1/item_007_oshigata.jpg."""
    return f"vol{volume}/item_{item_number:03d}_{label}.jpg"


class AssetStore(Protocol):
    """Durable image storage addressable by relative path."""

    def upload(self, path: str, content: bytes, content_type: str = CONTENT_TYPE_JPEG, overwrite: bool = True) -> None:
        """Store content at path; raises StorageError on failure."""
        ...

    def get_public_url(self, path: str) -> str:
        """Return a URL from which the stored object can be fetched."""
        ...


class SupabaseAssetStore:
    """Supabase Storage bucket."""

    def __init__(self, client, bucket: str):
        self._client = client
        self.bucket = bucket

    def upload(self, path: str, content: bytes, content_type: str = CONTENT_TYPE_JPEG, overwrite: bool = True) -> None:
        logger.debug(f"Upload {len(content)} bytes to {self.bucket}/{path}")
        try:
            self._client.storage.from_(self.bucket).upload(
                path=path,
                file=content,
                file_options={"content-type": content_type, "upsert": "true" if overwrite else "false"},
            )
        except Exception as e:
            raise StorageError(f"Upload failed for {path}: {e}") from e

    def get_public_url(self, path: str) -> str:
        return self._client.storage.from_(self.bucket).get_public_url(path)


class LocalAssetStore:
    """Filesystem-backed store; URLs are file:// URIs."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def _resolve(self, path: str) -> Path:
        return self.root / path

    def upload(self, path: str, content: bytes, content_type: str = CONTENT_TYPE_JPEG, overwrite: bool = True) -> None:
        target = self._resolve(path)
        if target.exists() and not overwrite:
            raise StorageError(f"Object already exists: {path}")

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            part_file = target.with_suffix(target.suffix + ".part")
            part_file.write_bytes(content)
            part_file.replace(target)
        except OSError as e:
            raise StorageError(f"Upload failed for {path}: {e}") from e

    def get_public_url(self, path: str) -> str:
        return self._resolve(path).resolve().as_uri()
