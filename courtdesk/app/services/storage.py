"""Object storage for user uploads.

Files live in a local directory that the app serves under a public URL
prefix, so a stored object's URL can be saved directly on a record.
"""

import logging
import re
import time
from dataclasses import dataclass
from pathlib import Path

from courtdesk.app.core.settings import get_settings

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class UploadRejected(ValueError):
    """Raised when an upload fails type or size validation."""


@dataclass
class StoredObject:
    key: str
    url: str
    content_type: str | None
    size: int


class LocalObjectStorage:
    def __init__(self, root: str | Path, url_prefix: str):
        self.root = Path(root)
        self.url_prefix = url_prefix.rstrip("/")

    def _path_for(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if self.root.resolve() not in path.parents:
            raise UploadRejected(f"Invalid storage key: {key}")
        return path

    def public_url(self, key: str) -> str:
        return f"{self.url_prefix}/{key}"

    def put(self, key: str, data: bytes, content_type: str | None = None) -> StoredObject:
        path = self._path_for(key)
        if path.exists():
            raise UploadRejected(f"Object already exists: {key}")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        logger.info("Stored %s (%s bytes)", key, len(data))
        return StoredObject(key=key, url=self.public_url(key), content_type=content_type, size=len(data))

    def delete(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)

    def key_from_url(self, url: str | None) -> str | None:
        prefix = f"{self.url_prefix}/"
        if url and url.startswith(prefix):
            return url[len(prefix):]
        return None


def get_storage() -> LocalObjectStorage:
    settings = get_settings()
    return LocalObjectStorage(settings.upload_dir, settings.upload_url_prefix)


def _timestamp_ms() -> int:
    return int(time.time() * 1000)


def sanitize_filename(filename: str) -> str:
    return _UNSAFE_CHARS.sub("_", filename or "file")


def file_extension(filename: str | None, content_type: str | None) -> str:
    if filename and "." in filename:
        return sanitize_filename(filename.rsplit(".", 1)[1].lower())
    if content_type and "/" in content_type:
        return sanitize_filename(content_type.split("/", 1)[1].lower())
    return "bin"


def avatar_key(user_id: int, filename: str | None, content_type: str | None, timestamp_ms: int | None = None) -> str:
    stamp = timestamp_ms if timestamp_ms is not None else _timestamp_ms()
    return f"{user_id}-{stamp}.{file_extension(filename, content_type)}"


def document_key(user_id: int, student_id: int, filename: str | None, timestamp_ms: int | None = None) -> str:
    stamp = timestamp_ms if timestamp_ms is not None else _timestamp_ms()
    return f"documents/{user_id}/{student_id}/{stamp}-{sanitize_filename(filename or 'file')}"


def validate_avatar(content_type: str | None, size: int, max_bytes: int) -> None:
    if not content_type or not content_type.startswith("image/"):
        raise UploadRejected("Please select an image file.")
    if size > max_bytes:
        raise UploadRejected(f"The file must be at most {max_bytes // (1024 * 1024)}MB.")


def validate_document(size: int, max_bytes: int) -> None:
    if size == 0:
        raise UploadRejected("The file is empty.")
    if size > max_bytes:
        raise UploadRejected(f"The file must be at most {max_bytes // (1024 * 1024)}MB.")
