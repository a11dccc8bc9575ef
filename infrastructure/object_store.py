"""Local object storage for photos and voice notes.

Files are copied under `<root>/<bucket>/<user_id>/` and addressed by a public
URL built from a configurable base. Deletion reverses the URL into a path and
sends the object to the OS trash.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
import os
from pathlib import Path
import random
import shutil
import string

from loguru import logger
from send2trash import send2trash

from core.services.interfaces import AuthUnavailableError, Bucket, MediaFile, UploadError

BUCKETS: tuple[str, ...] = ("photos", "voice-notes")
_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


def object_path_from_url(url: str, bucket: str) -> str | None:
    """Return the bucket-relative object path for a public URL, or None."""
    parts = (url or "").split(f"/{bucket}/", 1)
    if len(parts) < 2 or not parts[1]:
        return None
    return parts[1]


def make_object_name(user_id: str, file_name: str, now: datetime | None = None) -> str:
    """`<user>/<epoch ms>-<random7>.<ext>`."""
    ts = int((now or datetime.now()).timestamp() * 1000)
    suffix = "".join(random.choice(_SUFFIX_ALPHABET) for _ in range(7))
    ext = file_name.rsplit(".", 1)[-1].lower() if "." in file_name else "bin"
    return f"{user_id}/{ts}-{suffix}.{ext}"


class LocalObjectStore:
    """Object store rooted at a local directory."""

    def __init__(
        self,
        root: str | Path,
        public_base_url: str | None = None,
        remover: Callable[[str], None] = send2trash,
    ) -> None:
        self._root = Path(root)
        self._base_url = (public_base_url or self._root.resolve().as_uri()).rstrip("/")
        self._remove = remover

    @property
    def root(self) -> Path:
        return self._root

    def public_url(self, bucket: str, object_name: str) -> str:
        return f"{self._base_url}/{bucket}/{object_name}"

    def _relative(self, url: str, bucket: str) -> str | None:
        prefix = f"{self._base_url}/{bucket}/"
        if url.startswith(prefix):
            return url[len(prefix) :] or None
        return object_path_from_url(url, bucket)

    def _contained(self, bucket: str, rel: str) -> Path | None:
        """Resolve `rel` inside the bucket directory; None if it escapes it."""
        base = (self._root / bucket).resolve()
        path = Path(os.path.normpath(base / rel)).resolve()
        if path == base or base not in path.parents:
            logger.warning("Object path escapes bucket {}: {}", bucket, rel)
            return None
        return path

    def local_path(self, url: str) -> Path | None:
        """Map a public URL served by this store back to a local file path."""
        for bucket in BUCKETS:
            if url.startswith(f"{self._base_url}/{bucket}/"):
                rel = self._relative(url, bucket)
                return self._contained(bucket, rel) if rel else None
        return None

    def upload(self, file: MediaFile, bucket: Bucket, user_id: str, token: str) -> str:
        """Copy `file` into the bucket and return its public URL."""
        if not token:
            raise AuthUnavailableError("No authentication token")
        if bucket not in BUCKETS:
            raise UploadError(f"Unknown bucket: {bucket}")
        name = make_object_name(user_id, file.name)
        target = self._root / bucket / name
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(file.path, target)
        except OSError as ex:
            logger.error("Upload failed: {} -> {} ({})", file.path, target, ex)
            raise UploadError(f"Could not store {file.name}") from ex
        url = self.public_url(bucket, name)
        logger.info("Uploaded {} to {}", file.name, url)
        return url

    def delete(self, url: str, bucket: Bucket, token: str) -> None:
        """Trash the object behind `url`; failures are logged, not raised."""
        if not token:
            raise AuthUnavailableError("No authentication token")
        rel = self._relative(url, bucket)
        if rel is None:
            logger.warning("Delete skipped, URL is not in bucket {}: {}", bucket, url)
            return
        resolved = self._contained(bucket, rel)
        if resolved is None:
            return
        path = str(resolved)
        if not os.path.exists(path):
            logger.warning("Delete skipped, object does not exist: {}", path)
            return
        try:
            self._remove(path)
            logger.info("Deleted object {}", path)
        except (OSError, RuntimeError) as ex:
            logger.error("Error deleting object {}: {}", path, ex)
