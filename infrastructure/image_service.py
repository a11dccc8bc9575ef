"""Image loading and caching for collage rendering.

Photos are referenced by URL; the service maps a URL to a local file (through
the object store, or directly for `file://` URLs), decodes it with Qt and
falls back to Pillow (with the HEIF opener registered) for formats Qt
cannot read.
"""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote, urlparse

from PIL import Image, ImageOps
from pillow_heif import register_heif_opener
from PySide6.QtCore import QSize
from PySide6.QtGui import QImage, QImageReader
from loguru import logger

register_heif_opener()

DEFAULT_MEM_CACHE = 128


def path_from_file_url(url: str) -> Path | None:
    """Return the local path of a `file://` URL or a bare filesystem path."""
    if not url:
        return None
    parsed = urlparse(url)
    if parsed.scheme == "file":
        return Path(unquote(parsed.path))
    if parsed.scheme == "" or (len(parsed.scheme) == 1 and url[1:3] in (":\\", ":/")):
        return Path(url)
    return None


@dataclass
class _MemCacheItem:
    key: str
    image: QImage


class _LRUCache:
    def __init__(self, capacity: int) -> None:
        self._cap = max(1, int(capacity or 1))
        self._data: OrderedDict[str, _MemCacheItem] = OrderedDict()

    def get(self, key: str) -> QImage | None:
        """Return cached QImage for key, moving it to the MRU position."""
        item = self._data.get(key)
        if not item:
            return None
        self._data.move_to_end(key)
        return item.image

    def put(self, key: str, image: QImage) -> None:
        """Insert or update `key`, evicting the least recently used entry."""
        self._data[key] = _MemCacheItem(key, image)
        self._data.move_to_end(key)
        while len(self._data) > self._cap:
            self._data.popitem(last=False)

    def __len__(self) -> int:
        return len(self._data)


class ImageService:
    """Resolve photo URLs to decoded, size-bounded QImages."""

    def __init__(
        self,
        resolver: Callable[[str], Path | None] | None = None,
        settings: object | None = None,
    ) -> None:
        self._resolver = resolver
        cap = DEFAULT_MEM_CACHE
        if settings is not None:
            try:
                cap = int(settings.get("images.mem_cache", DEFAULT_MEM_CACHE) or DEFAULT_MEM_CACHE)  # type: ignore[attr-defined]
            except (ValueError, TypeError):
                cap = DEFAULT_MEM_CACHE
        self._cache = _LRUCache(cap)

    def resolve(self, url: str) -> Path | None:
        if self._resolver is not None:
            path = self._resolver(url)
            if path is not None:
                return path
        return path_from_file_url(url)

    def get_image(self, url: str, max_side: int) -> QImage | None:
        """Return the image behind `url` scaled so its longer side is <= `max_side`."""
        key = f"{url}|{int(max_side)}"
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        path = self.resolve(url)
        if path is None or not path.exists():
            logger.warning("Image not found for {}", url)
            return None
        img = self._load_qt(str(path), max_side) or self._load_pillow(str(path), max_side)
        if img is not None:
            self._cache.put(key, img)
        return img

    @staticmethod
    def _load_qt(path: str, max_side: int) -> QImage | None:
        reader = QImageReader(path)
        reader.setAutoTransform(True)
        size = reader.size()
        if max_side > 0 and size.isValid():
            w, h = size.width(), size.height()
            longest = max(w, h)
            if longest > max_side:
                ratio = max_side / float(longest)
                reader.setScaledSize(QSize(max(1, int(w * ratio)), max(1, int(h * ratio))))
        img = reader.read()
        if img.isNull():
            logger.debug("Qt read failed for {}: {}", path, reader.errorString())
            return None
        return img

    @staticmethod
    def _load_pillow(path: str, max_side: int) -> QImage | None:
        try:
            with Image.open(path) as im:
                im = ImageOps.exif_transpose(im).convert("RGBA")
                if max_side > 0:
                    im.thumbnail((max_side, max_side))
                data = im.tobytes("raw", "RGBA")
                qimg = QImage(data, im.width, im.height, im.width * 4, QImage.Format_RGBA8888)
                return qimg.copy()
        except (OSError, ValueError) as ex:
            logger.error("Pillow read failed for {}: {}", path, ex)
            return None
