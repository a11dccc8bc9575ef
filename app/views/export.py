"""Raster export of on-screen widgets."""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import Qt
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import QWidget
from loguru import logger


class WidgetExportRenderer:
    """Render a widget subtree to a PNG file.

    With `scale` > 1 the widget paints into a high-DPI pixmap, so the file
    holds `scale` device pixels per logical pixel.
    """

    def __init__(self, scale: float = 1.0) -> None:
        self._scale = max(1.0, float(scale))

    def render(self, subject: QWidget, out_path: str) -> str:
        size = subject.size()
        pixmap = QPixmap(size * self._scale)
        pixmap.setDevicePixelRatio(self._scale)
        pixmap.fill(Qt.transparent)
        subject.render(pixmap)
        out = Path(out_path)
        out.parent.mkdir(parents=True, exist_ok=True)
        if not pixmap.save(str(out), "PNG"):
            logger.error("Widget export failed: {}", out)
            raise OSError(f"Could not write {out}")
        logger.info("Widget exported: {}", out)
        return str(out)
