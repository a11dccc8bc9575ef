"""Scatter board that paints a highlights `Composition`."""

from __future__ import annotations

from PySide6.QtCore import QRectF, QSize, Qt
from PySide6.QtGui import QColor, QFont, QPainter, QPaintEvent
from PySide6.QtWidgets import QWidget

from app.views.constants import (
    HIGHLIGHT_TILE_PX,
    IMAGE_SIDE_PX,
    PAPER,
    POLAROID_SHADOW_PX,
    STONE_100,
    STONE_400,
    STONE_800,
)
from core.services.calendar_service import format_short_date
from core.services.highlights_service import EMPTY_MESSAGE, Composition, HighlightItem
from core.services.layout_service import cover_source_rect

_MARGIN = 32
_GAP = 20
_TITLE_H = 80


class HighlightsBoard(QWidget):
    """Paint the composition exactly as computed; repaints never reshuffle it."""

    def __init__(self, image_service, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._images = image_service
        self._composition = Composition(title="")

    def set_composition(self, composition: Composition) -> None:
        self._composition = composition
        self.setMinimumHeight(self._content_height(max(self.width(), 600)))
        self.update()

    @property
    def composition(self) -> Composition:
        return self._composition

    def sizeHint(self) -> QSize:  # noqa: N802
        return QSize(900, self._content_height(900))

    def _tile_size(self, item: HighlightItem) -> tuple[float, float]:
        w = HIGHLIGHT_TILE_PX * item.scale
        return w, w * 1.2

    def _placements(self, width: int) -> list[tuple[HighlightItem, QRectF]]:
        out: list[tuple[HighlightItem, QRectF]] = []
        x, y, row_h = float(_MARGIN), float(_TITLE_H), 0.0
        for item in self._composition.items:
            w, h = self._tile_size(item)
            if x > _MARGIN and x + w > width - _MARGIN:
                x = float(_MARGIN)
                y += row_h + _GAP
                row_h = 0.0
            out.append((item, QRectF(x, y, w, h)))
            x += w + _GAP
            row_h = max(row_h, h)
        return out

    def _content_height(self, width: int) -> int:
        placements = self._placements(width)
        if not placements:
            return _TITLE_H + 2 * _MARGIN
        return int(max(r.bottom() for _, r in placements) + _MARGIN)

    def paintEvent(self, event: QPaintEvent) -> None:  # noqa: N802
        p = QPainter(self)
        p.setRenderHint(QPainter.Antialiasing, True)
        p.setRenderHint(QPainter.SmoothPixmapTransform, True)
        p.fillRect(self.rect(), QColor(PAPER))

        title_font = QFont(self.font())
        title_font.setPointSizeF(title_font.pointSizeF() * 2.2)
        p.setFont(title_font)
        p.setPen(QColor(STONE_800))
        p.drawText(QRectF(0, 0, self.width(), _TITLE_H), Qt.AlignCenter, self._composition.title)

        p.setFont(self.font())
        if self._composition.is_empty:
            p.setPen(QColor(STONE_400))
            p.drawText(self.rect().adjusted(0, _TITLE_H, 0, 0), Qt.AlignCenter, EMPTY_MESSAGE)
            p.end()
            return
        for item, rect in self._placements(self.width()):
            self._paint_tile(p, item, rect)
        p.end()

    def _paint_tile(self, p: QPainter, item: HighlightItem, rect: QRectF) -> None:
        p.save()
        p.translate(rect.center())
        p.rotate(item.rotation)
        local = QRectF(-rect.width() / 2, -rect.height() / 2, rect.width(), rect.height())
        p.fillRect(local.translated(POLAROID_SHADOW_PX / 2, POLAROID_SHADOW_PX), QColor(120, 113, 108, 40))
        p.fillRect(local, QColor("white"))

        pad = max(4.0, local.width() / 20)
        window = QRectF(local.left() + pad, local.top() + pad, local.width() - 2 * pad, local.width() - 2 * pad)
        p.fillRect(window, QColor(STONE_100))
        img = self._images.get_image(item.photo.url, IMAGE_SIDE_PX) if self._images is not None else None
        if img is not None and not img.isNull():
            sx, sy, sw, sh = cover_source_rect(
                img.width(), img.height(), window.width(), window.height(), item.photo.pan_x, item.photo.pan_y
            )
            p.drawImage(window, img, QRectF(sx, sy, sw, sh))

        p.setPen(QColor(STONE_400))
        p.drawText(
            QRectF(local.left(), window.bottom(), local.width(), local.bottom() - window.bottom()),
            Qt.AlignCenter,
            format_short_date(item.entry_date),
        )
        p.restore()
