"""Collage widget: paints polaroids from the layout engine and turns mouse
drags into `GestureDelta` events."""

from __future__ import annotations

from PySide6.QtCore import QPointF, QRectF, QSize, Qt, Signal
from PySide6.QtGui import QColor, QMouseEvent, QPainter, QPaintEvent, QPen
from PySide6.QtWidgets import QSizePolicy, QWidget

from app.viewmodels.photo_vm import PhotoVM
from app.views.constants import (
    COLLAGE_ASPECT,
    COLLAGE_MIN_PX,
    DRAG_LIFT_SCALE,
    IMAGE_SIDE_PX,
    POLAROID_SHADOW_PX,
    STONE_100,
    STONE_400,
)
from core.models import Photo
from core.services.gesture_service import (
    EditMode,
    EditorSession,
    GestureDelta,
    GesturePhase,
    apply_gesture,
    preview_offset,
)
from core.services.layout_service import select_layout


class CollageWidget(QWidget):
    """Read-only or editable collage surface.

    In editable mode a drag emits BEGIN/UPDATE/END gestures through
    `photoGesture(photo_id, GestureDelta)`. Only the owner commits END
    gestures; in-flight updates are previewed locally.
    """

    photoGesture = Signal(str, object)

    def __init__(self, image_service, parent: QWidget | None = None, editable: bool = False) -> None:
        super().__init__(parent)
        self._images = image_service
        self._editable = editable
        self._photos: list[Photo] = []
        self._editor = EditorSession()
        self._drag_id: str | None = None
        self._drag_origin = QPointF()
        self._drag_delta = (0.0, 0.0)
        self.setMinimumSize(COLLAGE_MIN_PX, int(COLLAGE_MIN_PX / COLLAGE_ASPECT))
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.setMouseTracking(False)

    # Public API
    def set_photos(self, photos: list[Photo]) -> None:
        self._photos = list(photos)
        self.update()

    def set_editor(self, editor: EditorSession) -> None:
        """Switch the interaction mode; the photos themselves are not touched."""
        self._editor = editor
        self.setCursor(Qt.SizeAllCursor if editor.mode is EditMode.CROP else Qt.OpenHandCursor)
        self.update()

    def sizeHint(self) -> QSize:  # noqa: N802
        return QSize(480, int(480 / COLLAGE_ASPECT))

    # Geometry
    def _polaroids(self) -> list[PhotoVM]:
        layout = select_layout(len(self._photos))
        return [PhotoVM(photo=p, slot=s) for s, p in layout.paint_order(self._photos)]

    def _display_photo(self, vm: PhotoVM) -> Photo:
        """Photo as it should look right now, including an in-flight drag."""
        if vm.id != self._drag_id:
            return vm.photo
        dx, dy = self._drag_delta
        return apply_gesture(vm.photo, GestureDelta(GesturePhase.END, dx, dy), self._editor)

    def _frame(self, vm: PhotoVM) -> QRectF:
        offset = vm.photo.frame_offset
        if vm.id == self._drag_id:
            dx, dy = self._drag_delta
            offset = preview_offset(vm.photo, GestureDelta(GesturePhase.UPDATE, dx, dy), self._editor)
        x, y, w, h = vm.frame_rect(self.width(), self.height(), offset)
        return QRectF(x, y, w, h)

    def _hit(self, pos: QPointF) -> PhotoVM | None:
        for vm in reversed(self._polaroids()):
            if self._frame(vm).contains(pos):
                return vm
        return None

    # Painting
    def paintEvent(self, event: QPaintEvent) -> None:  # noqa: N802
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.setRenderHint(QPainter.SmoothPixmapTransform, True)
        if not self._photos:
            painter.fillRect(self.rect(), QColor(STONE_100))
            painter.setPen(QColor(STONE_400))
            painter.drawText(self.rect(), Qt.AlignCenter, "Add a photo to start")
            painter.end()
            return
        for vm in self._polaroids():
            self._paint_polaroid(painter, vm)
        painter.end()

    def _paint_polaroid(self, painter: QPainter, vm: PhotoVM) -> None:
        shown = self._display_photo(vm)
        frame = self._frame(vm)
        dragging = vm.id == self._drag_id
        painter.save()
        painter.translate(frame.center())
        if dragging:
            if self._editor.mode is EditMode.MOVE:
                painter.scale(DRAG_LIFT_SCALE, DRAG_LIFT_SCALE)
        else:
            painter.rotate(shown.rotation)
        local = QRectF(-frame.width() / 2, -frame.height() / 2, frame.width(), frame.height())

        shadow = local.translated(POLAROID_SHADOW_PX / 2, POLAROID_SHADOW_PX)
        painter.fillRect(shadow, QColor(120, 113, 108, 40))
        painter.fillRect(local, QColor("white"))

        wx, wy, ww, wh = PhotoVM.window_rect(local.width(), local.height())
        window = QRectF(local.left() + wx, local.top() + wy, ww, wh)
        painter.fillRect(window, QColor(STONE_100))
        img = self._images.get_image(shown.url, IMAGE_SIDE_PX) if self._images is not None else None
        if img is not None and not img.isNull():
            sx, sy, sw, sh = PhotoVM(shown, vm.slot).source_rect(img.width(), img.height(), ww, wh)
            painter.drawImage(window, img, QRectF(sx, sy, sw, sh))
        if self._editable:
            painter.setPen(QPen(QColor(STONE_400), 1))
            painter.drawText(
                QRectF(local.left(), window.bottom(), local.width(), local.bottom() - window.bottom()),
                Qt.AlignCenter,
                "crop" if self._editor.mode is EditMode.CROP else "move",
            )
        painter.restore()

    # Interaction
    def mousePressEvent(self, event: QMouseEvent) -> None:  # noqa: N802
        if not self._editable or event.button() != Qt.LeftButton:
            super().mousePressEvent(event)
            return
        vm = self._hit(event.position())
        if vm is None:
            return
        self._drag_id = vm.id
        self._drag_origin = event.position()
        self._drag_delta = (0.0, 0.0)
        if self._editor.mode is EditMode.MOVE:
            self.setCursor(Qt.ClosedHandCursor)
        self.photoGesture.emit(vm.id, GestureDelta(GesturePhase.BEGIN))

    def mouseMoveEvent(self, event: QMouseEvent) -> None:  # noqa: N802
        if self._drag_id is None:
            super().mouseMoveEvent(event)
            return
        delta = event.position() - self._drag_origin
        self._drag_delta = (delta.x(), delta.y())
        self.photoGesture.emit(self._drag_id, GestureDelta(GesturePhase.UPDATE, delta.x(), delta.y()))
        self.update()

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:  # noqa: N802
        if self._drag_id is None or event.button() != Qt.LeftButton:
            super().mouseReleaseEvent(event)
            return
        photo_id = self._drag_id
        delta = event.position() - self._drag_origin
        self._drag_id = None
        self._drag_delta = (0.0, 0.0)
        self.set_editor(self._editor)
        self.photoGesture.emit(photo_id, GestureDelta.end(delta.x(), delta.y()))
