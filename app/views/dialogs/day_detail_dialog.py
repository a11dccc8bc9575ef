"""Read-only view of a saved memory with edit, delete and export actions."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from PySide6.QtCore import QUrl
from PySide6.QtGui import QDesktopServices
from PySide6.QtWidgets import (
    QDialog,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)
from loguru import logger

from app.views.constants import DANGER, DAY_DETAIL_SIZE, EXPORT_SCALE, STONE_400, STONE_500, STONE_800
from app.views.dialogs.delete_confirm_dialog import DeleteConfirmDialog
from app.views.export import WidgetExportRenderer
from app.views.widgets.collage_widget import CollageWidget
from app.views.widgets.voice_recorder import VoiceRecorderWidget
from core.models import Entry
from core.moods import mood_style
from core.services.calendar_service import format_long_date
from core.services.interfaces import StatusReporter
from core.services.song_links import SongSource, resolve_song_link

EDIT_REQUESTED = 2


class DayDetailDialog(QDialog):
    """Shows one entry. Closes with `EDIT_REQUESTED` when the user picks Edit."""

    def __init__(
        self,
        entry: Entry,
        image_service,
        on_delete: Callable[[Entry], bool],
        reporter: StatusReporter | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._entry = entry
        self._on_delete = on_delete
        self._reporter = reporter
        self.setWindowTitle(entry.title)
        self.resize(*DAY_DETAIL_SIZE)

        root = QHBoxLayout(self)
        self._collage = CollageWidget(image_service, self, editable=False)
        self._collage.set_photos(entry.photos)
        root.addWidget(self._collage, 3)
        root.addWidget(self._build_text_side(), 2)

    def _build_text_side(self) -> QWidget:
        entry = self._entry
        style = mood_style(entry.mood)
        side = QWidget(self)
        layout = QVBoxLayout(side)

        chip = QLabel(style.label)
        chip.setStyleSheet(
            f"background: {style.bg}; color: {style.dark}; border-radius: 10px; padding: 2px 10px;"
        )
        top = QHBoxLayout()
        top.addWidget(chip)
        date_lbl = QLabel(format_long_date(entry.date))
        date_lbl.setStyleSheet(f"color: {STONE_400};")
        top.addWidget(date_lbl)
        top.addStretch(1)
        layout.addLayout(top)

        title = QLabel(entry.title)
        title.setWordWrap(True)
        title.setStyleSheet(f"font-size: 26px; color: {STONE_800};")
        layout.addWidget(title)

        if entry.hashtags:
            tags = QLabel(" ".join(entry.hashtags))
            tags.setWordWrap(True)
            tags.setStyleSheet(f"color: {style.accent};")
            layout.addWidget(tags)

        caption = QLabel(entry.caption)
        caption.setWordWrap(True)
        caption.setStyleSheet(f"color: {STONE_500}; font-size: 15px;")
        layout.addWidget(caption, 1)

        self._voice: VoiceRecorderWidget | None = None
        if entry.voice_note is not None:
            layout.addWidget(QLabel("Voice Note"))
            self._voice = VoiceRecorderWidget(entry.voice_note, side, read_only=True)
            layout.addWidget(self._voice)

        song = resolve_song_link(entry.song_url)
        if song is not None:
            label = {
                SongSource.YOUTUBE: "Play on YouTube",
                SongSource.SPOTIFY: "Open in Spotify",
            }.get(song.source, "Open song link")
            btn_song = QPushButton(label)
            btn_song.setToolTip(song.url)
            btn_song.clicked.connect(lambda: QDesktopServices.openUrl(QUrl(song.url)))
            layout.addWidget(btn_song)

        buttons = QHBoxLayout()
        btn_delete = QPushButton("Delete")
        btn_delete.setStyleSheet(f"color: {DANGER};")
        btn_delete.clicked.connect(self._delete)
        btn_export = QPushButton("Export")
        btn_export.clicked.connect(self._export)
        btn_edit = QPushButton("Edit")
        btn_edit.clicked.connect(lambda: self.done(EDIT_REQUESTED))
        btn_close = QPushButton("Close")
        btn_close.clicked.connect(self.reject)
        buttons.addWidget(btn_delete)
        buttons.addStretch(1)
        buttons.addWidget(btn_export)
        buttons.addWidget(btn_edit)
        buttons.addWidget(btn_close)
        layout.addLayout(buttons)
        return side

    def _delete(self) -> None:
        if DeleteConfirmDialog(self._entry, self).exec() != QDialog.Accepted:
            return
        if self._on_delete(self._entry):
            self.accept()

    def _export(self) -> None:
        default = f"Memory-{self._entry.date}.png"
        path, _ = QFileDialog.getSaveFileName(self, "Export Memory", default, "PNG Image (*.png)")
        if not path:
            return
        if Path(path).suffix.lower() != ".png":
            path += ".png"
        try:
            WidgetExportRenderer(scale=EXPORT_SCALE).render(self._collage, path)
        except OSError as ex:
            logger.error("Export failed: {}", ex)
            if self._reporter is not None:
                self._reporter.alert("Export Failed", str(ex))
            return
        if self._reporter is not None:
            self._reporter.show_status(f"Saved {path}", 3000)

    def done(self, result: int) -> None:
        if self._voice is not None:
            self._voice.shutdown()
        super().done(result)
