"""Create/edit dialog for a day's memory."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from PySide6.QtWidgets import (
    QButtonGroup,
    QDialog,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)
from loguru import logger

from app.viewmodels.entry_form_vm import EntryFormVM
from app.views.constants import DANGER, ENTRY_FORM_SIZE, PHOTO_FILE_FILTER, STONE_400, STONE_800
from app.views.dialogs.delete_confirm_dialog import DeleteConfirmDialog
from app.views.media_utils import media_files
from app.views.widgets.collage_widget import CollageWidget
from app.views.widgets.voice_recorder import VoiceRecorderWidget
from core.models import Entry
from core.moods import MOODS
from core.services.calendar_service import format_long_date
from core.services.gesture_service import EditMode, GestureDelta, GesturePhase
from core.services.interfaces import MediaFile, MemoryAppError


class EntryFormDialog(QDialog):
    """Form bound to an `EntryFormVM`; saving and deleting are delegated."""

    def __init__(
        self,
        vm: EntryFormVM,
        image_service,
        on_save: Callable[[Entry], bool],
        on_delete: Callable[[Entry], bool],
        on_error: Callable[[MemoryAppError], None] | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._vm = vm
        self._on_save = on_save
        self._on_delete = on_delete
        self._on_error = on_error
        self.setWindowTitle("Edit Memory" if vm.is_edit else "New Memory")
        self.resize(*ENTRY_FORM_SIZE)

        root = QHBoxLayout(self)
        root.addWidget(self._build_collage_side(image_service), 3)
        root.addWidget(self._build_form_side(), 2)
        self._sync_photos()
        self._sync_mode()

    # UI construction
    def _build_collage_side(self, image_service) -> QWidget:
        side = QWidget(self)
        layout = QVBoxLayout(side)

        modes = QHBoxLayout()
        self._btn_move = QPushButton("Move")
        self._btn_move.setToolTip("Move Layout")
        self._btn_crop = QPushButton("Crop")
        self._btn_crop.setToolTip("Reposition Image (Crop)")
        self._mode_group = QButtonGroup(self)
        self._mode_group.setExclusive(True)
        for btn in (self._btn_move, self._btn_crop):
            btn.setCheckable(True)
            self._mode_group.addButton(btn)
            modes.addWidget(btn)
        self._hint = QLabel()
        self._hint.setStyleSheet(f"color: {STONE_400};")
        modes.addStretch(1)
        modes.addWidget(self._hint)
        layout.addLayout(modes)
        self._btn_move.clicked.connect(lambda: self._set_mode(EditMode.MOVE))
        self._btn_crop.clicked.connect(lambda: self._set_mode(EditMode.CROP))

        self._collage = CollageWidget(image_service, side, editable=True)
        self._collage.photoGesture.connect(self._on_gesture)
        layout.addWidget(self._collage, 1)

        actions = QHBoxLayout()
        self._btn_upload = QPushButton("Upload Photos")
        self._btn_upload.clicked.connect(self._choose_photos)
        self._btn_clear = QPushButton("Clear all photos")
        self._btn_clear.clicked.connect(self._clear_photos)
        self._capacity = QLabel()
        self._capacity.setStyleSheet(f"color: {STONE_400};")
        actions.addWidget(self._btn_upload)
        actions.addWidget(self._capacity)
        actions.addStretch(1)
        actions.addWidget(self._btn_clear)
        layout.addLayout(actions)
        return side

    def _build_form_side(self) -> QWidget:
        side = QWidget(self)
        layout = QVBoxLayout(side)

        date_lbl = QLabel(format_long_date(self._vm.date))
        date_lbl.setStyleSheet(f"color: {STONE_400}; font-weight: bold; letter-spacing: 2px;")
        layout.addWidget(date_lbl)

        self._title = QLineEdit(self._vm.title)
        self._title.setPlaceholderText("Title your day...")
        self._title.setStyleSheet(f"font-size: 22px; color: {STONE_800};")
        layout.addWidget(self._title)

        layout.addWidget(QLabel("Mood"))
        moods = QHBoxLayout()
        self._mood_group = QButtonGroup(self)
        self._mood_group.setExclusive(True)
        for mood, style in MOODS.items():
            btn = QPushButton()
            btn.setCheckable(True)
            btn.setFixedSize(32, 32)
            btn.setToolTip(style.label)
            btn.setStyleSheet(
                f"QPushButton {{ background: {style.bg}; border-radius: 16px; border: 2px solid transparent; }}"
                f"QPushButton:checked {{ border: 2px solid {style.dark}; }}"
            )
            btn.setChecked(mood is self._vm.mood)
            btn.clicked.connect(lambda _=False, m=mood: setattr(self._vm, "mood", m))
            self._mood_group.addButton(btn)
            moods.addWidget(btn)
        moods.addStretch(1)
        layout.addLayout(moods)

        self._caption = QTextEdit()
        self._caption.setPlaceholderText("How did you feel today? Capture the moment...")
        self._caption.setPlainText(self._vm.caption)
        layout.addWidget(self._caption, 1)

        layout.addWidget(QLabel("Voice Note"))
        self._voice = VoiceRecorderWidget(self._vm.voice_note, side, on_error=self._on_error)
        self._voice.recordingFinished.connect(self._on_recording)
        self._voice.cleared.connect(lambda: self._vm.set_voice_note(None))
        layout.addWidget(self._voice)

        self._song = QLineEdit(self._vm.song_url)
        self._song.setPlaceholderText("Paste Spotify or YouTube link...")
        layout.addWidget(self._song)

        self._tags = QLineEdit(self._vm.hashtags_text)
        self._tags.setPlaceholderText("#summer #friends")
        layout.addWidget(self._tags)

        buttons = QHBoxLayout()
        if self._vm.is_edit:
            btn_delete = QPushButton("Delete")
            btn_delete.setStyleSheet(f"color: {DANGER};")
            btn_delete.clicked.connect(self._delete)
            buttons.addWidget(btn_delete)
        buttons.addStretch(1)
        btn_cancel = QPushButton("Cancel")
        btn_cancel.clicked.connect(self.reject)
        self._btn_save = QPushButton("Save Memory")
        self._btn_save.setDefault(True)
        self._btn_save.clicked.connect(self._save)
        buttons.addWidget(btn_cancel)
        buttons.addWidget(self._btn_save)
        layout.addLayout(buttons)
        return side

    # Sync helpers
    def _sync_photos(self) -> None:
        self._collage.set_photos(self._vm.photos)
        self._btn_upload.setEnabled(self._vm.can_add_photos)
        self._btn_clear.setVisible(bool(self._vm.photos))
        self._capacity.setText(f"{len(self._vm.photos)}/6")

    def _sync_mode(self) -> None:
        editor = self._vm.editor
        self._btn_move.setChecked(editor.mode is EditMode.MOVE)
        self._btn_crop.setChecked(editor.mode is EditMode.CROP)
        self._hint.setText(editor.hint)
        self._collage.set_editor(editor)

    def _pull_fields(self) -> None:
        self._vm.title = self._title.text()
        self._vm.caption = self._caption.toPlainText()
        self._vm.song_url = self._song.text()
        self._vm.hashtags_text = self._tags.text()

    # Slots
    def _set_mode(self, mode: EditMode) -> None:
        self._vm.set_mode(mode)
        self._sync_mode()

    def _on_gesture(self, photo_id: str, gesture: GestureDelta) -> None:
        if gesture.phase is not GesturePhase.END:
            return
        self._vm.handle_gesture(photo_id, gesture)
        self._collage.set_photos(self._vm.photos)

    def _choose_photos(self) -> None:
        paths, _ = QFileDialog.getOpenFileNames(self, "Add Photos", "", PHOTO_FILE_FILTER)
        if not paths:
            return
        self._btn_upload.setEnabled(False)
        added = self._vm.add_photos(media_files(paths))
        logger.info("Added {} photo(s) to {}", added, self._vm.date)
        self._sync_photos()

    def _clear_photos(self) -> None:
        self._vm.clear_photos()
        self._sync_photos()

    def _on_recording(self, path: str, seconds: int) -> None:
        name = Path(path).name
        if self._vm.record_voice_note(MediaFile(path=path, name=name), seconds):
            self._voice.set_note(self._vm.voice_note)
        else:
            self._voice.set_note(None)

    def _save(self) -> None:
        if self._vm.is_submitting:
            return
        self._pull_fields()
        self._btn_save.setEnabled(False)
        try:
            ok = self._vm.submit(self._on_save)
        finally:
            self._btn_save.setEnabled(True)
        if ok:
            self.accept()

    def _delete(self) -> None:
        entry = self._vm.existing
        if entry is None:
            return
        if DeleteConfirmDialog(entry, self).exec() != QDialog.Accepted:
            return
        if self._on_delete(entry):
            self.accept()

    def done(self, result: int) -> None:
        self._voice.shutdown()
        super().done(result)
