from __future__ import annotations

from PySide6.QtWidgets import (
    QCheckBox,
    QDialog,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
)

from core.models import Entry
from core.services.calendar_service import format_long_date


class DeleteConfirmDialog(QDialog):
    def __init__(self, entry: Entry, parent=None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Delete Memory")

        root = QVBoxLayout(self)

        title = QLabel("Are you sure you want to delete this memory? This cannot be undone.")
        title.setWordWrap(True)
        root.addWidget(title)
        root.addWidget(QLabel(f"{format_long_date(entry.date)} · {entry.title}"))

        media = entry.media_urls()
        if media:
            photos = sum(1 for bucket, _ in media if bucket == "photos")
            voice = any(bucket == "voice-notes" for bucket, _ in media)
            detail = f"{photos} photo(s)" + (" and a voice note" if voice else "") + " will be moved to the trash."
            warn = QLabel(detail)
            warn.setStyleSheet("color: #b91c1c; font-weight: bold;")
            root.addWidget(warn)

        self._confirm_box = QCheckBox("I understand the attached media will be trashed")
        if media:
            root.addWidget(self._confirm_box)
        else:
            self._confirm_box.setChecked(True)

        btns = QHBoxLayout()
        self.btn_ok = QPushButton("Delete")
        self.btn_cancel = QPushButton("Cancel")
        btns.addWidget(self.btn_ok)
        btns.addStretch(1)
        btns.addWidget(self.btn_cancel)
        root.addLayout(btns)

        self.btn_ok.clicked.connect(self._on_accept)
        self.btn_ok.setEnabled(self._confirm_box.isChecked())
        self._confirm_box.toggled.connect(self.btn_ok.setEnabled)
        self.btn_cancel.clicked.connect(self.reject)

    def _on_accept(self) -> None:
        if not self._confirm_box.isChecked():
            return
        self.accept()
