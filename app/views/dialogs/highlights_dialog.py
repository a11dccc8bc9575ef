"""Highlights recap dialog: shows the scatter board and saves it as a PNG."""

from __future__ import annotations

from pathlib import Path

from PySide6.QtWidgets import (
    QDialog,
    QFileDialog,
    QHBoxLayout,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)
from loguru import logger

from app.views.constants import HIGHLIGHTS_SIZE
from app.views.widgets.highlights_board import HighlightsBoard
from core.services.highlights_service import Composition
from core.services.interfaces import ExportRenderer, StatusReporter


class HighlightsDialog(QDialog):
    def __init__(
        self,
        composition: Composition,
        image_service,
        renderer: ExportRenderer,
        reporter: StatusReporter | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._composition = composition
        self._renderer = renderer
        self._reporter = reporter
        self.setWindowTitle(f"Highlights · {composition.title}")
        self.resize(*HIGHLIGHTS_SIZE)

        root = QVBoxLayout(self)
        self._board = HighlightsBoard(image_service, self)
        self._board.set_composition(composition)
        scroll = QScrollArea(self)
        scroll.setWidgetResizable(True)
        scroll.setWidget(self._board)
        root.addWidget(scroll, 1)

        buttons = QHBoxLayout()
        buttons.addStretch(1)
        self.btn_save = QPushButton("Save Image")
        self.btn_save.setEnabled(not composition.is_empty)
        self.btn_save.clicked.connect(self._save)
        btn_close = QPushButton("Close")
        btn_close.clicked.connect(self.reject)
        buttons.addWidget(self.btn_save)
        buttons.addWidget(btn_close)
        root.addLayout(buttons)

    def _save(self) -> None:
        path, _ = QFileDialog.getSaveFileName(
            self, "Save Highlights", self._composition.file_name, "PNG Image (*.png)"
        )
        if not path:
            return
        if Path(path).suffix.lower() != ".png":
            path += ".png"
        self.btn_save.setEnabled(False)
        try:
            saved = self._renderer.render(self._composition, path)
        except OSError as ex:
            logger.error("Highlights export failed: {}", ex)
            if self._reporter is not None:
                self._reporter.alert("Export Failed", "Failed to save the highlights image.")
            return
        finally:
            self.btn_save.setEnabled(True)
        if self._reporter is not None:
            self._reporter.show_status(f"Saved {saved}", 3000)
