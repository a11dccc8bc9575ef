"""Month and year calendar grids rendered from the navigator models."""

from __future__ import annotations

from PySide6.QtCore import QRectF, Qt, Signal
from PySide6.QtGui import QColor, QFont, QMouseEvent, QPainter, QPaintEvent
from PySide6.QtWidgets import QFrame, QGridLayout, QLabel, QVBoxLayout, QWidget

from app.views.constants import (
    DAY_CELL_MIN_PX,
    MINI_DAY_PX,
    STONE_200,
    STONE_400,
    STONE_800,
    YEAR_GRID_COLUMNS,
)
from core.services.calendar_service import (
    WEEKDAY_HEADERS,
    WEEKDAY_INITIALS,
    DayCell,
    MonthModel,
    YearModel,
)


def _clear_layout(layout: QGridLayout) -> None:
    while layout.count():
        item = layout.takeAt(0)
        w = item.widget()
        if w is not None:
            w.deleteLater()


class DayCellWidget(QFrame):
    """One day of the month grid."""

    clicked = Signal(int)

    def __init__(self, cell: DayCell, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.cell = cell
        self.setMinimumSize(DAY_CELL_MIN_PX, DAY_CELL_MIN_PX)
        self.setCursor(Qt.PointingHandCursor)
        self.setFrameShape(QFrame.StyledPanel)
        bg = cell.mood_color or "white"
        self.setStyleSheet(
            f"DayCellWidget {{ background: {bg}; border: 1px solid {STONE_200}; border-radius: 8px; }}"
            "DayCellWidget:hover { border-color: #a8a29e; }"
        )

        root = QVBoxLayout(self)
        root.setContentsMargins(8, 6, 8, 6)
        day = QLabel(str(cell.day))
        day.setStyleSheet(f"color: {STONE_800}; font-weight: bold; background: transparent;")
        root.addWidget(day, 0, Qt.AlignLeft | Qt.AlignTop)
        root.addStretch(1)
        if cell.entry is not None:
            title = QLabel(cell.entry.title)
            title.setWordWrap(True)
            title.setStyleSheet(f"color: {STONE_800}; background: transparent;")
            root.addWidget(title)
            if cell.has_photos:
                count = QLabel(f"{len(cell.entry.photos)} photo(s)")
                count.setStyleSheet(f"color: {STONE_400}; font-size: 10px; background: transparent;")
                root.addWidget(count)
            self.setToolTip(cell.entry.title)
        else:
            plus = QLabel("+")
            plus.setStyleSheet(f"color: {STONE_400}; font-size: 18px; background: transparent;")
            root.addWidget(plus, 0, Qt.AlignCenter)

    def mousePressEvent(self, event: QMouseEvent) -> None:  # noqa: N802
        if event.button() == Qt.LeftButton:
            self.clicked.emit(self.cell.day)
        super().mousePressEvent(event)


class MonthGridWidget(QWidget):
    """Seven-column month grid with leading blanks before day 1."""

    dayClicked = Signal(int)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._grid = QGridLayout(self)
        self._grid.setSpacing(6)

    def set_model(self, model: MonthModel) -> None:
        _clear_layout(self._grid)
        for col, name in enumerate(WEEKDAY_HEADERS):
            header = QLabel(name)
            header.setAlignment(Qt.AlignCenter)
            header.setStyleSheet(f"color: {STONE_400}; font-weight: bold;")
            self._grid.addWidget(header, 0, col)
        for cell in model.days:
            pos = model.blanks + cell.day - 1
            widget = DayCellWidget(cell, self)
            widget.clicked.connect(self.dayClicked)
            self._grid.addWidget(widget, 1 + pos // 7, pos % 7)


class MiniMonthWidget(QWidget):
    """Compact month: name, entry count and mood dots."""

    clicked = Signal(int)

    def __init__(self, model: MonthModel, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.model = model
        self.setCursor(Qt.PointingHandCursor)
        self.setMinimumSize(MINI_DAY_PX * 7 + 24, MINI_DAY_PX * 8 + 36)

    def mousePressEvent(self, event: QMouseEvent) -> None:  # noqa: N802
        if event.button() == Qt.LeftButton:
            self.clicked.emit(self.model.month)
        super().mousePressEvent(event)

    def paintEvent(self, event: QPaintEvent) -> None:  # noqa: N802
        p = QPainter(self)
        p.setRenderHint(QPainter.Antialiasing, True)
        p.setPen(QColor(STONE_200))
        p.setBrush(QColor("#faf5ff"))
        p.drawRoundedRect(QRectF(self.rect()).adjusted(1, 1, -1, -1), 10, 10)

        title_font = QFont(self.font())
        title_font.setBold(True)
        p.setFont(title_font)
        p.setPen(QColor(STONE_800))
        name = self.model.title.split(" ")[0]
        p.drawText(QRectF(12, 6, self.width() - 24, 22), Qt.AlignLeft | Qt.AlignVCenter, name)
        if self.model.entry_count:
            p.setPen(QColor(STONE_400))
            p.drawText(
                QRectF(12, 6, self.width() - 24, 22),
                Qt.AlignRight | Qt.AlignVCenter,
                str(self.model.entry_count),
            )

        small = QFont(self.font())
        small.setPointSizeF(max(6.0, small.pointSizeF() * 0.7))
        p.setFont(small)
        cell = min((self.width() - 24) / 7.0, (self.height() - 36) / 7.0)
        top = 32.0
        for col, initial in enumerate(WEEKDAY_INITIALS):
            p.setPen(QColor(STONE_400))
            p.drawText(QRectF(12 + col * cell, top, cell, cell), Qt.AlignCenter, initial)
        for day in self.model.days:
            pos = self.model.blanks + day.day - 1
            rect = QRectF(12 + (pos % 7) * cell, top + (1 + pos // 7) * cell, cell, cell)
            if day.mood_color:
                p.setPen(Qt.NoPen)
                p.setBrush(QColor(day.mood_color))
                p.drawEllipse(rect.adjusted(1, 1, -1, -1))
            else:
                p.setPen(QColor(STONE_800))
                p.drawText(rect, Qt.AlignCenter, str(day.day))
        p.end()


class YearGridWidget(QWidget):
    """Twelve mini months; clicking one opens it in the month view."""

    monthClicked = Signal(int)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._grid = QGridLayout(self)
        self._grid.setSpacing(12)

    def set_model(self, model: YearModel) -> None:
        _clear_layout(self._grid)
        for i, month in enumerate(model.months):
            widget = MiniMonthWidget(month, self)
            widget.clicked.connect(self.monthClicked)
            self._grid.addWidget(widget, i // YEAR_GRID_COLUMNS, i % YEAR_GRID_COLUMNS)
