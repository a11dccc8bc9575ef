"""Main calendar window.

Hosts the month/year grids, the navigation header and the menus, and opens
the entry, detail and highlights dialogs on behalf of `MainVM`.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QButtonGroup,
    QDialog,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)
from loguru import logger

from app.viewmodels.entry_form_vm import EntryFormVM
from app.viewmodels.main_vm import DayAction, MainVM
from app.views.components.menu_controller import MenuController
from app.views.constants import APP_TAGLINE, APP_TITLE, PAPER, STONE_400, STONE_800
from app.views.dialogs.day_detail_dialog import EDIT_REQUESTED, DayDetailDialog
from app.views.dialogs.entry_form_dialog import EntryFormDialog
from app.views.dialogs.highlights_dialog import HighlightsDialog
from app.views.widgets.calendar_grid import MonthGridWidget, YearGridWidget
from core.services.calendar_service import ViewMode, date_key
from core.services.gesture_service import EditorSession
from core.services.interfaces import ExportRenderer, MemoryAppError
from infrastructure.logging import open_latest_log, open_log_directory


class MainWindow(QMainWindow):
    """Calendar window bound to a `MainVM`."""

    def __init__(
        self,
        vm: MainVM,
        service: Any,
        image_service: Any | None = None,
        highlights_renderer: ExportRenderer | None = None,
        session: Any | None = None,
        editor: EditorSession | None = None,
    ) -> None:
        super().__init__()
        self._vm = vm
        self._service = service
        self._img = image_service
        self._renderer = highlights_renderer
        self._session = session
        self._editor = editor or EditorSession()

        self.status_reporter = StatusReporterImpl(self)
        self._vm.set_reporter(self.status_reporter)

        self.menu_controller = MenuController(self)
        self.menu_controller.setup_menus()
        self.menu_controller.connect_actions(
            {
                "new_today": self.on_new_today,
                "reload": self.on_reload,
                "sign_out": self.on_sign_out,
                "month_view": lambda: self.on_view_mode(ViewMode.MONTH),
                "year_view": lambda: self.on_view_mode(ViewMode.YEAR),
                "prev": self.on_prev,
                "next": self.on_next,
                "today": self.on_today,
                "recap": self.on_recap,
                "open_latest_log": self.on_open_latest_log,
                "open_log_directory": open_log_directory,
            }
        )

        self.menu_controller.enable_action("sign_out", session is not None)

        self._setup_ui()
        self.setWindowTitle(APP_TITLE)
        self.resize(1200, 860)

    # UI construction
    def _setup_ui(self) -> None:
        central = QWidget(self)
        central.setStyleSheet(f"background: {PAPER};")
        root = QVBoxLayout(central)

        header = QHBoxLayout()
        titles = QVBoxLayout()
        self._greeting = QLabel()
        self._greeting.setStyleSheet(f"font-size: 28px; color: {STONE_800};")
        tagline = QLabel(APP_TAGLINE)
        tagline.setStyleSheet(f"color: {STONE_400};")
        titles.addWidget(self._greeting)
        titles.addWidget(tagline)
        header.addLayout(titles)
        header.addStretch(1)

        self._btn_month = QPushButton("Month")
        self._btn_year = QPushButton("Year")
        self._mode_group = QButtonGroup(self)
        self._mode_group.setExclusive(True)
        for btn in (self._btn_month, self._btn_year):
            btn.setCheckable(True)
            self._mode_group.addButton(btn)
            header.addWidget(btn)
        self._btn_month.clicked.connect(lambda: self.on_view_mode(ViewMode.MONTH))
        self._btn_year.clicked.connect(lambda: self.on_view_mode(ViewMode.YEAR))
        root.addLayout(header)

        nav = QHBoxLayout()
        btn_prev = QPushButton("<")
        btn_prev.clicked.connect(self.on_prev)
        self._heading = QLabel()
        self._heading.setAlignment(Qt.AlignCenter)
        self._heading.setStyleSheet(f"font-size: 22px; color: {STONE_800};")
        btn_next = QPushButton(">")
        btn_next.clicked.connect(self.on_next)
        self._btn_recap = QPushButton()
        self._btn_recap.clicked.connect(self.on_recap)
        nav.addWidget(btn_prev)
        nav.addWidget(self._heading, 1)
        nav.addWidget(btn_next)
        nav.addWidget(self._btn_recap)
        root.addLayout(nav)

        self._month_grid = MonthGridWidget(self)
        self._month_grid.dayClicked.connect(self.on_day_clicked)
        self._year_grid = YearGridWidget(self)
        self._year_grid.monthClicked.connect(self.on_month_clicked)
        year_scroll = QScrollArea(self)
        year_scroll.setWidgetResizable(True)
        year_scroll.setWidget(self._year_grid)
        self._stack = QStackedWidget(self)
        self._stack.addWidget(self._month_grid)
        self._stack.addWidget(year_scroll)
        root.addWidget(self._stack, 1)

        self.setCentralWidget(central)

    # Rendering
    def refresh(self) -> None:
        """Re-render header and grid from the view-model."""
        vm = self._vm
        self._greeting.setText(vm.greeting)
        self._heading.setText(vm.heading)
        self._btn_recap.setText(vm.recap_label)
        is_year = vm.view_mode is ViewMode.YEAR
        self._btn_month.setChecked(not is_year)
        self._btn_year.setChecked(is_year)
        if is_year:
            self._year_grid.set_model(vm.year_model())
            self._stack.setCurrentIndex(1)
        else:
            self._month_grid.set_model(vm.month_model())
            self._stack.setCurrentIndex(0)

    def load_entries(self) -> None:
        if self._vm.load():
            self.status_reporter.show_status(f"Loaded {self._vm.entry_count} memories", 2000)
        self.refresh()

    # Navigation handlers
    def on_prev(self) -> None:
        self._vm.go_prev()
        self.refresh()

    def on_next(self) -> None:
        self._vm.go_next()
        self.refresh()

    def on_today(self) -> None:
        self._vm.go_today()
        self.refresh()

    def on_view_mode(self, mode: ViewMode) -> None:
        self._vm.set_view_mode(mode)
        self.refresh()

    def on_month_clicked(self, month: int) -> None:
        self._vm.open_month(month)
        self.refresh()

    def on_reload(self) -> None:
        self.load_entries()

    def on_sign_out(self) -> None:
        if self._session is None or not hasattr(self._session, "sign_out"):
            return
        self._session.sign_out()
        self.load_entries()

    # Entry handlers
    def on_day_clicked(self, day: int) -> None:
        self.open_day(self._vm.click_day(day))

    def on_new_today(self) -> None:
        today = date.today()
        key = date_key(today.year, today.month, today.day)
        self.open_day(DayAction(date=key, entry=self._vm.get_entry_by_date(key)))

    def open_day(self, action: DayAction) -> None:
        if action.is_create:
            self._open_form(action.date)
            return
        dlg = DayDetailDialog(
            action.entry,
            self._img,
            on_delete=self._vm.delete_entry,
            reporter=self.status_reporter,
            parent=self,
        )
        result = dlg.exec()
        if result == EDIT_REQUESTED:
            self._open_form(action.date)
        self.refresh()

    def _open_form(self, key: str) -> None:
        form_vm = EntryFormVM(
            key,
            self._service,
            existing=self._vm.get_entry_by_date(key),
            editor=self._editor,
            reporter=self.status_reporter,
        )
        dlg = EntryFormDialog(
            form_vm,
            self._img,
            on_save=self._vm.save_entry,
            on_delete=self._vm.delete_entry,
            on_error=self.status_reporter.report,
            parent=self,
        )
        if dlg.exec() == QDialog.Accepted:
            logger.info("Entry form closed for {}", key)
        self.refresh()

    def on_recap(self) -> None:
        if self._renderer is None:
            return
        composition = self._vm.highlights()
        HighlightsDialog(composition, self._img, self._renderer, self.status_reporter, self).exec()

    def on_open_latest_log(self) -> None:
        if not open_latest_log():
            self.status_reporter.alert("No Log", "No log file has been written yet.")


class StatusReporterImpl:
    """Implementation of StatusReporter protocol."""

    def __init__(self, main_window: QMainWindow):
        self.window = main_window

    def alert(self, title: str, message: str) -> None:
        QMessageBox.warning(self.window, title, message)

    def show_status(self, message: str, timeout_ms: int = 3000) -> None:
        """Show status message in status bar."""
        self.window.statusBar().showMessage(message, timeout_ms)

    def report(self, ex: MemoryAppError) -> None:
        self.alert(ex.title, str(ex))
