"""MenuController: Manages menu creation and action connections."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import QMainWindow, QMenuBar


class MenuController:
    """Manages main window menu creation and action connections.

    Actions are created once and looked up by name; handlers are connected
    from a name -> callable mapping.
    """

    def __init__(self, main_window: QMainWindow) -> None:
        """Initialize with main window reference.

        Args:
            main_window: The QMainWindow to create menus for
        """
        self.window = main_window
        self.actions: dict[str, QAction] = {}

    def setup_menus(self) -> dict[str, QAction]:
        """Create all menus and return action references."""
        menubar = QMenuBar(self.window)

        file_menu = menubar.addMenu("File")
        self.actions["new_today"] = file_menu.addAction("New Memory for Today…")
        self.actions["new_today"].setShortcut(QKeySequence.New)
        self.actions["reload"] = file_menu.addAction("Reload")
        self.actions["reload"].setShortcut(QKeySequence.Refresh)
        file_menu.addSeparator()
        self.actions["sign_out"] = file_menu.addAction("Sign Out")
        self.actions["exit"] = file_menu.addAction("Exit")

        view_menu = menubar.addMenu("View")
        self.actions["month_view"] = view_menu.addAction("Month")
        self.actions["year_view"] = view_menu.addAction("Year")
        view_menu.addSeparator()
        self.actions["prev"] = view_menu.addAction("Previous")
        self.actions["prev"].setShortcut(QKeySequence.MoveToPreviousPage)
        self.actions["next"] = view_menu.addAction("Next")
        self.actions["next"].setShortcut(QKeySequence.MoveToNextPage)
        self.actions["today"] = view_menu.addAction("Today")
        view_menu.addSeparator()
        self.actions["recap"] = view_menu.addAction("Highlights Recap…")

        log_menu = menubar.addMenu("Log")
        self.actions["open_latest_log"] = log_menu.addAction("Open Latest Log")
        self.actions["open_log_directory"] = log_menu.addAction("Open Log Directory")

        self.window.setMenuBar(menubar)
        return self.actions

    def connect_actions(self, handlers: dict[str, Callable]) -> None:
        """Connect menu actions to their handler methods.

        Unknown names are ignored; "exit" defaults to closing the window.
        """
        for name, action in self.actions.items():
            handler = handlers.get(name)
            if handler is not None:
                action.triggered.connect(handler)
        if "exit" not in handlers:
            self.actions["exit"].triggered.connect(self.window.close)

    def get_action(self, name: str) -> QAction | None:
        """Get a specific action by name."""
        return self.actions.get(name)

    def enable_action(self, name: str, enabled: bool = True) -> None:
        """Enable or disable a specific action."""
        action = self.get_action(name)
        if action:
            action.setEnabled(enabled)
