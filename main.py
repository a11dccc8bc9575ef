from __future__ import annotations

import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication
from loguru import logger

from app.views.main_window import MainWindow
from app.viewmodels.main_vm import MainVM
from core.services.entry_service import EntryService
from core.services.gesture_service import EditorSession
from core.services.highlights_service import MAX_HIGHLIGHTS
from infrastructure.highlights_renderer import HighlightsRenderer
from infrastructure.image_service import ImageService
from infrastructure.json_entry_store import JsonEntryStore
from infrastructure.logging import get_app_data_directory, init_logging
from infrastructure.object_store import LocalObjectStore
from infrastructure.session import SettingsSessionProvider
from infrastructure.settings import JsonSettings


BASE_DIR = Path(__file__).parent


def _highlights_seed(settings: JsonSettings) -> int | None:
    raw = settings.get("highlights.seed")
    if raw is None:
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid highlights.seed: {!r}", raw)
        return None


def main() -> int:
    settings = JsonSettings(BASE_DIR / "settings.json")
    log_dir = settings.get("logging.dir") or None
    init_logging(log_dir, str(settings.get("logging.level", "INFO")))
    logger.info("Settings loaded from {}", settings.path)

    app = QApplication(sys.argv)

    data_dir = settings.get_path("storage.data_dir", get_app_data_directory())
    objects = LocalObjectStore(
        data_dir,
        public_base_url=settings.get("storage.public_base_url") or None,
    )
    store = JsonEntryStore(data_dir)
    session = SettingsSessionProvider(settings)
    service = EntryService(session, store, objects)

    img = ImageService(resolver=objects.local_path, settings=settings)
    renderer = HighlightsRenderer(objects.local_path)
    editor = EditorSession(pan_sensitivity=settings.get_float("editor.pan_sensitivity", 0.5))
    vm = MainVM(
        service,
        highlights_seed=_highlights_seed(settings),
        max_highlights=settings.get_int("highlights.max_items", MAX_HIGHLIGHTS),
    )

    win = MainWindow(
        vm=vm,
        service=service,
        image_service=img,
        highlights_renderer=renderer,
        session=session,
        editor=editor,
    )
    win.load_entries()
    win.statusBar().showMessage("Ready", 2000)
    win.show()

    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
