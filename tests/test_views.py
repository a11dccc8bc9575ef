import os
from pathlib import Path
import tempfile
import unittest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtGui import QImage
from PySide6.QtWidgets import QApplication, QMainWindow, QWidget

from app.views.components.menu_controller import MenuController
from app.views.dialogs.delete_confirm_dialog import DeleteConfirmDialog
from app.views.export import WidgetExportRenderer
from app.views.widgets.voice_recorder import VoiceRecorderWidget
from core.models import Entry, VoiceNote, normalize_photo


def setUpModule():
    global _app
    _app = QApplication.instance() or QApplication([])


class WidgetExportTests(unittest.TestCase):
    def test_scaled_export_has_device_pixels(self):
        widget = QWidget()
        widget.resize(120, 80)
        with tempfile.TemporaryDirectory() as tmp:
            out = WidgetExportRenderer(scale=2).render(widget, str(Path(tmp) / "m.png"))
            img = QImage(out)
        self.assertEqual((img.width(), img.height()), (240, 160))

    def test_unscaled_export_matches_widget(self):
        widget = QWidget()
        widget.resize(50, 30)
        with tempfile.TemporaryDirectory() as tmp:
            out = WidgetExportRenderer().render(widget, str(Path(tmp) / "m.png"))
            img = QImage(out)
        self.assertEqual((img.width(), img.height()), (50, 30))


class DeleteConfirmDialogTests(unittest.TestCase):
    def test_media_must_be_acknowledged_before_delete(self):
        entry = Entry(id="e", user_id="u", date="2024-03-01", title="t", photos=[normalize_photo("file:///a.jpg")])
        dlg = DeleteConfirmDialog(entry)
        self.assertIn("understand", dlg._confirm_box.text())
        self.assertFalse(dlg.btn_ok.isEnabled())
        dlg._confirm_box.setChecked(True)
        self.assertTrue(dlg.btn_ok.isEnabled())

    def test_entry_without_media_can_delete_directly(self):
        dlg = DeleteConfirmDialog(Entry(id="e", user_id="u", date="2024-03-01", title="t"))
        self.assertTrue(dlg.btn_ok.isEnabled())


class MenuControllerTests(unittest.TestCase):
    def test_enable_action_by_name(self):
        menus = MenuController(QMainWindow())
        menus.setup_menus()
        menus.enable_action("sign_out", False)
        self.assertFalse(menus.get_action("sign_out").isEnabled())
        self.assertIsNone(menus.get_action("missing"))
        menus.enable_action("missing", False)


class VoiceRecorderWidgetTests(unittest.TestCase):
    def test_no_scratch_directory_until_recording(self):
        note = VoiceNote(id="v", url="file:///v.webm", duration=3)
        widget = VoiceRecorderWidget(note, read_only=True)
        self.assertIsNone(widget._tmp_dir)
        widget.shutdown()
        self.assertIsNone(widget._tmp_dir)


if __name__ == "__main__":
    unittest.main()
