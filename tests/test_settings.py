import json
import os
from pathlib import Path
import tempfile
import unittest

from infrastructure.session import SettingsSessionProvider
from infrastructure.settings import JsonSettings


class JsonSettingsTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.path = Path(self._tmp.name) / "settings.json"

    def write(self, data):
        self.path.write_text(json.dumps(data), encoding="utf-8")
        return JsonSettings(self.path)

    def test_missing_file_raises(self):
        with self.assertRaises(FileNotFoundError):
            JsonSettings(self.path)

    def test_dotted_get(self):
        s = self.write({"editor": {"pan_sensitivity": 0.75}})
        self.assertEqual(s.get("editor.pan_sensitivity"), 0.75)
        self.assertEqual(s.get("editor.missing", 3), 3)
        self.assertIsNone(s.get("nope.deeper"))

    def test_typed_getters_fall_back(self):
        s = self.write({"highlights": {"max_items": "many", "seed": "12"}})
        self.assertEqual(s.get_int("highlights.max_items", 30), 30)
        self.assertEqual(s.get_int("highlights.seed", 0), 12)
        self.assertEqual(s.get_float("editor.pan_sensitivity", 0.5), 0.5)

    def test_get_path_expands_user(self):
        s = self.write({"storage": {"data_dir": "~/memories"}})
        self.assertEqual(s.get_path("storage.data_dir", "/x"), Path(os.path.expanduser("~/memories")))
        self.assertEqual(s.get_path("storage.other", "/x"), Path("/x"))


class SettingsSessionProviderTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.path = Path(self._tmp.name) / "settings.json"

    def provider(self, session):
        self.path.write_text(json.dumps({"session": session}), encoding="utf-8")
        return SettingsSessionProvider(JsonSettings(self.path))

    def test_reads_user_and_token(self):
        p = self.provider({"user_id": "u1", "email": "a@b.c", "full_name": "Grace Hopper", "token": "t"})
        user = p.current_user()
        self.assertEqual(user.id, "u1")
        self.assertEqual(user.greeting_name, "Grace")
        self.assertEqual(p.get_token(), "t")

    def test_missing_token_is_none(self):
        p = self.provider({"user_id": "u1"})
        self.assertIsNone(p.get_token())
        self.assertEqual(p.current_user().greeting_name, "there")

    def test_no_user(self):
        self.assertIsNone(self.provider({}).current_user())

    def test_sign_out(self):
        p = self.provider({"user_id": "u1", "token": "t"})
        p.sign_out()
        self.assertIsNone(p.current_user())
        self.assertIsNone(p.get_token())


if __name__ == "__main__":
    unittest.main()
