from pathlib import Path
import tempfile
import unittest

from app.views.media_utils import format_duration, media_files


class MediaUtilsTests(unittest.TestCase):
    def test_format_duration(self):
        self.assertEqual(format_duration(0), "0:00")
        self.assertEqual(format_duration(9), "0:09")
        self.assertEqual(format_duration(75), "1:15")
        self.assertEqual(format_duration(3600), "60:00")
        self.assertEqual(format_duration(-1), "-:--")

    def test_media_files_skips_missing(self):
        with tempfile.TemporaryDirectory() as tmp:
            real = Path(tmp) / "a.jpg"
            real.write_bytes(b"x")
            out = media_files([str(real), str(Path(tmp) / "gone.jpg"), tmp])
        self.assertEqual([(f.name, f.path) for f in out], [("a.jpg", str(real))])


if __name__ == "__main__":
    unittest.main()
