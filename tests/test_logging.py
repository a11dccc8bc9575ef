from pathlib import Path
import tempfile
import unittest

from loguru import logger

from infrastructure import logging as app_logging


class InitLoggingTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.addCleanup(logger.remove)

    def test_creates_dated_log_file(self):
        log_dir = app_logging.init_logging(str(Path(self._tmp.name) / "logs"))
        logger.info("hello {}", "world")
        logger.complete()
        latest = app_logging.find_latest_log_file(str(log_dir))
        self.assertIsNotNone(latest)
        self.assertTrue(latest.name.startswith("memories_"))
        self.assertEqual(app_logging.get_log_directory(), str(log_dir))

    def test_no_log_in_empty_directory(self):
        self.assertIsNone(app_logging.find_latest_log_file(self._tmp.name))


if __name__ == "__main__":
    unittest.main()
