from pathlib import Path
import tempfile
import unittest

from core.services.interfaces import AuthUnavailableError, MediaFile, UploadError
from infrastructure.object_store import LocalObjectStore, make_object_name, object_path_from_url


class ObjectStoreTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.tmp = Path(self._tmp.name)
        self.removed = []
        self.store = LocalObjectStore(
            self.tmp / "store", public_base_url="https://cdn.example/public", remover=self.removed.append
        )
        self.src = self.tmp / "pic.JPG"
        self.src.write_bytes(b"jpeg-bytes")

    def test_upload_copies_file_and_returns_public_url(self):
        url = self.store.upload(MediaFile(str(self.src), "pic.JPG"), "photos", "u1", "tok")
        self.assertTrue(url.startswith("https://cdn.example/public/photos/u1/"))
        self.assertTrue(url.endswith(".jpg"))
        local = self.store.local_path(url)
        self.assertEqual(local.read_bytes(), b"jpeg-bytes")

    def test_upload_missing_file_raises(self):
        with self.assertRaises(UploadError):
            self.store.upload(MediaFile(str(self.tmp / "nope.jpg"), "nope.jpg"), "photos", "u1", "tok")

    def test_upload_without_token_raises(self):
        with self.assertRaises(AuthUnavailableError):
            self.store.upload(MediaFile(str(self.src), "pic.JPG"), "photos", "u1", "")

    def test_delete_sends_object_to_remover(self):
        url = self.store.upload(MediaFile(str(self.src), "pic.JPG"), "photos", "u1", "tok")
        self.store.delete(url, "photos", "tok")
        self.assertEqual(len(self.removed), 1)
        self.assertEqual(Path(self.removed[0]), self.store.local_path(url))

    def test_delete_unparseable_url_is_noop(self):
        self.store.delete("https://elsewhere.example/x.jpg", "photos", "tok")
        self.assertEqual(self.removed, [])

    def test_delete_refuses_path_outside_bucket(self):
        outside = self.tmp / "precious.txt"
        outside.write_text("keep")
        self.store.delete("https://evil.example/photos/../../precious.txt", "photos", "tok")
        self.store.delete("https://cdn.example/public/photos/../../precious.txt", "photos", "tok")
        self.assertEqual(self.removed, [])
        self.assertTrue(outside.exists())

    def test_local_path_refuses_path_outside_bucket(self):
        self.assertIsNone(self.store.local_path("https://cdn.example/public/photos/../../precious.txt"))
        self.assertIsNone(self.store.local_path("https://cdn.example/public/photos/u1/../../../x"))

    def test_remover_failure_is_not_raised(self):
        def failing(_path):
            raise OSError("trash unavailable")

        store = LocalObjectStore(self.tmp / "store", public_base_url="https://cdn.example/public", remover=failing)
        url = store.upload(MediaFile(str(self.src), "pic.JPG"), "photos", "u1", "tok")
        store.delete(url, "photos", "tok")

    def test_default_base_is_file_uri(self):
        store = LocalObjectStore(self.tmp / "store")
        url = store.upload(MediaFile(str(self.src), "pic.JPG"), "voice-notes", "u1", "tok")
        self.assertTrue(url.startswith("file://"))
        self.assertTrue(store.local_path(url).exists())


class HelperTests(unittest.TestCase):
    def test_object_path_from_url(self):
        self.assertEqual(object_path_from_url("https://x/storage/photos/u1/a.jpg", "photos"), "u1/a.jpg")
        self.assertIsNone(object_path_from_url("https://x/storage/other/a.jpg", "photos"))

    def test_make_object_name_shape(self):
        name = make_object_name("u1", "Voice.WEBM")
        user, rest = name.split("/")
        stamp, tail = rest.split("-", 1)
        self.assertEqual(user, "u1")
        self.assertTrue(stamp.isdigit())
        self.assertEqual(len(tail.split(".")[0]), 7)
        self.assertTrue(tail.endswith(".webm"))


if __name__ == "__main__":
    unittest.main()
