import random
import unittest

from core.models import Entry, VoiceNote, normalize_photo
from core.services.entry_service import EntryService
from core.services.interfaces import AuthUnavailableError, MediaFile, UploadError
from fakes import FakeObjects, FakeSession, FakeStore


def files(n, prefix="f"):
    return [MediaFile(path=f"/tmp/{prefix}{i}.jpg", name=f"{prefix}{i}.jpg") for i in range(n)]


def photos(n):
    return [normalize_photo(f"u{i}", rotation=0) for i in range(n)]


class EntryServiceTests(unittest.TestCase):
    def setUp(self):
        self.session = FakeSession()
        self.store = FakeStore()
        self.objects = FakeObjects()
        self.service = EntryService(self.session, self.store, self.objects, rng=random.Random(5))

    def test_load_signed_out_returns_empty(self):
        self.session.user = None
        self.assertEqual(self.service.load(), [])

    def test_load_without_token_raises(self):
        self.session.token = None
        with self.assertRaises(AuthUnavailableError):
            self.service.load()

    def test_save_without_token_raises_and_writes_nothing(self):
        self.session.token = ""
        with self.assertRaises(AuthUnavailableError):
            self.service.save(Entry(id="e", user_id="", date="2024-03-07", title="t"))
        self.assertEqual(self.store.entries, [])

    def test_save_assigns_user(self):
        saved = self.service.save(Entry(id="e", user_id="", date="2024-03-07", title="t"))
        self.assertEqual(saved.user_id, "u1")
        self.assertEqual(self.service.load()[0].date, "2024-03-07")

    def test_upload_respects_cap(self):
        added = self.service.upload_photos(files(5), photos(3))
        self.assertEqual(len(added), 3)
        self.assertEqual(len(self.objects.uploaded), 3)

    def test_upload_at_cap_accepts_nothing(self):
        self.assertEqual(self.service.upload_photos(files(2), photos(6)), [])
        self.assertEqual(self.objects.uploaded, [])

    def test_upload_failure_discards_batch(self):
        self.objects.fail_on = "f1.jpg"
        with self.assertRaises(UploadError):
            self.service.upload_photos(files(3), [])

    def test_uploaded_photos_are_normalized(self):
        added = self.service.upload_photos(files(1), [])
        p = added[0]
        self.assertEqual(p.url, "https://cdn.example/photos/u1/f0.jpg")
        self.assertEqual(p.pan_offset, (50.0, 50.0))
        self.assertEqual(p.frame_offset, (0.0, 0.0))

    def test_voice_note_upload(self):
        note = self.service.upload_voice_note(MediaFile("/tmp/rec.webm", "rec.webm"), 7)
        self.assertEqual(note.duration, 7)
        self.assertEqual(self.objects.uploaded, [("voice-notes", note.url)])

    def test_delete_releases_media(self):
        entry = Entry(
            id="e1",
            user_id="u1",
            date="2024-03-07",
            title="t",
            photos=[normalize_photo("https://cdn.example/photos/u1/a.jpg", rotation=0)],
            voice_note=VoiceNote("v", "https://cdn.example/voice-notes/u1/v.webm", 3),
        )
        self.store.entries = [entry]
        self.service.delete(entry)
        self.assertEqual(self.store.entries, [])
        self.assertEqual(
            self.objects.deleted,
            [
                ("photos", "https://cdn.example/photos/u1/a.jpg"),
                ("voice-notes", "https://cdn.example/voice-notes/u1/v.webm"),
            ],
        )


if __name__ == "__main__":
    unittest.main()
