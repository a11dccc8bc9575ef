"""ViewModel backing the create/edit entry form."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime

from loguru import logger

from core.models import (
    UNTITLED,
    Entry,
    Photo,
    VoiceNote,
    new_id,
    parse_hashtags,
    remaining_photo_capacity,
)
from core.moods import DEFAULT_MOOD, Mood
from core.services.entry_service import EntryService
from core.services.gesture_service import (
    EditMode,
    EditorSession,
    GestureDelta,
    apply_gesture,
    replace_photo,
)
from core.services.interfaces import MediaFile, MemoryAppError, StatusReporter


class EntryFormVM:
    """Form state for one day's entry.

    The form edits a copy of the entry; nothing is persisted until `submit`.
    `is_submitting` and `is_uploading` are advisory flags for the view.
    """

    def __init__(
        self,
        date: str,
        service: EntryService,
        existing: Entry | None = None,
        editor: EditorSession | None = None,
        reporter: StatusReporter | None = None,
    ) -> None:
        self.date = date
        self._service = service
        self._reporter = reporter
        self.existing = existing
        self.title = existing.title if existing else ""
        self.caption = existing.caption if existing else ""
        self.photos: list[Photo] = list(existing.photos) if existing else []
        self.mood: Mood = existing.mood if existing else DEFAULT_MOOD
        self.hashtags_text = " ".join(existing.hashtags) if existing else ""
        self.song_url = (existing.song_url or "") if existing else ""
        self.voice_note: VoiceNote | None = existing.voice_note if existing else None
        self.editor = editor or EditorSession()
        self.is_submitting = False
        self.is_uploading = False

    def _fail(self, action: str, ex: MemoryAppError) -> None:
        logger.error("{} failed: {}", action, ex)
        if self._reporter is not None:
            self._reporter.alert(ex.title, str(ex))

    @property
    def is_edit(self) -> bool:
        return self.existing is not None

    # Photos
    @property
    def remaining_capacity(self) -> int:
        return remaining_photo_capacity(self.photos)

    @property
    def can_add_photos(self) -> bool:
        return self.remaining_capacity > 0 and not self.is_uploading

    def add_photos(self, files: Sequence[MediaFile]) -> int:
        """Upload and append photos up to the cap; returns how many were added."""
        if not files or self.remaining_capacity == 0:
            return 0
        self.is_uploading = True
        try:
            added = self._service.upload_photos(files, self.photos)
        except MemoryAppError as ex:
            self._fail("Uploading photos", ex)
            return 0
        finally:
            self.is_uploading = False
        self.photos = self.photos + added
        return len(added)

    def clear_photos(self) -> None:
        self.photos = []

    def photo(self, photo_id: str) -> Photo | None:
        return next((p for p in self.photos if p.id == photo_id), None)

    # Editing surface
    def set_mode(self, mode: EditMode) -> None:
        """Switch between move and crop; stored offsets are untouched."""
        self.editor = self.editor.with_mode(mode)

    def handle_gesture(self, photo_id: str, gesture: GestureDelta) -> Photo | None:
        """Apply a drag gesture to the photo `photo_id` and return its new state."""
        current = self.photo(photo_id)
        if current is None:
            return None
        updated = apply_gesture(current, gesture, self.editor)
        if updated is not current:
            self.photos = replace_photo(self.photos, updated)
        return updated

    # Voice
    def set_voice_note(self, note: VoiceNote | None) -> None:
        self.voice_note = note

    def record_voice_note(self, file: MediaFile, duration: int) -> bool:
        """Upload a finished recording and attach it to the form."""
        try:
            self.voice_note = self._service.upload_voice_note(file, duration)
            return True
        except MemoryAppError as ex:
            self._fail("Saving voice note", ex)
            return False

    # Save
    def build_entry(self) -> Entry:
        """Assemble the full replacement entry from the form fields."""
        return Entry(
            id=self.existing.id if self.existing else new_id(),
            user_id=self._service.user_id or "",
            date=self.date,
            title=self.title.strip() or UNTITLED,
            caption=self.caption,
            photos=list(self.photos),
            mood=self.mood,
            hashtags=parse_hashtags(self.hashtags_text),
            song_url=self.song_url.strip() or None,
            voice_note=self.voice_note,
            created_at=datetime.now(),
        )

    def submit(self, saver: Callable[[Entry], bool]) -> bool:
        """Build the entry and hand it to `saver`; returns its success flag."""
        self.is_submitting = True
        try:
            return saver(self.build_entry())
        finally:
            self.is_submitting = False
