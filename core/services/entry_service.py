"""Entry persistence and media orchestration.

Coordinates the session provider, entry store and object store so that the
view-models only deal with domain objects and `MemoryAppError` subclasses.
"""

from __future__ import annotations

from collections.abc import Sequence
import random

from loguru import logger

from core.models import Entry, Photo, VoiceNote, new_id, normalize_photo, remaining_photo_capacity
from core.services.interfaces import (
    PHOTOS_BUCKET,
    VOICE_BUCKET,
    AuthUnavailableError,
    EntryStore,
    MediaFile,
    ObjectStore,
    SessionProvider,
    UploadError,
    UserInfo,
)


class EntryService:
    """Use cases over the user's entries."""

    def __init__(
        self,
        session: SessionProvider,
        store: EntryStore,
        objects: ObjectStore,
        rng: random.Random | None = None,
    ) -> None:
        self._session = session
        self._store = store
        self._objects = objects
        self._rng = rng

    def _credentials(self) -> tuple[str, str]:
        user = self._session.current_user()
        token = self._session.get_token()
        if user is None or not token:
            raise AuthUnavailableError("No authentication token. Please sign in again.")
        return user.id, token

    @property
    def current_user(self) -> UserInfo | None:
        return self._session.current_user()

    @property
    def user_id(self) -> str | None:
        user = self._session.current_user()
        return user.id if user else None

    def load(self) -> list[Entry]:
        """Return the user's entries, newest date first; empty when signed out."""
        if self._session.current_user() is None:
            return []
        user_id, token = self._credentials()
        entries = self._store.list(user_id, token)
        logger.info("Loaded {} entries for {}", len(entries), user_id)
        return entries

    def save(self, entry: Entry) -> Entry:
        """Persist `entry`, replacing any existing entry on the same date."""
        user_id, token = self._credentials()
        entry.user_id = user_id
        saved = self._store.upsert(user_id, token, entry)
        logger.info("Saved entry {} for {}", saved.date, user_id)
        return saved

    def delete(self, entry: Entry) -> None:
        """Delete `entry` and release the media it owns."""
        user_id, token = self._credentials()
        self._store.delete(user_id, token, entry.id)
        logger.info("Deleted entry {} ({})", entry.id, entry.date)
        for bucket, url in entry.media_urls():
            self._objects.delete(url, bucket, token)  # type: ignore[arg-type]

    def upload_photos(self, files: Sequence[MediaFile], current: Sequence[Photo]) -> list[Photo]:
        """Upload as many of `files` as the photo cap allows.

        All-or-nothing: if any file fails, no photo from the batch is returned.

        Raises:
            AuthUnavailableError: No token.
            UploadError: Any upload in the batch failed.
        """
        accepted = list(files)[: remaining_photo_capacity(list(current))]
        if not accepted:
            logger.info("Photo cap reached; {} file(s) ignored", len(files))
            return []
        user_id, token = self._credentials()
        photos: list[Photo] = []
        for f in accepted:
            try:
                url = self._objects.upload(f, PHOTOS_BUCKET, user_id, token)
            except (UploadError, OSError) as ex:
                logger.error("Photo upload failed for {}: {}", f.path, ex)
                raise UploadError("Failed to upload photos. Please try again.") from ex
            photos.append(normalize_photo(url, rng=self._rng))
        if len(accepted) < len(files):
            logger.info("Accepted {} of {} photos (cap)", len(accepted), len(files))
        return photos

    def upload_voice_note(self, file: MediaFile, duration: int) -> VoiceNote:
        """Upload a captured recording and wrap it as a `VoiceNote`."""
        user_id, token = self._credentials()
        try:
            url = self._objects.upload(file, VOICE_BUCKET, user_id, token)
        except (UploadError, OSError) as ex:
            logger.error("Voice note upload failed for {}: {}", file.path, ex)
            raise UploadError("Failed to upload the voice note. Please try again.") from ex
        return VoiceNote(id=new_id(rng=self._rng), url=url, duration=max(0, int(duration)))
