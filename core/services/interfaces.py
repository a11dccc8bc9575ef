"""Core service interfaces, collaborator protocols and the error taxonomy.

The application consumes an identity provider, an entry store, an object
store, an audio capture device and an export renderer. Concrete adapters
live in `infrastructure`; the core only depends on the protocols below.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol

from core.models import Entry

Bucket = Literal["photos", "voice-notes"]
PHOTOS_BUCKET: Bucket = "photos"
VOICE_BUCKET: Bucket = "voice-notes"


class MemoryAppError(Exception):
    """Base class for failures surfaced to the user."""

    title = "Error"


class AuthUnavailableError(MemoryAppError):
    """No bearer token is available; writes must not proceed."""

    title = "Not signed in"


class StoreError(MemoryAppError):
    """The entry store failed to load, save or delete."""

    title = "Storage error"


class UploadError(MemoryAppError):
    """A media upload failed; the whole batch is discarded."""

    title = "Upload failed"


class CaptureDeniedError(MemoryAppError):
    """The microphone could not be acquired."""

    title = "Microphone unavailable"


@dataclass
class UserInfo:
    """Identity of the signed-in user.

    Attributes:
        id: Stable user identifier used to scope entries and media.
        email: Primary e-mail address, may be empty.
        full_name: Display name, optional.
    """

    id: str
    email: str = ""
    full_name: str | None = None

    @property
    def greeting_name(self) -> str:
        if self.full_name:
            return self.full_name.split()[0]
        return "there"


@dataclass
class MediaFile:
    """A local file about to be uploaded."""

    path: str
    name: str


class SessionProvider(Protocol):
    def current_user(self) -> UserInfo | None:
        """Return the signed-in user or None."""
        ...

    def get_token(self) -> str | None:
        """Return a short-lived bearer token, or None when unavailable."""
        ...


class EntryStore(Protocol):
    def list(self, user_id: str, token: str) -> list[Entry]:
        """Return the user's entries ordered by date descending."""
        ...

    def upsert(self, user_id: str, token: str, entry: Entry) -> Entry:
        """Insert, or replace the existing record for (user, date)."""
        ...

    def delete(self, user_id: str, token: str, entry_id: str) -> None:
        """Delete the entry with `entry_id` owned by `user_id`."""
        ...


class ObjectStore(Protocol):
    def upload(self, file: MediaFile, bucket: Bucket, user_id: str, token: str) -> str:
        """Store `file` under a user-scoped path and return its public URL."""
        ...

    def delete(self, url: str, bucket: Bucket, token: str) -> None:
        """Remove the object behind a public URL; unknown URLs are ignored."""
        ...


class ExportRenderer(Protocol):
    def render(self, subject: object, out_path: str) -> str:
        """Render a visual subtree to a raster image file and return its path."""
        ...


class StatusReporter(Protocol):
    def alert(self, title: str, message: str) -> None:
        """Show a blocking, user-visible message."""
        ...

    def show_status(self, message: str, timeout_ms: int = 0) -> None:
        """Show a transient status message."""
        ...
