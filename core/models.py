"""Core domain models for journal entries, photos and voice notes."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
import math
import random
import string

from core.moods import DEFAULT_MOOD, Mood

MAX_PHOTOS = 6
DEFAULT_FRAME_OFFSET = 0.0
DEFAULT_PAN = 50.0
PAN_MIN = 0.0
PAN_MAX = 100.0
# Decorative tilt assigned at creation, degrees
ROTATION_RANGE = (-3.0, 3.0)
UNTITLED = "Untitled Memory"

_ID_ALPHABET = string.ascii_lowercase + string.digits


def new_id(length: int = 9, rng: random.Random | None = None) -> str:
    """Return a short random identifier."""
    r = rng or random
    return "".join(r.choice(_ID_ALPHABET) for _ in range(length))


def clamp_pan(value: float) -> float:
    """Clamp a pan percentage into [0, 100]."""
    return min(PAN_MAX, max(PAN_MIN, float(value)))


def _finite_or(value: object, default: float) -> float:
    if value is None:
        return default
    try:
        num = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return num if math.isfinite(num) else default


@dataclass
class Photo:
    """A single polaroid in an entry's collage.

    `x`/`y` displace the frame from its layout slot and are unbounded.
    `pan_x`/`pan_y` place the focal point of the image inside the frame
    window as percentages (50/50 is centered).
    """

    id: str
    url: str
    rotation: float
    x: float = DEFAULT_FRAME_OFFSET
    y: float = DEFAULT_FRAME_OFFSET
    pan_x: float = DEFAULT_PAN
    pan_y: float = DEFAULT_PAN

    @property
    def frame_offset(self) -> tuple[float, float]:
        return (self.x, self.y)

    @property
    def pan_offset(self) -> tuple[float, float]:
        return (self.pan_x, self.pan_y)


def normalize_photo(
    url: str,
    *,
    id: str | None = None,  # pylint: disable=redefined-builtin
    rotation: float | None = None,
    x: float | None = None,
    y: float | None = None,
    pan_x: float | None = None,
    pan_y: float | None = None,
    rng: random.Random | None = None,
) -> Photo:
    """Build a fully populated `Photo`, filling every missing field with its default.

    This is the only place photo defaults are applied, both for freshly
    uploaded photos and for records read back from storage.
    """
    r = rng or random
    if rotation is None or not math.isfinite(float(rotation)):
        rotation = r.uniform(*ROTATION_RANGE)
    return Photo(
        id=id or new_id(rng=rng),
        url=url,
        rotation=float(rotation),
        x=_finite_or(x, DEFAULT_FRAME_OFFSET),
        y=_finite_or(y, DEFAULT_FRAME_OFFSET),
        pan_x=clamp_pan(_finite_or(pan_x, DEFAULT_PAN)),
        pan_y=clamp_pan(_finite_or(pan_y, DEFAULT_PAN)),
    )


@dataclass
class VoiceNote:
    """A recorded voice memo attached to an entry."""

    id: str
    url: str
    duration: int  # whole seconds


@dataclass
class Entry:
    """One journal entry; `date` (YYYY-MM-DD) is the natural key per user."""

    id: str
    user_id: str
    date: str
    title: str
    caption: str = ""
    photos: list[Photo] = field(default_factory=list)
    mood: Mood = DEFAULT_MOOD
    hashtags: list[str] = field(default_factory=list)
    song_url: str | None = None
    voice_note: VoiceNote | None = None
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def has_photos(self) -> bool:
        return len(self.photos) > 0

    @property
    def cover_photo(self) -> Photo | None:
        """First photo; it owns the largest collage slot."""
        return self.photos[0] if self.photos else None

    def media_urls(self) -> list[tuple[str, str]]:
        """Return (bucket, url) for every media object this entry owns."""
        owned = [("photos", p.url) for p in self.photos if p.url]
        if self.voice_note is not None and self.voice_note.url:
            owned.append(("voice-notes", self.voice_note.url))
        return owned


def parse_hashtags(text: str | None) -> list[str]:
    """Split a space separated tag string, keeping only `#`-prefixed tokens."""
    if not text:
        return []
    return [tok for tok in text.split() if tok.startswith("#")]


def remaining_photo_capacity(photos: list[Photo]) -> int:
    """How many more photos the collection accepts before hitting the cap."""
    return max(0, MAX_PHOTOS - len(photos))
