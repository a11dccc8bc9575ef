"""JSON file persistence for journal entries.

One file per user holds a list of records in the entry wire format:
`{id, user_id, date, title, caption, photos: [{id, url, rotation, x, y,
panX, panY}], mood, hashtags, song_url, voice_note: {id, url, duration},
created_at}`. Writes are upserts keyed by (user, date).
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
import json
import os
from pathlib import Path
import re
import tempfile
from typing import Any
import uuid

from loguru import logger

from core.models import UNTITLED, Entry, Photo, VoiceNote, normalize_photo
from core.moods import DEFAULT_MOOD, parse_mood
from core.services.interfaces import AuthUnavailableError, StoreError

_SAFE_NAME_RX = re.compile(r"[^A-Za-z0-9_.-]")


def _parse_datetime(value: Any) -> datetime:
    """Parse an ISO timestamp; falls back to now for missing/invalid values."""
    if isinstance(value, (int, float)):
        # epoch milliseconds
        try:
            return datetime.fromtimestamp(float(value) / 1000.0)
        except (OverflowError, OSError, ValueError):
            return datetime.now()
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            logger.warning("Invalid created_at: {}", value)
    return datetime.now()


def photo_to_record(photo: Photo) -> dict[str, Any]:
    return {
        "id": photo.id,
        "url": photo.url,
        "rotation": photo.rotation,
        "x": photo.x,
        "y": photo.y,
        "panX": photo.pan_x,
        "panY": photo.pan_y,
    }


def photo_from_record(row: dict[str, Any]) -> Photo:
    return normalize_photo(
        str(row.get("url") or ""),
        id=row.get("id") or None,
        rotation=row.get("rotation"),
        x=row.get("x"),
        y=row.get("y"),
        pan_x=row.get("panX"),
        pan_y=row.get("panY"),
    )


def entry_to_record(entry: Entry) -> dict[str, Any]:
    """Serialize `entry` into its stored JSON shape."""
    voice = entry.voice_note
    return {
        "id": entry.id,
        "user_id": entry.user_id,
        "date": entry.date,
        "title": entry.title,
        "caption": entry.caption,
        "photos": [photo_to_record(p) for p in entry.photos],
        "mood": entry.mood.value,
        "hashtags": list(entry.hashtags),
        "song_url": entry.song_url or None,
        "voice_note": (
            {"id": voice.id, "url": voice.url, "duration": int(voice.duration)} if voice else None
        ),
        "created_at": entry.created_at.isoformat(),
    }


def entry_from_record(row: dict[str, Any]) -> Entry:
    """Deserialize a stored record, defaulting every optional field.

    Raises:
        KeyError: If `date` is missing.
    """
    mood = parse_mood(row.get("mood"))
    if mood is None:
        logger.warning("Unknown mood {!r} on {}, using {}", row.get("mood"), row.get("date"), DEFAULT_MOOD.value)
        mood = DEFAULT_MOOD
    raw_voice = row.get("voice_note")
    voice = None
    if isinstance(raw_voice, dict) and raw_voice.get("url"):
        voice = VoiceNote(
            id=str(raw_voice.get("id") or ""),
            url=str(raw_voice["url"]),
            duration=int(raw_voice.get("duration") or 0),
        )
    return Entry(
        id=str(row.get("id") or ""),
        user_id=str(row.get("user_id") or ""),
        date=str(row["date"]),
        title=str(row.get("title") or UNTITLED),
        caption=str(row.get("caption") or ""),
        photos=[photo_from_record(p) for p in (row.get("photos") or []) if isinstance(p, dict)],
        mood=mood,
        hashtags=[str(t) for t in (row.get("hashtags") or [])],
        song_url=row.get("song_url") or None,
        voice_note=voice,
        created_at=_parse_datetime(row.get("created_at")),
    )


class JsonEntryStore:
    """File-backed entry store honouring the remote store contract."""

    def __init__(self, data_dir: str | Path) -> None:
        self._dir = Path(data_dir) / "entries"

    def _file_for(self, user_id: str) -> Path:
        return self._dir / f"{_SAFE_NAME_RX.sub('_', user_id)}.json"

    @staticmethod
    def _check_token(token: str | None) -> None:
        if not token:
            raise AuthUnavailableError("No authentication token")

    def _read(self, user_id: str) -> list[dict[str, Any]]:
        path = self._file_for(user_id)
        if not path.exists():
            return []
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as ex:
            logger.error("Read entries failed: {} ({})", path, ex)
            raise StoreError("Failed to load entries. Please try again.") from ex
        if not isinstance(data, list):
            raise StoreError(f"Corrupt entry file: {path}")
        return [row for row in data if isinstance(row, dict) and row.get("user_id") == user_id]

    def _write(self, user_id: str, rows: list[dict[str, Any]]) -> None:
        path = self._file_for(user_id)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix=".entries_", suffix=".json", dir=str(path.parent))
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(rows, f, ensure_ascii=False, indent=2)
            os.replace(tmp, path)
        except OSError as ex:
            logger.error("Write entries failed: {} ({})", path, ex)
            raise StoreError("Failed to save entry. Please try again.") from ex

    def list(self, user_id: str, token: str) -> list[Entry]:
        """Return `user_id`'s entries ordered by date descending."""
        self._check_token(token)
        entries: list[Entry] = []
        for row in self._read(user_id):
            try:
                entries.append(entry_from_record(row))
            except (KeyError, TypeError, ValueError) as ex:
                logger.error("Entry record error: {} | row={}", ex, row)
                continue
        entries.sort(key=lambda e: e.date, reverse=True)
        return entries

    def upsert(self, user_id: str, token: str, entry: Entry) -> Entry:
        """Insert `entry` or replace the record stored for the same date."""
        self._check_token(token)
        rows = self._read(user_id)
        existing = next((r for r in rows if r.get("date") == entry.date), None)
        if existing is not None:
            stored = replace(
                entry,
                id=str(existing.get("id") or entry.id),
                user_id=user_id,
                created_at=_parse_datetime(existing.get("created_at")),
            )
            rows = [r for r in rows if r is not existing]
        else:
            stored = replace(entry, id=str(uuid.uuid4()), user_id=user_id)
        rows.append(entry_to_record(stored))
        rows.sort(key=lambda r: str(r.get("date")), reverse=True)
        self._write(user_id, rows)
        return stored

    def delete(self, user_id: str, token: str, entry_id: str) -> None:
        """Delete the entry `entry_id` belonging to `user_id`; unknown ids are a no-op."""
        self._check_token(token)
        rows = self._read(user_id)
        kept = [r for r in rows if r.get("id") != entry_id]
        if len(kept) == len(rows):
            logger.warning("Delete: entry {} not found for {}", entry_id, user_id)
            return
        self._write(user_id, kept)
