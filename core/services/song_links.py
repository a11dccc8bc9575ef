"""Resolve attached song links into embeddable player URLs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import re

_YOUTUBE_RX = re.compile(
    r"(?:youtube\.com/(?:[^/]+/.+/|(?:v|e(?:mbed)?)/|.*[?&]v=)|youtu\.be/)([^\"&?/\s]{11})"
)


class SongSource(str, Enum):
    YOUTUBE = "youtube"
    SPOTIFY = "spotify"
    EXTERNAL = "external"


@dataclass(frozen=True)
class SongLink:
    source: SongSource
    url: str
    embed_url: str | None = None
    video_id: str | None = None


def youtube_video_id(url: str) -> str | None:
    m = _YOUTUBE_RX.search(url or "")
    return m.group(1) if m else None


def resolve_song_link(url: str | None) -> SongLink | None:
    """Classify `url`; returns None for a blank link."""
    if not url or not url.strip():
        return None
    url = url.strip()
    video_id = youtube_video_id(url)
    if video_id:
        embed = f"https://www.youtube.com/embed/{video_id}?autoplay=1&playsinline=1&mute=0"
        return SongLink(SongSource.YOUTUBE, url, embed, video_id)
    if "spotify.com" in url:
        embed = url if "/embed" in url else url.replace("spotify.com", "spotify.com/embed", 1)
        return SongLink(SongSource.SPOTIFY, url, embed)
    return SongLink(SongSource.EXTERNAL, url)
