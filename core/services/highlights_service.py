"""Highlights compositor: scatter one photo per entry onto an export canvas."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
import random

from core.models import Entry, Photo

MAX_HIGHLIGHTS = 30
SCATTER_ROTATION = (-5.0, 5.0)
SCATTER_SCALE = (0.8, 1.2)
EMPTY_MESSAGE = "No photos found in this period to create a highlight."


@dataclass(frozen=True)
class HighlightItem:
    photo: Photo
    entry_date: str
    rotation: float
    scale: float = 1.0


@dataclass(frozen=True)
class Composition:
    """A computed highlight layout; it is never recomputed on repaint."""

    title: str
    items: list[HighlightItem] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def file_name(self) -> str:
        return f"Highlights-{self.title.replace(' ', '-', 1)}.png"


def select_entries(entries: Iterable[Entry], max_items: int = MAX_HIGHLIGHTS) -> list[Entry]:
    """Keep entries with at least one photo, in input order, capped at `max_items`."""
    picked: list[Entry] = []
    for e in entries:
        if len(picked) >= max_items:
            break
        if e.photos:
            picked.append(e)
    return picked


def compose_highlights(
    title: str,
    entries: Iterable[Entry],
    *,
    rng: random.Random | None = None,
    max_items: int = MAX_HIGHLIGHTS,
) -> Composition:
    """Build a scatter composition from the first photo of each selected entry.

    Pass a seeded `rng` for a reproducible composition.
    """
    r = rng or random.Random()
    items = [
        HighlightItem(
            photo=e.cover_photo,
            entry_date=e.date,
            rotation=r.uniform(*SCATTER_ROTATION),
            scale=r.uniform(*SCATTER_SCALE),
        )
        for e in select_entries(entries, max_items)
    ]
    return Composition(title=title, items=items)
