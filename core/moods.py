"""Mood tags and their display palette."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Mood(str, Enum):
    """The closed set of mood tags an entry can carry."""

    HAPPY = "happy"
    CALM = "calm"
    NOSTALGIC = "nostalgic"
    CREATIVE = "creative"
    ENERGETIC = "energetic"
    REFLECTIVE = "reflective"
    COZY = "cozy"


@dataclass(frozen=True)
class MoodStyle:
    """Colours used when rendering a mood.

    Attributes:
        label: Human readable name.
        bg: Soft background colour (calendar cell tint, mini-calendar dot).
        accent: Accent strip colour.
        dark: Text/chip colour on light backgrounds.
    """

    label: str
    bg: str
    accent: str
    dark: str


DEFAULT_MOOD = Mood.HAPPY

MOODS: dict[Mood, MoodStyle] = {
    Mood.HAPPY: MoodStyle("Happy", "#FFD57E", "#FFC145", "#B38000"),
    Mood.CALM: MoodStyle("Calm", "#9AD3DE", "#78C0CE", "#2C6E7A"),
    Mood.NOSTALGIC: MoodStyle("Nostalgic", "#F7C7E7", "#EAA2C6", "#9D4C73"),
    Mood.CREATIVE: MoodStyle("Creative", "#C1A3FF", "#A380F7", "#5E38C2"),
    Mood.ENERGETIC: MoodStyle("Energetic", "#FFB3B3", "#FF8080", "#C23838"),
    Mood.REFLECTIVE: MoodStyle("Reflective", "#B8D8C0", "#96C2A2", "#4A7055"),
    Mood.COZY: MoodStyle("Cozy", "#E6D3B8", "#D4B895", "#8F6F45"),
}


def mood_style(mood: Mood | str) -> MoodStyle:
    """Return the palette for `mood`; unknown values use the default mood."""
    try:
        return MOODS[Mood(mood)]
    except ValueError:
        return MOODS[DEFAULT_MOOD]


def parse_mood(value: str | None) -> Mood | None:
    """Parse a stored mood string, returning None when it is not recognised."""
    if not value:
        return None
    try:
        return Mood(str(value).strip().lower())
    except ValueError:
        return None
