"""Drag gesture handling for the collage editor.

Gestures arrive as `GestureDelta` values and are folded into photos by the
pure `apply_gesture` reducer. The active edit mode lives in an explicit
`EditorSession` shared by every photo on the editing surface; only the END
phase of a gesture commits a change.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum
import math

from core.models import Photo, clamp_pan

DEFAULT_PAN_SENSITIVITY = 0.5


class EditMode(str, Enum):
    MOVE = "move"  # drag moves the polaroid frame
    CROP = "crop"  # drag pans the image under a pinned frame


class GesturePhase(str, Enum):
    BEGIN = "begin"
    UPDATE = "update"
    END = "end"


@dataclass(frozen=True)
class GestureDelta:
    """Pointer displacement accumulated since the gesture began."""

    phase: GesturePhase
    dx: float = 0.0
    dy: float = 0.0

    @classmethod
    def end(cls, dx: float, dy: float) -> "GestureDelta":
        return cls(GesturePhase.END, dx, dy)


@dataclass(frozen=True)
class EditorSession:
    """Editing-surface context passed to every photo's gesture handler."""

    mode: EditMode = EditMode.MOVE
    pan_sensitivity: float = DEFAULT_PAN_SENSITIVITY

    def with_mode(self, mode: EditMode) -> "EditorSession":
        return replace(self, mode=mode)

    @property
    def frame_pinned(self) -> bool:
        """True when drags must not move the frame visually."""
        return self.mode is EditMode.CROP

    @property
    def hint(self) -> str:
        return "Drag photo to crop" if self.mode is EditMode.CROP else "Drag photo to move"


def _finite(value: float) -> float:
    v = float(value)
    return v if math.isfinite(v) else 0.0


def move_frame(photo: Photo, dx: float, dy: float) -> Photo:
    """Displace the frame by (dx, dy); offsets are unbounded."""
    return replace(photo, x=photo.x + _finite(dx), y=photo.y + _finite(dy))


def pan_image(photo: Photo, dx: float, dy: float, sensitivity: float = DEFAULT_PAN_SENSITIVITY) -> Photo:
    """Pan the image inside its frame.

    The displacement is applied inverted: dragging left reveals what was to
    the right. Results are clamped to [0, 100].
    """
    return replace(
        photo,
        pan_x=clamp_pan(photo.pan_x - _finite(dx) * sensitivity),
        pan_y=clamp_pan(photo.pan_y - _finite(dy) * sensitivity),
    )


def apply_gesture(photo: Photo, gesture: GestureDelta, session: EditorSession) -> Photo:
    """Fold one gesture event into `photo` and return the resulting photo.

    BEGIN and UPDATE leave the photo untouched. END writes exactly one
    offset pair, chosen by the session mode.
    """
    if gesture.phase is not GesturePhase.END:
        return photo
    if session.mode is EditMode.CROP:
        return pan_image(photo, gesture.dx, gesture.dy, session.pan_sensitivity)
    return move_frame(photo, gesture.dx, gesture.dy)


def replace_photo(photos: Sequence[Photo], updated: Photo) -> list[Photo]:
    """Return a copy of `photos` with the photo sharing `updated.id` swapped in."""
    return [updated if p.id == updated.id else p for p in photos]


def preview_offset(photo: Photo, gesture: GestureDelta, session: EditorSession) -> tuple[float, float]:
    """Frame position to draw while a gesture is in flight (visual only)."""
    if gesture.phase is GesturePhase.END or session.frame_pinned:
        return photo.frame_offset
    return (photo.x + _finite(gesture.dx), photo.y + _finite(gesture.dy))
