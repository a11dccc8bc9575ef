"""Lightweight view model wrapper around a collage `Photo`."""

from __future__ import annotations

from dataclasses import dataclass

from core.models import Photo
from core.services.layout_service import Slot, cover_source_rect

# Polaroid border as a fraction of the frame width; the bottom lip is larger
FRAME_PAD_RATIO = 0.04
FRAME_LIP_RATIO = 0.14


@dataclass
class PhotoVM:
    """Expose geometry for painting one polaroid inside a collage."""

    photo: Photo
    slot: Slot

    @property
    def id(self) -> str:
        return self.photo.id

    @property
    def rotation(self) -> float:
        return self.photo.rotation

    def frame_rect(
        self, width: float, height: float, offset: tuple[float, float] | None = None
    ) -> tuple[float, float, float, float]:
        """Frame rectangle in pixels: the slot scaled to the surface plus the frame offset."""
        x, y, w, h = self.slot.to_pixels(width, height)
        dx, dy = offset if offset is not None else self.photo.frame_offset
        return (x + dx, y + dy, w, h)

    @staticmethod
    def window_rect(frame_w: float, frame_h: float) -> tuple[float, float, float, float]:
        """Photo window inside a polaroid of `frame_w` x `frame_h`, relative to the frame."""
        pad = max(2.0, frame_w * FRAME_PAD_RATIO)
        lip = max(pad, frame_w * FRAME_LIP_RATIO)
        return (pad, pad, max(1.0, frame_w - 2 * pad), max(1.0, frame_h - pad - lip))

    def source_rect(self, img_w: float, img_h: float, win_w: float, win_h: float) -> tuple[float, float, float, float]:
        """Part of the image visible through a `win_w` x `win_h` window."""
        return cover_source_rect(img_w, img_h, win_w, win_h, self.photo.pan_x, self.photo.pan_y)
