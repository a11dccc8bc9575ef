"""Collage layout templates keyed by photo count.

Slots are expressed in unit coordinates (fractions of the drawing area), so a
view maps them to pixels by scaling with its own size. Layout selection is a
pure function of the photo count.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from core.models import MAX_PHOTOS, Photo


class LayoutKind(str, Enum):
    EMPTY = "empty"
    SINGLE = "single"
    OVERLAP = "overlap"
    FEATURE_COLUMN = "feature_column"
    GRID = "grid"
    HERO = "hero"


@dataclass(frozen=True)
class Slot:
    """Placement of one photo inside the collage.

    Attributes:
        index: Photo index that fills this slot.
        left, top, width, height: Unit-square geometry.
        z: Stacking order; higher draws above lower.
        col_span, row_span: Grid cells covered (1 for free-form layouts).
    """

    index: int
    left: float
    top: float
    width: float
    height: float
    z: int = 0
    col_span: int = 1
    row_span: int = 1

    @property
    def area(self) -> float:
        return self.width * self.height

    def to_pixels(self, width: float, height: float) -> tuple[float, float, float, float]:
        """Return (x, y, w, h) scaled to a `width` x `height` surface."""
        return (self.left * width, self.top * height, self.width * width, self.height * height)


@dataclass(frozen=True)
class CollageLayout:
    kind: LayoutKind
    slots: tuple[Slot, ...]

    @property
    def hero_index(self) -> int | None:
        """Photo index in the largest slot (first one wins on ties)."""
        if not self.slots:
            return None
        best = self.slots[0]
        for slot in self.slots[1:]:
            if slot.area > best.area:
                best = slot
        return best.index

    def assign(self, photos: Sequence[Photo]) -> list[tuple[Slot, Photo]]:
        """Pair slots with photos; photos without a slot are not rendered."""
        return [(slot, photos[slot.index]) for slot in self.slots if slot.index < len(photos)]

    def paint_order(self, photos: Sequence[Photo]) -> list[tuple[Slot, Photo]]:
        """Like `assign` but sorted bottom-most first."""
        return sorted(self.assign(photos), key=lambda pair: (pair[0].z, pair[0].index))


# Padding/gap as fractions of the drawing area
SINGLE_SCALE = 0.9
OVERLAP_SCALE = 2.0 / 3.0
OVERLAP_INSET = 0.04
GRID_PAD = 0.04
GRID_GAP = 0.04
HERO_PAD = 0.02
HERO_GAP = 0.02


def _grid_cell(
    index: int,
    cols: int,
    rows: int,
    col: int,
    row: int,
    *,
    col_span: int = 1,
    row_span: int = 1,
    pad: float = GRID_PAD,
    gap: float = GRID_GAP,
) -> Slot:
    cell_w = (1.0 - 2 * pad - (cols - 1) * gap) / cols
    cell_h = (1.0 - 2 * pad - (rows - 1) * gap) / rows
    return Slot(
        index=index,
        left=pad + col * (cell_w + gap),
        top=pad + row * (cell_h + gap),
        width=cell_w * col_span + gap * (col_span - 1),
        height=cell_h * row_span + gap * (row_span - 1),
        col_span=col_span,
        row_span=row_span,
    )


def _single() -> CollageLayout:
    margin = (1.0 - SINGLE_SCALE) / 2
    return CollageLayout(
        LayoutKind.SINGLE, (Slot(0, margin, margin, SINGLE_SCALE, SINGLE_SCALE),)
    )


def _overlap() -> CollageLayout:
    far = 1.0 - OVERLAP_INSET - OVERLAP_SCALE
    return CollageLayout(
        LayoutKind.OVERLAP,
        (
            Slot(0, OVERLAP_INSET, OVERLAP_INSET, OVERLAP_SCALE, OVERLAP_SCALE, z=10),
            Slot(1, far, far, OVERLAP_SCALE, OVERLAP_SCALE, z=20),
        ),
    )


def _feature_column() -> CollageLayout:
    return CollageLayout(
        LayoutKind.FEATURE_COLUMN,
        (
            _grid_cell(0, 2, 2, 0, 0, row_span=2),
            _grid_cell(1, 2, 2, 1, 0),
            _grid_cell(2, 2, 2, 1, 1),
        ),
    )


def _grid() -> CollageLayout:
    return CollageLayout(
        LayoutKind.GRID,
        tuple(_grid_cell(i, 2, 2, i % 2, i // 2) for i in range(4)),
    )


# Cells around the 2x2 hero in a 3x3 grid: right column, then bottom row
_HERO_SIDE_CELLS = ((2, 0), (2, 1), (0, 2), (1, 2), (2, 2))


def _hero(count: int) -> CollageLayout:
    slots = [_grid_cell(0, 3, 3, 0, 0, col_span=2, row_span=2, pad=HERO_PAD, gap=HERO_GAP)]
    for i in range(1, min(count, MAX_PHOTOS)):
        col, row = _HERO_SIDE_CELLS[i - 1]
        slots.append(_grid_cell(i, 3, 3, col, row, pad=HERO_PAD, gap=HERO_GAP))
    return CollageLayout(LayoutKind.HERO, tuple(slots))


def select_layout(count: int) -> CollageLayout:
    """Return the layout template for `count` photos.

    Counts above the photo cap reuse the hero template with its six slots.

    Raises:
        ValueError: If `count` is negative.
    """
    if count < 0:
        raise ValueError(f"photo count must be >= 0, got {count}")
    if count == 0:
        return CollageLayout(LayoutKind.EMPTY, ())
    if count == 1:
        return _single()
    if count == 2:
        return _overlap()
    if count == 3:
        return _feature_column()
    if count == 4:
        return _grid()
    return _hero(count)


def cover_source_rect(
    src_w: float, src_h: float, dst_w: float, dst_h: float, pan_x: float = 50.0, pan_y: float = 50.0
) -> tuple[float, float, float, float]:
    """Crop rectangle (x, y, w, h) of the source that fills a `dst_w` x `dst_h` window.

    The image is scaled to cover the window; the pan percentages choose which
    part of the overflow stays visible (0 = left/top edge, 100 = right/bottom).
    """
    if src_w <= 0 or src_h <= 0 or dst_w <= 0 or dst_h <= 0:
        return (0.0, 0.0, max(src_w, 0.0), max(src_h, 0.0))
    scale = max(dst_w / src_w, dst_h / src_h)
    vis_w = min(src_w, dst_w / scale)
    vis_h = min(src_h, dst_h / scale)
    return ((src_w - vis_w) * pan_x / 100.0, (src_h - vis_h) * pan_y / 100.0, vis_w, vis_h)
