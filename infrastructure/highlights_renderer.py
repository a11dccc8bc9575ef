"""Pillow renderer that turns a highlights composition into a PNG."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont, ImageOps
from pillow_heif import register_heif_opener
from loguru import logger

from core.services.calendar_service import format_short_date
from core.services.highlights_service import Composition, HighlightItem
from core.services.layout_service import cover_source_rect

BACKGROUND = (250, 249, 246, 255)  # #faf9f6
INK = (68, 64, 60, 255)
MUTED = (168, 162, 158, 255)
PLACEHOLDER = (231, 229, 228, 255)

register_heif_opener()


class HighlightsRenderer:
    """Render a `Composition` as a scattered polaroid board.

    Tiles flow left to right and wrap; each tile keeps the rotation and
    scale stored in its `HighlightItem`.
    """

    def __init__(
        self,
        resolver: Callable[[str], Path | None],
        *,
        canvas_width: int = 1200,
        tile_width: int = 280,
        gap: int = 24,
        margin: int = 48,
        title_height: int = 150,
    ) -> None:
        self._resolve = resolver
        self.canvas_width = canvas_width
        self.tile_width = tile_width
        self.gap = gap
        self.margin = margin
        self.title_height = title_height

    def _font(self, size: int) -> ImageFont.ImageFont:
        try:
            return ImageFont.load_default(size=size)
        except TypeError:
            return ImageFont.load_default()

    def _load_photo(self, url: str, w: int, h: int, pan_x: float, pan_y: float) -> Image.Image:
        path = self._resolve(url)
        if path is not None and path.exists():
            try:
                with Image.open(path) as src:
                    src = ImageOps.exif_transpose(src).convert("RGBA")
                    x, y, cw, ch = cover_source_rect(src.width, src.height, w, h, pan_x, pan_y)
                    box = (int(x), int(y), int(x + cw), int(y + ch))
                    return src.resize((w, h), Image.Resampling.LANCZOS, box=box)
            except (OSError, ValueError) as ex:
                logger.warning("Highlights: cannot read {}: {}", path, ex)
        return Image.new("RGBA", (w, h), PLACEHOLDER)

    def render_tile(self, item: HighlightItem) -> Image.Image:
        """One polaroid: white frame, cropped photo, date label; rotated and scaled."""
        base_w = max(1, int(self.tile_width * item.scale))
        pad = max(4, base_w // 20)
        label_h = max(24, base_w // 7)
        photo_w = base_w - 2 * pad
        photo_h = photo_w
        tile = Image.new("RGBA", (base_w, pad + photo_h + label_h), (255, 255, 255, 255))
        photo = self._load_photo(item.photo.url, photo_w, photo_h, item.photo.pan_x, item.photo.pan_y)
        tile.paste(photo, (pad, pad))
        draw = ImageDraw.Draw(tile)
        draw.text(
            (base_w / 2, pad + photo_h + label_h / 2),
            format_short_date(item.entry_date),
            fill=MUTED,
            font=self._font(max(12, label_h // 2)),
            anchor="mm",
        )
        return tile.rotate(item.rotation, resample=Image.Resampling.BICUBIC, expand=True, fillcolor=(0, 0, 0, 0))

    def render(self, composition: Composition, out_path: str | Path) -> str:
        """Render `composition` to `out_path` (PNG) and return the path."""
        tiles = [self.render_tile(item) for item in composition.items]
        usable = self.canvas_width - 2 * self.margin
        placements: list[tuple[Image.Image, int, int]] = []
        x, y, row_h = self.margin, self.title_height, 0
        for tile in tiles:
            if x > self.margin and x + tile.width > self.margin + usable:
                x = self.margin
                y += row_h + self.gap
                row_h = 0
            placements.append((tile, x, y))
            x += tile.width + self.gap
            row_h = max(row_h, tile.height)
        height = y + row_h + self.margin if tiles else self.title_height + self.margin * 2

        canvas = Image.new("RGBA", (self.canvas_width, height), BACKGROUND)
        draw = ImageDraw.Draw(canvas)
        draw.text(
            (self.canvas_width / 2, self.title_height / 2),
            composition.title,
            fill=INK,
            font=self._font(56),
            anchor="mm",
        )
        for tile, tx, ty in placements:
            canvas.alpha_composite(tile, (tx, ty))

        out = Path(out_path)
        out.parent.mkdir(parents=True, exist_ok=True)
        canvas.convert("RGB").save(out, "PNG")
        logger.info("Highlights exported: {} ({} photos)", out, len(tiles))
        return str(out)
