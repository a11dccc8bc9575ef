"""
UI/view constants centralized for reuse across view modules.

Colours follow the paper/stone palette of the calendar; sizes are in
device-independent pixels.
"""

from __future__ import annotations

APP_TITLE = "Aesthetic Memory"
APP_TAGLINE = "Your personal calendar of moments"

# Palette
PAPER = "#faf9f6"
STONE_100 = "#f5f5f4"
STONE_200 = "#e7e5e4"
STONE_400 = "#a8a29e"
STONE_500 = "#78716c"
STONE_800 = "#292524"
DANGER = "#b91c1c"

# Calendar
DAY_CELL_MIN_PX = 96
MINI_DAY_PX = 18
YEAR_GRID_COLUMNS = 4

# Collage / polaroid
COLLAGE_MIN_PX = 320
COLLAGE_ASPECT = 4 / 5  # width / height
POLAROID_SHADOW_PX = 6
DRAG_LIFT_SCALE = 1.06  # frame scale while dragged in move mode
IMAGE_SIDE_PX = 1024  # decode bound for collage images

# Highlights board
HIGHLIGHT_TILE_PX = 140
EXPORT_SCALE = 2  # device pixels per logical pixel in single-entry PNG export

# Dialog sizes
ENTRY_FORM_SIZE = (1100, 720)
DAY_DETAIL_SIZE = (1100, 720)
HIGHLIGHTS_SIZE = (1000, 760)

PHOTO_FILE_FILTER = "Images (*.png *.jpg *.jpeg *.gif *.bmp *.webp *.heic *.heif)"
