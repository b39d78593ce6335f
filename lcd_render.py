# lcd_render.py
#
# ============================================================
# LCD Asset Code: pixel row renderer
# ============================================================
#
# INPUT : a 48-character bit pattern (see lcd_digits.py)
# OUTPUT: a 256 x 1 RGBA image
#
# Row layout (x = pixel index):
#
#   x in [0, 8)    : reserved, always blank
#   x in [8, 56)   : pattern[x - 8]   ("1" -> mark, "0" -> blank)
#   x in [56, 256) : reserved, always blank
#
# Pixel values are fully opaque:
#   mark  = black (0, 0, 0, 255)
#   blank = white (255, 255, 255, 255)
#
# Precondition: the pattern is exactly 48 characters. It is guaranteed by
# encoding_pattern() and is not re-validated here.
#
# ============================================================
# Dependencies
# ============================================================
# - Pillow (PIL): pip install pillow
#
# ============================================================

from __future__ import annotations

from typing import List, Tuple

from PIL import Image

ROW_WIDTH = 256
ROW_HEIGHT = 1
DATA_OFFSET = 8   # pixels 0..7 are reserved for other uses
DATA_END = 56     # pixels 56..255 are reserved for other uses

MARK = 1
BLANK = 0

MARK_RGBA: Tuple[int, int, int, int] = (0, 0, 0, 255)
BLANK_RGBA: Tuple[int, int, int, int] = (255, 255, 255, 255)


def layout_pixel_row(pattern: str) -> List[int]:
    """
    Map the pattern onto the 256 pixel slots of the row.

    Returns a list of length 256 holding MARK (1) or BLANK (0).
    """
    row: List[int] = []

    # Bits 0-7 are reserved and stay blank.
    for x in range(0, DATA_OFFSET):
        row.append(BLANK)

    # Bits 8-55 carry the six display characters.
    for x in range(DATA_OFFSET, DATA_END):
        row.append(MARK if pattern[x - DATA_OFFSET] == "1" else BLANK)

    # Bits 56-255 are reserved and stay blank.
    for x in range(DATA_END, ROW_WIDTH):
        row.append(BLANK)

    return row


def render_pixel_row(pattern: str) -> Image.Image:
    """Render the pattern into a 256x1 opaque black/white RGBA image."""
    img = Image.new("RGBA", (ROW_WIDTH, ROW_HEIGHT), color=BLANK_RGBA)
    pixels = [MARK_RGBA if p == MARK else BLANK_RGBA for p in layout_pixel_row(pattern)]
    img.putdata(pixels * ROW_HEIGHT)
    return img
