"""Pixel reconstruction from decoded KoalaPaint data."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Iterator, List, Sequence, Tuple

from PIL import Image

from .koala import CARD_COLUMNS, CARD_HEIGHT, CARD_ROWS, KoalaImage
from .palette import Color

CARD_WIDTH = 4
RASTER_WIDTH = CARD_COLUMNS * CARD_WIDTH
RASTER_HEIGHT = CARD_ROWS * CARD_HEIGHT

# Bit offsets of the four 2-bit pixels in a bitmap byte.
PIXEL_BIT_POSITIONS = (0, 2, 4, 6)

CardColors = Tuple[Color, Color, Color, Color]


@dataclass
class Raster:
    """Row-major RGB pixels, top to bottom, left to right."""

    width: int = RASTER_WIDTH
    height: int = RASTER_HEIGHT
    pixels: List[Color] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.pixels)

    def pixel(self, x: int, y: int) -> Color:
        return self.pixels[y * self.width + x]

    def rows(self) -> Iterator[List[Color]]:
        for y in range(self.height):
            yield self.pixels[y * self.width : (y + 1) * self.width]

    def to_bytes(self) -> bytes:
        return bytes(itertools.chain.from_iterable(self.pixels))


def bit_position_to_column(bit_position: int) -> int:
    """Map a pixel's bit offset to its column inside a 4-pixel card row.

    Pixels are packed most significant pair first in display order, so bit
    offset 6 is the leftmost column and bit offset 0 the rightmost.
    """

    if bit_position not in PIXEL_BIT_POSITIONS:
        raise ValueError(f"Invalid pixel bit position: {bit_position}")
    return (6 - bit_position) // 2


def card_color_table(image: KoalaImage, palette: Sequence[Color], cx: int, cy: int) -> CardColors:
    """Return the four colors a card's 2-bit pixel codes select.

    * 00: global background color
    * 01: upper nibble of the video matrix byte
    * 10: lower nibble of the video matrix byte
    * 11: lower nibble of the color RAM byte
    """

    video = image.video_byte(cx, cy)
    return (
        palette[image.background & 0x0F],
        palette[(video >> 4) & 0x0F],
        palette[video & 0x0F],
        palette[image.color_byte(cx, cy) & 0x0F],
    )


def decode_card_row(value: int, colors: Sequence[Color]) -> List[Color]:
    row: List[Color] = [colors[0]] * CARD_WIDTH
    for bit_position in PIXEL_BIT_POSITIONS:
        row[bit_position_to_column(bit_position)] = colors[(value >> bit_position) & 0x03]
    return row


def render_koala(image: KoalaImage, palette: Sequence[Color]) -> Raster:
    """Expand every card of ``image`` into a 160x200 raster."""

    if len(palette) != 16:
        raise ValueError(f"Palette must have 16 entries, got {len(palette)}")

    pixels: List[Color] = [palette[0]] * (RASTER_WIDTH * RASTER_HEIGHT)
    for cy in range(CARD_ROWS):
        for cx in range(CARD_COLUMNS):
            colors = card_color_table(image, palette, cx, cy)
            for ry, value in enumerate(image.card_bitmap(cx, cy)):
                start = (cy * CARD_HEIGHT + ry) * RASTER_WIDTH + cx * CARD_WIDTH
                pixels[start : start + CARD_WIDTH] = decode_card_row(value, colors)
    return Raster(RASTER_WIDTH, RASTER_HEIGHT, pixels)


def raster_to_image(raster: Raster) -> Image.Image:
    preview = Image.new("RGB", (raster.width, raster.height))
    preview.putdata(raster.pixels)
    return preview
