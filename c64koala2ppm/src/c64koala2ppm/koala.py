"""KoalaPaint file decoding.

The Commodore 64 version of Koala Painter stores a multicolor bitmap as:

Field            | Size  | Notes
-----------------|-------|-----------------------------------------------
Load address     | 2     | little endian, not used for decoding
Bitmap           | 8000  | 8 bytes per card, cards in row-major order
Video matrix     | 1000  | 1 byte per card; both nibbles select a color
Color RAM        | 1000  | 1 byte per card; only the low nibble is used
Background color | 1     | low nibble selects the global background

The screen is divided into 40x25 cards of 4x8 multicolor pixels.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import BinaryIO, Optional

LOAD_ADDRESS_SIZE = 2
CARD_COLUMNS = 40
CARD_ROWS = 25
CARD_HEIGHT = 8
CARD_COUNT = CARD_COLUMNS * CARD_ROWS
BITMAP_SIZE = CARD_COUNT * CARD_HEIGHT
VIDEO_SIZE = CARD_COUNT
COLOR_SIZE = CARD_COUNT
BACKGROUND_SIZE = 1
KOALA_FILE_SIZE = LOAD_ADDRESS_SIZE + BITMAP_SIZE + VIDEO_SIZE + COLOR_SIZE + BACKGROUND_SIZE

# Fill values for data missing from short files. They render as a
# recognizable stripe pattern instead of black.
FALLBACK_BITMAP = 0x1B
FALLBACK_VIDEO = 0x25
FALLBACK_COLOR = 0x06
FALLBACK_BACKGROUND = 0x00

TRUNCATED_MESSAGE = "koala file is too short. Output may be corrupt."


class KoalaTruncatedWarning(RuntimeWarning):
    """Issued when the input ends before all KoalaPaint sections are read."""


@dataclass
class KoalaImage:
    bitmap: bytes
    video: bytes
    color: bytes
    background: int
    load_address: Optional[int] = None
    truncated: bool = False

    @classmethod
    def blank(cls) -> "KoalaImage":
        """Return an image holding only the short-file fallback values."""

        return cls(
            bitmap=bytes([FALLBACK_BITMAP]) * BITMAP_SIZE,
            video=bytes([FALLBACK_VIDEO]) * VIDEO_SIZE,
            color=bytes([FALLBACK_COLOR]) * COLOR_SIZE,
            background=FALLBACK_BACKGROUND,
        )

    @staticmethod
    def card_index(cx: int, cy: int) -> int:
        if not (0 <= cx < CARD_COLUMNS and 0 <= cy < CARD_ROWS):
            raise IndexError(f"Card ({cx}, {cy}) is outside the 40x25 grid")
        return cy * CARD_COLUMNS + cx

    def card_bitmap(self, cx: int, cy: int) -> bytes:
        start = self.card_index(cx, cy) * CARD_HEIGHT
        return self.bitmap[start : start + CARD_HEIGHT]

    def video_byte(self, cx: int, cy: int) -> int:
        return self.video[self.card_index(cx, cy)]

    def color_byte(self, cx: int, cy: int) -> int:
        return self.color[self.card_index(cx, cy)]


def _overlay(fallback: bytes, chunk: bytes) -> bytes:
    return chunk + fallback[len(chunk) :]


def parse_koala(data: bytes) -> KoalaImage:
    """Decode KoalaPaint file contents.

    Short input is not an error. Sections are consumed in file order; the
    first incomplete one keeps whatever prefix was present, everything after
    it keeps the fallback fill, and a :class:`KoalaTruncatedWarning` is
    issued once. Bytes past the background color are ignored.
    """

    image = KoalaImage.blank()
    offset = 0

    def take(size: int) -> bytes:
        nonlocal offset
        chunk = data[offset : offset + size]
        offset += len(chunk)
        if len(chunk) < size:
            image.truncated = True
        return bytes(chunk)

    address = take(LOAD_ADDRESS_SIZE)
    if not image.truncated:
        image.load_address = address[0] | (address[1] << 8)
    if not image.truncated:
        image.bitmap = _overlay(image.bitmap, take(BITMAP_SIZE))
    if not image.truncated:
        image.video = _overlay(image.video, take(VIDEO_SIZE))
    if not image.truncated:
        image.color = _overlay(image.color, take(COLOR_SIZE))
    if not image.truncated:
        background = take(BACKGROUND_SIZE)
        if background:
            image.background = background[0]

    if image.truncated:
        warnings.warn(TRUNCATED_MESSAGE, KoalaTruncatedWarning, stacklevel=2)
    return image


def read_koala(stream: BinaryIO) -> KoalaImage:
    return parse_koala(stream.read())
