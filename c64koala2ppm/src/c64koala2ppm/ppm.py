"""Binary Portable Pixmap (P6) output."""

from __future__ import annotations

from typing import BinaryIO

from .render import RASTER_HEIGHT, RASTER_WIDTH, Raster

MAX_VALUE = 255


def ppm_header(width: int, height: int) -> bytes:
    return b"P6\n%d %d\n%d\n" % (width, height, MAX_VALUE)


PPM_HEADER = ppm_header(RASTER_WIDTH, RASTER_HEIGHT)


def encode_ppm(raster: Raster) -> bytes:
    """Return the raster as a P6 pixmap: header, then packed RGB triples."""

    expected = raster.width * raster.height
    if len(raster) != expected:
        raise ValueError(f"Raster has {len(raster)} pixels, expected {expected}")
    return ppm_header(raster.width, raster.height) + raster.to_bytes()


def write_ppm(raster: Raster, stream: BinaryIO) -> int:
    data = encode_ppm(raster)
    stream.write(data)
    return len(data)
