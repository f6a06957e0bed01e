"""VIC-II color palette generation.

The Commodore 64 colors are described by an angle on the color wheel, a luma
level and a flag telling whether the color carries any chroma at all (the
greys do not). Values follow http://www.pepto.de/projects/colorvic/.

Each hardware color is converted to Y'UV and then to RGB::

    R = Y             + 1.13983 * V
    G = Y - 0.39465 * U - 0.58060 * V
    B = Y + 2.03211 * U

Intermediate values are kept at single precision, as the reference decoder
does, so the generated bytes match it exactly.
"""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from typing import Sequence, Tuple

Color = Tuple[int, int, int]

DEFAULT_SATURATION = 1.0

# pepto uses 34.0081334493 / 255 (0.13337) for both scales.
U_SCALE = 0.1331
V_SCALE = 0.1331

ANGLE_STEPS = 16
LUMA_LEVELS = 32

_FLOAT32_MAX = 3.4028234663852886e38


@dataclass(frozen=True)
class HardwareColor:
    """One VIC-II color: angle is 0-15, luma 0-32, saturation 0 or 1."""

    name: str
    angle: int
    luma: int
    saturation: int


@dataclass(frozen=True)
class YUVColor:
    # y is luma (Y'), gamma-compressed
    y: float
    u: float
    v: float


VIC_II_COLORS: Tuple[HardwareColor, ...] = (
    HardwareColor("black", 0, 0, 0),
    HardwareColor("white", 0, 32, 0),
    HardwareColor("red", 5, 10, 1),
    HardwareColor("cyan", 13, 20, 1),
    HardwareColor("purple", 2, 12, 1),
    HardwareColor("green", 10, 16, 1),
    HardwareColor("blue", 0, 8, 1),
    HardwareColor("yellow", 8, 24, 1),
    HardwareColor("orange", 6, 12, 1),
    HardwareColor("brown", 7, 8, 1),
    HardwareColor("light red", 5, 16, 1),
    HardwareColor("dark grey", 0, 10, 0),
    HardwareColor("grey", 0, 15, 0),
    HardwareColor("light green", 10, 24, 1),
    HardwareColor("light blue", 0, 15, 1),
    HardwareColor("light grey", 0, 20, 0),
)


def _f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def hardware_to_yuv(color: HardwareColor, saturation: float = DEFAULT_SATURATION) -> YUVColor:
    chroma = _f32(color.saturation * _f32(saturation))
    angle = color.angle * math.pi / (ANGLE_STEPS / 2)
    return YUVColor(
        y=_f32(color.luma / LUMA_LEVELS),
        u=_f32(_f32(chroma * _f32(U_SCALE)) * math.cos(angle)),
        v=_f32(_f32(chroma * _f32(V_SCALE)) * math.sin(angle)),
    )


def _to_byte(component: float) -> int:
    component = max(0.0, min(1.0, component))
    # add-half-and-truncate, not round(): round() is half-to-even
    return int(255 * component + 0.5)


def yuv_to_rgb(yuv: YUVColor) -> Color:
    r = _f32(yuv.y + 1.13983 * yuv.v)
    g = _f32(yuv.y + -0.39465 * yuv.u + -0.58060 * yuv.v)
    b = _f32(yuv.y + 2.03211 * yuv.u)
    return (_to_byte(r), _to_byte(g), _to_byte(b))


def build_palette(saturation: float = DEFAULT_SATURATION) -> Tuple[Color, ...]:
    """Resolve the 16 VIC-II colors to RGB.

    ``saturation`` scales the chroma of every color and must be zero or
    greater; 0 yields a greyscale palette. The result is a fresh tuple each
    time but always identical for the same ``saturation``.
    """

    if not saturation >= 0:
        raise ValueError(f"saturation must be >= 0, got {saturation}")
    if saturation > _FLOAT32_MAX:
        raise ValueError(f"saturation is too large: {saturation}")
    return tuple(yuv_to_rgb(hardware_to_yuv(color, saturation)) for color in VIC_II_COLORS)


def format_palette_text(palette: Sequence[Color]) -> str:
    entries = [
        f"{idx}: {hw.name} ({r},{g},{b})"
        for idx, (hw, (r, g, b)) in enumerate(zip(VIC_II_COLORS, palette))
    ]
    return ", ".join(entries)
