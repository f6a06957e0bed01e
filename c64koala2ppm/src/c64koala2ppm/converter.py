"""End-to-end KoalaPaint to pixmap conversion."""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image

from .koala import parse_koala
from .palette import DEFAULT_SATURATION, Color, build_palette
from .ppm import encode_ppm
from .render import Raster, raster_to_image, render_koala


@dataclass
class ConvertOptions:
    """Options for palette generation."""

    saturation: float = DEFAULT_SATURATION


class ConversionError(Exception):
    """Custom exception for conversion errors."""


class InputOpenError(ConversionError):
    """Raised when the KoalaPaint input cannot be opened or read."""


def validate_options(options: ConvertOptions) -> None:
    saturation = options.saturation
    if not isinstance(saturation, (int, float)) or math.isnan(saturation) or saturation < 0:
        raise ConversionError("saturation must be >= 0")
    if math.isinf(saturation):
        raise ConversionError("saturation must be a finite number")


def prepare_palette(options: Optional[ConvertOptions] = None) -> Tuple[Color, ...]:
    """Validate ``options`` and resolve the palette they describe."""

    options = options or ConvertOptions()
    validate_options(options)
    try:
        return build_palette(options.saturation)
    except ValueError as exc:
        raise ConversionError(str(exc)) from exc


def convert_koala_to_raster(data: bytes, options: Optional[ConvertOptions] = None) -> Raster:
    palette = prepare_palette(options)
    return render_koala(parse_koala(data), palette)


def convert_koala_to_ppm(data: bytes, options: Optional[ConvertOptions] = None) -> bytes:
    return encode_ppm(convert_koala_to_raster(data, options))


def convert_koala_to_image(data: bytes, options: Optional[ConvertOptions] = None) -> Image.Image:
    """Convert KoalaPaint bytes into an in-memory RGB preview."""

    return raster_to_image(convert_koala_to_raster(data, options))


def read_koala_file(path: str | Path) -> bytes:
    path = Path(path)
    try:
        with path.open("rb") as stream:
            return stream.read()
    except OSError as exc:
        raise InputOpenError(f'could not open "{path}" for reading') from exc


def convert_koala_file_to_ppm(path: str | Path, options: Optional[ConvertOptions] = None) -> bytes:
    palette = prepare_palette(options)
    image = parse_koala(read_koala_file(path))
    return encode_ppm(render_koala(image, palette))
