"""Commodore 64 KoalaPaint to Portable Pixmap converter.

The package decodes KoalaPaint multicolor bitmaps and writes them as binary
P6 pixmaps. It can be invoked through the CLI (``python -m c64koala2ppm``)
or imported to convert KoalaPaint bytes directly.
"""

from .converter import (
    ConversionError,
    ConvertOptions,
    InputOpenError,
    convert_koala_file_to_ppm,
    convert_koala_to_image,
    convert_koala_to_ppm,
    convert_koala_to_raster,
)
from .koala import KoalaImage, KoalaTruncatedWarning, parse_koala, read_koala
from .palette import VIC_II_COLORS, build_palette, format_palette_text
from .ppm import PPM_HEADER, encode_ppm, write_ppm
from .render import Raster, raster_to_image, render_koala

__all__ = [
    "PPM_HEADER",
    "VIC_II_COLORS",
    "ConversionError",
    "ConvertOptions",
    "InputOpenError",
    "KoalaImage",
    "KoalaTruncatedWarning",
    "Raster",
    "build_palette",
    "convert_koala_file_to_ppm",
    "convert_koala_to_image",
    "convert_koala_to_ppm",
    "convert_koala_to_raster",
    "encode_ppm",
    "format_palette_text",
    "parse_koala",
    "raster_to_image",
    "read_koala",
    "render_koala",
    "write_ppm",
]
