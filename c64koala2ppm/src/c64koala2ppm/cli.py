"""Command line interface for c64koala2ppm."""

from __future__ import annotations

import argparse
import sys
import warnings
from typing import BinaryIO, List, Optional

from .converter import ConversionError, ConvertOptions, InputOpenError, prepare_palette, read_koala_file
from .koala import KoalaTruncatedWarning, parse_koala
from .palette import DEFAULT_SATURATION, build_palette, format_palette_text
from .ppm import write_ppm
from .render import render_koala

EXIT_USAGE = 1
EXIT_OPEN_FAILURE = 2

LICENSE_TEXT = """\
c64koala2ppm, convert a Commodore 64 KoalaPaint image to Portable Pixmap
Copyright 2009 Christopher Williams

This program is free software; you can redistribute it and/or
modify it under the terms of the GNU General Public License
as published by the Free Software Foundation; either version 2
of the License, or (at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU General Public License for more details."""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    palette_text = format_palette_text(build_palette(DEFAULT_SATURATION))

    parser = _ArgumentParser(
        prog="c64koala2ppm",
        description=(
            "Convert a Commodore 64 KoalaPaint image to a binary Portable Pixmap (P6) "
            "written to standard output.\n"
            f"Palette at saturation {DEFAULT_SATURATION}: {palette_text}"
        ),
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "koala_file",
        nargs="*",
        help="KoalaPaint file to read (default or '-': standard input)",
    )
    parser.add_argument(
        "-L",
        "--license",
        action="store_true",
        help="Show license information and exit",
    )
    parser.add_argument(
        "-s",
        "--saturation",
        type=float,
        default=DEFAULT_SATURATION,
        help="Set the output saturation. Value must be >= 0",
    )
    return parser


def main(
    argv: Optional[List[str]] = None,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[BinaryIO] = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.license:
        print(LICENSE_TEXT, file=sys.stderr)
        return 0
    if len(args.koala_file) > 1:
        print(f"{parser.prog}: too many filenames", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return EXIT_USAGE

    try:
        palette = prepare_palette(ConvertOptions(saturation=args.saturation))

        filename = args.koala_file[0] if args.koala_file else "-"
        if filename == "-":
            data = (stdin or sys.stdin.buffer).read()
        else:
            data = read_koala_file(filename)

        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", KoalaTruncatedWarning)
            image = parse_koala(data)
        for warning in caught:
            print(f"{parser.prog}: {warning.message}", file=sys.stderr)

        write_ppm(render_koala(image, palette), stdout or sys.stdout.buffer)
        return 0
    except InputOpenError as exc:
        print(f"{parser.prog}: {exc}", file=sys.stderr)
        return EXIT_OPEN_FAILURE
    except ConversionError as exc:
        print(f"{parser.prog}: {exc}", file=sys.stderr)
        return EXIT_USAGE


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
