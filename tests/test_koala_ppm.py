import hashlib
import io
import sys
import warnings
from pathlib import Path

import pytest
from PIL import Image

sys.path.append(str(Path(__file__).resolve().parents[1] / "c64koala2ppm/src"))

from c64koala2ppm.converter import (
    ConversionError,
    ConvertOptions,
    InputOpenError,
    convert_koala_file_to_ppm,
    convert_koala_to_image,
    convert_koala_to_ppm,
    convert_koala_to_raster,
)
from c64koala2ppm.koala import KoalaTruncatedWarning
from c64koala2ppm.palette import build_palette
from c64koala2ppm.ppm import PPM_HEADER, encode_ppm, ppm_header, write_ppm
from c64koala2ppm.render import Raster


def _make_koala_bytes() -> bytes:
    """A sample with a different card pattern per card row."""

    bitmap = bytearray()
    for cy in range(25):
        for _cx in range(40):
            bitmap += bytes([(0x1B if cy % 2 else 0xE4)] * 8)
    video = bytes((cy * 40 + cx) % 256 for cy in range(25) for cx in range(40))
    color = bytes([0x0E]) * 1000
    return bytes([0x00, 0x60]) + bytes(bitmap) + video + color + bytes([0x06])


def test_header_bytes():
    assert PPM_HEADER == b"P6\n160 200\n255\n"
    assert len(PPM_HEADER) == 15
    assert ppm_header(4, 2) == b"P6\n4 2\n255\n"


def test_encode_small_raster():
    raster = Raster(2, 1, [(1, 2, 3), (250, 251, 252)])

    assert encode_ppm(raster) == b"P6\n2 1\n255\n" + bytes([1, 2, 3, 250, 251, 252])


def test_encode_rejects_incomplete_raster():
    with pytest.raises(ValueError):
        encode_ppm(Raster(2, 2, [(0, 0, 0)]))


def test_write_ppm_returns_size():
    raster = convert_koala_to_raster(_make_koala_bytes())
    stream = io.BytesIO()

    written = write_ppm(raster, stream)

    assert written == 96015
    assert stream.getvalue() == encode_ppm(raster)


def test_reference_sample_output():
    ppm = convert_koala_to_ppm(_make_koala_bytes(), ConvertOptions(saturation=1.0))

    assert len(ppm) == 96015
    assert ppm[:15] == b"P6\n160 200\n255\n"


@pytest.mark.parametrize(
    "saturation, digest",
    [
        (1.0, "c2088c43b0bcb6d8299fc6653b8ee668c9db166e46e1af11284642a566652d59"),
        (0.7, "8fd6f21b4192a1b54f8d8e9568d71792d7fc001f9365adfdea5935564ccc3fa5"),
        (0.0, "b6eb7989417f016d7f26616812d4c4e5e069a18786fdd138678537982fa0e3e6"),
    ],
)
def test_reference_sample_digest(saturation, digest):
    ppm = convert_koala_to_ppm(_make_koala_bytes(), ConvertOptions(saturation=saturation))

    assert hashlib.sha256(ppm).hexdigest() == digest


def test_output_is_readable_pixmap():
    palette = build_palette(1.0)

    with Image.open(io.BytesIO(convert_koala_to_ppm(_make_koala_bytes()))) as img:
        assert img.format == "PPM"
        assert img.size == (160, 200)
        # card row 0 is 0xE4: color RAM (14) is leftmost, background (6) rightmost
        assert img.getpixel((0, 0)) == palette[14]
        assert img.getpixel((3, 0)) == palette[6]
        # card row 1 is 0x1B: background leftmost
        assert img.getpixel((0, 8)) == palette[6]
        assert img.getpixel((3, 8)) == palette[14]


def test_convert_to_image_matches_ppm():
    data = _make_koala_bytes()

    preview = convert_koala_to_image(data)

    with Image.open(io.BytesIO(convert_koala_to_ppm(data))) as img:
        assert list(preview.getdata()) == list(img.convert("RGB").getdata())


def test_zero_saturation_output_is_grey():
    ppm = convert_koala_to_ppm(_make_koala_bytes(), ConvertOptions(saturation=0.0))
    payload = ppm[15:]

    for offset in range(0, len(payload), 3 * 97):
        r, g, b = payload[offset : offset + 3]
        assert r == g == b


def test_truncated_input_still_produces_full_output():
    with pytest.warns(KoalaTruncatedWarning):
        ppm = convert_koala_to_ppm(b"\x00\x60")

    assert len(ppm) == 96015


def test_negative_saturation_is_conversion_error():
    with pytest.raises(ConversionError, match="saturation must be >= 0"):
        convert_koala_to_ppm(_make_koala_bytes(), ConvertOptions(saturation=-1.0))


def test_infinite_saturation_is_conversion_error():
    with pytest.raises(ConversionError):
        convert_koala_to_ppm(_make_koala_bytes(), ConvertOptions(saturation=float("inf")))


def test_convert_file(tmp_path):
    path = tmp_path / "sample.koa"
    path.write_bytes(_make_koala_bytes())

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        ppm = convert_koala_file_to_ppm(path)

    assert ppm == convert_koala_to_ppm(_make_koala_bytes())


def test_convert_missing_file(tmp_path):
    with pytest.raises(InputOpenError, match="could not open"):
        convert_koala_file_to_ppm(tmp_path / "missing.koa")
