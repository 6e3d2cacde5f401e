"""Tests for encoding and saving finished images."""

import io
from datetime import datetime

import pytest
from PIL import Image

from photo_booth.errors import InvalidInput
from photo_booth.export import encode, export_filename, resolve_format, save


@pytest.mark.parametrize(
    "fmt, magic",
    [("jpeg", b"\xff\xd8"), ("jpg", b"\xff\xd8"), ("png", b"\x89PNG"), ("webp", b"RIFF")],
)
def test_encode_signatures(gray_image, fmt, magic) -> None:
    assert encode(gray_image, fmt)[: len(magic)] == magic


def test_png_is_lossless(noisy_image) -> None:
    with Image.open(io.BytesIO(encode(noisy_image, "png"))) as decoded:
        assert list(decoded.convert("RGB").getdata()) == list(noisy_image.getdata())


def test_jpeg_flattens_transparency_onto_white() -> None:
    image = Image.new("RGBA", (16, 16), (0, 0, 0, 0))

    with Image.open(io.BytesIO(encode(image, "jpeg"))) as decoded:
        assert decoded.mode == "RGB"
        r, g, b = decoded.getpixel((8, 8))
        assert min(r, g, b) >= 250


def test_lower_quality_gives_smaller_jpeg(noisy_image) -> None:
    assert len(encode(noisy_image, "jpeg", 20)) < len(encode(noisy_image, "jpeg", 95))


def test_unknown_format_is_rejected(gray_image) -> None:
    with pytest.raises(InvalidInput):
        encode(gray_image, "gif")


def test_format_names_are_normalised() -> None:
    assert resolve_format(" .PNG ").name == "png"
    assert resolve_format(None).name == "png"


def test_export_filename_uses_date_and_extension() -> None:
    when = datetime(2026, 2, 14, 18, 0)

    assert export_filename("vintage-camera", "jpeg", when) == "vintage-camera-2026-02-14.jpeg"
    assert export_filename("photobooth", "png", when) == "photobooth-2026-02-14.png"


def test_save_infers_format_from_suffix(gray_image, tmp_path) -> None:
    path = save(gray_image, tmp_path / "nested" / "shot.webp")

    assert path.exists()
    assert path.read_bytes()[:4] == b"RIFF"
