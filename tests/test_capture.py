"""Tests for capture sources and single-shot capture."""

from datetime import datetime

import pytest
from PIL import Image

from photo_booth.capture import (
    CallableSource,
    SequenceSource,
    SingleShotCapture,
    StillImageSource,
)
from photo_booth.errors import InvalidInput, SourceUnavailable
from photo_booth.models import AdjustmentParams


def test_capture_stamps_time_id_and_filter(seeded_compositor, gray_image) -> None:
    when = datetime(2026, 3, 1, 12, 30, 0)
    capture = SingleShotCapture(seeded_compositor, encode_format="jpeg", quality=90, clock=lambda: when)

    shot = capture.capture(StillImageSource(gray_image), AdjustmentParams(brightness=120), "cherry")

    assert shot.id.startswith(f"photo-{int(when.timestamp() * 1000)}-")
    assert shot.timestamp == when
    assert shot.filter_name == "Cherry"
    assert shot.adjustments.brightness == 120
    assert shot.image.size == (100, 100)
    assert shot.encoded[:2] == b"\xff\xd8"


def test_capture_ids_are_unique_within_one_instant(quick_capture, gray_image) -> None:
    source = StillImageSource(gray_image)

    ids = {quick_capture.capture(source).id for _ in range(5)}

    assert len(ids) == 5


def test_capture_without_filter(quick_capture, gray_image) -> None:
    shot = quick_capture.capture(StillImageSource(gray_image), None, None)

    assert shot.filter_name is None
    assert shot.encoded is None
    assert shot.adjustments.is_neutral
    assert shot.image.getpixel((0, 0)) == (128, 128, 128)


def test_unavailable_source_is_reported(quick_capture) -> None:
    source = CallableSource(lambda: None)

    with pytest.raises(SourceUnavailable):
        quick_capture.capture(source)


def test_callable_source_wraps_device_errors() -> None:
    def broken():
        raise IOError("usb disconnected")

    with pytest.raises(SourceUnavailable, match="usb disconnected"):
        CallableSource(broken).get_frame()


def test_still_source_from_bytes(png_bytes) -> None:
    source = StillImageSource(png_bytes(color=(1, 2, 3)))

    frame = source.get_frame()

    assert frame.getpixel((0, 0)) == (1, 2, 3)
    assert source.get_frame() is not frame


def test_still_source_rejects_garbage() -> None:
    with pytest.raises(SourceUnavailable):
        StillImageSource(b"definitely not an image")


def test_sequence_source_cycles(tmp_path) -> None:
    paths = []
    for idx, color in enumerate([(255, 0, 0), (0, 255, 0)]):
        path = tmp_path / f"frame{idx}.png"
        Image.new("RGB", (8, 8), color).save(path)
        paths.append(path)

    source = SequenceSource(paths)
    colors = [source.get_frame().getpixel((0, 0)) for _ in range(3)]

    assert colors == [(255, 0, 0), (0, 255, 0), (255, 0, 0)]


def test_sequence_source_needs_images() -> None:
    with pytest.raises(InvalidInput):
        SequenceSource([])


def test_sequence_source_missing_file(tmp_path) -> None:
    with pytest.raises(SourceUnavailable):
        SequenceSource([tmp_path / "missing.png"]).get_frame()
