"""Tests for the camera facade."""

import pytest
from PIL import Image

from photo_booth.capture import CallableSource, StillImageSource
from photo_booth.errors import FilmRollExhausted, SourceUnavailable, UnknownFilter
from photo_booth.models import AdjustmentParams
from photo_booth.pipeline import BoothSettings, CameraPipeline
from tests.conftest import CountingSource


def _pipeline(source, tmp_path, scheduler=None, **overrides) -> CameraPipeline:
    settings = BoothSettings(output_dir=tmp_path, seed=3, **overrides)
    return CameraPipeline(source, settings, scheduler=scheduler)


def test_take_photo_lands_in_gallery(gray_image, tmp_path) -> None:
    pipeline = _pipeline(StillImageSource(gray_image), tmp_path, roll_size=5)

    shot = pipeline.take_photo(AdjustmentParams(fade=20), "honeymoon")

    assert pipeline.gallery.latest is shot
    assert pipeline.gallery.shots_left == 4
    assert shot.filter_name == "Honeymoon"
    assert shot.encoded[:2] == b"\xff\xd8"


def test_failed_capture_leaves_gallery_untouched(tmp_path) -> None:
    pipeline = _pipeline(CallableSource(lambda: None), tmp_path, roll_size=5)

    with pytest.raises(SourceUnavailable):
        pipeline.take_photo()

    assert len(pipeline.gallery) == 0
    assert pipeline.gallery.shots_left == 5


def test_unknown_filter_is_rejected_before_shooting(tmp_path) -> None:
    source = CountingSource()
    pipeline = _pipeline(source, tmp_path)

    with pytest.raises(UnknownFilter):
        pipeline.take_photo(None, "kodachrome")

    assert source.frames == 0
    assert len(pipeline.gallery) == 0


def test_roll_runs_out(gray_image, tmp_path) -> None:
    pipeline = _pipeline(StillImageSource(gray_image), tmp_path, roll_size=1)
    pipeline.take_photo()

    with pytest.raises(FilmRollExhausted):
        pipeline.take_photo()

    assert len(pipeline.gallery) == 1


def test_preview_does_not_touch_gallery(gray_image, tmp_path) -> None:
    pipeline = _pipeline(StillImageSource(gray_image), tmp_path)

    preview = pipeline.preview(gray_image, AdjustmentParams(brightness=120))

    assert preview.getpixel((50, 50)) == (153, 153, 153)
    assert len(pipeline.gallery) == 0


def test_filters_list_the_catalog(gray_image, tmp_path) -> None:
    pipeline = _pipeline(StillImageSource(gray_image), tmp_path)

    ids = [effect.id for effect in pipeline.filters()]

    assert "cherry" in ids
    assert len(ids) == len(set(ids))


def test_photobooth_strip_is_exported(scheduler, tmp_path) -> None:
    pipeline = _pipeline(CountingSource(size=(64, 48)), tmp_path, scheduler)

    pipeline.start_photobooth(target_count=2, timer_seconds=1)
    scheduler.run_until_idle()
    strip = pipeline.photobooth_strip()
    path = pipeline.export_strip(strip)

    assert pipeline.booth.state == "complete"
    assert strip.placeholders == []
    assert path.parent == tmp_path
    assert path.name.startswith("photobooth-") and path.suffix == ".png"
    assert path.read_bytes()[:4] == b"\x89PNG"


def test_export_single_image(gray_image, tmp_path) -> None:
    pipeline = _pipeline(StillImageSource(gray_image), tmp_path)

    path = pipeline.export(gray_image, "jpeg")

    assert path.suffix == ".jpeg"
    assert path.name.startswith("vintage-camera-")
    assert path.read_bytes()[:2] == b"\xff\xd8"


def test_upload_is_scaled_to_editing_size(png_bytes, gray_image, tmp_path) -> None:
    pipeline = _pipeline(StillImageSource(gray_image), tmp_path)

    upload = pipeline.load_upload(png_bytes(size=(1600, 1200)))

    assert upload.size == (800, 600)


def test_export_framed_photo(gray_image, tmp_path) -> None:
    pipeline = _pipeline(StillImageSource(gray_image), tmp_path)

    path = pipeline.export_framed(gray_image, "polaroid")

    assert path.name.startswith("serelune-framed-photo-")
    with Image.open(path) as saved:
        assert saved.size == (140, 200)
