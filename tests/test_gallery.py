"""Tests for the in-memory gallery."""

from datetime import datetime

import pytest

from photo_booth.errors import FilmRollExhausted
from photo_booth.gallery import Gallery
from photo_booth.models import CapturedImage


def _shot(idx: int) -> CapturedImage:
    return CapturedImage(id=f"photo-{idx}", image=None, timestamp=datetime(2026, 1, 1, 0, 0, idx))


def test_gallery_is_newest_first() -> None:
    gallery = Gallery(roll_size=5)
    for idx in range(3):
        gallery.add(_shot(idx))

    assert [item.id for item in gallery] == ["photo-2", "photo-1", "photo-0"]
    assert gallery.latest.id == "photo-2"
    assert len(gallery) == 3
    assert gallery.shots_left == 2


def test_remove_and_get() -> None:
    gallery = Gallery(roll_size=5)
    gallery.add(_shot(1))
    gallery.add(_shot(2))

    removed = gallery.remove("photo-1")

    assert removed.id == "photo-1"
    assert gallery.get("photo-1") is None
    assert gallery.get("photo-2").id == "photo-2"
    with pytest.raises(KeyError):
        gallery.remove("photo-1")


def test_film_roll_runs_out() -> None:
    gallery = Gallery(roll_size=2)
    gallery.add(_shot(1))
    gallery.add(_shot(2))

    with pytest.raises(FilmRollExhausted):
        gallery.add(_shot(3))

    assert len(gallery) == 2
    assert gallery.shots_left == 0

    gallery.reload()
    gallery.add(_shot(3))
    assert gallery.shots_left == 1


def test_clear_keeps_shot_counter() -> None:
    gallery = Gallery(roll_size=3)
    gallery.add(_shot(1))

    gallery.clear()

    assert len(gallery) == 0
    assert gallery.latest is None
    assert gallery.shots_left == 2
