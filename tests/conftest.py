"""Shared test fixtures."""

import io
from dataclasses import dataclass, field
from typing import List

import numpy as np
import pytest
from PIL import Image

from photo_booth.capture import SingleShotCapture
from photo_booth.compositor import Compositor
from photo_booth.errors import SourceUnavailable
from photo_booth.timer import ManualScheduler


@dataclass
class CountingSource:
    """Returns a solid frame whose red channel encodes the frame number."""

    size: tuple = (40, 30)
    frames: int = 0
    fail_on: set = field(default_factory=set)

    def get_frame(self) -> Image.Image:
        self.frames += 1
        if self.frames in self.fail_on:
            raise SourceUnavailable("device not ready")
        return Image.new("RGB", self.size, (self.frames * 20, 100, 100))


@dataclass
class RecordingListener:
    countdowns: List[int] = field(default_factory=list)
    captured: List[str] = field(default_factory=list)
    completed: List[list] = field(default_factory=list)
    cancelled: List[object] = field(default_factory=list)


@pytest.fixture
def gray_image() -> Image.Image:
    return Image.new("RGB", (100, 100), (128, 128, 128))


@pytest.fixture
def noisy_image() -> Image.Image:
    rng = np.random.default_rng(7)
    arr = rng.integers(0, 256, size=(48, 64, 3), dtype=np.uint8)
    return Image.fromarray(arr)


@pytest.fixture
def png_bytes():
    def _make(color=(10, 200, 30), size=(64, 48)) -> bytes:
        buf = io.BytesIO()
        Image.new("RGB", size, color).save(buf, format="PNG")
        return buf.getvalue()

    return _make


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def seeded_compositor() -> Compositor:
    return Compositor(rng=np.random.default_rng(1234))


@pytest.fixture
def quick_capture(seeded_compositor) -> SingleShotCapture:
    """Capture without encoding, to keep tests fast."""
    return SingleShotCapture(seeded_compositor, encode_format=None)
