"""High-level wiring of the camera: single shots, gallery, photobooth and export."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

import numpy as np
from PIL import Image

from configs.config import (
    BOOTH_TARGET_COUNT,
    BOOTH_TIMER_SECONDS,
    CAPTURE_FORMAT,
    CAPTURE_QUALITY,
    FILM_ROLL_SIZE,
    OUTPUT_DIR,
    logger,
)
from photo_booth.capture import CaptureSource, SingleShotCapture, StillImageSource
from photo_booth.compositor import Compositor
from photo_booth.errors import FilmRollExhausted
from photo_booth.export import export_filename, save
from photo_booth.filters import CATALOG, FilterCatalog
from photo_booth.frames import apply_frame, fit_upload
from photo_booth.gallery import Gallery
from photo_booth.models import AdjustmentParams, CapturedImage, FilterEffect
from photo_booth.session import BoothListeners, Photobooth
from photo_booth.strip import CompositeStrip, StripComposer
from photo_booth.timer import Scheduler


@dataclass(frozen=True, slots=True)
class BoothSettings:
    """Configuration container for the camera pipeline."""

    output_dir: Path = OUTPUT_DIR
    target_count: int = BOOTH_TARGET_COUNT
    timer_seconds: int = BOOTH_TIMER_SECONDS
    roll_size: int = FILM_ROLL_SIZE
    capture_format: str = CAPTURE_FORMAT
    capture_quality: int = CAPTURE_QUALITY
    seed: int | None = None


class CameraPipeline:
    """Camera facade: the UI hands in parameters and gets images back."""

    def __init__(
        self,
        source: CaptureSource,
        settings: BoothSettings | None = None,
        *,
        catalog: FilterCatalog | None = None,
        scheduler: Scheduler | None = None,
        listeners: BoothListeners | None = None,
    ) -> None:
        self._settings = settings or BoothSettings()
        self.catalog = catalog or CATALOG
        self.compositor = Compositor(self.catalog, np.random.default_rng(self._settings.seed))
        self.capture = SingleShotCapture(
            self.compositor,
            encode_format=self._settings.capture_format,
            quality=self._settings.capture_quality,
        )
        self.gallery = Gallery(self._settings.roll_size)
        self.booth = Photobooth(
            source,
            self.capture,
            scheduler=scheduler,
            composer=StripComposer(),
            listeners=listeners,
        )

    @property
    def settings(self) -> BoothSettings:
        return self._settings

    def filters(self) -> List[FilterEffect]:
        return self.catalog.all()

    def load_upload(self, data: bytes | str | Path) -> Image.Image:
        """Decode an uploaded photo and scale it to the editing size."""
        return fit_upload(StillImageSource(data).get_frame())

    def preview(self, image: Image.Image, params: AdjustmentParams, filter_id: str | None = None) -> Image.Image:
        """Recompose an already loaded image whenever the sliders change."""
        return self.compositor.compose(image, params, filter_id)

    def take_photo(self, params: AdjustmentParams | None = None, filter_id: str | None = None) -> CapturedImage:
        """Manual shutter: capture, then store in the gallery.

        The gallery is only touched once the capture succeeded.
        """
        if self.gallery.shots_left <= 0:
            raise FilmRollExhausted(f"All {self.gallery.roll_size} shots used; reload the roll")
        shot = self.booth.shutter(params, filter_id)
        return self.gallery.add(shot)

    def start_photobooth(
        self,
        params: AdjustmentParams | None = None,
        filter_id: str | None = None,
        target_count: int | None = None,
        timer_seconds: int | None = None,
    ) -> None:
        self.booth.start(
            target_count or self._settings.target_count,
            timer_seconds or self._settings.timer_seconds,
            params,
            filter_id,
        )

    def photobooth_strip(self) -> CompositeStrip:
        return self.booth.strip()

    def export(self, image: Image.Image, fmt: str = "png", prefix: str = "vintage-camera",
               quality: int | None = None) -> Path:
        path = self._settings.output_dir / export_filename(prefix, fmt)
        saved = save(image, path, fmt, quality)
        logger.info("Saved %s", saved)
        return saved

    def export_framed(self, image: Image.Image, frame_id: str, fmt: str = "png",
                      prefix: str = "serelune-framed-photo") -> Path:
        return self.export(apply_frame(image, frame_id), fmt, prefix)

    def export_strip(self, strip: CompositeStrip, prefix: str = "photobooth") -> Path:
        path = self._settings.output_dir / export_filename(prefix, "png")
        saved = strip.save(path)
        logger.info("Saved strip %s", saved)
        return saved


__all__ = ["BoothSettings", "CameraPipeline"]
