"""Frame sources and the single-shot capture operation."""
from __future__ import annotations

import io
import itertools
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Protocol, Sequence

from PIL import Image, ImageOps, UnidentifiedImageError

from configs.config import CAPTURE_FORMAT, CAPTURE_QUALITY, logger
from photo_booth.compositor import Compositor
from photo_booth.errors import InvalidInput, SourceUnavailable
from photo_booth.export import encode
from photo_booth.models import AdjustmentParams, CapturedImage, FilterEffect

_SEQUENCE = itertools.count(1)


class CaptureSource(Protocol):
    def get_frame(self) -> Image.Image:
        """Return the current frame or raise ``SourceUnavailable``."""
        ...


def _decode(data: bytes | str | Path) -> Image.Image:
    """Open an uploaded photo fully into memory, honouring EXIF orientation."""
    try:
        if isinstance(data, (bytes, bytearray)):
            handle = Image.open(io.BytesIO(data))
        else:
            handle = Image.open(data)
        with handle as raw:
            img = ImageOps.exif_transpose(raw)
            if img is raw:
                img = raw.copy()
            img.load()
            return img
    except (UnidentifiedImageError, OSError) as exc:
        raise SourceUnavailable(f"Cannot read image: {exc}") from exc


class StillImageSource:
    """A loaded photo (path or bytes) standing in for the live camera."""

    def __init__(self, data: bytes | str | Path | Image.Image) -> None:
        if isinstance(data, Image.Image):
            self._frame = data.copy()
        else:
            self._frame = _decode(data)

    def get_frame(self) -> Image.Image:
        return self._frame.copy()


class CallableSource:
    """Wraps a frame function such as a camera grab; ``None`` means not ready."""

    def __init__(self, grab: Callable[[], Image.Image | None]) -> None:
        self._grab = grab

    def get_frame(self) -> Image.Image:
        try:
            frame = self._grab()
        except SourceUnavailable:
            raise
        except Exception as exc:
            raise SourceUnavailable(f"Frame grab failed: {exc}") from exc
        if frame is None:
            raise SourceUnavailable("Camera is not ready")
        return frame


class SequenceSource:
    """Cycles through a fixed list of image files, one per frame request."""

    def __init__(self, paths: Sequence[str | Path]) -> None:
        if not paths:
            raise InvalidInput("SequenceSource needs at least one image")
        self._paths: List[Path] = [Path(p) for p in paths]
        self._cursor = itertools.cycle(self._paths)

    def get_frame(self) -> Image.Image:
        return _decode(next(self._cursor))


def new_capture_id(when: datetime) -> str:
    return f"photo-{int(when.timestamp() * 1000)}-{next(_SEQUENCE)}"


class SingleShotCapture:
    """Pull one frame, composite it and stamp it with a time and an id."""

    def __init__(
        self,
        compositor: Compositor | None = None,
        *,
        encode_format: str | None = CAPTURE_FORMAT,
        quality: int = CAPTURE_QUALITY,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.compositor = compositor or Compositor()
        self.encode_format = encode_format
        self.quality = quality
        self._clock = clock

    def capture(
        self,
        source: CaptureSource,
        params: AdjustmentParams | None = None,
        filter_effect: FilterEffect | str | None = None,
    ) -> CapturedImage:
        params = params or AdjustmentParams()
        effect = (
            self.compositor.resolve(filter_effect) if isinstance(filter_effect, str) else filter_effect
        )
        try:
            frame = source.get_frame()
        except SourceUnavailable as exc:
            logger.error("Capture failed: %s", exc)
            raise
        if frame is None:
            logger.error("Capture failed: source returned no frame")
            raise SourceUnavailable("Source returned no frame")

        output = self.compositor.compose(frame, params, effect)

        when = self._clock()
        encoded = encode(output, self.encode_format, self.quality) if self.encode_format else None
        record = CapturedImage(
            id=new_capture_id(when),
            image=output,
            timestamp=when,
            filter_name=effect.name if effect else None,
            adjustments=params,
            encoded=encoded,
        )
        logger.info("Captured %s (%sx%s, filter=%s)", record.id, *output.size, record.filter_name or "none")
        return record


__all__ = [
    "CaptureSource",
    "StillImageSource",
    "CallableSource",
    "SequenceSource",
    "SingleShotCapture",
    "new_capture_id",
]
