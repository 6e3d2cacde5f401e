"""Lays a photobooth session's captures out as one perforated vertical strip."""
from __future__ import annotations

import io
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Sequence, Tuple, Union

from PIL import Image, ImageDraw, ImageFont, ImageOps, UnidentifiedImageError

from configs.config import MAX_TARGET_COUNT, MIN_TARGET_COUNT, logger
from configs.strip_config import (
    BACKGROUND_COLOR,
    BORDER_WIDTH,
    CAPTION_TOP,
    CELL_ASPECT,
    DATE_FORMAT,
    DATE_TOP,
    FOOTER_HEIGHT,
    FOOTER_TEXT_HEIGHT,
    HEADER_HEIGHT,
    INK_COLOR,
    PERFORATION_COUNT,
    PERFORATION_INSET,
    PERFORATION_RADIUS,
    PHOTO_SPACING,
    PLACEHOLDER_FILL,
    PLACEHOLDER_OUTLINE,
    PLACEHOLDER_TEXT,
    STRIP_BRAND,
    STRIP_CAPTION,
    STRIP_MARGIN,
    STRIP_WIDTH,
)
from photo_booth.errors import DecodeFailure, InvalidInput
from photo_booth.export import encode, save
from photo_booth.models import CapturedImage

StripItem = Union[CapturedImage, Image.Image, bytes, None]
Box = Tuple[int, int, int, int]


@dataclass(frozen=True, slots=True)
class StripLayout:
    """Fixed strip geometry; only the height depends on the slot count."""

    width: int = STRIP_WIDTH
    margin: int = STRIP_MARGIN
    header_height: int = HEADER_HEIGHT
    footer_height: int = FOOTER_HEIGHT
    spacing: int = PHOTO_SPACING
    aspect: Tuple[int, int] = CELL_ASPECT
    perforation_count: int = PERFORATION_COUNT
    perforation_radius: int = PERFORATION_RADIUS
    perforation_inset: int = PERFORATION_INSET
    border_width: int = BORDER_WIDTH

    @property
    def cell_width(self) -> int:
        return self.width - 2 * self.margin

    @property
    def photo_height(self) -> int:
        aspect_w, aspect_h = self.aspect
        return int(round(self.cell_width * aspect_h / aspect_w))

    def height_for(self, target_count: int) -> int:
        return self.header_height + target_count * (self.photo_height + self.spacing) + self.footer_height

    def cell_box(self, index: int) -> Box:
        top = self.header_height + index * (self.photo_height + self.spacing)
        return self.margin, top, self.margin + self.cell_width, top + self.photo_height

    def perforation_centres(self, height: int) -> List[Tuple[int, int]]:
        step = height / self.perforation_count
        centres: List[Tuple[int, int]] = []
        for i in range(self.perforation_count):
            y = int(round(step * (i + 0.5)))
            centres.append((self.perforation_inset, y))
            centres.append((self.width - 1 - self.perforation_inset, y))
        return centres


@dataclass(slots=True)
class CompositeStrip:
    image: Image.Image
    layout: StripLayout
    target_count: int
    placeholders: List[int] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def size(self) -> Tuple[int, int]:
        return self.image.size

    def to_bytes(self) -> bytes:
        """PNG bytes; the strip is always stored losslessly."""
        return encode(self.image, "png")

    def save(self, path: str | Path) -> Path:
        return save(self.image, Path(path).with_suffix(".png"), "png")


def _loaded_rgb(image: Image.Image) -> Image.Image:
    try:
        return image.convert("RGB")
    except (UnidentifiedImageError, OSError) as exc:
        raise DecodeFailure(f"Cannot decode slot image: {exc}") from exc


def decode_item(item: StripItem) -> Image.Image:
    """Return an RGB copy of one slot's image, raising ``DecodeFailure``.

    Lazily opened images are only read here, so truncated files surface now.
    """
    if isinstance(item, Image.Image):
        return _loaded_rgb(item)
    data: bytes | None
    if isinstance(item, CapturedImage):
        if item.image is not None:
            return _loaded_rgb(item.image)
        data = item.encoded
    else:
        data = item
    if not data:
        raise DecodeFailure("Slot has no image data")
    try:
        with Image.open(io.BytesIO(data)) as raw:
            return raw.convert("RGB")
    except (UnidentifiedImageError, OSError) as exc:
        raise DecodeFailure(f"Cannot decode slot image: {exc}") from exc


def _text_size(draw: ImageDraw.ImageDraw, text: str, font) -> Tuple[int, int]:
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    return right - left, bottom - top


class StripComposer:
    def __init__(
        self,
        layout: StripLayout | None = None,
        *,
        caption: str = STRIP_CAPTION,
        brand: str = STRIP_BRAND,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.layout = layout or StripLayout()
        self.caption = caption
        self.brand = brand
        self._clock = clock
        self._font = ImageFont.load_default()

    def compose(self, images: Sequence[StripItem], target_count: int) -> CompositeStrip:
        if not MIN_TARGET_COUNT <= target_count <= MAX_TARGET_COUNT:
            raise InvalidInput(
                f"target_count must be within {MIN_TARGET_COUNT}..{MAX_TARGET_COUNT}, got {target_count}"
            )
        if len(images) > target_count:
            raise InvalidInput(f"{len(images)} images supplied for {target_count} slots")

        layout = self.layout
        height = layout.height_for(target_count)
        canvas = Image.new("RGB", (layout.width, height), BACKGROUND_COLOR)
        draw = ImageDraw.Draw(canvas)

        result = CompositeStrip(image=canvas, layout=layout, target_count=target_count)
        decoded = self._decode_all(images, result.warnings)
        try:
            for index in range(target_count):
                frame = decoded[index] if index < len(decoded) else None
                if frame is None:
                    self._draw_placeholder(draw, index)
                    result.placeholders.append(index)
                else:
                    self._draw_photo(canvas, frame, index)
        finally:
            for frame in decoded:
                if frame is not None:
                    frame.close()

        self._draw_frame(draw, height, self._capture_date(images))
        logger.info(
            "Composed %dx%d strip: %d photos, %d placeholders",
            layout.width,
            height,
            target_count - len(result.placeholders),
            len(result.placeholders),
        )
        return result

    def _decode_all(self, images: Sequence[StripItem], warnings: List[str]) -> List[Image.Image | None]:
        # results go into a pre-sized list so slot order never depends on completion order
        decoded: List[Image.Image | None] = [None] * len(images)
        with ThreadPoolExecutor(max_workers=1) as executor:
            futures = {
                executor.submit(decode_item, item): idx
                for idx, item in enumerate(images)
                if item is not None
            }
            for future in as_completed(futures):
                idx = futures[future]
                try:
                    decoded[idx] = future.result()
                except DecodeFailure as exc:
                    message = f"Photo {idx + 1}: {exc}"
                    warnings.append(message)
                    logger.warning("Strip slot fallback to placeholder. %s", message)
        return decoded

    def _capture_date(self, images: Sequence[StripItem]) -> datetime:
        for item in images:
            if isinstance(item, CapturedImage):
                return item.timestamp
        return self._clock()

    def _draw_photo(self, canvas: Image.Image, frame: Image.Image, index: int) -> None:
        x0, y0, x1, y1 = self.layout.cell_box(index)
        fitted = ImageOps.fit(
            frame,
            (x1 - x0, y1 - y0),
            method=Image.Resampling.LANCZOS,
            centering=(0.5, 0.5),
        )
        canvas.paste(fitted, (x0, y0))

    def _draw_placeholder(self, draw: ImageDraw.ImageDraw, index: int) -> None:
        x0, y0, x1, y1 = self.layout.cell_box(index)
        draw.rectangle((x0, y0, x1 - 1, y1 - 1), fill=PLACEHOLDER_FILL, outline=PLACEHOLDER_OUTLINE)
        label = f"Photo {index + 1}"
        tw, th = _text_size(draw, label, self._font)
        draw.text(
            ((x0 + x1 - tw) // 2, (y0 + y1 - th) // 2),
            label,
            fill=PLACEHOLDER_TEXT,
            font=self._font,
        )

    def _draw_centered(self, draw: ImageDraw.ImageDraw, text: str, top: int) -> None:
        tw, _ = _text_size(draw, text, self._font)
        draw.text(((self.layout.width - tw) // 2, top), text, fill=INK_COLOR, font=self._font)

    def _draw_frame(self, draw: ImageDraw.ImageDraw, height: int, when: datetime) -> None:
        layout = self.layout
        bw = layout.border_width
        if bw > 0:
            draw.rectangle((0, 0, layout.width - 1, height - 1), outline=INK_COLOR, width=bw)

        self._draw_centered(draw, self.caption, CAPTION_TOP)
        self._draw_centered(draw, when.strftime(DATE_FORMAT), DATE_TOP)
        footer_top = height - layout.footer_height
        brand_top = footer_top + (layout.footer_height - FOOTER_TEXT_HEIGHT) // 2
        self._draw_centered(draw, self.brand, brand_top)

        r = layout.perforation_radius
        for cx, cy in layout.perforation_centres(height):
            draw.ellipse((cx - r, cy - r, cx + r, cy + r), fill=INK_COLOR)


__all__ = ["StripLayout", "CompositeStrip", "StripComposer", "decode_item"]
