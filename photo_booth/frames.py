"""Decorative borders added around a finished photo before export."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Tuple

from PIL import Image, ImageDraw, ImageFont, ImageOps

from configs.config import logger
from configs.frames_config import (
    FRAME_ACCENT,
    FRAME_CAPTION_COLOR,
    FRAME_CAPTION_FORMAT,
    FRAME_ORNAMENT,
    FRAME_RINGS,
    PHOTO_FRAMES,
    SPROCKET_COUNT,
    SPROCKET_FILL,
    SPROCKET_OUTLINE,
    SPROCKET_SIZE,
    TAPE_COLORS,
    TAPE_SIZE,
    UPLOAD_MAX_SIZE,
)
from photo_booth.errors import InvalidInput

Box = Tuple[int, int, int, int]


@dataclass(frozen=True, slots=True)
class PhotoFrame:
    id: str
    name: str
    border: Box  # left, top, right, bottom
    color: Tuple[int, int, int]
    decoration: str = "none"

    def outer_size(self, size: Tuple[int, int]) -> Tuple[int, int]:
        left, top, right, bottom = self.border
        return size[0] + left + right, size[1] + top + bottom


FRAMES: Dict[str, PhotoFrame] = {
    fid: PhotoFrame(fid, name, border, color, decoration)
    for fid, name, border, color, decoration in PHOTO_FRAMES
}


def get_frame(frame_id: str) -> PhotoFrame:
    try:
        return FRAMES[frame_id]
    except KeyError:
        raise InvalidInput(f"Unknown frame: {frame_id!r}") from None


def fit_upload(image: Image.Image, max_size: Tuple[int, int] = UPLOAD_MAX_SIZE) -> Image.Image:
    """Scale ``image`` to fit ``max_size`` keeping its aspect ratio."""
    if image.width <= 0 or image.height <= 0:
        raise InvalidInput("Cannot resize an empty image")
    if image.size == tuple(max_size):
        return image.copy()
    return ImageOps.contain(image, max_size, method=Image.Resampling.LANCZOS)


def _photo_box(frame: PhotoFrame, size: Tuple[int, int]) -> Box:
    left, top, _, _ = frame.border
    return left, top, left + size[0], top + size[1]


def _draw_rings(draw: ImageDraw.ImageDraw, frame: PhotoFrame, photo: Box) -> None:
    x0, y0, x1, y1 = photo
    offset = 0
    for width, color in FRAME_RINGS.get(frame.id, []):
        for step in range(width):
            pad = offset + step + 1
            draw.rectangle((x0 - pad, y0 - pad, x1 - 1 + pad, y1 - 1 + pad), outline=color)
        offset += width


def _draw_sprockets(draw: ImageDraw.ImageDraw, frame: PhotoFrame, canvas: Image.Image, photo: Box) -> None:
    left, _, right, _ = frame.border
    hole_w, hole_h = SPROCKET_SIZE
    step = canvas.height / SPROCKET_COUNT
    for i in range(SPROCKET_COUNT):
        cy = int(step * (i + 0.5))
        for cx in (left // 2, canvas.width - right // 2):
            draw.rectangle(
                (cx - hole_w // 2, cy - hole_h // 2, cx + hole_w // 2 - 1, cy + hole_h // 2 - 1),
                fill=SPROCKET_FILL,
                outline=SPROCKET_OUTLINE,
            )


def _draw_corner_brackets(draw: ImageDraw.ImageDraw, frame: PhotoFrame, canvas: Image.Image, photo: Box) -> None:
    arm, inset, w, h = 16, 4, canvas.width - 1, canvas.height - 1
    for cx, cy, dx, dy in ((inset, inset, 1, 1), (w - inset, inset, -1, 1),
                           (inset, h - inset, 1, -1), (w - inset, h - inset, -1, -1)):
        draw.line((cx, cy, cx + dx * arm, cy), fill=FRAME_ACCENT, width=2)
        draw.line((cx, cy, cx, cy + dy * arm), fill=FRAME_ACCENT, width=2)


def _draw_ornaments(draw: ImageDraw.ImageDraw, frame: PhotoFrame, canvas: Image.Image, photo: Box) -> None:
    mid_x, mid_y = canvas.width // 2, canvas.height // 2
    long_side, short_side = 32, 8
    edge = 8
    bars = [
        (mid_x - long_side // 2, edge, mid_x + long_side // 2, edge + short_side),
        (mid_x - long_side // 2, canvas.height - edge - short_side, mid_x + long_side // 2, canvas.height - edge),
        (edge, mid_y - long_side // 2, edge + short_side, mid_y + long_side // 2),
        (canvas.width - edge - short_side, mid_y - long_side // 2, canvas.width - edge, mid_y + long_side // 2),
    ]
    for bar in bars:
        draw.rounded_rectangle(bar, radius=short_side // 2, fill=FRAME_ORNAMENT)


def _draw_tape(draw: ImageDraw.ImageDraw, frame: PhotoFrame, canvas: Image.Image, photo: Box) -> None:
    w, h, s = canvas.width, canvas.height, TAPE_SIZE
    corners = [(0, 0), (w - s, 0), (0, h - s), (w - s, h - s)]
    for (x, y), color in zip(corners, TAPE_COLORS):
        draw.rectangle((x, y, x + s - 1, y + s - 1), fill=color)


def _draw_date_caption(draw: ImageDraw.ImageDraw, frame: PhotoFrame, canvas: Image.Image, photo: Box,
                       when: datetime | None = None) -> None:
    text = (when or datetime.now()).strftime(FRAME_CAPTION_FORMAT)
    font = ImageFont.load_default()
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    band_top = photo[3]
    x = (canvas.width - (right - left)) // 2
    y = band_top + (canvas.height - band_top - (bottom - top)) // 2
    draw.text((x, y), text, fill=FRAME_CAPTION_COLOR, font=font)


_DECORATIONS: Dict[str, Callable] = {
    "sprockets": _draw_sprockets,
    "corner-brackets": _draw_corner_brackets,
    "ornaments": _draw_ornaments,
    "tape": _draw_tape,
}


def apply_frame(image: Image.Image, frame_id: str, when: datetime | None = None) -> Image.Image:
    """Return a new RGB image with ``image`` inside the named frame."""
    frame = get_frame(frame_id)
    photo = image.convert("RGB") if image.mode != "RGB" else image
    canvas = ImageOps.expand(photo, border=frame.border, fill=frame.color)
    draw = ImageDraw.Draw(canvas)
    box = _photo_box(frame, photo.size)

    _draw_rings(draw, frame, box)
    if frame.decoration == "date-caption":
        _draw_date_caption(draw, frame, canvas, box, when)
    elif frame.decoration in _DECORATIONS:
        _DECORATIONS[frame.decoration](draw, frame, canvas, box)

    logger.debug("Framed %sx%s photo with %s", photo.width, photo.height, frame.id)
    return canvas


def frame_ids() -> List[str]:
    return list(FRAMES)


__all__ = ["PhotoFrame", "FRAMES", "get_frame", "frame_ids", "fit_upload", "apply_frame"]
