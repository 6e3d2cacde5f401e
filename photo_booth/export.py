"""Encoding finished images for the save/display sink."""
from __future__ import annotations

import io
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from PIL import Image

from photo_booth.errors import InvalidInput


@dataclass(frozen=True, slots=True)
class ExportFormat:
    name: str
    pil_format: str
    extension: str
    lossless: bool
    default_quality: int | None = None


EXPORT_FORMATS: dict[str, ExportFormat] = {
    "jpeg": ExportFormat("jpeg", "JPEG", ".jpeg", False, 92),
    "jpg": ExportFormat("jpg", "JPEG", ".jpg", False, 92),
    "png": ExportFormat("png", "PNG", ".png", True),
    "webp": ExportFormat("webp", "WEBP", ".webp", False, 90),
}


def resolve_format(fmt: str | None) -> ExportFormat:
    key = (fmt or "png").strip().lower().lstrip(".")
    try:
        return EXPORT_FORMATS[key]
    except KeyError:
        raise InvalidInput(f"Unsupported export format: {fmt}") from None


def _flatten(image: Image.Image, background=(255, 255, 255)) -> Image.Image:
    if image.mode == "RGB":
        return image
    if image.mode in ("RGBA", "LA") or "transparency" in image.info:
        rgba = image.convert("RGBA")
        canvas = Image.new("RGB", rgba.size, background)
        canvas.paste(rgba, mask=rgba.getchannel("A"))
        return canvas
    return image.convert("RGB")


def encode(image: Image.Image, fmt: str | None = "png", quality: int | None = None) -> bytes:
    """Return ``image`` encoded as ``fmt``; ``quality`` (1-100) applies to lossy formats."""
    profile = resolve_format(fmt)
    buf = io.BytesIO()
    if profile.lossless:
        out = image if image.mode in ("RGB", "RGBA", "L", "LA") else image.convert("RGBA")
        out.save(buf, format=profile.pil_format, optimize=True)
        return buf.getvalue()

    q = profile.default_quality if quality is None else max(1, min(100, int(quality)))
    params = {"format": profile.pil_format, "quality": q}
    if profile.pil_format == "JPEG":
        params["optimize"] = True
        out = _flatten(image)
    else:
        out = image if image.mode in ("RGB", "RGBA") else image.convert("RGB")
    icc_profile = image.info.get("icc_profile")
    if icc_profile:
        params["icc_profile"] = icc_profile
    out.save(buf, **params)
    return buf.getvalue()


def save(image: Image.Image, path: str | Path, fmt: str | None = None, quality: int | None = None) -> Path:
    """Write ``image`` to ``path``; the format defaults to the path's suffix."""
    target = Path(path)
    data = encode(image, fmt or target.suffix or "png", quality)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(data)
    return target


def export_filename(prefix: str, fmt: str = "png", when: datetime | None = None) -> str:
    profile = resolve_format(fmt)
    stamp = (when or datetime.now()).strftime("%Y-%m-%d")
    return f"{prefix}-{stamp}{profile.extension}"


__all__ = ["ExportFormat", "EXPORT_FORMATS", "resolve_format", "encode", "save", "export_filename"]
