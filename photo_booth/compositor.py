"""Turns a source frame plus slider values and an optional look into a final image.

Order of the passes is fixed and affects the result:

1. brightness, contrast, saturate and hue-rotate (temperature) from the sliders,
   followed by the filter's own expression;
2. film grain;
3. fade (screen blend with white);
4. vignette (radial multiply).
"""
from __future__ import annotations

from typing import Tuple

import numpy as np
from PIL import Image, ImageChops

from configs.config import logger
from configs.filters_config import TEMPERATURE_HUE_DEGREES
from photo_booth.errors import InvalidInput
from photo_booth.filters import CATALOG, FilterCatalog, apply_expression
from photo_booth.models import AdjustmentParams, FilterEffect, FilterOp

VIGNETTE_INNER_RADIUS = 0.7  # fraction of the centre-to-corner distance left untouched


def adjustment_expression(params: AdjustmentParams) -> Tuple[FilterOp, ...]:
    return (
        FilterOp("brightness", params.brightness / 100.0),
        FilterOp("contrast", params.contrast / 100.0),
        FilterOp("saturate", params.saturation / 100.0),
        FilterOp("hue-rotate", params.temperature * TEMPERATURE_HUE_DEGREES),
    )


def _validate_source(source: Image.Image | None) -> Image.Image:
    if source is None:
        raise InvalidInput("Source image is missing")
    if not isinstance(source, Image.Image):
        raise InvalidInput(f"Expected a PIL image, got {type(source).__name__}")
    width, height = source.size
    if width <= 0 or height <= 0:
        raise InvalidInput(f"Source image has no pixels ({width}x{height})")
    if source.mode in ("RGB", "RGBA"):
        return source
    has_alpha = "A" in source.getbands() or "transparency" in source.info
    return source.convert("RGBA" if has_alpha else "RGB")


def _split_alpha(img: Image.Image) -> Tuple[Image.Image, Image.Image | None]:
    if img.mode == "RGBA":
        return img.convert("RGB"), img.getchannel("A")
    return img, None


def _merge_alpha(rgb: Image.Image, alpha: Image.Image | None) -> Image.Image:
    if alpha is None:
        return rgb
    out = rgb.convert("RGBA")
    out.putalpha(alpha)
    return out


def add_grain(img: Image.Image, grain: float, rng: np.random.Generator | None = None) -> Image.Image:
    """Add uniform integer noise in ``[-grain, +grain]`` to R, G and B."""
    amplitude = int(round(grain))
    if amplitude <= 0:
        return img
    rng = rng if rng is not None else np.random.default_rng()

    arr = np.asarray(img, dtype=np.int16).copy()
    height, width = arr.shape[:2]
    noise = rng.integers(-amplitude, amplitude, size=(height, width, 3), endpoint=True)
    arr[..., :3] += noise.astype(np.int16)
    np.clip(arr, 0, 255, out=arr)
    return Image.fromarray(arr.astype(np.uint8))


def apply_fade(img: Image.Image, fade: float) -> Image.Image:
    """Screen a white layer over the image at opacity ``fade / 200``."""
    opacity = max(0.0, min(100.0, fade)) / 200.0
    if opacity <= 0:
        return img
    rgb, alpha = _split_alpha(img)
    white = Image.new("RGB", rgb.size, (255, 255, 255))
    screened = ImageChops.screen(rgb, white)
    return _merge_alpha(Image.blend(rgb, screened, opacity), alpha)


def vignette_mask(size: Tuple[int, int], vignette: float) -> np.ndarray:
    """Per-pixel multiplier in ``[1 - vignette/100, 1]``, shaped ``(height, width)``."""
    width, height = size
    strength = max(0.0, min(100.0, vignette)) / 100.0
    xs = np.arange(width, dtype=np.float64) + 0.5 - width / 2.0
    ys = np.arange(height, dtype=np.float64) + 0.5 - height / 2.0
    max_dist = float(np.hypot(width / 2.0, height / 2.0))
    dist = np.hypot(xs[np.newaxis, :], ys[:, np.newaxis]) / max_dist
    ramp = np.clip((dist - VIGNETTE_INNER_RADIUS) / (1.0 - VIGNETTE_INNER_RADIUS), 0.0, 1.0)
    return 1.0 - ramp * strength


def apply_vignette(img: Image.Image, vignette: float) -> Image.Image:
    if vignette <= 0:
        return img
    rgb, alpha = _split_alpha(img)
    mask = np.rint(vignette_mask(rgb.size, vignette) * 255.0).astype(np.uint8)
    layer = Image.fromarray(mask)
    multiplied = ImageChops.multiply(rgb, Image.merge("RGB", (layer, layer, layer)))
    return _merge_alpha(multiplied, alpha)


def compose(
    source: Image.Image | None,
    params: AdjustmentParams | None = None,
    filter_effect: FilterEffect | None = None,
    rng: np.random.Generator | None = None,
) -> Image.Image:
    """Return a new image; ``source`` is never modified."""
    base = _validate_source(source)
    params = params or AdjustmentParams()

    ops = adjustment_expression(params)
    if filter_effect is not None:
        ops = ops + tuple(filter_effect.expression)

    out = apply_expression(base, ops)
    if params.grain > 0:
        out = add_grain(out, params.grain, rng)
    if params.fade > 0:
        out = apply_fade(out, params.fade)
    if params.vignette > 0:
        out = apply_vignette(out, params.vignette)
    return out


class Compositor:
    """Compositor bound to a catalog and a random source, selecting looks by id."""

    def __init__(self, catalog: FilterCatalog | None = None, rng: np.random.Generator | None = None) -> None:
        self.catalog = catalog or CATALOG
        self.rng = rng if rng is not None else np.random.default_rng()

    def resolve(self, filter_id: str | None) -> FilterEffect | None:
        if not filter_id:
            return None
        return self.catalog.get(filter_id)

    def compose(
        self,
        source: Image.Image | None,
        params: AdjustmentParams | None = None,
        filter_effect: FilterEffect | str | None = None,
    ) -> Image.Image:
        effect = self.resolve(filter_effect) if isinstance(filter_effect, str) else filter_effect
        out = compose(source, params, effect, rng=self.rng)
        logger.debug(
            "Composed %sx%s frame (filter=%s)",
            out.size[0],
            out.size[1],
            effect.id if effect else "none",
        )
        return out


__all__ = [
    "adjustment_expression",
    "add_grain",
    "apply_fade",
    "vignette_mask",
    "apply_vignette",
    "compose",
    "Compositor",
]
