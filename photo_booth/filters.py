"""Filter catalog and the colour primitives filter expressions are built from."""
from __future__ import annotations

import math
import re
from typing import Dict, Iterable, Iterator, List, Sequence, Tuple

from PIL import Image, ImageFilter

from configs.config import logger
from configs.filters_config import ADVANCED_FILTERS, VINTAGE_FILTERS
from photo_booth.errors import InvalidInput, UnknownFilter
from photo_booth.models import FilterEffect, FilterOp

PRIMITIVES = ("brightness", "contrast", "saturate", "hue-rotate", "sepia", "grayscale", "blur")

_TERM_RE = re.compile(
    r"\s*([a-z-]+)\(\s*([-+]?(?:\d+\.?\d*|\.\d+))\s*(%|deg|rad|turn|px)?\s*\)\s*"
)

_ANGLE_UNITS = {None: 1.0, "deg": 1.0, "rad": 180.0 / math.pi, "turn": 360.0}

Matrix = Tuple[float, float, float, float, float, float, float, float, float, float, float, float]


def _parse_term(name: str, number: str, unit: str | None) -> FilterOp:
    value = float(number)
    if name == "hue-rotate":
        if unit not in _ANGLE_UNITS:
            raise InvalidInput(f"hue-rotate expects an angle, got {number}{unit}")
        return FilterOp(name, value * _ANGLE_UNITS[unit])
    if name == "blur":
        if unit not in (None, "px") or value < 0:
            raise InvalidInput(f"blur expects a non-negative length, got {number}{unit or ''}")
        return FilterOp(name, value)
    if unit not in (None, "%") or value < 0:
        raise InvalidInput(f"{name} expects a non-negative amount, got {number}{unit or ''}")
    amount = value / 100.0 if unit == "%" else value
    if name in ("sepia", "grayscale"):
        amount = min(1.0, amount)
    return FilterOp(name, amount)


def parse_expression(text: str) -> Tuple[FilterOp, ...]:
    """Parse ``brightness(95%) hue-rotate(20deg) blur(0.4px)`` into ordered ops."""
    ops: List[FilterOp] = []
    pos = 0
    text = text or ""
    while pos < len(text):
        if text[pos:].strip() == "":
            break
        m = _TERM_RE.match(text, pos)
        if not m:
            raise InvalidInput(f"Malformed filter expression near {text[pos:]!r}")
        name, number, unit = m.groups()
        if name not in PRIMITIVES:
            raise InvalidInput(f"Unsupported filter primitive: {name}")
        ops.append(_parse_term(name, number, unit))
        pos = m.end()
    return tuple(ops)


# -------------------- colour matrices (W3C filter effects) --------------------

def _as_pil_matrix(rows: Sequence[Sequence[float]]) -> Matrix:
    (a, b, c), (d, e, f), (g, h, i) = rows
    return (a, b, c, 0.0, d, e, f, 0.0, g, h, i, 0.0)


def saturate_matrix(s: float) -> Matrix:
    return _as_pil_matrix((
        (0.213 + 0.787 * s, 0.715 - 0.715 * s, 0.072 - 0.072 * s),
        (0.213 - 0.213 * s, 0.715 + 0.285 * s, 0.072 - 0.072 * s),
        (0.213 - 0.213 * s, 0.715 - 0.715 * s, 0.072 + 0.928 * s),
    ))


def hue_rotate_matrix(degrees: float) -> Matrix:
    rad = math.radians(degrees)
    c, s = math.cos(rad), math.sin(rad)
    return _as_pil_matrix((
        (0.213 + c * 0.787 - s * 0.213, 0.715 - c * 0.715 - s * 0.715, 0.072 - c * 0.072 + s * 0.928),
        (0.213 - c * 0.213 + s * 0.143, 0.715 + c * 0.285 + s * 0.140, 0.072 - c * 0.072 - s * 0.283),
        (0.213 - c * 0.213 - s * 0.787, 0.715 - c * 0.715 + s * 0.715, 0.072 + c * 0.928 + s * 0.072),
    ))


def sepia_matrix(amount: float) -> Matrix:
    k = 1.0 - amount
    return _as_pil_matrix((
        (0.393 + 0.607 * k, 0.769 - 0.769 * k, 0.189 - 0.189 * k),
        (0.349 - 0.349 * k, 0.686 + 0.314 * k, 0.168 - 0.168 * k),
        (0.272 - 0.272 * k, 0.534 - 0.534 * k, 0.131 + 0.869 * k),
    ))


def grayscale_matrix(amount: float) -> Matrix:
    k = 1.0 - amount
    return _as_pil_matrix((
        (0.2126 + 0.7874 * k, 0.7152 - 0.7152 * k, 0.0722 - 0.0722 * k),
        (0.2126 - 0.2126 * k, 0.7152 + 0.2848 * k, 0.0722 - 0.0722 * k),
        (0.2126 - 0.2126 * k, 0.7152 - 0.7152 * k, 0.0722 + 0.9278 * k),
    ))


_MATRICES = {
    "saturate": saturate_matrix,
    "hue-rotate": hue_rotate_matrix,
    "sepia": sepia_matrix,
    "grayscale": grayscale_matrix,
}


def _linear_lut(slope: float, intercept: float) -> List[int]:
    # floor rounding: 128 * 1.2 -> 153
    return [max(0, min(255, math.floor(i * slope + intercept))) for i in range(256)]


def brightness_lut(amount: float) -> List[int]:
    return _linear_lut(amount, 0.0)


def contrast_lut(amount: float) -> List[int]:
    return _linear_lut(amount, 127.5 - 127.5 * amount)


def _apply_op(img: Image.Image, op: FilterOp) -> Image.Image:
    if op.name == "brightness":
        return img.point(brightness_lut(op.amount) * 3)
    if op.name == "contrast":
        return img.point(contrast_lut(op.amount) * 3)
    if op.name == "blur":
        return img.filter(ImageFilter.GaussianBlur(radius=op.amount))
    return img.convert("RGB", _MATRICES[op.name](op.amount))


def apply_expression(img: Image.Image, ops: Iterable[FilterOp]) -> Image.Image:
    """Run ``img`` through ``ops`` in order and return a new image.

    Identity terms are skipped, so a neutral expression returns an exact copy.
    Alpha is carried through untouched.
    """
    alpha = img.getchannel("A") if img.mode == "RGBA" else None
    base = img.convert("RGB") if img.mode != "RGB" else img.copy()

    for op in ops:
        if op.is_identity:
            continue
        base = _apply_op(base, op)

    if alpha is not None:
        base = base.convert("RGBA")
        base.putalpha(alpha)
    return base


class FilterCatalog:
    """Read-only registry of filter looks, selectable by id."""

    def __init__(self, effects: Iterable[FilterEffect]) -> None:
        self._by_id: Dict[str, FilterEffect] = {}
        for effect in effects:
            if effect.id in self._by_id:
                raise InvalidInput(f"Duplicate filter id: {effect.id}")
            self._by_id[effect.id] = effect

    @classmethod
    def from_entries(cls, entries: Iterable[Tuple[str, str, str, str]]) -> "FilterCatalog":
        effects = [
            FilterEffect(id=fid, name=name, expression=parse_expression(expr), description=desc)
            for fid, name, expr, desc in entries
        ]
        return cls(effects)

    def get(self, filter_id: str) -> FilterEffect:
        try:
            return self._by_id[filter_id]
        except KeyError:
            raise UnknownFilter(filter_id) from None

    def find(self, filter_id: str | None) -> FilterEffect | None:
        if filter_id is None:
            return None
        return self._by_id.get(filter_id)

    def all(self) -> List[FilterEffect]:
        return list(self._by_id.values())

    def ids(self) -> List[str]:
        return list(self._by_id)

    def __contains__(self, filter_id: object) -> bool:
        return filter_id in self._by_id

    def __iter__(self) -> Iterator[FilterEffect]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)


def build_default_catalog() -> FilterCatalog:
    catalog = FilterCatalog.from_entries([*VINTAGE_FILTERS, *ADVANCED_FILTERS])
    logger.debug("Loaded %d filter looks", len(catalog))
    return catalog


CATALOG = build_default_catalog()

__all__ = [
    "PRIMITIVES",
    "parse_expression",
    "apply_expression",
    "saturate_matrix",
    "hue_rotate_matrix",
    "sepia_matrix",
    "grayscale_matrix",
    "brightness_lut",
    "contrast_lut",
    "FilterCatalog",
    "build_default_catalog",
    "CATALOG",
]
