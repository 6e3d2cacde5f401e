from __future__ import annotations

from dataclasses import dataclass, field, fields, asdict
from datetime import datetime
from typing import Dict, Tuple

from PIL import Image

from configs.filters_config import ADJUSTMENT_RANGES


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, float(value)))


@dataclass(frozen=True, slots=True)
class AdjustmentParams:
    """Manual slider values; every field is clamped to its documented range."""

    brightness: float = 100.0
    contrast: float = 100.0
    saturation: float = 100.0
    temperature: float = 0.0
    grain: float = 0.0
    fade: float = 0.0
    vignette: float = 0.0

    def __post_init__(self) -> None:
        for f in fields(self):
            low, high, _ = ADJUSTMENT_RANGES[f.name]
            object.__setattr__(self, f.name, _clamp(getattr(self, f.name), low, high))

    @classmethod
    def neutral(cls) -> "AdjustmentParams":
        return cls()

    @property
    def is_neutral(self) -> bool:
        return all(
            getattr(self, f.name) == ADJUSTMENT_RANGES[f.name][2] for f in fields(self)
        )

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class FilterOp:
    """One primitive of a filter expression.

    Percent terms are stored as factors (``95%`` -> ``0.95``), ``hue-rotate`` in
    degrees and ``blur`` as a radius in pixels.
    """

    name: str
    amount: float

    @property
    def is_identity(self) -> bool:
        if self.name in ("brightness", "contrast", "saturate"):
            return self.amount == 1.0
        if self.name == "hue-rotate":
            return self.amount % 360.0 == 0.0
        return self.amount == 0.0

    def __str__(self) -> str:
        if self.name == "hue-rotate":
            return f"hue-rotate({self.amount:g}deg)"
        if self.name == "blur":
            return f"blur({self.amount:g}px)"
        return f"{self.name}({self.amount * 100:g}%)"


@dataclass(frozen=True, slots=True)
class FilterEffect:
    """A named, read-only filter look."""

    id: str
    name: str
    expression: Tuple[FilterOp, ...]
    description: str = ""

    @property
    def css(self) -> str:
        return " ".join(str(op) for op in self.expression)


@dataclass(frozen=True, slots=True)
class CapturedImage:
    """A finished capture as stored in the gallery or a photobooth session."""

    id: str
    image: Image.Image | None
    timestamp: datetime
    filter_name: str | None = None
    adjustments: AdjustmentParams = field(default_factory=AdjustmentParams)
    encoded: bytes | None = None

    def to_dict(self) -> Dict[str, object]:
        """Metadata view without pixel data."""
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(timespec="milliseconds"),
            "filter_name": self.filter_name,
            "adjustments": self.adjustments.to_dict(),
            "size": self.image.size if self.image is not None else None,
            "encoded_bytes": len(self.encoded) if self.encoded is not None else 0,
        }


__all__ = ["AdjustmentParams", "FilterOp", "FilterEffect", "CapturedImage"]
