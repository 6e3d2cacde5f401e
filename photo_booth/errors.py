"""Exceptions raised by the capture and compositing pipeline."""
from __future__ import annotations


class PhotoBoothError(Exception):
    """Base class for every pipeline failure."""


class InvalidInput(PhotoBoothError, ValueError):
    """Malformed or empty source image, or an unusable argument."""


class UnknownFilter(InvalidInput, KeyError):
    """A filter id that the catalog does not contain."""

    def __init__(self, filter_id: str) -> None:
        super().__init__(filter_id)
        self.filter_id = filter_id

    def __str__(self) -> str:
        return f"Unknown filter: {self.filter_id!r}"


class SourceUnavailable(PhotoBoothError, RuntimeError):
    """The capture device cannot provide a frame right now."""


class SessionAlreadyActive(PhotoBoothError, RuntimeError):
    """A photobooth session is running; starts and manual shots are refused."""


class DecodeFailure(PhotoBoothError, OSError):
    """A stored image could not be decoded."""


class FilmRollExhausted(PhotoBoothError):
    """No shots left on the roll."""


__all__ = [
    "PhotoBoothError",
    "InvalidInput",
    "UnknownFilter",
    "SourceUnavailable",
    "SessionAlreadyActive",
    "DecodeFailure",
    "FilmRollExhausted",
]
