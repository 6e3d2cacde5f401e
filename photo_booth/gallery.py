"""In-memory gallery of single captures, newest first."""
from __future__ import annotations

from typing import Iterator, List

from configs.config import FILM_ROLL_SIZE, logger
from photo_booth.errors import FilmRollExhausted
from photo_booth.models import CapturedImage


class Gallery:
    def __init__(self, roll_size: int = FILM_ROLL_SIZE) -> None:
        self.roll_size = max(1, int(roll_size))
        self.shots_left = self.roll_size
        self._items: List[CapturedImage] = []

    def add(self, item: CapturedImage) -> CapturedImage:
        if self.shots_left <= 0:
            raise FilmRollExhausted(f"All {self.roll_size} shots used; reload the roll")
        self._items.insert(0, item)
        self.shots_left -= 1
        logger.debug("Gallery +%s (%d shots left)", item.id, self.shots_left)
        return item

    def remove(self, item_id: str) -> CapturedImage:
        for idx, item in enumerate(self._items):
            if item.id == item_id:
                return self._items.pop(idx)
        raise KeyError(item_id)

    def get(self, item_id: str) -> CapturedImage | None:
        return next((item for item in self._items if item.id == item_id), None)

    @property
    def latest(self) -> CapturedImage | None:
        return self._items[0] if self._items else None

    def clear(self) -> None:
        self._items.clear()

    def reload(self) -> None:
        self.shots_left = self.roll_size

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[CapturedImage]:
        return iter(list(self._items))


__all__ = ["Gallery"]
