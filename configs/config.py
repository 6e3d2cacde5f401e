"""Core configuration values for the photo booth pipeline."""
from __future__ import annotations

import logging
from pathlib import Path

from configs.env_utils import get_env_float, get_env_int, get_env_str, load_env_file

load_env_file()

LOG_LEVEL = get_env_str("LOG_LEVEL", "INFO").strip().upper() or "INFO"

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

logger = logging.getLogger("photo_booth")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
OUTPUT_DIR = Path(get_env_str("OUTPUT_DIR", str(PROJECT_ROOT / "output"))).expanduser()

# Photobooth session bounds
MIN_TARGET_COUNT = 1
MAX_TARGET_COUNT = 5
MIN_TIMER_SECONDS = 1
MAX_TIMER_SECONDS = 10

BOOTH_TARGET_COUNT = get_env_int(
    "BOOTH_TARGET_COUNT", 4, minimum=MIN_TARGET_COUNT, maximum=MAX_TARGET_COUNT
)
BOOTH_TIMER_SECONDS = get_env_int(
    "BOOTH_TIMER_SECONDS", 3, minimum=MIN_TIMER_SECONDS, maximum=MAX_TIMER_SECONDS
)
TICK_INTERVAL_SEC = max(0.05, get_env_float("TICK_INTERVAL_SEC", 1.0))

FILM_ROLL_SIZE = get_env_int("FILM_ROLL_SIZE", 24, minimum=1)

CAPTURE_FORMAT = get_env_str("CAPTURE_FORMAT", "jpeg").strip().lower()
CAPTURE_QUALITY = get_env_int("CAPTURE_QUALITY", 90, minimum=1, maximum=100)

__all__ = [
    "logger",
    "LOG_LEVEL",
    "PROJECT_ROOT",
    "OUTPUT_DIR",
    "MIN_TARGET_COUNT",
    "MAX_TARGET_COUNT",
    "MIN_TIMER_SECONDS",
    "MAX_TIMER_SECONDS",
    "BOOTH_TARGET_COUNT",
    "BOOTH_TIMER_SECONDS",
    "TICK_INTERVAL_SEC",
    "FILM_ROLL_SIZE",
    "CAPTURE_FORMAT",
    "CAPTURE_QUALITY",
]
