"""Helpers for reading booth settings from environment variables."""
from __future__ import annotations

import os
from pathlib import Path

_ENV_LOADED = False
_ENV_SOURCE: str | None = None  # ".env" | ".env.example" | None


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _load_env_from_path(path: Path) -> None:
    """Copy KEY=VALUE pairs from a file into os.environ, keeping existing keys."""
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError:
        return

    for raw_line in lines:
        stripped = raw_line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        if stripped.startswith("export "):
            stripped = stripped[len("export "):].lstrip()

        key, value = stripped.split("=", 1)
        key = key.strip()
        if not key:
            continue
        os.environ.setdefault(key, _strip_quotes(value.strip()))


def load_env_file(env_path: Path | None = None) -> str | None:
    """Populate os.environ from .env, falling back to .env.example for defaults.

    Returns the name of the file that was applied, if any.
    """
    global _ENV_LOADED, _ENV_SOURCE
    if _ENV_LOADED and env_path is None:
        return _ENV_SOURCE

    if env_path is not None:
        candidates = [Path(env_path)]
    else:
        project_root = Path(__file__).resolve().parents[1]
        candidates = [project_root / ".env", project_root / ".env.example"]

    for candidate in candidates:
        if candidate.exists():
            _load_env_from_path(candidate)
            _ENV_SOURCE = candidate.name
            break

    _ENV_LOADED = True
    return _ENV_SOURCE


def get_env_str(key: str, default: str = "") -> str:
    """Fetch a string, decoding escaped newlines."""
    load_env_file()
    value = os.environ.get(key)
    if value is None:
        return default
    return value.replace("\\n", "\n")


def get_env_int(key: str, default: int, *, minimum: int | None = None, maximum: int | None = None) -> int:
    """Fetch an integer; unparsable values fall back to the default, bounds clamp."""
    load_env_file()
    raw = os.environ.get(key, "").strip()
    try:
        value = int(raw) if raw else default
    except ValueError:
        value = default
    if minimum is not None:
        value = max(minimum, value)
    if maximum is not None:
        value = min(maximum, value)
    return value


def get_env_float(key: str, default: float) -> float:
    load_env_file()
    raw = os.environ.get(key, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


__all__ = [
    "load_env_file",
    "get_env_str",
    "get_env_int",
    "get_env_float",
]
