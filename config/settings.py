"""Application settings constants."""

from __future__ import annotations

import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent

_TRUTHY = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def _env_int(name: str, default: int, *, minimum: int = 1) -> int:
    try:
        value = int(str(os.getenv(name, default)).strip())
    except (TypeError, ValueError):
        return default
    return value if value >= minimum else default


def _env_float(name: str, default: float) -> float:
    try:
        value = float(str(os.getenv(name, default)).strip())
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


# Upper bound on suggestions resolved per request.
SONGS_MAX_ITEMS = _env_int("SONGS_MAX_ITEMS", 5)

# Number of availability checks allowed in flight for one batch.
SONGS_VERIFY_CONCURRENCY = _env_int("SONGS_VERIFY_CONCURRENCY", 1)

SONGS_OEMBED_URL = os.getenv("SONGS_OEMBED_URL", "https://www.youtube.com/oembed")
SONGS_OEMBED_TIMEOUT_SECONDS = _env_float("SONGS_OEMBED_TIMEOUT_SECONDS", 5.0)
SONGS_USER_AGENT = os.getenv("SONGS_USER_AGENT", "songlinks/1.0 (+link resolver)")

# Search term used when a suggestion has neither title nor artist.
SONGS_FALLBACK_TERM = (os.getenv("SONGS_FALLBACK_TERM") or "").strip() or "music"

# Serve canned suggestions instead of calling a real generator.
SONGS_USE_FAKE = _env_bool("SONGS_USE_FAKE")

SONGS_LOG_DIR = Path(os.getenv("SONGS_LOG_DIR", PROJECT_ROOT / "data" / "logs")).resolve()
