"""Normalize untrusted link text into canonical YouTube watch URLs."""

from __future__ import annotations

import logging
import re
from typing import Any, NamedTuple, Optional, Pattern
from urllib.parse import quote, urlparse

from songs.types import SanitizeOutcome, Sanitized, Unrecognized

logger = logging.getLogger(__name__)

CANONICAL_WATCH_PREFIX = "https://www.youtube.com/watch?v="
YOUTUBE_HOSTS = frozenset({"youtube.com", "www.youtube.com", "m.youtube.com", "music.youtube.com"})
SHORT_LINK_HOSTS = frozenset({"youtu.be", "www.youtu.be"})
_VIDEO_PATH_PREFIXES = ("/shorts/", "/embed/", "/v/", "/live/")

_VIDEO_ID = r"([A-Za-z0-9_-]{11})(?![A-Za-z0-9_-])"
_NOT_HOST_CHAR = r"(?<![\w.-])"

_EDGE_WRAPPERS_RE = re.compile(r"^[\s<'\"`]+|[\s>'\"`]+$")
_CONTROL_WS_RE = re.compile(r"[\r\n\t]+")
_WRAPPED_PARENS_RE = re.compile(r"^\(.+\)$")
_WS_RE = re.compile(r"\s+")
_TRAILING_PUNCT_RE = re.compile(r"[)\],;:!?]+$")
_SCHEMELESS_YOUTUBE_RE = re.compile(r"^(?:(?:www|m|music)\.)?youtube\.com/.+", re.IGNORECASE)
_HTTP_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_YOUTUBE_HOST_RE = re.compile(r"(?:^|[/\s@])(?:(?:www|m|music)\.)?youtube\.com(?:[/?:]|$)", re.IGNORECASE)
_CANONICAL_WATCH_RE = re.compile(r"https://www\.youtube\.com/watch\?v=([A-Za-z0-9_-]{11})")

# URI decoding leaves escapes of these characters alone; `%` is kept so that
# `%25` is not turned into a bare percent sign.
_URI_RESERVED = ";/?:@&=+$,#%"
_URI_SAFE = ";,/?:@&=+$!*'()#%"
_ESCAPE_RUN_RE = re.compile(r"(?:%[0-9A-Fa-f]{2})+")
_MALFORMED_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class _Alias(NamedTuple):
    name: str
    pattern: Pattern[str]
    host_guard: Optional[Pattern[str]] = None


# Evaluated in order; the first match wins.
_ALIASES: tuple[_Alias, ...] = (
    _Alias(
        "short_link",
        re.compile(_NOT_HOST_CHAR + r"(?:https?://)?(?:www\.)?youtu\.be/" + _VIDEO_ID, re.IGNORECASE),
    ),
    _Alias(
        "shorts_path",
        re.compile(
            _NOT_HOST_CHAR + r"(?:https?://)?(?:(?:www|m)\.)?youtube\.com/shorts/" + _VIDEO_ID,
            re.IGNORECASE,
        ),
    ),
    _Alias(
        "embed_path",
        re.compile(
            _NOT_HOST_CHAR
            + r"(?:https?://)?(?:(?:www|m)\.)?youtube(?:-nocookie)?\.com/(?:embed|v|live)/"
            + _VIDEO_ID,
            re.IGNORECASE,
        ),
    ),
    _Alias("watch_query", re.compile(r"[?&]v=" + _VIDEO_ID), _YOUTUBE_HOST_RE),
)


def canonical_watch_url(video_id: str) -> str:
    return f"{CANONICAL_WATCH_PREFIX}{video_id}"


def is_canonical_watch_url(url: Any) -> bool:
    return isinstance(url, str) and bool(_CANONICAL_WATCH_RE.fullmatch(url))


def extract_video_id(url: Any) -> str | None:
    if not isinstance(url, str):
        return None
    match = _CANONICAL_WATCH_RE.fullmatch(url)
    return match.group(1) if match else None


def looks_like_video_url(url: Any) -> bool:
    """True for any link that points at a single YouTube video, canonical or not.

    Channel, playlist and search pages are not video links.
    """
    if not isinstance(url, str) or not url:
        return False
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    host = (parsed.hostname or "").lower()
    path = parsed.path.rstrip("/")
    if host in SHORT_LINK_HOSTS:
        return bool(path)
    if host not in YOUTUBE_HOSTS:
        return False
    return path == "/watch" or path.startswith(_VIDEO_PATH_PREFIXES)


def match_alias(text: str) -> tuple[str, str] | None:
    """Return ``(alias_name, video_id)`` for the first alias form found in ``text``."""
    for alias in _ALIASES:
        if alias.host_guard is not None and not alias.host_guard.search(text):
            continue
        match = alias.pattern.search(text)
        if match:
            return alias.name, match.group(1)
    return None


def _strip_noise(raw: Any) -> str:
    text = str(raw).strip()
    text = _EDGE_WRAPPERS_RE.sub("", text)
    text = _CONTROL_WS_RE.sub(" ", text).strip()
    if _WRAPPED_PARENS_RE.match(text):
        text = text[1:-1].strip()
    text = _WS_RE.sub(" ", text)
    return _TRAILING_PUNCT_RE.sub("", text)


def _decode_uri(value: str) -> str:
    if _MALFORMED_ESCAPE_RE.search(value):
        raise ValueError("malformed percent escape")

    def _decode_run(match: re.Match[str]) -> str:
        decoded = bytes.fromhex(match.group(0).replace("%", "")).decode("utf-8")
        return "".join(f"%{ord(ch):02X}" if ch in _URI_RESERVED else ch for ch in decoded)

    return _ESCAPE_RUN_RE.sub(_decode_run, value)


def normalize_escapes(url: str) -> str:
    """Decode then re-encode ``url`` so escaping is uniform and never doubled."""
    try:
        return quote(_decode_uri(url), safe=_URI_SAFE)
    except ValueError:
        # Covers UnicodeDecodeError/UnicodeEncodeError as well.
        return _escape_spaces(url)


def _escape_spaces(url: str) -> str:
    escaped = _WS_RE.sub("%20", url)
    return "".join(
        ch if ch.isascii() else quote(ch.encode("utf-8", errors="replace"), safe="")
        for ch in escaped
    )


def sanitize_outcome(raw: Any) -> SanitizeOutcome:
    if raw is None:
        return Unrecognized("empty")
    try:
        text = _strip_noise(raw)
        if not text:
            return Unrecognized("empty")

        alias = match_alias(text)
        if alias is not None:
            return Sanitized(canonical_watch_url(alias[1]))

        if _SCHEMELESS_YOUTUBE_RE.match(text):
            text = f"https://{text}"

        if not _HTTP_SCHEME_RE.match(text):
            return Unrecognized("no_http_scheme")

        url = normalize_escapes(text)
        if not urlparse(url).netloc:
            return Unrecognized("no_host")
        return Sanitized(url)
    except Exception:
        logger.debug("sanitize failed raw=%r", raw, exc_info=True)
        return Unrecognized("error")


def sanitize(raw: Any) -> str | None:
    """Return the canonical http(s) URL for ``raw`` or ``None``; never raises."""
    outcome = sanitize_outcome(raw)
    if isinstance(outcome, Sanitized):
        return outcome.url
    return None
