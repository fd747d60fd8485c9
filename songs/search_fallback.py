"""Deterministic YouTube search URLs used when no verified link exists."""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import quote

from config.settings import SONGS_FALLBACK_TERM

SEARCH_URL_TEMPLATE = "https://www.youtube.com/results?search_query={query}"
DEFAULT_SEARCH_TERM = "music"

_LINE_BREAKS_RE = re.compile(r"[\n\r]+")
_QUOTES_RE = re.compile("[\"'`‘’“”]")
_SEPARATORS_RE = re.compile(r"(?:\\/|[\\|])+")
_WS_RE = re.compile(r"\s+")
# Same set encodeURIComponent leaves untouched.
_COMPONENT_SAFE = "-_.!~*'()"


def build_search_query(title: Any = "", artist: Any = "", *, default_term: str | None = None) -> str:
    query = f"{title or ''} {artist or ''}".strip()
    query = _LINE_BREAKS_RE.sub(" ", query)
    query = _QUOTES_RE.sub("", query)
    query = _SEPARATORS_RE.sub(" ", query)
    query = _WS_RE.sub(" ", query).strip()
    if query:
        return query
    term = _WS_RE.sub(" ", str(default_term or "")).strip()
    return term or SONGS_FALLBACK_TERM or DEFAULT_SEARCH_TERM


def build_search_url(title: Any = "", artist: Any = "", *, default_term: str | None = None) -> str:
    """Return a YouTube search URL for ``title`` + ``artist``.

    Never returns an empty query: blank metadata searches for the default term.

    Examples:
    - ``build_search_url("Song A", "Artist A")``
      -> ``"https://www.youtube.com/results?search_query=Song%20A%20Artist%20A"``
    - ``build_search_url("", "")``
      -> ``"https://www.youtube.com/results?search_query=music"``
    """
    query = build_search_query(title, artist, default_term=default_term)
    # Lone surrogates from decoded JSON cannot be UTF-8 encoded as-is.
    encoded = quote(query.encode("utf-8", errors="replace"), safe=_COMPONENT_SAFE)
    return SEARCH_URL_TEMPLATE.format(query=encoded)
