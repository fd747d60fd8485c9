"""Parse free-form generator output into candidate song references."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from config.settings import SONGS_MAX_ITEMS
from songs.types import CandidateReference

logger = logging.getLogger(__name__)

_JSON_ARRAY_BLOB_RE = re.compile(r"(\[\s*\{.*\}\s*\])", re.DOTALL)
_NUMBERED_LINE_RE = re.compile(r"^\d+\.\s*(.+?)\s*-\s*(.+)$")
_DASH_SPLIT_RE = re.compile(r"\s*[-—]\s*")


def safe_parse_json(text: Any) -> Any:
    """``json.loads`` that also digs a ``[{...}]`` array out of noisy output."""
    if not isinstance(text, str):
        return None
    try:
        return json.loads(text)
    except ValueError:
        pass
    match = _JSON_ARRAY_BLOB_RE.search(text)
    if not match:
        return None
    try:
        return json.loads(match.group(1))
    except ValueError:
        return None


def _parse_lines(raw: str, limit: int) -> list[CandidateReference]:
    suggestions: list[CandidateReference] = []
    for line in (ln.strip() for ln in raw.splitlines()):
        if not line:
            continue
        numbered = _NUMBERED_LINE_RE.match(line)
        if numbered:
            suggestions.append(
                CandidateReference(title=numbered.group(1).strip(), artist=numbered.group(2).strip())
            )
        else:
            parts = _DASH_SPLIT_RE.split(line)
            if len(parts) >= 2:
                suggestions.append(CandidateReference(title=parts[0].strip(), artist=parts[1].strip()))
        if len(suggestions) >= limit:
            break
    return suggestions


def parse_suggestions(raw: Any, *, limit: int | None = None) -> list[CandidateReference]:
    """Return at most ``limit`` candidates parsed from ``raw``.

    A JSON array of ``{title, artist, url, reason}`` objects is preferred;
    otherwise lines shaped like ``1. Title - Artist`` or ``Title - Artist``
    are accepted. An empty list means nothing usable was found.
    """
    cap = SONGS_MAX_ITEMS if limit is None else max(0, int(limit))
    if not isinstance(raw, str) or not raw.strip():
        return []

    parsed = safe_parse_json(raw)
    if isinstance(parsed, list):
        items = [item for item in parsed if isinstance(item, dict)]
        return [CandidateReference.from_mapping(item) for item in items[:cap]]

    suggestions = _parse_lines(raw, cap)
    if not suggestions:
        logger.info("No suggestions parsed from generator output (%d chars)", len(raw))
    return suggestions
