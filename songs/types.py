"""Structured types for song reference resolution."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Union


def _clean_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


@dataclass(frozen=True)
class CandidateReference:
    """Unverified title/artist/url suggestion, usually produced by a language model."""

    title: str = ""
    artist: str = ""
    raw_url: str | None = None
    reason: str = ""

    @classmethod
    def from_mapping(cls, item: Any) -> "CandidateReference":
        """Build a candidate from a loose ``{title, artist, url, reason}`` mapping.

        Missing keys and non-string values are coerced; a non-mapping yields an
        empty candidate rather than raising.
        """
        if isinstance(item, CandidateReference):
            return item
        if not isinstance(item, Mapping):
            return cls()
        raw_url = item.get("url")
        if raw_url is None:
            raw_url = item.get("raw_url")
        return cls(
            title=_clean_text(item.get("title")),
            artist=_clean_text(item.get("artist")),
            raw_url=None if raw_url is None else str(raw_url),
            reason=_clean_text(item.get("reason")),
        )


class Resolution(Enum):
    CANONICAL_VERIFIED = "canonical_verified"
    PASSTHROUGH = "passthrough"
    FALLBACK_NO_URL = "fallback_no_url"
    FALLBACK_UNAVAILABLE = "fallback_unavailable"
    FALLBACK_UNVERIFIED = "fallback_unverified"

    @property
    def is_fallback(self) -> bool:
        return self.value.startswith("fallback_")


@dataclass(frozen=True)
class ResolvedReference:
    title: str
    artist: str
    reason: str
    url: str
    resolution: Resolution

    def as_payload(self) -> dict[str, str]:
        return {
            "title": self.title,
            "artist": self.artist,
            "url": self.url,
            "reason": self.reason,
        }


class Availability(Enum):
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"
    # Transport failure, timeout or malformed response; not a confirmed absence.
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Sanitized:
    url: str


@dataclass(frozen=True)
class Unrecognized:
    reason: str


SanitizeOutcome = Union[Sanitized, Unrecognized]

__all__ = [
    "Availability",
    "CandidateReference",
    "Resolution",
    "ResolvedReference",
    "SanitizeOutcome",
    "Sanitized",
    "Unrecognized",
]
