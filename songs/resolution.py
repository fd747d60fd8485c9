"""Turn candidate song suggestions into links that are safe to show.

Every candidate comes out with a usable http(s) URL. The precedence is:

1. The supplied url is sanitized. Unrecognizable text falls back to a
   search URL built from title + artist.
2. YouTube video links are checked through oEmbed. Only a confirmed
   ``AVAILABLE`` keeps the canonical link; a confirmed absence or an
   inconclusive check both fall back to search.
3. Any other http(s) link is passed through unchanged.

Nothing in this module raises to the caller.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Protocol

import anyio

from config.settings import SONGS_MAX_ITEMS, SONGS_VERIFY_CONCURRENCY
from songs.oembed import get_oembed_verifier
from songs.sanitize import is_canonical_watch_url, looks_like_video_url, sanitize_outcome
from songs.search_fallback import build_search_url
from songs.types import (
    Availability,
    CandidateReference,
    Resolution,
    ResolvedReference,
    Unrecognized,
)

logger = logging.getLogger(__name__)


class AvailabilityVerifier(Protocol):
    async def check_async(self, url: str) -> Availability: ...


def _log_event(level, message, **fields):
    payload = {"message": message, **fields}
    try:
        logger.log(level, json.dumps(payload, sort_keys=True, ensure_ascii=False, default=str))
    except Exception as exc:
        logger.log(level, f"log_event_serialization_failed: {exc} message={message}")


class ReferenceResolver:
    def __init__(
        self,
        verifier: AvailabilityVerifier | None = None,
        *,
        max_items: int | None = None,
        concurrency: int | None = None,
        fallback_term: str | None = None,
    ) -> None:
        self._verifier = verifier
        self.max_items = max(0, int(max_items if max_items is not None else SONGS_MAX_ITEMS))
        self.concurrency = max(1, int(concurrency if concurrency is not None else SONGS_VERIFY_CONCURRENCY))
        self.fallback_term = fallback_term

    @property
    def verifier(self) -> AvailabilityVerifier:
        if self._verifier is None:
            self._verifier = get_oembed_verifier()
        return self._verifier

    def _fallback(self, candidate: CandidateReference) -> str:
        return build_search_url(candidate.title, candidate.artist, default_term=self.fallback_term)

    async def _check(self, url: str) -> Availability:
        try:
            outcome = await self.verifier.check_async(url)
        except Exception:
            logger.exception("Availability check failed for url=%s", url)
            return Availability.UNKNOWN
        if not isinstance(outcome, Availability):
            return Availability.UNKNOWN
        return outcome

    async def _resolve_url(self, candidate: CandidateReference) -> tuple[str, Resolution]:
        outcome = sanitize_outcome(candidate.raw_url)
        if isinstance(outcome, Unrecognized):
            return self._fallback(candidate), Resolution.FALLBACK_NO_URL

        url = outcome.url
        if not looks_like_video_url(url):
            return url, Resolution.PASSTHROUGH
        if not is_canonical_watch_url(url):
            # A video link whose id could not be recognized cannot be verified.
            logger.info("Unrecognized YouTube video link, falling back to search: %s", url)
            return self._fallback(candidate), Resolution.FALLBACK_UNAVAILABLE

        availability = await self._check(url)
        if availability is Availability.AVAILABLE:
            return url, Resolution.CANONICAL_VERIFIED
        logger.info("YouTube video %s, falling back to search: %s", availability.value, url)
        if availability is Availability.UNAVAILABLE:
            return self._fallback(candidate), Resolution.FALLBACK_UNAVAILABLE
        return self._fallback(candidate), Resolution.FALLBACK_UNVERIFIED

    async def resolve(self, candidate: Any) -> ResolvedReference:
        """Resolve one candidate (a ``CandidateReference`` or a loose mapping)."""
        candidate = CandidateReference.from_mapping(candidate)
        try:
            url, resolution = await self._resolve_url(candidate)
        except Exception:
            logger.exception("Resolution crashed for title=%r; using search fallback", candidate.title)
            url, resolution = self._fallback(candidate), Resolution.FALLBACK_UNVERIFIED

        _log_event(
            logging.INFO,
            "song_reference_resolved",
            title=candidate.title,
            artist=candidate.artist,
            raw_url=candidate.raw_url,
            url=url,
            resolution=resolution.value,
            fallback=resolution.is_fallback,
        )
        return ResolvedReference(
            title=candidate.title,
            artist=candidate.artist,
            reason=candidate.reason,
            url=url,
            resolution=resolution,
        )

    async def resolve_batch(self, candidates: Iterable[Any] | None) -> list[ResolvedReference]:
        """Resolve up to ``max_items`` candidates, keeping input order.

        With ``concurrency > 1`` availability checks overlap, but results are
        still written back by position.
        """
        try:
            items = list(candidates or [])[: self.max_items]
        except TypeError:
            logger.warning("Ignoring non-iterable candidate batch: %r", type(candidates).__name__)
            return []

        if self.concurrency <= 1 or len(items) <= 1:
            return [await self.resolve(item) for item in items]

        results: list[ResolvedReference | None] = [None] * len(items)
        limiter = anyio.CapacityLimiter(self.concurrency)

        async def _run(index: int, item: Any) -> None:
            async with limiter:
                results[index] = await self.resolve(item)

        async with anyio.create_task_group() as tg:
            for index, item in enumerate(items):
                tg.start_soon(_run, index, item)
        return [result for result in results if result is not None]


async def resolve_references(
    candidates: Iterable[Any] | None,
    *,
    verifier: AvailabilityVerifier | None = None,
) -> list[ResolvedReference]:
    return await ReferenceResolver(verifier).resolve_batch(candidates)
