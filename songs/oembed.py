import logging
import threading

import anyio
import requests

from config.settings import SONGS_OEMBED_TIMEOUT_SECONDS, SONGS_OEMBED_URL, SONGS_USER_AGENT
from songs.sanitize import is_canonical_watch_url
from songs.types import Availability

logger = logging.getLogger(__name__)


class OEmbedVerifier:
    """Existence check for YouTube videos through the public oEmbed endpoint.

    oEmbed answers 200 for public videos and 401/404 for removed or private
    ones, without fetching the video page itself. Only canonical watch URLs
    are checked; anything else is reported unavailable without a request.
    A single attempt is made per call.
    """

    def __init__(
        self,
        *,
        endpoint: str | None = None,
        timeout_seconds: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.endpoint = endpoint or SONGS_OEMBED_URL
        self.timeout_seconds = timeout_seconds if timeout_seconds is not None else SONGS_OEMBED_TIMEOUT_SECONDS
        self._session = session or requests.Session()

    def check(self, url: str) -> Availability:
        if not is_canonical_watch_url(url):
            return Availability.UNAVAILABLE
        try:
            resp = self._session.get(
                self.endpoint,
                params={"url": url, "format": "json"},
                headers={"User-Agent": SONGS_USER_AGENT},
                timeout=self.timeout_seconds,
            )
            status = int(resp.status_code)
        except Exception as exc:
            logger.info(f"[OEMBED] video={url} status=error outcome=unknown error={exc.__class__.__name__}")
            return Availability.UNKNOWN

        if status != 200:
            logger.info(f"[OEMBED] video={url} status={status} outcome=unavailable")
            return Availability.UNAVAILABLE
        try:
            payload = resp.json()
        except ValueError:
            payload = None
        if not isinstance(payload, dict):
            logger.info(f"[OEMBED] video={url} status=200 outcome=unknown error=malformed_body")
            return Availability.UNKNOWN
        logger.info(f"[OEMBED] video={url} status=200 outcome=available")
        return Availability.AVAILABLE

    async def check_async(self, url: str) -> Availability:
        return await anyio.to_thread.run_sync(self.check, url)

    async def is_available(self, url: str) -> bool:
        try:
            outcome = await self.check_async(url)
        except Exception:
            logger.exception("oEmbed check crashed for url=%s", url)
            return False
        return outcome is Availability.AVAILABLE

    def close(self) -> None:
        self._session.close()


_VERIFIER: OEmbedVerifier | None = None
_VERIFIER_LOCK = threading.Lock()


def get_oembed_verifier() -> OEmbedVerifier:
    global _VERIFIER
    if _VERIFIER is not None:
        return _VERIFIER
    with _VERIFIER_LOCK:
        if _VERIFIER is None:
            _VERIFIER = OEmbedVerifier()
    return _VERIFIER
