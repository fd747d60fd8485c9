import sys
from pathlib import Path

import pytest


# Ensure tests can import project packages regardless of how pytest is invoked.
ROOT = Path(__file__).resolve().parents[1]
ROOT_STR = str(ROOT)
if ROOT_STR not in sys.path:
    sys.path.insert(0, ROOT_STR)

from songs.types import Availability  # noqa: E402


class FakeVerifier:
    """Availability checker that answers from a url -> outcome table."""

    def __init__(self, outcomes=None, default=Availability.AVAILABLE, error=None):
        self.outcomes = dict(outcomes or {})
        self.default = default
        self.error = error
        self.calls = []

    async def check_async(self, url):
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.outcomes.get(url, self.default)


@pytest.fixture()
def fake_verifier_factory():
    return FakeVerifier
