#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from songs.resolution import ReferenceResolver
from songs.types import Availability, CandidateReference


class _SkipVerification:
    async def check_async(self, url: str) -> Availability:
        return Availability.UNKNOWN


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Resolve one song suggestion into a link.")
    parser.add_argument("--title", default="")
    parser.add_argument("--artist", default="")
    parser.add_argument("--url", default=None, help="Raw url text as a model would produce it")
    parser.add_argument("--no-verify", action="store_true", help="Skip the oEmbed availability check")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    resolver = ReferenceResolver(_SkipVerification() if args.no_verify else None)
    candidate = CandidateReference(title=args.title, artist=args.artist, raw_url=args.url)
    resolved = asyncio.run(resolver.resolve(candidate))
    print(f"title={resolved.title!r} artist={resolved.artist!r}")
    print(f"url={resolved.url}")
    print(f"resolution={resolved.resolution.value}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
