from __future__ import annotations

import asyncio
import json

from songs.generators import SYSTEM_PROMPT, StaticSuggestionGenerator, build_generator, build_prompt
from songs.suggestions import parse_suggestions


def test_build_prompt_embeds_journal_text() -> None:
    prompt = build_prompt("long week, need a lift")

    assert prompt.startswith(SYSTEM_PROMPT)
    assert '"""long week, need a lift"""' in prompt
    assert "Return up to 5 suggestions as JSON" in prompt


def test_static_generator_output_parses() -> None:
    raw = asyncio.run(StaticSuggestionGenerator().generate("anything"))

    assert isinstance(json.loads(raw), list)
    parsed = parse_suggestions(raw)
    assert [item.title for item in parsed] == ["Peaceful Moments", "Bright Mornings", "Slow Streets"]
    assert all(item.raw_url == "" for item in parsed)


def test_build_generator() -> None:
    assert isinstance(build_generator(True), StaticSuggestionGenerator)
    assert build_generator(False) is None
