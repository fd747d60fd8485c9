"""Suggestion generator seam.

A generator turns a short journal entry into raw text listing song
suggestions. Real model-backed generators are supplied by the deployment;
``StaticSuggestionGenerator`` serves canned suggestions for offline use.
"""

from __future__ import annotations

import json
from typing import Protocol

SYSTEM_PROMPT = (
    "You are a friendly music recommender. Based on the user's short journal text, "
    "suggest up to 5 songs that match the mood, situation, or vibe described. "
    "Output must be valid JSON: an array of objects. Each object must have these keys: "
    '"title" (string), "artist" (string or empty), "url" (string or empty), '
    '"reason" (short explanation string). If you can, provide a YouTube video or short URL '
    "(https://www.youtube.com/watch?v=...) for each suggestion. "
    "Do not output additional prose outside the JSON."
)

_EXAMPLE = (
    '[{"title":"Song Name","artist":"Artist Name",'
    '"url":"https://www.youtube.com/watch?v=...","reason":"Short reason"}]'
)


class SuggestionGenerator(Protocol):
    async def generate(self, text: str) -> str: ...


def build_prompt(text: str) -> str:
    user_prompt = (
        f'Journal text:\n"""{text}"""\n\n'
        f"Return up to 5 suggestions as JSON. Example:\n{_EXAMPLE}"
    )
    return f"{SYSTEM_PROMPT}\n\n{user_prompt}"


class StaticSuggestionGenerator:
    suggestions = (
        {
            "title": "Peaceful Moments",
            "artist": "Acoustic From The Heart",
            "url": "",
            "reason": "Calm, gentle acoustic fits a reflective day.",
        },
        {
            "title": "Bright Mornings",
            "artist": "Sunrise Band",
            "url": "",
            "reason": "Uplifting tempo to boost optimism.",
        },
        {
            "title": "Slow Streets",
            "artist": "Night Walkers",
            "url": "",
            "reason": "Gentle late-night track for introspection.",
        },
    )

    async def generate(self, text: str) -> str:
        return json.dumps(list(self.suggestions))


def build_generator(use_fake: bool) -> SuggestionGenerator | None:
    if use_fake:
        return StaticSuggestionGenerator()
    return None
