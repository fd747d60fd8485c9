from __future__ import annotations

import json

from songs.suggestions import parse_suggestions, safe_parse_json
from songs.types import CandidateReference


def test_clean_json_array_is_parsed() -> None:
    raw = json.dumps(
        [
            {"title": " Song A ", "artist": "Artist A", "url": "https://youtu.be/aaaaaaaaaaa", "reason": "calm"},
            {"title": "Song B", "artist": None, "reason": "upbeat"},
        ]
    )

    parsed = parse_suggestions(raw)

    assert parsed == [
        CandidateReference(title="Song A", artist="Artist A", raw_url="https://youtu.be/aaaaaaaaaaa", reason="calm"),
        CandidateReference(title="Song B", artist="", raw_url=None, reason="upbeat"),
    ]


def test_json_array_is_dug_out_of_noisy_output() -> None:
    raw = 'Sure! Here you go:\n```json\n[{"title": "Song C", "artist": "Artist C"}]\n```\nEnjoy.'

    parsed = parse_suggestions(raw)

    assert [item.title for item in parsed] == ["Song C"]
    assert parsed[0].artist == "Artist C"


def test_json_results_are_capped_and_non_objects_skipped() -> None:
    raw = json.dumps(["oops"] + [{"title": f"Song {idx}"} for idx in range(8)])

    parsed = parse_suggestions(raw)

    assert [item.title for item in parsed] == ["Song 0", "Song 1", "Song 2", "Song 3", "Song 4"]
    assert len(parse_suggestions(raw, limit=2)) == 2


def test_numbered_lines_are_parsed_when_json_fails() -> None:
    raw = "Here are some picks:\n1. Holocene - Bon Iver\n2. Weightless - Marconi Union\n"

    parsed = parse_suggestions(raw)

    assert parsed == [
        CandidateReference(title="Holocene", artist="Bon Iver"),
        CandidateReference(title="Weightless", artist="Marconi Union"),
    ]


def test_dash_separated_lines_are_parsed() -> None:
    raw = "Clair de Lune — Debussy\nGymnopédie No.1 - Erik Satie\nno separator here"

    parsed = parse_suggestions(raw)

    assert [(item.title, item.artist) for item in parsed] == [
        ("Clair de Lune", "Debussy"),
        ("Gymnopédie No.1", "Erik Satie"),
    ]


def test_line_parsing_stops_at_limit() -> None:
    raw = "\n".join(f"{idx}. Track {idx} - Band {idx}" for idx in range(1, 10))
    assert len(parse_suggestions(raw)) == 5


def test_unparseable_output_yields_nothing() -> None:
    assert parse_suggestions("I cannot help with that.") == []
    assert parse_suggestions("") == []
    assert parse_suggestions(None) == []
    assert parse_suggestions('{"title": "not a list"}') == []


def test_safe_parse_json() -> None:
    assert safe_parse_json('[{"a": 1}]') == [{"a": 1}]
    assert safe_parse_json('noise [{"a": 1}] noise') == [{"a": 1}]
    assert safe_parse_json("noise [{broken}] noise") is None
    assert safe_parse_json(None) is None
