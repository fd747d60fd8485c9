from __future__ import annotations

from urllib.parse import parse_qs, urlparse

from songs.search_fallback import build_search_query, build_search_url

SEARCH_PREFIX = "https://www.youtube.com/results?search_query="


def _query_of(url: str) -> str:
    return parse_qs(urlparse(url).query)["search_query"][0]


def test_title_and_artist_are_joined_and_encoded() -> None:
    assert build_search_url("Song A", "Artist A") == f"{SEARCH_PREFIX}Song%20A%20Artist%20A"


def test_empty_metadata_uses_default_term() -> None:
    url = build_search_url("", "")
    assert url == f"{SEARCH_PREFIX}music"
    assert _query_of(url) == "music"


def test_none_values_are_treated_as_empty() -> None:
    assert build_search_url(None, None) == f"{SEARCH_PREFIX}music"
    assert build_search_url("Song B", None) == f"{SEARCH_PREFIX}Song%20B"


def test_explicit_default_term_overrides_setting() -> None:
    assert build_search_url("  ", "", default_term="lofi beats") == f"{SEARCH_PREFIX}lofi%20beats"
    assert build_search_url("", "", default_term="   ") == f"{SEARCH_PREFIX}music"


def test_quotes_newlines_and_separators_are_cleaned() -> None:
    assert build_search_query('"Hey Jude"\n', "The\r\nBeatles") == "Hey Jude The Beatles"
    assert build_search_query("‘Yesterday’", "“Beatles”") == "Yesterday Beatles"
    assert build_search_query("AC\\/DC", "Back | in || Black") == "AC DC Back in Black"
    assert build_search_query("Don't Stop", "") == "Dont Stop"


def test_only_noise_falls_back_to_default_term() -> None:
    assert build_search_query("''", "\n|\\") == "music"


def test_reserved_characters_are_component_encoded() -> None:
    url = build_search_url("Rock & Roll", "AC/DC?")
    assert url == f"{SEARCH_PREFIX}Rock%20%26%20Roll%20AC%2FDC%3F"
    assert _query_of(url) == "Rock & Roll AC/DC?"


def test_unicode_is_percent_encoded() -> None:
    assert build_search_url("Café", "") == f"{SEARCH_PREFIX}Caf%C3%A9"


def test_lone_surrogate_does_not_raise() -> None:
    url = build_search_url("bad \ud800 text", "")
    assert url.startswith(SEARCH_PREFIX)
    assert _query_of(url)
