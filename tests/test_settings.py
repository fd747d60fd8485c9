from __future__ import annotations

from config import settings


def test_env_bool(monkeypatch) -> None:
    monkeypatch.setenv("SONGS_TEST_FLAG", " Yes ")
    assert settings._env_bool("SONGS_TEST_FLAG") is True
    monkeypatch.setenv("SONGS_TEST_FLAG", "off")
    assert settings._env_bool("SONGS_TEST_FLAG") is False
    monkeypatch.delenv("SONGS_TEST_FLAG")
    assert settings._env_bool("SONGS_TEST_FLAG", default=True) is True


def test_env_int_falls_back_on_bad_values(monkeypatch) -> None:
    monkeypatch.setenv("SONGS_TEST_INT", "3")
    assert settings._env_int("SONGS_TEST_INT", 5) == 3
    monkeypatch.setenv("SONGS_TEST_INT", "lots")
    assert settings._env_int("SONGS_TEST_INT", 5) == 5
    monkeypatch.setenv("SONGS_TEST_INT", "0")
    assert settings._env_int("SONGS_TEST_INT", 5) == 5


def test_env_float_falls_back_on_bad_values(monkeypatch) -> None:
    monkeypatch.setenv("SONGS_TEST_FLOAT", "2.5")
    assert settings._env_float("SONGS_TEST_FLOAT", 5.0) == 2.5
    monkeypatch.setenv("SONGS_TEST_FLOAT", "-1")
    assert settings._env_float("SONGS_TEST_FLOAT", 5.0) == 5.0


def test_defaults() -> None:
    assert settings.SONGS_MAX_ITEMS >= 1
    assert settings.SONGS_OEMBED_URL.startswith("https://")
    assert settings.SONGS_FALLBACK_TERM
