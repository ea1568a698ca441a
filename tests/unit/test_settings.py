"""Unit tests for environment-driven settings."""

from __future__ import annotations

import logging

import pytest

from madmatch.backend.app.settings import Settings


def test_defaults_when_environment_is_empty() -> None:
    settings = Settings.from_env({})

    assert settings == Settings()
    assert settings.salling_zip_code == "8000"
    assert settings.enable_real_data is True
    assert settings.filter_case_sensitive is True


def test_reads_values_from_environment() -> None:
    settings = Settings.from_env(
        {
            "MADMATCH_ALLOWED_ORIGINS": "https://a.test, https://b.test,,",
            "SALLING_API_KEY": " secret ",
            "SALLING_ZIP_CODE": "2100",
            "ENABLE_REAL_DATA": "false",
            "ENABLE_MOCK_FALLBACK": "1",
            "MADMATCH_CACHE_TTL": "120",
            "SPOONACULAR_API_KEY": "spoon",
            "MADMATCH_FILTER_CASE_SENSITIVE": "no",
            "OPEN_FOOD_FACTS_BASE_URL": "https://off.test/api/v2",
        }
    )

    assert settings.allowed_origins == frozenset({"https://a.test", "https://b.test"})
    assert settings.salling_api_key == "secret"
    assert settings.salling_zip_code == "2100"
    assert settings.enable_real_data is False
    assert settings.enable_mock_fallback is True
    assert settings.cache_ttl_seconds == 120
    assert settings.spoonacular_api_key == "spoon"
    assert settings.filter_case_sensitive is False
    assert settings.open_food_facts_base_url == "https://off.test/api/v2"


@pytest.mark.parametrize(
    ("env", "value"),
    [("MADMATCH_CACHE_TTL", "soon"), ("MADMATCH_CACHE_TTL", "-5"), ("ENABLE_REAL_DATA", "maybe")],
)
def test_invalid_values_are_logged_and_ignored(
    caplog: pytest.LogCaptureFixture, env: str, value: str
) -> None:
    with caplog.at_level(logging.WARNING):
        settings = Settings.from_env({env: value})

    assert settings == Settings()
    assert env in caplog.text
