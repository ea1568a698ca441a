"""Configuration loader for the YAML-backed lookup tables."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .schema import (
    CategoryRule,
    CategoryRules,
    ConfigurationError,
    MockDeal,
    MockDealSet,
    TranslationEntry,
    TranslationTable,
)

CONFIG_DIRECTORY = Path(__file__).resolve().parent / "data"
TRANSLATIONS_FILE = CONFIG_DIRECTORY / "translations.yaml"
CATEGORIES_FILE = CONFIG_DIRECTORY / "categories.yaml"
MOCK_DEALS_FILE = CONFIG_DIRECTORY / "mock_deals.yaml"


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Configuration file missing: {path.name}")
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must define a mapping at the top level")
    return data


def parse_translation_table(raw: dict[str, Any]) -> TranslationTable:
    """Validate a raw translation payload."""

    try:
        return TranslationTable.model_validate(raw)
    except ValidationError as error:
        raise ConfigurationError(f"Translation table validation failed: {error}") from error


@lru_cache(maxsize=1)
def load_translation_table(path: Path | None = None) -> TranslationTable:
    """Load and cache the Danish to English translation table."""

    return parse_translation_table(_load_yaml(path or TRANSLATIONS_FILE))


@lru_cache(maxsize=1)
def load_category_rules(path: Path | None = None) -> CategoryRules:
    """Load and cache the category keywords and brand names."""

    raw = _load_yaml(path or CATEGORIES_FILE)
    try:
        return CategoryRules.model_validate(raw)
    except ValidationError as error:
        raise ConfigurationError(f"Category rules validation failed: {error}") from error


@lru_cache(maxsize=1)
def load_mock_deals(path: Path | None = None) -> MockDealSet:
    """Load and cache the mock deal dataset."""

    raw = _load_yaml(path or MOCK_DEALS_FILE)
    try:
        return MockDealSet.model_validate(raw)
    except ValidationError as error:
        raise ConfigurationError(f"Mock deal validation failed: {error}") from error


__all__ = [
    "CATEGORIES_FILE",
    "CONFIG_DIRECTORY",
    "CategoryRule",
    "CategoryRules",
    "ConfigurationError",
    "MOCK_DEALS_FILE",
    "MockDeal",
    "MockDealSet",
    "TRANSLATIONS_FILE",
    "TranslationEntry",
    "TranslationTable",
    "load_category_rules",
    "load_mock_deals",
    "load_translation_table",
    "parse_translation_table",
]
