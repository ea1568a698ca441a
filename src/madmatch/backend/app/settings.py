"""Runtime settings resolved from environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Mapping

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_positive_int(value: str | None, *, env: str) -> int | None:
    if value is None or not value.strip():
        return None
    try:
        parsed = int(value)
    except ValueError:
        logger.warning("Ignoring invalid value for %s: %s", env, value)
        return None
    if parsed <= 0:
        logger.warning("Ignoring non-positive value for %s: %s", env, value)
        return None
    return parsed


def _parse_bool(value: str | None, *, env: str, default: bool) -> bool:
    if value is None or not value.strip():
        return default
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    logger.warning("Ignoring invalid boolean for %s: %s", env, value)
    return default


def _parse_allowed_origins(raw: str | None) -> frozenset[str]:
    """Convert an environment variable into a normalised set of origins."""

    if not raw:
        return frozenset()

    return frozenset(origin.strip() for origin in raw.split(",") if origin.strip())


def _optional(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()


@dataclass(frozen=True)
class Settings:
    """Configuration consumed by the application factory."""

    allowed_origins: frozenset[str] = field(default_factory=frozenset)
    salling_api_key: str | None = None
    salling_base_url: str | None = None
    salling_zip_code: str = "8000"
    enable_real_data: bool = True
    enable_mock_fallback: bool = True
    cache_ttl_seconds: int = 3600
    spoonacular_api_key: str | None = None
    spoonacular_base_url: str | None = None
    max_recipes: int = 3
    open_food_facts_base_url: str | None = None
    filter_case_sensitive: bool = True

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        defaults = cls()

        return cls(
            allowed_origins=_parse_allowed_origins(env.get("MADMATCH_ALLOWED_ORIGINS")),
            salling_api_key=_optional(env.get("SALLING_API_KEY")),
            salling_base_url=_optional(env.get("SALLING_API_BASE_URL")),
            salling_zip_code=_optional(env.get("SALLING_ZIP_CODE")) or defaults.salling_zip_code,
            enable_real_data=_parse_bool(
                env.get("ENABLE_REAL_DATA"), env="ENABLE_REAL_DATA", default=True
            ),
            enable_mock_fallback=_parse_bool(
                env.get("ENABLE_MOCK_FALLBACK"), env="ENABLE_MOCK_FALLBACK", default=True
            ),
            cache_ttl_seconds=_parse_positive_int(
                env.get("MADMATCH_CACHE_TTL"), env="MADMATCH_CACHE_TTL"
            )
            or defaults.cache_ttl_seconds,
            spoonacular_api_key=_optional(env.get("SPOONACULAR_API_KEY")),
            spoonacular_base_url=_optional(env.get("SPOONACULAR_BASE_URL")),
            max_recipes=_parse_positive_int(
                env.get("MADMATCH_MAX_RECIPES"), env="MADMATCH_MAX_RECIPES"
            )
            or defaults.max_recipes,
            open_food_facts_base_url=_optional(env.get("OPEN_FOOD_FACTS_BASE_URL")),
            filter_case_sensitive=_parse_bool(
                env.get("MADMATCH_FILTER_CASE_SENSITIVE"),
                env="MADMATCH_FILTER_CASE_SENSITIVE",
                default=True,
            ),
        )


__all__ = ["Settings"]
