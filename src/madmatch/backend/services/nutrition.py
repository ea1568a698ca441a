"""Nutrition facts for deals via the Open Food Facts search API."""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Any, Mapping

import requests
from pydantic import ValidationError

from madmatch.backend.models import NutritionFacts
from madmatch.backend.version import get_project_version

from .cache import TTLCache

logger = logging.getLogger(__name__)

OPEN_FOOD_FACTS_BASE_URL = "https://world.openfoodfacts.org/api/v2"
NUTRITION_CACHE_TTL_SECONDS = 60 * 60
REQUEST_TIMEOUT_SECONDS = 5
SEARCH_FIELDS = "product_name,nutriments,serving_size"

# Field name -> nutriment keys, per-100g value preferred.
_NUTRIMENT_KEYS: dict[str, tuple[str, ...]] = {
    "energy_kcal": ("energy-kcal_100g", "energy-kcal"),
    "energy_kj": ("energy-kj_100g", "energy-kj"),
    "protein": ("proteins_100g", "proteins"),
    "fat": ("fat_100g", "fat"),
    "saturated_fat": ("saturated-fat_100g", "saturated-fat"),
    "carbohydrates": ("carbohydrates_100g", "carbohydrates"),
    "sugars": ("sugars_100g", "sugars"),
    "fiber": ("fiber_100g", "fiber"),
    "salt": ("salt_100g", "salt"),
}


def _first_number(nutriments: Mapping[str, Any], keys: tuple[str, ...]) -> float | None:
    for key in keys:
        value = nutriments.get(key)
        if value is None:
            continue
        try:
            number = float(value)
        except (TypeError, ValueError):
            continue
        if math.isfinite(number):
            return number
    return None


def parse_nutrition(product: Mapping[str, Any], *, retrieved_at: datetime) -> NutritionFacts:
    """Build :class:`NutritionFacts` from one Open Food Facts search hit."""

    nutriments = product.get("nutriments")
    if not isinstance(nutriments, Mapping):
        nutriments = {}

    values = {field: _first_number(nutriments, keys) for field, keys in _NUTRIMENT_KEYS.items()}
    return NutritionFacts(
        **values,
        serving_size=str(product.get("serving_size") or "100g"),
        last_updated=retrieved_at,
    )


class OpenFoodFactsClient:
    """Thin wrapper around the Open Food Facts product search."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        session: requests.Session | None = None,
        user_agent: str | None = None,
    ) -> None:
        self.base_url = (base_url or OPEN_FOOD_FACTS_BASE_URL).rstrip("/")
        self.session = session or requests.Session()
        self.user_agent = user_agent or f"MadMatch/{get_project_version()} (contact@madmatch.dk)"

    def search_first(self, product_name: str) -> Mapping[str, Any] | None:
        """Return the best search hit for ``product_name``, ``None`` when nothing matches."""

        params = {"search_terms": product_name, "page_size": 1, "fields": SEARCH_FIELDS}
        response = self.session.get(
            f"{self.base_url}/search",
            params=params,
            headers={"User-Agent": self.user_agent},
            timeout=REQUEST_TIMEOUT_SECONDS,
        )
        if not response.ok:
            logger.error("Open Food Facts returned status %s", response.status_code)
            return None

        payload = response.json()
        products = payload.get("products") if isinstance(payload, Mapping) else None
        if not products or not isinstance(products, list):
            logger.info("No Open Food Facts products found for %r", product_name)
            return None

        first = products[0]
        return first if isinstance(first, Mapping) else None


class NutritionService:
    """Look up and cache nutrition facts per product id."""

    def __init__(
        self,
        client: OpenFoodFactsClient,
        *,
        cache: TTLCache | None = None,
    ) -> None:
        self.client = client
        self.cache = cache or TTLCache(ttl_seconds=NUTRITION_CACHE_TTL_SECONDS)

    def get_nutrition(self, product_name: str | None, product_id: str) -> NutritionFacts | None:
        """Return nutrition facts for the product, ``None`` when unavailable."""

        if not product_name:
            logger.warning("Empty product name provided for nutrition lookup")
            return None

        cache_key = f"product:{product_id}"
        cached = self.cache.get_entry(cache_key)
        if cached is not None:
            logger.debug("Nutrition cache hit for product %s", product_id)
            return cached.value

        logger.info("Nutrition cache miss for product %s, querying Open Food Facts", product_id)
        try:
            product = self.client.search_first(product_name)
        except (requests.RequestException, ValueError) as error:
            logger.error("Open Food Facts request for %r failed: %s", product_name, error)
            return None
        if product is None:
            return None

        try:
            facts = parse_nutrition(product, retrieved_at=self.cache.now())
        except ValidationError as error:
            logger.warning("Discarding malformed nutrition data for %r: %s", product_name, error)
            return None

        self.cache.set(cache_key, facts)
        return facts

    def clear_cache(self) -> None:
        self.cache.clear()

    def cache_stats(self) -> dict[str, int]:
        return self.cache.stats().as_dict()


__all__ = [
    "NutritionService",
    "OpenFoodFactsClient",
    "parse_nutrition",
]
