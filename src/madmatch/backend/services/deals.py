"""Deal sources and the catalog that aggregates them.

Live clearance offers come from the Salling Group food-waste API. Stores the
API does not cover are represented by a packaged mock dataset. The catalog
combines both, caches the result and keeps the last successful live response
around so a failing upstream does not empty the listing.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Mapping

import requests
from pydantic import ValidationError

from madmatch.backend.models import DealRecord
from madmatch.backend.config.tables import (
    CategoryRules,
    MockDealSet,
    load_category_rules,
    load_mock_deals,
)

from .cache import TTLCache

logger = logging.getLogger(__name__)

SALLING_BASE_URL = "https://api.sallinggroup.com"
DEFAULT_ZIP_CODE = "8000"
REQUEST_TIMEOUT_SECONDS = 5
LIVE_ID_OFFSET = 1000
PLACEHOLDER_IMAGE = "/images/placeholder.jpg"
UNKNOWN_PRODUCT = "Ukendt Produkt"

CACHE_KEY_ALL = "tilbud_all"
CACHE_KEY_LAST_SUCCESS = "tilbud_last_success"
LAST_SUCCESS_TTL_SECONDS = 60 * 60 * 24


class SallingAPIError(RuntimeError):
    """Raised when the Salling Group API cannot be reached or answers with an error."""


class CatalogUnavailableError(RuntimeError):
    """Raised when no deal source produced any records."""


def infer_category(product_name: str | None, rules: CategoryRules | None = None) -> str:
    """Return the first category whose keyword occurs in ``product_name``."""

    rules = rules or load_category_rules()
    if not product_name:
        return rules.fallback

    lowered = product_name.lower()
    for rule in rules.categories:
        if any(keyword in lowered for keyword in rule.keywords):
            return rule.name
    return rules.fallback


def normalize_brand(brand: str | None, rules: CategoryRules | None = None) -> str:
    """Map a Salling brand slug to its display name."""

    rules = rules or load_category_rules()
    if not brand:
        return rules.unknown_brand
    return rules.brands.get(brand.lower(), brand)


def _to_float(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class SallingGroupAdapter:
    """Client for the Salling Group food-waste endpoint."""

    def __init__(
        self,
        api_key: str | None,
        base_url: str | None = None,
        zip_code: str | None = None,
        *,
        session: requests.Session | None = None,
        rules: CategoryRules | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = (base_url or SALLING_BASE_URL).rstrip("/")
        self.zip_code = zip_code or DEFAULT_ZIP_CODE
        self.session = session or requests.Session()
        self._rules = rules

    @property
    def rules(self) -> CategoryRules:
        return self._rules or load_category_rules()

    def fetch_food_waste(self) -> list[Mapping[str, Any]]:
        """Return raw clearance offers for the configured zip code."""

        if not self.api_key:
            logger.warning("Salling API key not configured, skipping API call")
            return []

        url = f"{self.base_url}/v1/food-waste"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }
        logger.info("Fetching food waste data from %s (zip %s)", url, self.zip_code)

        try:
            response = self.session.get(
                url,
                params={"zip": self.zip_code},
                headers=headers,
                timeout=REQUEST_TIMEOUT_SECONDS,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as error:
            status = getattr(getattr(error, "response", None), "status_code", None)
            logger.error("Failed to fetch from Salling API: %s (status %s)", error, status)
            raise SallingAPIError(f"Salling API request failed: {error}") from error
        except ValueError as error:
            raise SallingAPIError("Salling API returned invalid JSON") from error

        clearances = payload if isinstance(payload, list) else []
        logger.info("Retrieved %d clearance offers from Salling API", len(clearances))
        return clearances

    def transform(self, clearances: Any) -> list[DealRecord]:
        """Convert raw clearance offers into :class:`DealRecord` instances."""

        if not isinstance(clearances, list):
            logger.warning("Invalid clearances data, expected a list")
            return []

        rules = self.rules
        records: list[DealRecord] = []
        next_id = LIVE_ID_OFFSET

        for clearance in clearances:
            if not isinstance(clearance, Mapping):
                logger.warning("Skipping malformed clearance entry: %r", clearance)
                continue

            offer = clearance.get("offer")
            product = clearance.get("product")
            store = clearance.get("store")
            if not (
                isinstance(offer, Mapping)
                and isinstance(product, Mapping)
                and isinstance(store, Mapping)
            ):
                logger.warning("Incomplete clearance data, skipping: %r", clearance)
                continue

            name = str(product.get("description") or UNKNOWN_PRODUCT)
            try:
                record = DealRecord(
                    id=next_id,
                    name=name,
                    store=normalize_brand(_optional_str(store.get("brand")), rules),
                    category=infer_category(name, rules),
                    normal_price=_to_float(offer.get("originalPrice")),
                    deal_price=_to_float(offer.get("newPrice")),
                    discount=_round_half_up(_to_float(offer.get("percentDiscount"))),
                    image_url=product.get("image") or PLACEHOLDER_IMAGE,
                    source="salling-api",
                    ean=_optional_str(offer.get("ean")),
                    stock=offer.get("stock"),
                    expires_at=offer.get("endTime"),
                )
            except ValidationError as error:
                logger.error("Failed to transform clearance item: %s", error)
                continue

            next_id += 1
            records.append(record)

        logger.info("Transformed %d items to deal records", len(records))
        return records

    def get_deals(self) -> list[DealRecord]:
        return self.transform(self.fetch_food_waste())


class MockDataAdapter:
    """Serves the packaged mock deals for stores outside the Salling group."""

    def __init__(self, dataset: MockDealSet | None = None) -> None:
        self._dataset = dataset

    def get_deals(self) -> list[DealRecord]:
        dataset = self._dataset or load_mock_deals()
        return [
            DealRecord(
                id=deal.id,
                name=deal.name,
                store=deal.store,
                category=deal.category,
                normal_price=deal.normal_price,
                deal_price=deal.deal_price,
                discount=deal.discount,
                image_url=deal.image_url,
                source="mock-data",
            )
            for deal in dataset.deals
        ]


class DealCatalog:
    """Aggregate deal sources behind a cache with last-success fallback."""

    def __init__(
        self,
        *,
        salling: SallingGroupAdapter | None = None,
        mock: MockDataAdapter | None = None,
        enable_real_data: bool = True,
        enable_mock_fallback: bool = True,
        cache: TTLCache | None = None,
    ) -> None:
        self.salling = salling or SallingGroupAdapter(api_key=None)
        self.mock = mock or MockDataAdapter()
        self.enable_real_data = enable_real_data
        self.enable_mock_fallback = enable_mock_fallback
        self.cache = cache or TTLCache(ttl_seconds=3600)

    def _fetch_live(self) -> list[DealRecord]:
        try:
            records = self.salling.get_deals()
        except SallingAPIError as error:
            logger.error("Salling API failed, attempting fallback: %s", error)
            entry = self.cache.get_entry(CACHE_KEY_LAST_SUCCESS)
            if entry is None:
                return []
            age_hours = entry.age(now=self.cache.now()).total_seconds() / 3600
            logger.info(
                "Using last successful API response (%d items, %.1f hours old)",
                len(entry.value),
                age_hours,
            )
            return list(entry.value)

        self.cache.set(CACHE_KEY_LAST_SUCCESS, records, ttl_seconds=LAST_SUCCESS_TTL_SECONDS)
        return records

    def get_deals(self) -> list[DealRecord]:
        """Return every available deal, live records first."""

        cached = self.cache.get_entry(CACHE_KEY_ALL)
        if cached is not None:
            logger.debug("Returning %d cached deals", len(cached.value))
            return list(cached.value)

        logger.info("Cache miss, fetching fresh deal data")
        deals: list[DealRecord] = []

        if self.enable_real_data:
            deals.extend(self._fetch_live())

        if self.enable_mock_fallback:
            mock_deals = self.mock.get_deals()
            deals.extend(mock_deals)
            logger.info("Added %d mock deals", len(mock_deals))

        if not deals:
            logger.critical("No deal data available from any source")
            raise CatalogUnavailableError("Unable to retrieve deal data")

        self.cache.set(CACHE_KEY_ALL, tuple(deals))
        live = sum(1 for deal in deals if deal.source == "salling-api")
        logger.info("Returning %d deals (%d live, %d mock)", len(deals), live, len(deals) - live)
        return deals

    def get_deal(self, deal_id: int) -> DealRecord | None:
        return next((deal for deal in self.get_deals() if deal.id == deal_id), None)

    def get_stores(self) -> list[str]:
        return _sorted_unique(deal.store for deal in self.get_deals())

    def get_categories(self) -> list[str]:
        return _sorted_unique(deal.category for deal in self.get_deals())

    def clear_cache(self) -> None:
        """Drop cached listings while preserving the live fallback entry."""

        for key in self.cache.keys():
            if not key.startswith(CACHE_KEY_LAST_SUCCESS):
                self.cache.delete(key)
        logger.info("Deal cache cleared (fallback preserved)")

    def cache_stats(self) -> dict[str, int]:
        return self.cache.stats().as_dict()


def _sorted_unique(values: Iterable[str]) -> list[str]:
    return sorted(set(values))


__all__ = [
    "CatalogUnavailableError",
    "DealCatalog",
    "MockDataAdapter",
    "SallingAPIError",
    "SallingGroupAdapter",
    "infer_category",
    "normalize_brand",
]
