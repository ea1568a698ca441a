"""Recipe suggestions for deals via the Spoonacular API."""

from __future__ import annotations

import logging
import re
from http import HTTPStatus
from typing import Any, Iterable, Mapping

import requests
from pydantic import ValidationError

from madmatch.backend.models import Recipe

from .cache import TTLCache
from .translator import NameTranslator

logger = logging.getLogger(__name__)

SPOONACULAR_BASE_URL = "https://api.spoonacular.com"
DEFAULT_MAX_RECIPES = 3
RECIPE_CACHE_TTL_SECONDS = 60 * 60 * 24
REQUEST_TIMEOUT_SECONDS = 5
USER_AGENT = "MadMatch (contact@madmatch.dk)"

_PERCENTAGE_PATTERN = re.compile(r"\d+-\d+%|\d+,\d+%|\d+%")
_SEPARATOR_PATTERN = re.compile(r"[,;-]")
_WHITESPACE_PATTERN = re.compile(r"\s+")


def extract_ingredient(product_name: str, modifiers: Iterable[str] = ()) -> str:
    """Reduce a shop product name to the ingredient text worth searching for.

    >>> extract_ingredient("Dansk Hakket Oksekød 8-12%", ["dansk"])
    'hakket oksekød'
    """

    ingredient = _PERCENTAGE_PATTERN.sub("", product_name.lower())
    for modifier in modifiers:
        ingredient = re.sub(rf"\b{re.escape(modifier.lower())}\b", "", ingredient)
    ingredient = _SEPARATOR_PATTERN.split(ingredient, maxsplit=1)[0]
    return _WHITESPACE_PATTERN.sub(" ", ingredient).strip()


def _slugify(title: str) -> str:
    return _WHITESPACE_PATTERN.sub("-", title.strip().lower())


def _ingredient_names(items: Any) -> tuple[str, ...]:
    if not isinstance(items, list):
        return ()
    names = []
    for item in items:
        if isinstance(item, Mapping):
            name = item.get("name") or item.get("original")
            if name:
                names.append(str(name))
    return tuple(names)


class SpoonacularClient:
    """Thin wrapper around the ``findByIngredients`` endpoint."""

    def __init__(
        self,
        api_key: str | None,
        base_url: str | None = None,
        *,
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = (base_url or SPOONACULAR_BASE_URL).rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT})

    def find_by_ingredients(self, ingredient: str, *, number: int) -> list[Recipe]:
        """Return recipes using ``ingredient``; an empty list on any failure."""

        if not self.api_key:
            logger.warning("Spoonacular API key not configured")
            return []

        params = {
            "apiKey": self.api_key,
            "ingredients": ingredient,
            "number": number,
            "ranking": 2,
            "ignorePantry": "true",
        }

        try:
            response = self.session.get(
                f"{self.base_url}/recipes/findByIngredients",
                params=params,
                timeout=REQUEST_TIMEOUT_SECONDS,
            )
            if response.status_code == HTTPStatus.PAYMENT_REQUIRED:
                logger.error("Spoonacular API quota exceeded")
                return []
            if response.status_code == HTTPStatus.UNAUTHORIZED:
                logger.error("Spoonacular API rejected the configured key")
                return []
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as error:
            logger.error("Spoonacular request for %r failed: %s", ingredient, error)
            return []

        if not isinstance(payload, list):
            logger.warning("Unexpected Spoonacular payload type: %s", type(payload).__name__)
            return []

        recipes: list[Recipe] = []
        for item in payload[:number]:
            if not isinstance(item, Mapping) or "id" not in item:
                continue
            title = str(item.get("title") or "")
            try:
                recipes.append(
                    Recipe(
                        id=f"spoonacular-{item['id']}",
                        title=title,
                        image_url=item.get("image"),
                        used_ingredients=_ingredient_names(item.get("usedIngredients")),
                        missed_ingredients=_ingredient_names(item.get("missedIngredients")),
                        source_url=f"https://spoonacular.com/recipes/{_slugify(title)}-{item['id']}",
                    )
                )
            except ValidationError as error:
                logger.warning("Skipping malformed recipe %r: %s", item.get("id"), error)
        return recipes


class RecipeSuggestionService:
    """Translate product names and look up matching recipes with caching."""

    def __init__(
        self,
        translator: NameTranslator,
        client: SpoonacularClient,
        *,
        max_recipes: int = DEFAULT_MAX_RECIPES,
        cache: TTLCache | None = None,
        modifiers: Iterable[str] = (),
    ) -> None:
        if max_recipes <= 0:
            raise ValueError("max_recipes must be positive")
        self.translator = translator
        self.client = client
        self.max_recipes = max_recipes
        self.cache = cache or TTLCache(ttl_seconds=RECIPE_CACHE_TTL_SECONDS)
        self._modifiers = tuple(modifiers)

    def ingredient_for(self, product_name: str) -> str:
        cleaned = extract_ingredient(product_name, self._modifiers)
        return self.translator.translate(cleaned) if cleaned else ""

    def suggest(self, product_name: str) -> list[Recipe]:
        ingredient = self.ingredient_for(product_name)
        if not ingredient:
            logger.warning("Could not extract an ingredient from %r", product_name)
            return []

        cache_key = f"ingredient:{ingredient}"
        cached = self.cache.get_entry(cache_key)
        if cached is not None:
            logger.debug("Recipe cache hit for %r", ingredient)
            return list(cached.value)

        recipes = self.client.find_by_ingredients(ingredient, number=self.max_recipes)
        if recipes:
            self.cache.set(cache_key, tuple(recipes))
        return recipes


__all__ = [
    "RecipeSuggestionService",
    "SpoonacularClient",
    "extract_ingredient",
]
