"""Per-application service wiring."""

from __future__ import annotations

from dataclasses import dataclass

from flask import Flask, current_app

from madmatch.backend.config.tables import load_translation_table
from madmatch.backend.services.cache import TTLCache
from madmatch.backend.services.deals import DealCatalog, MockDataAdapter, SallingGroupAdapter
from madmatch.backend.services.filters import FilterEngine
from madmatch.backend.services.nutrition import NutritionService, OpenFoodFactsClient
from madmatch.backend.services.recipes import RecipeSuggestionService, SpoonacularClient
from madmatch.backend.services.translator import NameTranslator

from .settings import Settings

EXTENSION_KEY = "madmatch"


@dataclass(frozen=True)
class ServiceContainer:
    """Services constructed once per application and shared by handlers."""

    catalog: DealCatalog
    filters: FilterEngine
    translator: NameTranslator
    recipes: RecipeSuggestionService
    nutrition: NutritionService

    @classmethod
    def from_settings(cls, settings: Settings) -> ServiceContainer:
        table = load_translation_table()
        translator = NameTranslator.from_table(table)

        catalog = DealCatalog(
            salling=SallingGroupAdapter(
                settings.salling_api_key,
                settings.salling_base_url,
                settings.salling_zip_code,
            ),
            mock=MockDataAdapter(),
            enable_real_data=settings.enable_real_data,
            enable_mock_fallback=settings.enable_mock_fallback,
            cache=TTLCache(ttl_seconds=settings.cache_ttl_seconds),
        )
        recipes = RecipeSuggestionService(
            translator,
            SpoonacularClient(settings.spoonacular_api_key, settings.spoonacular_base_url),
            max_recipes=settings.max_recipes,
            modifiers=table.modifiers,
        )

        return cls(
            catalog=catalog,
            filters=FilterEngine(case_sensitive=settings.filter_case_sensitive),
            translator=translator,
            recipes=recipes,
            nutrition=NutritionService(OpenFoodFactsClient(settings.open_food_facts_base_url)),
        )

    def init_app(self, app: Flask) -> None:
        app.extensions[EXTENSION_KEY] = self


def get_services() -> ServiceContainer:
    """Return the container registered on the active application."""

    return current_app.extensions[EXTENSION_KEY]


__all__ = ["EXTENSION_KEY", "ServiceContainer", "get_services"]
