"""Service-layer helpers for the MadMatch backend."""

from .deals import CatalogUnavailableError, DealCatalog, MockDataAdapter, SallingGroupAdapter
from .filters import FilterCriteria, FilterEngine, apply_filters
from .nutrition import NutritionService, OpenFoodFactsClient
from .recipes import RecipeSuggestionService, SpoonacularClient
from .request_parser import parse_deal_id, parse_filter_criteria, parse_product_name
from .response_builder import build_item_response, build_list_response
from .translator import NameTranslator

__all__ = [
    "CatalogUnavailableError",
    "DealCatalog",
    "FilterCriteria",
    "FilterEngine",
    "MockDataAdapter",
    "NameTranslator",
    "NutritionService",
    "OpenFoodFactsClient",
    "RecipeSuggestionService",
    "SallingGroupAdapter",
    "SpoonacularClient",
    "apply_filters",
    "build_item_response",
    "build_list_response",
    "parse_deal_id",
    "parse_filter_criteria",
    "parse_product_name",
]
