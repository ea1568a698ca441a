"""Domain models shared by services and routes."""

from .deals import DealRecord, DealSource, NutritionFacts, Recipe

__all__ = ["DealRecord", "DealSource", "NutritionFacts", "Recipe"]
