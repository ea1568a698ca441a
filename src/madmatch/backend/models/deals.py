"""Pydantic models describing deal and recipe payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

DealSource = Literal["salling-api", "mock-data"]

__all__ = ["DealRecord", "DealSource", "NutritionFacts", "Recipe"]


class DealRecord(BaseModel):
    """A single grocery deal.

    Attribute names are English; the serialised form uses the Danish keys the
    web client consumes (``navn``, ``butik``, ``kategori`` ...).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    name: str = Field(alias="navn")
    store: str = Field(alias="butik")
    category: str = Field(alias="kategori")
    normal_price: float = Field(alias="normalpris", ge=0)
    deal_price: float = Field(alias="tilbudspris", ge=0)
    discount: int = Field(default=0, alias="rabat")
    image_url: str = Field(default="/images/placeholder.jpg", alias="billedeUrl")
    source: DealSource = Field(default="mock-data", alias="_source")
    ean: str | None = Field(default=None, alias="_ean")
    stock: float | None = Field(default=None, alias="_stock")
    expires_at: str | None = Field(default=None, alias="_expiryDate")

    def as_payload(self) -> dict[str, Any]:
        """Return the JSON-ready representation with Danish keys."""

        payload = self.model_dump(by_alias=True, mode="json")
        for key in ("_ean", "_stock", "_expiryDate"):
            if payload.get(key) is None:
                payload.pop(key, None)
        return payload


class Recipe(BaseModel):
    """Recipe suggestion returned by an external recipe source."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    image_url: str | None = None
    used_ingredients: tuple[str, ...] = ()
    missed_ingredients: tuple[str, ...] = ()
    source_url: str | None = None
    source: str = "spoonacular"

    def as_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class NutritionFacts(BaseModel):
    """Per-100g nutrition values looked up for a product.

    Values the upstream source does not report stay ``None``; zero is a real
    value and is kept.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    energy_kcal: float | None = Field(default=None, alias="energyKcal")
    energy_kj: float | None = Field(default=None, alias="energyKj")
    protein: float | None = None
    fat: float | None = None
    saturated_fat: float | None = Field(default=None, alias="saturatedFat")
    carbohydrates: float | None = None
    sugars: float | None = None
    fiber: float | None = None
    salt: float | None = None
    serving_size: str = Field(default="100g", alias="servingSize")
    source: str = "openfoodfacts"
    last_updated: datetime = Field(alias="lastUpdated")

    def as_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")
