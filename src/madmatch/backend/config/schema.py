"""Pydantic models describing the static lookup tables shipped with MadMatch."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

MINIMUM_TRANSLATION_ENTRIES = 20
FALLBACK_CATEGORY = "Diverse"
UNKNOWN_STORE = "Ukendt"


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class TranslationEntry(ImmutableModel):
    """A single Danish term and its English equivalent."""

    danish: str
    english: str
    group: str | None = None

    @field_validator("danish", mode="before")
    @classmethod
    def _normalise_danish(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ConfigurationError("Translation entries require a Danish term")
        return value.strip().lower()

    @field_validator("english")
    @classmethod
    def _require_english(cls, value: str) -> str:
        if not value.strip():
            raise ConfigurationError("Translation entries require an English term")
        return value.strip()


class TranslationTable(ImmutableModel):
    """Immutable Danish to English food term table."""

    entries: tuple[TranslationEntry, ...]
    modifiers: tuple[str, ...] = ()

    @field_validator("modifiers", mode="before")
    @classmethod
    def _normalise_modifiers(cls, value: Any) -> tuple[str, ...]:
        if value is None:
            return ()
        if isinstance(value, str) or not isinstance(value, Sequence):
            raise ConfigurationError("Modifiers must be declared as a list of terms")
        return tuple(str(item).strip().lower() for item in value)

    @model_validator(mode="after")
    def _validate_entries(self) -> TranslationTable:
        if len(self.entries) < MINIMUM_TRANSLATION_ENTRIES:
            raise ConfigurationError(
                f"Translation table requires at least {MINIMUM_TRANSLATION_ENTRIES} "
                f"entries, found {len(self.entries)}"
            )

        seen: set[str] = set()
        for entry in self.entries:
            if entry.danish in seen:
                raise ConfigurationError(
                    f"Duplicate translation key after lowercasing: {entry.danish!r}"
                )
            seen.add(entry.danish)

        unknown = [modifier for modifier in self.modifiers if modifier not in seen]
        if unknown:
            raise ConfigurationError(
                f"Modifiers must also be translation keys: {sorted(unknown)}"
            )
        return self

    def as_mapping(self) -> Mapping[str, str]:
        """Return a read-only ``danish -> english`` view in table order."""

        return MappingProxyType({entry.danish: entry.english for entry in self.entries})

    def groups(self) -> dict[str, int]:
        """Count entries per declared group."""

        counts: dict[str, int] = {}
        for entry in self.entries:
            label = entry.group or "ungrouped"
            counts[label] = counts.get(label, 0) + 1
        return counts

    def __len__(self) -> int:
        return len(self.entries)


class CategoryRule(ImmutableModel):
    """Keywords that assign a product name to a category."""

    name: str
    keywords: tuple[str, ...] = ()

    @field_validator("keywords", mode="before")
    @classmethod
    def _lowercase_keywords(cls, value: Any) -> tuple[str, ...]:
        if value is None:
            return ()
        return tuple(str(keyword).strip().lower() for keyword in value)


class CategoryRules(ImmutableModel):
    """Ordered category inference rules plus the store brand lookup."""

    categories: tuple[CategoryRule, ...]
    fallback: str = FALLBACK_CATEGORY
    brands: Mapping[str, str] = Field(default_factory=dict)
    unknown_brand: str = UNKNOWN_STORE

    @field_validator("brands", mode="before")
    @classmethod
    def _lowercase_brand_keys(cls, value: Any) -> Mapping[str, str]:
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise ConfigurationError("Brand mappings must be declared as a mapping")
        return {str(key).strip().lower(): str(label) for key, label in value.items()}

    @model_validator(mode="after")
    def _validate_categories(self) -> CategoryRules:
        names = [rule.name for rule in self.categories]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ConfigurationError(f"Duplicate category names: {duplicates}")
        return self


class MockDeal(ImmutableModel):
    """Raw mock deal definition as stored in YAML."""

    id: int = Field(ge=1)
    name: str
    store: str
    category: str
    normal_price: float = Field(ge=0)
    deal_price: float = Field(ge=0)
    discount: int = Field(default=0, ge=0, le=100)
    image_url: str = "/images/placeholder.jpg"

    @model_validator(mode="after")
    def _validate_prices(self) -> MockDeal:
        if self.deal_price > self.normal_price:
            raise ConfigurationError(
                f"Mock deal {self.id} has a deal price above its normal price"
            )
        return self


class MockDealSet(ImmutableModel):
    """Collection of mock deals used when live data is unavailable."""

    deals: tuple[MockDeal, ...]

    @model_validator(mode="after")
    def _validate_ids(self) -> MockDealSet:
        ids = [deal.id for deal in self.deals]
        if len(ids) != len(set(ids)):
            raise ConfigurationError("Mock deal identifiers must be unique")
        return self


__all__ = [
    "CategoryRule",
    "CategoryRules",
    "ConfigurationError",
    "FALLBACK_CATEGORY",
    "ImmutableModel",
    "MINIMUM_TRANSLATION_ENTRIES",
    "MockDeal",
    "MockDealSet",
    "TranslationEntry",
    "TranslationTable",
    "UNKNOWN_STORE",
]
