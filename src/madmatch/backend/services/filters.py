"""Store and category filtering over deal collections."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Iterable, Sequence, TypeVar

T = TypeVar("T")

# Query parameter names mapped onto criteria fields.
QUERY_PARAMETERS: Mapping[str, str] = {"butik": "store", "kategori": "category"}


def _clean(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None


@dataclass(frozen=True)
class FilterCriteria:
    """Optional equality constraints; ``None`` means unconstrained."""

    store: str | None = None
    category: str | None = None

    @classmethod
    def from_query(cls, args: Mapping[str, Any]) -> FilterCriteria:
        """Build criteria from ``butik``/``kategori`` query parameters."""

        values = {field: _clean(args.get(param)) for param, field in QUERY_PARAMETERS.items()}
        return cls(**values)

    @classmethod
    def coerce(cls, criteria: FilterCriteria | Mapping[str, Any] | None) -> FilterCriteria:
        if criteria is None:
            return cls()
        if isinstance(criteria, FilterCriteria):
            return criteria
        return cls(
            store=_clean(criteria.get("store")),
            category=_clean(criteria.get("category")),
        )

    def active(self) -> dict[str, str]:
        """Return only the constraints that are set."""

        return {
            field: value
            for field, value in (("store", _clean(self.store)), ("category", _clean(self.category)))
            if value is not None
        }


def _field_value(record: Any, field: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(field)
    return getattr(record, field, None)


class FilterEngine:
    """Apply store/category equality filters while preserving order."""

    def __init__(self, *, case_sensitive: bool = True) -> None:
        self.case_sensitive = case_sensitive

    def _matches(self, actual: Any, expected: str) -> bool:
        if not isinstance(actual, str):
            return False
        if self.case_sensitive:
            return actual == expected
        return actual.casefold() == expected.casefold()

    def apply_filters(
        self,
        deals: Iterable[T],
        criteria: FilterCriteria | Mapping[str, Any] | None = None,
    ) -> list[T]:
        """Return the deals satisfying every active criterion, in input order."""

        constraints = FilterCriteria.coerce(criteria).active()
        return [
            deal
            for deal in deals
            if all(
                self._matches(_field_value(deal, field), expected)
                for field, expected in constraints.items()
            )
        ]


def apply_filters(
    deals: Sequence[T],
    criteria: FilterCriteria | Mapping[str, Any] | None = None,
    *,
    case_sensitive: bool = True,
) -> list[T]:
    """Functional shortcut for :meth:`FilterEngine.apply_filters`."""

    return FilterEngine(case_sensitive=case_sensitive).apply_filters(deals, criteria)


__all__ = ["FilterCriteria", "FilterEngine", "QUERY_PARAMETERS", "apply_filters"]
