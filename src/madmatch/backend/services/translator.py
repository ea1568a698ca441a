"""Danish product name to English ingredient term resolution.

Names are matched against the translation table in two passes: an exact match
on the lowercased name, then the longest table key contained in the name.
Qualifier terms such as "økologisk" or "frisk" only resolve on an exact match
so that "Frisk Mælk" becomes "milk" rather than "fresh".
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping, overload

from madmatch.backend.config.tables import TranslationTable, load_translation_table


class NameTranslator:
    """Resolve free-text product names to canonical English terms."""

    def __init__(
        self,
        translations: Mapping[str, str],
        *,
        modifiers: Iterable[str] = (),
    ) -> None:
        table = {key.lower(): value for key, value in translations.items()}
        self._table: Mapping[str, str] = MappingProxyType(table)
        self._modifiers = frozenset(modifier.lower() for modifier in modifiers)
        # Stable sort keeps table order among keys of equal length.
        self._partial_keys: tuple[str, ...] = tuple(
            sorted(
                (key for key in table if key not in self._modifiers),
                key=len,
                reverse=True,
            )
        )

    @classmethod
    def from_table(cls, table: TranslationTable) -> NameTranslator:
        return cls(table.as_mapping(), modifiers=table.modifiers)

    @classmethod
    def default(cls) -> NameTranslator:
        """Build a translator from the packaged translation table."""

        return cls.from_table(load_translation_table())

    @property
    def table(self) -> Mapping[str, str]:
        return self._table

    @overload
    def translate(self, name: str) -> str: ...

    @overload
    def translate(self, name: None) -> None: ...

    def translate(self, name: str | None) -> str | None:
        """Return the English term for ``name`` or ``name`` itself when unknown."""

        if not name:
            return name

        lowered = name.lower()
        exact = self._table.get(lowered)
        if exact is not None:
            return exact

        for key in self._partial_keys:
            if key in lowered:
                return self._table[key]

        return name

    def translate_many(self, names: Iterable[str | None]) -> list[str | None]:
        return [self.translate(name) for name in names]

    def __len__(self) -> int:
        return len(self._table)


__all__ = ["NameTranslator"]
