"""Utilities for validating lookup table data and surfacing issues."""

from __future__ import annotations

import argparse
from typing import Callable, Sequence

from .tables import (
    CategoryRules,
    ConfigurationError,
    MockDealSet,
    TranslationTable,
    load_category_rules,
    load_mock_deals,
    load_translation_table,
)

REQUIRED_TRANSLATION_GROUPS = ("meat", "dairy", "vegetables")


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def validate_translation_table(table: TranslationTable) -> list[str]:
    """Return human-readable issues for a loaded translation table."""

    errors: list[str] = []
    groups = table.groups()

    missing = [group for group in REQUIRED_TRANSLATION_GROUPS if not groups.get(group)]
    if missing:
        errors.append(
            _format_scope("translations", f"no entries for required groups {missing}")
        )

    keys = [entry.danish for entry in table.entries]
    for modifier in table.modifiers:
        shadowed = [key for key in keys if key != modifier and modifier in key]
        if shadowed:
            errors.append(
                _format_scope(
                    "translations.modifiers",
                    f"modifier {modifier!r} is contained in food terms {shadowed}",
                )
            )

    return errors


def validate_category_rules(rules: CategoryRules) -> list[str]:
    errors: list[str] = []

    for rule in rules.categories:
        if not rule.keywords:
            errors.append(
                _format_scope(f"categories.{rule.name}", "no keywords defined")
            )

    if any(rule.name == rules.fallback for rule in rules.categories):
        errors.append(
            _format_scope(
                "categories",
                f"fallback category {rules.fallback!r} should not declare keywords",
            )
        )

    for slug, label in rules.brands.items():
        if not label.strip():
            errors.append(_format_scope(f"brands.{slug}", "display name is empty"))

    return errors


def validate_mock_deals(deals: MockDealSet, rules: CategoryRules) -> list[str]:
    errors: list[str] = []
    known = {rule.name for rule in rules.categories} | {rules.fallback}

    for deal in deals.deals:
        scope = f"mock_deals.{deal.id}"
        if deal.category not in known:
            errors.append(_format_scope(scope, f"unknown category {deal.category!r}"))

        if deal.normal_price > 0:
            expected = round((1 - deal.deal_price / deal.normal_price) * 100)
            if abs(expected - deal.discount) > 1:
                errors.append(
                    _format_scope(
                        scope,
                        f"discount {deal.discount}% does not match prices (~{expected}%)",
                    )
                )

    return errors


def validate_all() -> dict[str, list[str]]:
    """Load every table and collect validation issues keyed by table name."""

    results: dict[str, list[str]] = {}
    loaders: dict[str, Callable[[], list[str]]] = {
        "translations": lambda: validate_translation_table(load_translation_table()),
        "categories": lambda: validate_category_rules(load_category_rules()),
        "mock_deals": lambda: validate_mock_deals(load_mock_deals(), load_category_rules()),
    }

    for name, check in loaders.items():
        try:
            results[name] = check()
        except (ConfigurationError, FileNotFoundError) as error:
            results[name] = [f"failed to load configuration: {error}"]

    return results


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate the translation table, category rules and mock deals."
    )
    parser.add_argument(
        "tables",
        nargs="*",
        help="Specific tables to report on: translations, categories, mock_deals",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)
    results = validate_all()
    selected = args.tables or list(results)

    unknown = [name for name in selected if name not in results]
    if unknown:
        parser.print_help()
        return 2

    exit_code = 0
    for name in selected:
        issues = results[name]
        if issues:
            exit_code = 1
            print(f"[{name}] {len(issues)} issue(s) detected:")
            for issue in issues:
                print(f"  - {issue}")
        else:
            print(f"[{name}] OK")

    return exit_code


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
