from madmatch.backend.config.tables import (
    CategoryRules,
    MockDealSet,
    load_category_rules,
    load_mock_deals,
    load_translation_table,
)
from madmatch.backend.config.validator import (
    main,
    validate_all,
    validate_category_rules,
    validate_mock_deals,
    validate_translation_table,
)


def test_current_configuration_is_valid() -> None:
    results = validate_all()
    assert all(not issues for issues in results.values()), results


def test_validator_flags_missing_required_group() -> None:
    table = load_translation_table()
    entries = tuple(
        entry.model_copy(update={"group": "other"}) if entry.group == "dairy" else entry
        for entry in table.entries
    )
    broken = table.model_copy(update={"entries": entries})

    errors = validate_translation_table(broken)

    assert any("dairy" in error for error in errors)


def test_validator_flags_modifier_shadowing_food_terms() -> None:
    table = load_translation_table()
    broken = table.model_copy(update={"modifiers": table.modifiers + ("brød",)})

    errors = validate_translation_table(broken)

    assert any("translations.modifiers" in error for error in errors)


def test_validator_flags_empty_keyword_lists() -> None:
    rules = load_category_rules()
    category = rules.categories[0].model_copy(update={"keywords": ()})
    broken = rules.model_copy(update={"categories": (category,) + rules.categories[1:]})

    errors = validate_category_rules(broken)

    assert any("no keywords" in error for error in errors)


def test_validator_flags_mock_deals_with_unknown_categories() -> None:
    deals = load_mock_deals()
    first = deals.deals[0].model_copy(update={"category": "Legetøj"})
    broken = MockDealSet.model_construct(deals=(first,) + deals.deals[1:])

    errors = validate_mock_deals(broken, load_category_rules())

    assert any("unknown category" in error for error in errors)


def test_validator_flags_inconsistent_discounts() -> None:
    deals = load_mock_deals()
    first = deals.deals[0].model_copy(update={"discount": 90})
    broken = MockDealSet.model_construct(deals=(first,))

    errors = validate_mock_deals(broken, CategoryRules.model_validate({"categories": [{"name": "Kød"}]}))

    assert any("does not match prices" in error for error in errors)


def test_cli_reports_success(capsys) -> None:
    assert main([]) == 0
    output = capsys.readouterr().out
    assert "[translations] OK" in output
    assert "[mock_deals] OK" in output


def test_cli_rejects_unknown_tables() -> None:
    assert main(["nonsense"]) == 2
