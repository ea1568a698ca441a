"""Unit tests for recipe suggestions."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest
import requests

from madmatch.backend.services.recipes import (
    RecipeSuggestionService,
    SpoonacularClient,
    extract_ingredient,
)
from madmatch.backend.services.translator import NameTranslator

MODIFIERS = ("økologisk", "frisk", "frossen", "dansk")

SPOONACULAR_PAYLOAD = [
    {
        "id": 715538,
        "title": "Bruschetta Style Pork",
        "image": "https://img.spoonacular.com/recipes/715538.jpg",
        "usedIngredients": [{"name": "ground beef"}],
        "missedIngredients": [{"name": "tomatoes"}, {"original": "1 onion"}],
    },
    {"id": 2, "title": "Beef Tacos"},
    {"id": 3, "title": "Chili"},
    {"id": 4, "title": "Lasagne"},
]


def _response(payload: Any, status: int = 200) -> MagicMock:
    response = MagicMock()
    response.status_code = status
    response.json.return_value = payload
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status} Error")
    return response


def _client(*responses: Any, api_key: str | None = "spoon-key") -> SpoonacularClient:
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    session.get.side_effect = list(responses)
    return SpoonacularClient(api_key, session=session)


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Dansk Hakket Oksekød 8-12%", "hakket oksekød"),
        ("Letmælk 0,5%", "letmælk"),
        ("Økologisk Mælk 1L", "mælk 1l"),
        ("Kylling, hel", "kylling"),
        ("Friske Jordbær 250g", "friske jordbær 250g"),
    ],
)
def test_extract_ingredient(name: str, expected: str) -> None:
    assert extract_ingredient(name, MODIFIERS) == expected


def test_client_parses_recipes() -> None:
    client = _client(_response(SPOONACULAR_PAYLOAD))

    recipes = client.find_by_ingredients("ground beef", number=3)

    assert [recipe.id for recipe in recipes] == ["spoonacular-715538", "spoonacular-2", "spoonacular-3"]
    first = recipes[0]
    assert first.used_ingredients == ("ground beef",)
    assert first.missed_ingredients == ("tomatoes", "1 onion")
    assert first.source_url == "https://spoonacular.com/recipes/bruschetta-style-pork-715538"

    _, kwargs = client.session.get.call_args
    assert kwargs["params"]["ingredients"] == "ground beef"
    assert kwargs["params"]["number"] == 3
    assert kwargs["params"]["ranking"] == 2


def test_client_without_key_skips_request() -> None:
    client = _client(api_key=None)

    assert client.find_by_ingredients("beef", number=3) == []
    client.session.get.assert_not_called()


@pytest.mark.parametrize("status", [401, 402, 500])
def test_client_returns_empty_list_on_http_errors(status: int) -> None:
    client = _client(_response({"message": "nope"}, status=status))

    assert client.find_by_ingredients("beef", number=3) == []


def test_client_returns_empty_list_on_network_errors() -> None:
    client = _client(requests.Timeout("timed out"))

    assert client.find_by_ingredients("beef", number=3) == []


def test_service_translates_before_searching() -> None:
    client = _client(_response(SPOONACULAR_PAYLOAD))
    service = RecipeSuggestionService(NameTranslator.default(), client, modifiers=MODIFIERS)

    recipes = service.suggest("Hakket Oksekød 8-12%")

    assert len(recipes) == 3
    _, kwargs = client.session.get.call_args
    assert kwargs["params"]["ingredients"] == "ground beef"


def test_service_caches_results_per_ingredient() -> None:
    client = _client(_response(SPOONACULAR_PAYLOAD))
    service = RecipeSuggestionService(NameTranslator.default(), client, modifiers=MODIFIERS)

    first = service.suggest("Kyllingebryst 500g")
    second = service.suggest("Kylling")

    assert first == second
    assert client.session.get.call_count == 1


def test_service_returns_empty_list_for_blank_names() -> None:
    client = _client()
    service = RecipeSuggestionService(NameTranslator.default(), client)

    assert service.suggest("8-12%") == []
    client.session.get.assert_not_called()


def test_service_rejects_non_positive_limits() -> None:
    with pytest.raises(ValueError):
        RecipeSuggestionService(NameTranslator.default(), _client(), max_recipes=0)
