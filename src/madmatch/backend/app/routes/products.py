"""Per-product enrichment: recipe suggestions and nutrition facts."""

from __future__ import annotations

from typing import Any

from flask import Blueprint

from madmatch.backend.app.container import get_services
from madmatch.backend.app.http import problem_response
from madmatch.backend.models import DealRecord
from madmatch.backend.services import build_item_response, build_list_response, parse_deal_id

blueprint = Blueprint("products", __name__, url_prefix="/api/produkt")

NUTRITION_UNAVAILABLE = "Næringsdata ikke tilgængelig for dette produkt"


def _find_product(raw_id: str) -> DealRecord | None:
    deal_id = parse_deal_id(raw_id)
    if deal_id is None:
        return None
    return get_services().catalog.get_deal(deal_id)


def _product_not_found() -> tuple[Any, int]:
    return problem_response("Produkt ikke fundet", status=404).to_response()


@blueprint.get("/<deal_id>/recipes")
def get_recipes(deal_id: str) -> tuple[Any, int]:
    """Suggest recipes for the product behind ``deal_id``."""

    deal = _find_product(deal_id)
    if deal is None:
        return _product_not_found()

    recipes = get_services().recipes.suggest(deal.name)
    return build_list_response([recipe.as_payload() for recipe in recipes])


@blueprint.get("/<deal_id>/nutrition")
def get_nutrition(deal_id: str) -> tuple[Any, int]:
    """Return Open Food Facts nutrition data for the product behind ``deal_id``."""

    deal = _find_product(deal_id)
    if deal is None:
        return _product_not_found()

    facts = get_services().nutrition.get_nutrition(deal.name, str(deal.id))
    if facts is None:
        return build_item_response(None, message=NUTRITION_UNAVAILABLE)
    return build_item_response(facts.as_payload())
