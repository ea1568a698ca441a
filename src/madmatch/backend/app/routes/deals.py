"""REST endpoints for browsing and filtering deals."""

from __future__ import annotations

import logging
from typing import Any

from flask import Blueprint, request

from madmatch.backend.app.container import get_services
from madmatch.backend.app.http import problem_response
from madmatch.backend.services import (
    build_item_response,
    build_list_response,
    parse_deal_id,
    parse_filter_criteria,
)

blueprint = Blueprint("deals", __name__, url_prefix="/api")

logger = logging.getLogger(__name__)


@blueprint.get("/tilbud")
def list_deals() -> tuple[Any, int]:
    """Return all deals, optionally filtered by ``butik`` and ``kategori``."""

    services = get_services()
    criteria = parse_filter_criteria(request)
    filtered = services.filters.apply_filters(services.catalog.get_deals(), criteria)

    logger.info(
        "Returning %d deals (butik: %s, kategori: %s)",
        len(filtered),
        criteria.store or "all",
        criteria.category or "all",
    )
    return build_list_response([deal.as_payload() for deal in filtered])


@blueprint.get("/tilbud/<deal_id>")
def get_deal(deal_id: str) -> tuple[Any, int]:
    parsed = parse_deal_id(deal_id)
    deal = None if parsed is None else get_services().catalog.get_deal(parsed)
    if deal is None:
        return problem_response("Tilbud ikke fundet", status=404).to_response()
    return build_item_response(deal.as_payload())


@blueprint.get("/butikker")
def list_stores() -> tuple[Any, int]:
    return build_item_response(get_services().catalog.get_stores())


@blueprint.get("/kategorier")
def list_categories() -> tuple[Any, int]:
    return build_item_response(get_services().catalog.get_categories())
