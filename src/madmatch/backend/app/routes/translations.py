"""Expose the product name translator to API consumers."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request

from madmatch.backend.app.container import get_services
from madmatch.backend.services import build_item_response, parse_product_name

blueprint = Blueprint("translations", __name__, url_prefix="/api")


@blueprint.get("/oversaet")
def translate_product_name() -> tuple[Any, int]:
    """Return the English ingredient term for the ``navn`` query parameter."""

    name = parse_product_name(request)
    english = get_services().translator.translate(name)
    return build_item_response({"navn": name, "engelsk": english})
