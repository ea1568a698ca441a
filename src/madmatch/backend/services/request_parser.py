"""Helpers for normalising incoming query parameters."""

from __future__ import annotations

from flask import Request
from werkzeug.exceptions import BadRequest

from .filters import FilterCriteria


def parse_filter_criteria(req: Request) -> FilterCriteria:
    """Map ``butik``/``kategori`` query parameters onto :class:`FilterCriteria`."""

    return FilterCriteria.from_query(req.args)


def parse_product_name(req: Request, *, parameter: str = "navn") -> str:
    """Return the product name query parameter or raise ``BadRequest``."""

    value = req.args.get(parameter)
    if value is None or not value.strip():
        raise BadRequest(f"Query parameter '{parameter}' is required")
    return value.strip()


def parse_deal_id(raw: str) -> int | None:
    """Return the numeric deal id from a path segment, ``None`` if it is not one."""

    value = raw.strip()
    if not (value.isascii() and value.isdigit()):
        return None
    return int(value)
