"""Utilities for serialising API responses in the shared envelope."""

from __future__ import annotations

from typing import Any, Sequence, Tuple

from flask import jsonify

ResponseTuple = Tuple[Any, int]


def build_list_response(items: Sequence[Any]) -> ResponseTuple:
    """Return ``{"success": true, "count": n, "data": [...]}``."""

    return jsonify({"success": True, "count": len(items), "data": list(items)}), 200


def build_item_response(item: Any, **extra: Any) -> ResponseTuple:
    """Return ``{"success": true, "data": item}`` plus any extra keys."""

    payload = {"success": True, "data": item}
    payload.update(extra)
    return jsonify(payload), 200
