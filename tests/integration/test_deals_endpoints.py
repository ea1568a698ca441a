"""Integration tests for the deal listing endpoints."""

from __future__ import annotations

from http import HTTPStatus
from unittest.mock import patch

import pytest
from flask.testing import FlaskClient

from madmatch.backend.app import create_app
from madmatch.backend.app.container import ServiceContainer
from madmatch.backend.app.settings import Settings


def test_lists_all_deals(client: FlaskClient) -> None:
    response = client.get("/api/tilbud")

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["success"] is True
    assert payload["count"] == len(payload["data"]) > 0
    first = payload["data"][0]
    assert set(first) >= {
        "id",
        "navn",
        "butik",
        "kategori",
        "normalpris",
        "tilbudspris",
        "rabat",
        "billedeUrl",
        "_source",
    }


def test_filters_by_store(client: FlaskClient) -> None:
    payload = client.get("/api/tilbud", query_string={"butik": "Aldi"}).get_json()

    assert payload["count"] > 0
    assert all(deal["butik"] == "Aldi" for deal in payload["data"])


def test_filters_by_store_and_category(client: FlaskClient) -> None:
    payload = client.get(
        "/api/tilbud", query_string={"butik": "Rema 1000", "kategori": "Mejeri"}
    ).get_json()

    assert [deal["navn"] for deal in payload["data"]] == ["Smør 250g", "Æg 10 stk"]


def test_filter_without_matches_returns_empty_list(client: FlaskClient) -> None:
    payload = client.get("/api/tilbud", query_string={"butik": "Lidl"}).get_json()

    assert payload == {"success": True, "count": 0, "data": []}


def test_filtering_is_case_sensitive_by_default(client: FlaskClient) -> None:
    payload = client.get("/api/tilbud", query_string={"butik": "aldi"}).get_json()

    assert payload["count"] == 0


def test_case_insensitive_filtering_can_be_enabled() -> None:
    app = create_app(
        Settings(
            allowed_origins=frozenset({"https://madmatch.test"}),
            enable_real_data=False,
            filter_case_sensitive=False,
        )
    )

    payload = app.test_client().get("/api/tilbud", query_string={"butik": "aldi"}).get_json()

    assert payload["count"] > 0
    assert all(deal["butik"] == "Aldi" for deal in payload["data"])


def test_get_single_deal(client: FlaskClient) -> None:
    response = client.get("/api/tilbud/1")

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["success"] is True
    assert payload["data"]["id"] == 1
    assert payload["data"]["navn"] == "Hakket Oksekød 8-12%"


def test_missing_deal_returns_404(client: FlaskClient) -> None:
    response = client.get("/api/tilbud/99999")

    assert response.status_code == HTTPStatus.NOT_FOUND
    assert response.get_json() == {"success": False, "error": "Tilbud ikke fundet"}


def test_non_numeric_deal_id_returns_404(client: FlaskClient) -> None:
    response = client.get("/api/tilbud/abc")

    assert response.status_code == HTTPStatus.NOT_FOUND
    assert response.get_json() == {"success": False, "error": "Tilbud ikke fundet"}


def test_lists_stores(client: FlaskClient) -> None:
    payload = client.get("/api/butikker").get_json()

    assert payload["success"] is True
    assert payload["data"] == ["Aldi", "Rema 1000"]


def test_lists_categories(client: FlaskClient) -> None:
    payload = client.get("/api/kategorier").get_json()

    assert payload["success"] is True
    assert "Mejeri" in payload["data"]
    assert payload["data"] == sorted(payload["data"])


@pytest.mark.parametrize("path", ["/api/tilbud", "/api/butikker", "/api/kategorier"])
def test_catalog_failure_returns_500(path: str) -> None:
    app = create_app(
        Settings(
            allowed_origins=frozenset({"https://madmatch.test"}),
            enable_real_data=False,
            enable_mock_fallback=False,
        )
    )

    response = app.test_client().get(path)

    assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert response.get_json() == {"success": False, "error": "Internal server error"}


def test_unexpected_catalog_error_returns_json_500(
    client: FlaskClient, services: ServiceContainer
) -> None:
    with patch.object(services.catalog, "get_deals", side_effect=AttributeError("boom")):
        response = client.get("/api/tilbud")

    assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert response.get_json() == {"success": False, "error": "Internal server error"}
