"""Integration tests covering CORS behaviour for API endpoints."""

import pytest
from flask.testing import FlaskClient

from madmatch.backend.app import create_app
from madmatch.backend.app.settings import Settings

ALLOWED_ORIGIN = "https://allowed.test"
ALLOWED_EMBEDDER = "https://embedder.test"
DISALLOWED_ORIGIN = "https://blocked.test"


@pytest.fixture()
def cors_client(monkeypatch: pytest.MonkeyPatch) -> FlaskClient:
    """Return a client configured with a known CORS allow-list."""

    monkeypatch.setenv(
        "MADMATCH_ALLOWED_ORIGINS",
        ",".join([ALLOWED_ORIGIN, ALLOWED_EMBEDDER]),
    )
    monkeypatch.setenv("ENABLE_REAL_DATA", "false")

    app = create_app()
    app.config.update(TESTING=True)

    with app.test_client() as client:
        yield client


def test_allowed_origin_receives_cors_headers(cors_client: FlaskClient) -> None:
    response = cors_client.get("/api/butikker", headers={"Origin": ALLOWED_ORIGIN})

    assert response.status_code == 200
    assert response.headers.get("Access-Control-Allow-Origin") == ALLOWED_ORIGIN


def test_preflight_request_returns_success(cors_client: FlaskClient) -> None:
    response = cors_client.options(
        "/api/tilbud",
        headers={
            "Origin": ALLOWED_EMBEDDER,
            "Access-Control-Request-Method": "GET",
        },
    )

    assert response.status_code == 200
    assert response.headers.get("Access-Control-Allow-Origin") == ALLOWED_EMBEDDER
    assert "GET" in response.headers.get("Access-Control-Allow-Methods", "")


def test_disallowed_origin_does_not_receive_cors_headers(cors_client: FlaskClient) -> None:
    response = cors_client.get("/api/butikker", headers={"Origin": DISALLOWED_ORIGIN})

    assert response.status_code == 200
    assert response.headers.get("Access-Control-Allow-Origin") is None


def test_missing_allow_list_warns() -> None:
    with pytest.warns(UserWarning, match="No allowed origins"):
        create_app(Settings(enable_real_data=False))
