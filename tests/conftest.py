"""Test configuration utilities and shared fixtures."""

import sys
from pathlib import Path

# Ensure the ``src`` directory is importable when tests are executed without an
# editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402
from flask import Flask  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402

from madmatch.backend.app import create_app  # noqa: E402
from madmatch.backend.app.container import ServiceContainer, get_services  # noqa: E402
from madmatch.backend.app.settings import Settings  # noqa: E402

ALLOWED_ORIGIN = "https://madmatch.test"


@pytest.fixture()
def settings() -> Settings:
    """Offline settings: mock data only, no third-party API keys."""

    return Settings(
        allowed_origins=frozenset({ALLOWED_ORIGIN}),
        enable_real_data=False,
        enable_mock_fallback=True,
    )


@pytest.fixture()
def app(settings: Settings) -> Flask:
    """Return a configured Flask application for integration tests."""

    application = create_app(settings)
    application.config.update(TESTING=True)
    return application


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Provide a test client bound to the configured Flask app."""

    return app.test_client()


@pytest.fixture()
def services(app: Flask) -> ServiceContainer:
    with app.app_context():
        return get_services()
