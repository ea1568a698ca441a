"""Application factory for MadMatch backend services."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from warnings import warn

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import BadRequest, HTTPException, MethodNotAllowed, NotFound

from madmatch.backend.services.deals import CatalogUnavailableError
from madmatch.backend.version import get_project_version

from .container import ServiceContainer
from .http import problem_response
from .routes import register_routes
from .settings import Settings

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    services: ServiceContainer | None = None,
) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__)
    settings = settings or Settings.from_env()

    if not settings.allowed_origins:
        warn(
            "No allowed origins configured; cross-origin requests will be rejected.",
            stacklevel=1,
        )

    CORS(
        app,
        resources={r"/api/*": {"origins": sorted(settings.allowed_origins)}},
        supports_credentials=False,
        methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    (services or ServiceContainer.from_settings(settings)).init_app(app)
    app.config["MADMATCH_SETTINGS"] = settings

    @app.before_request
    def _log_request() -> None:
        logger.info("%s %s", request.method, request.path)

    register_routes(app)

    @app.route("/health", methods=["GET"])
    def health_check():
        """Simple health check endpoint for infrastructure monitoring."""

        payload = {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": get_project_version(),
        }
        return jsonify(payload)

    @app.errorhandler(BadRequest)
    def handle_bad_request(error: BadRequest):
        """Return consistent JSON responses for malformed requests."""

        message = error.description or "Invalid request"
        return problem_response(message, status=400).to_response()

    @app.errorhandler(NotFound)
    def handle_not_found(error: NotFound):
        return problem_response("Endpoint not found", status=404).to_response()

    @app.errorhandler(MethodNotAllowed)
    def handle_method_not_allowed(error: MethodNotAllowed):
        response, status = problem_response("Method not allowed", status=405).to_response()
        if error.valid_methods:
            response.headers["Allow"] = ", ".join(sorted(error.valid_methods))
        return response, status

    @app.errorhandler(HTTPException)
    def handle_http_exception(error: HTTPException):
        return problem_response(error.name, status=error.code or 500).to_response()

    @app.errorhandler(CatalogUnavailableError)
    def handle_catalog_unavailable(error: CatalogUnavailableError):
        logger.error("Deal catalog unavailable: %s", error)
        return problem_response("Internal server error", status=500).to_response()

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        logger.exception("Unhandled error while serving %s %s", request.method, request.path)
        return problem_response("Internal server error", status=500).to_response()

    return app


__all__ = ["create_app"]
