"""Blueprint registrations for application routes."""

from flask import Flask

from .deals import blueprint as deals_blueprint
from .products import blueprint as products_blueprint
from .translations import blueprint as translations_blueprint


def register_routes(app: Flask) -> None:
    """Register all Flask blueprints with the provided application."""

    app.register_blueprint(deals_blueprint)
    app.register_blueprint(products_blueprint)
    app.register_blueprint(translations_blueprint)
