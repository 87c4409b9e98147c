# ffeval/app.py

"""ffeval HTTP application entrypoint.

This module creates and configures the Flask application. When run
directly it applies development-time CORS settings and starts the HTTP
server using environment-based configuration.
"""

from __future__ import annotations

import logging
from typing import Optional

from flask import Flask
from flask_cors import CORS

from ffeval.blueprints.docs.docs import docs_bp
from ffeval.blueprints.flags.evaluate import evaluate_bp
from ffeval.blueprints.system.health import health_bp
from ffeval.config import Settings, configure_logging, load_settings
from ffeval.errors.handlers import register_error_handlers

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Create and configure the ffeval Flask application instance.

    Args:
        settings: Explicit settings; loaded from the environment if omitted.

    Returns:
        Flask: A configured Flask application instance.
    """
    settings = settings or load_settings()
    app = Flask(__name__)
    app.config["FFEVAL_SETTINGS"] = settings

    # Register JSON error handlers (400/404/422/500, etc.).
    register_error_handlers(app)

    # System & health
    app.register_blueprint(health_bp)      # /health/

    # Evaluation endpoints
    app.register_blueprint(evaluate_bp)    # /evaluate/

    # Documentation (OpenAPI + Swagger UI)
    app.register_blueprint(docs_bp)        # /openapi.yaml and /docs

    return app


def enable_cors(app: Flask, settings: Settings) -> None:
    """Allow the configured frontends to call this API directly.

    In production, CORS should be enforced at the reverse proxy layer.
    """
    CORS(
        app,
        resources={r"/*": {"origins": list(settings.cors_origins)}},
        supports_credentials=False,
        allow_headers=["Content-Type"],
        methods=["GET", "POST", "OPTIONS"],
    )


def run_server(settings: Optional[Settings] = None) -> None:
    """Run the development HTTP server."""
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = create_app(settings)
    enable_cors(app, settings)

    logger.info("Starting ffeval on %s:%s", settings.host, settings.port)
    app.run(
        host=settings.host,
        port=settings.port,
        debug=settings.debug,
    )


if __name__ == "__main__":
    run_server()
