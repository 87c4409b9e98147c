"""Documentation endpoints for ffeval (OpenAPI spec, schemas, Swagger UI).

This blueprint serves:
- the OpenAPI YAML file
- JSON Schema files referenced by OpenAPI
- a minimal Swagger UI pointing to /openapi.yaml
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from flask import Blueprint, current_app, send_from_directory

from ffeval.errors.handlers import NotFound

# Absolute routes: /openapi.yaml, /schemas/*, /docs
docs_bp = Blueprint("docs_bp", __name__)


def _package_dir() -> Path:
    return Path(current_app.root_path)  # resolved at request time


@docs_bp.get("/openapi.yaml")
def get_openapi_yaml() -> Any:
    """Serve the OpenAPI spec file located at ffeval/docs/openapi.yaml.

    Raises:
        NotFound: If the file is missing from the installed package.
    """
    docs_dir = _package_dir() / "docs"
    if not (docs_dir / "openapi.yaml").exists():
        raise NotFound("openapi.yaml not found")

    return send_from_directory(docs_dir, "openapi.yaml", mimetype="text/yaml")


@docs_bp.get("/schemas/<path:filename>")
def get_schema_file(filename: str) -> Any:
    """Serve JSON schema files used by OpenAPI ``$ref``s.

    Args:
        filename: Schema file name under ``ffeval/schemas``.

    Raises:
        NotFound: If the schema does not exist.
    """
    schemas_dir = _package_dir() / "schemas"
    if not (schemas_dir / filename).is_file():
        raise NotFound(f"schema {filename} not found")

    return send_from_directory(
        schemas_dir,
        filename,
        mimetype="application/json",
    )


@docs_bp.get("/docs")
def swagger_ui() -> tuple[str, int, dict[str, str]]:
    """Serve a minimal Swagger UI pointing to ``/openapi.yaml``."""
    return (
        """
        <!doctype html>
        <html>
        <head>
            <meta charset="utf-8"/>
            <title>ffeval API Docs</title>
            <link rel="stylesheet"
                  href="https://unpkg.com/swagger-ui-dist/swagger-ui.css"/>
        </head>
        <body>
            <div id="swagger-ui"></div>
            <script src="https://unpkg.com/swagger-ui-dist/swagger-ui-bundle.js"></script>
            <script>
            window.ui = SwaggerUIBundle({
                url: '/openapi.yaml',
                dom_id: '#swagger-ui'
            });
            </script>
        </body>
        </html>
        """,
        200,
        {"Content-Type": "text/html; charset=utf-8"},
    )
