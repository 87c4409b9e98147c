"""Liveness endpoint for ffeval."""

from flask import Blueprint, jsonify

from ffeval import __version__

health_bp = Blueprint("health_bp", __name__, url_prefix="/health")


@health_bp.get("/")
def health() -> jsonify:
    """
    Health probe.

    Returns:
        {"status": "ok", "version": "<package version>"}
    """
    return jsonify({"status": "ok", "version": __version__})
