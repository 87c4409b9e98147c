# ffeval/validators/evaluate_validator.py
"""
Validators for /evaluate/ requests using JSON Schema.

This module loads the request schemas once at import time and exposes
helpers to validate incoming payloads, raising BadRequest on error.
"""


from pathlib import Path
import json
from jsonschema import validate as js_validate, ValidationError
from ffeval.errors.handlers import BadRequest
from ffeval.validators.flag_config_validator import validate_flag_config


SCHEMAS_DIR = Path(__file__).resolve().parent.parent / "schemas"


def _load_schema(filename: str) -> dict:
    with (SCHEMAS_DIR / filename).open("r", encoding="utf-8") as f:
        return json.load(f)


EVALUATE_REQUEST_SCHEMA = _load_schema("EvaluateRequest.schema.json")
EXPRESSION_REQUEST_SCHEMA = _load_schema("ExpressionRequest.schema.json")
ROLLOUT_REQUEST_SCHEMA = _load_schema("RolloutRequest.schema.json")


def _validate(payload: dict, schema: dict, name: str) -> None:
    if not isinstance(payload, dict):
        raise BadRequest("Payload must be a JSON object.")

    try:
        js_validate(instance=payload, schema=schema)
    except ValidationError as e:
        msg = getattr(e, "message", None) or str(e)
        raise BadRequest(f"Invalid {name}: {msg}")


def validate_eval_payload(payload: dict) -> None:
    """
    Validate an evaluation document ``{flag, context}``.

    Args:
        payload: Parsed JSON body.

    Raises:
        BadRequest: If payload is not an object, doesn't match the
            EvaluateRequest schema, or carries an invalid flag.
    """
    _validate(payload, EVALUATE_REQUEST_SCHEMA, "EvaluateRequest")
    validate_flag_config(payload["flag"])


def validate_expression_payload(payload: dict) -> None:
    """Validate a single-condition request ``{flag_key, expr, context}``."""
    _validate(payload, EXPRESSION_REQUEST_SCHEMA, "ExpressionRequest")


def validate_rollout_payload(payload: dict) -> None:
    """Validate a rollout probe ``{flag_key, user_id, p}``."""
    _validate(payload, ROLLOUT_REQUEST_SCHEMA, "RolloutRequest")
