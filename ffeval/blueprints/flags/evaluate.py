"""Runtime evaluation endpoints for ffeval feature flags.

This blueprint exposes the public ``/evaluate/`` API used by client
applications to check whether a flag is enabled for a given context, plus
two diagnostic endpoints for single conditions and rollout buckets.
"""

from __future__ import annotations

import logging
from typing import Any

from flask import Blueprint, jsonify, request

from ffeval.services.document import context_from_document, evaluate_document
from ffeval.services.expression import eval_rule_expr
from ffeval.services.rollout import rollout, rollout_bucket
from ffeval.validators.evaluate_validator import (
    validate_expression_payload,
    validate_rollout_payload,
)

logger = logging.getLogger(__name__)

evaluate_bp = Blueprint("evaluate_bp", __name__, url_prefix="/evaluate")


@evaluate_bp.post("/")
def post_evaluate() -> tuple[Any, int]:
    """Evaluate a flag against a context.

    Request JSON body (EvaluateRequest):
        {
            "flag": {"key": "string",
                     "rules": [{"if": "string", "then": bool}],
                     "default": bool},
            "context": { ... }
        }

    Behaviour:
        - Returns 400 with {"error": "BadRequest"} if the body is not a
            valid EvaluateRequest.
        - Otherwise returns 200 with {"key", "enabled", "matchedRule"}.
            Malformed rules are skipped, never reported.

    Returns:
        A tuple ``(response, status_code)``.
    """
    payload = request.get_json(silent=True)
    result = evaluate_document(payload)

    logger.info(
        "Evaluated flag %s: enabled=%s matchedRule=%s",
        result["key"],
        result["enabled"],
        result["matchedRule"],
    )
    return jsonify(result), 200


@evaluate_bp.post("/expression")
def post_evaluate_expression() -> tuple[Any, int]:
    """Evaluate a single condition and report failures.

    Request JSON body (ExpressionRequest):
        {"flag_key": "string", "expr": "string", "context": { ... }}

    Unlike ``/evaluate/``, a malformed or type-invalid condition is
    returned as HTTP 422 with the failure category in ``error``. Use it to
    check rule text before deploying a flag.

    Returns:
        A tuple ``(response, status_code)``.
    """
    payload = request.get_json(silent=True)
    validate_expression_payload(payload)

    context = context_from_document(payload.get("context") or {})
    value = eval_rule_expr(payload["flag_key"], payload["expr"], context)

    return (
        jsonify(
            {
                "flag_key": payload["flag_key"],
                "expr": payload["expr"],
                "result": value,
            }
        ),
        200,
    )


@evaluate_bp.post("/rollout")
def post_rollout() -> tuple[Any, int]:
    """Return the rollout bucket and decision for one user.

    Request JSON body (RolloutRequest):
        {"flag_key": "string", "user_id": "string", "p": number}

    Returns:
        A tuple ``(response, status_code)``.
    """
    payload = request.get_json(silent=True)
    validate_rollout_payload(payload)

    flag_key = payload["flag_key"]
    user_id = payload["user_id"]
    p = float(payload["p"])

    return (
        jsonify(
            {
                "flag_key": flag_key,
                "user_id": user_id,
                "p": p,
                "bucket": rollout_bucket(flag_key, user_id),
                "enabled": rollout(flag_key, user_id, p),
            }
        ),
        200,
    )
