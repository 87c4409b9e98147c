# ffeval/services/document.py
"""Conversion between JSON documents and the evaluation model.

Input documents look like::

    {
        "flag": {"key": "paywall",
                 "rules": [{"if": "country == 'CA'", "then": true}],
                 "default": false},
        "context": {"userId": "u123", "country": "CA"}
    }

and results are rendered as ``{"key", "enabled", "matchedRule"}``.
"""


from __future__ import annotations

from typing import Any, Dict, Mapping

from ffeval.services.flag_service import eval_flag
from ffeval.services.models import EvalResult, Flag, Rule, Value
from ffeval.validators.evaluate_validator import validate_eval_payload


def flag_from_document(doc: Mapping[str, Any]) -> Flag:
    """Build a :class:`Flag` from an already validated flag document."""
    rules = tuple(
        Rule(condition=rule["if"], then_value=rule["then"])
        for rule in doc.get("rules") or []
    )
    return Flag(
        key=doc["key"],
        rules=rules,
        default=bool(doc.get("default", False)),
    )


def _to_value(raw: Any) -> Value:
    # bool before int: JSON true/false decode to bool, a subclass of int.
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        return raw
    if isinstance(raw, (int, float)):
        try:
            return float(raw)
        except OverflowError:
            return float("inf") if raw > 0 else float("-inf")
    return None


def context_from_document(doc: Mapping[str, Any]) -> Dict[str, Value]:
    """Convert a JSON context object into evaluation values.

    Strings and booleans are kept, every number is widened to ``float`` and
    any other JSON shape (null, array, object) becomes ``None``.
    """
    return {key: _to_value(raw) for key, raw in doc.items()}


def result_to_document(result: EvalResult) -> Dict[str, Any]:
    """Render an :class:`EvalResult` as a response document."""
    return result.to_dict()


def evaluate_document(doc: Any) -> Dict[str, Any]:
    """Validate, convert and evaluate one ``{flag, context}`` document.

    Raises:
        BadRequest: If the document does not match the request schema.
    """
    validate_eval_payload(doc)
    flag = flag_from_document(doc["flag"])
    context = context_from_document(doc["context"])
    return result_to_document(eval_flag(flag, context))
