# ffeval/services/terms.py
"""Operand resolution, comparison and membership for rule conditions.

Terms are resolved in a fixed order: ``rollout(p)`` call, boolean literal,
number literal, quoted string, and finally a context identifier. An unknown
identifier resolves to ``None`` rather than failing.
"""


from __future__ import annotations

import sys
from typing import Optional

from ffeval.errors.evaluation import (
    MalformedExpression,
    UnsupportedMembershipTarget,
    UnsupportedOperator,
)
from ffeval.services.models import Context, Value
from ffeval.services.rollout import rollout

ROLLOUT_PREFIX = "rollout("
USER_ID_KEY = "userId"
QUOTE_CHARS = ("'", '"')
EQUALITY_OPERATORS = ("==", "!=")
ORDERING_OPERATORS = ("<", "<=", ">", ">=")

_EPSILON = sys.float_info.epsilon


def parse_number(text: str) -> Optional[float]:
    """Parse a plain float literal, or return None.

    Only ASCII literals without digit separators or surrounding whitespace
    are accepted (``1``, ``-2.5``, ``1e3``, ``inf``, ``nan``).
    """
    if not text or not text.isascii() or "_" in text or text != text.strip():
        return None
    try:
        return float(text)
    except ValueError:
        return None


def unquote(text: str) -> Optional[str]:
    """Return the content of a quoted literal, or None if ``text`` is not one.

    Each end may use either quote character; they are not required to match.
    """
    if len(text) >= 2 and text[0] in QUOTE_CHARS and text[-1] in QUOTE_CHARS:
        return text[1:-1]
    return None


def value_kind(value: object) -> str:
    """Classify a context value as string, number, boolean or null."""
    # bool first: it is a subclass of int.
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (int, float)):
        return "number"
    return "null"


def resolve_term(fragment: str, context: Context, flag_key: str) -> Value:
    """Resolve an atomic condition fragment to a value.

    Args:
        fragment: Literal, identifier or ``rollout(p)`` call.
        context: Named values for this evaluation.
        flag_key: Key of the flag being evaluated (feeds the rollout hash).

    Returns:
        The resolved value. Unknown identifiers resolve to ``None``.

    Raises:
        MalformedExpression: If a ``rollout(...)`` argument is not a number.
    """
    term = fragment.strip()

    if term.startswith(ROLLOUT_PREFIX) and term.endswith(")"):
        inner = term[len(ROLLOUT_PREFIX):-1].strip()
        p = parse_number(inner)
        if p is None:
            raise MalformedExpression(
                f"rollout() expects a numeric argument, got {inner!r}"
            )
        user_id = context.get(USER_ID_KEY)
        if not isinstance(user_id, str):
            user_id = ""
        return rollout(flag_key, user_id, p)

    lowered = term.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False

    number = parse_number(term)
    if number is not None:
        return number

    text = unquote(term)
    if text is not None:
        return text

    return context.get(term)


def _as_float(value: object) -> float:
    try:
        return float(value)  # type: ignore[arg-type]
    except OverflowError:
        return float("inf") if value > 0 else float("-inf")  # type: ignore[operator]


def compare(left: Value, operator: str, right: Value) -> bool:
    """Compare two resolved values.

    Mismatched or null operands never match (``False``); an operator that is
    not defined for matching operand types is a failure.

    Raises:
        UnsupportedOperator: For example ``<`` between two strings.
    """
    left_kind = value_kind(left)
    right_kind = value_kind(right)

    if left_kind != right_kind or left_kind == "null":
        return False

    if left_kind == "number":
        a = _as_float(left)
        b = _as_float(right)
        if operator == "==":
            return abs(a - b) < _EPSILON
        if operator == "!=":
            return abs(a - b) >= _EPSILON
        if operator == "<":
            return a < b
        if operator == "<=":
            return a <= b
        if operator == ">":
            return a > b
        if operator == ">=":
            return a >= b
        raise UnsupportedOperator(f"unknown operator {operator!r}")

    # string / boolean: equality only
    if operator == "==":
        return left == right
    if operator == "!=":
        return left != right
    raise UnsupportedOperator(
        f"operator {operator!r} is not supported for {left_kind} operands"
    )


def contains(left: Value, target: str) -> bool:
    """Evaluate ``left in (<quoted>, <quoted>, ...)``.

    Only string membership is supported; a non-string left operand is simply
    not a member. Unquoted list items never match.

    Raises:
        UnsupportedMembershipTarget: If ``target`` is not parenthesized.
    """
    if not isinstance(left, str):
        return False

    items = target.strip()
    if not (items.startswith("(") and items.endswith(")")):
        raise UnsupportedMembershipTarget(
            f"'in' expects a parenthesized list, got {items!r}"
        )

    for token in items[1:-1].split(","):
        if unquote(token.strip()) == left:
            return True
    return False
