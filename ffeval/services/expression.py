# ffeval/services/expression.py
"""Evaluator for the rule condition language.

Grammar::

    expr      := or_expr
    or_expr   := and_expr { "||" and_expr }
    and_expr  := cmp_expr { "&&" cmp_expr }
    cmp_expr  := term [ comp_op term ]
    comp_op   := " in " | "<=" | ">=" | "==" | "!=" | "<" | ">"
    term      := "rollout(" number ")" | boolean | number | quoted string
                 | identifier

Each level splits at the first top-level occurrence of its operator (see
:func:`ffeval.services.scanner.find_top_level`). ``||`` and ``&&`` short
circuit: once the result is known the rest of the chain is neither parsed
nor resolved.
"""


from __future__ import annotations

from ffeval.errors.evaluation import MalformedExpression
from ffeval.services.models import Context
from ffeval.services.scanner import find_top_level
from ffeval.services.terms import compare, contains, resolve_term

OR_OPERATOR = "||"
AND_OPERATOR = "&&"
IN_OPERATOR = " in "
# Longer operators first so "<=" is never split as "<".
COMPARISON_OPERATORS = (IN_OPERATOR, "<=", ">=", "==", "!=", "<", ">")


def eval_rule_expr(flag_key: str, expr: str, context: Context) -> bool:
    """Evaluate one rule condition against a context.

    Args:
        flag_key: Key of the flag the rule belongs to (used by ``rollout``).
        expr: Condition text, for example ``"country == 'CA' && ver >= 2"``.
        context: Named values; read only.

    Returns:
        bool: The value of the condition.

    Raises:
        EvaluationFailure: If the condition is malformed or applies an
            operator to operands that do not support it.
    """
    return _eval_or(flag_key, expr.strip(), context)


def _eval_or(flag_key: str, text: str, context: Context) -> bool:
    remaining = text
    while True:
        idx = find_top_level(remaining, OR_OPERATOR)
        if idx is None:
            return _eval_and(flag_key, remaining, context)
        if _eval_and(flag_key, remaining[:idx].strip(), context):
            return True
        remaining = remaining[idx + len(OR_OPERATOR):].strip()


def _eval_and(flag_key: str, text: str, context: Context) -> bool:
    remaining = text
    while True:
        idx = find_top_level(remaining, AND_OPERATOR)
        if idx is None:
            return _eval_comparison(flag_key, remaining, context)
        if not _eval_comparison(flag_key, remaining[:idx].strip(), context):
            return False
        remaining = remaining[idx + len(AND_OPERATOR):].strip()


def _eval_comparison(flag_key: str, text: str, context: Context) -> bool:
    for operator in COMPARISON_OPERATORS:
        idx = find_top_level(text, operator)
        if idx is None:
            continue

        lhs = text[:idx].strip()
        rhs = text[idx + len(operator):].strip()
        left = resolve_term(lhs, context, flag_key)
        if operator == IN_OPERATOR:
            return contains(left, rhs)
        right = resolve_term(rhs, context, flag_key)
        return compare(left, operator, right)

    # A lone term must itself be a boolean.
    value = resolve_term(text, context, flag_key)
    if isinstance(value, bool):
        return value
    raise MalformedExpression(f"{text!r} does not evaluate to a boolean")
