# ffeval/services/flag_service.py
"""Flag evaluation service.

Provides a pure, stateless function to evaluate a feature flag for a given
context: the first rule whose condition holds decides, otherwise the flag's
default applies.
"""


from __future__ import annotations

from ffeval.errors.evaluation import EvaluationFailure
from ffeval.services.expression import eval_rule_expr
from ffeval.services.models import Context, EvalResult, Flag


def eval_flag(flag: Flag, context: Context) -> EvalResult:
    """Evaluate ``flag`` against ``context``.

    Rules are tried strictly in order. A rule whose condition is malformed
    or type-invalid is skipped exactly like a rule whose condition is false,
    so this function always returns a result.

    Args:
        flag: The flag definition.
        context: Named values for this request; never mutated.

    Returns:
        EvalResult: ``enabled`` from the first matching rule (with its
        zero-based index in ``matched_rule``), or the flag default with
        ``matched_rule=None`` when nothing matched.
    """
    for index, rule in enumerate(flag.rules):
        try:
            matched = eval_rule_expr(flag.key, rule.condition, context)
        except EvaluationFailure:
            continue

        if matched:
            return EvalResult(
                key=flag.key,
                enabled=rule.then_value,
                matched_rule=index,
            )

    return EvalResult(key=flag.key, enabled=flag.default, matched_rule=None)
