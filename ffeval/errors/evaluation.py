# ffeval/errors/evaluation.py
"""Failures raised while evaluating a single rule condition.

These never escape :func:`ffeval.services.flag_service.eval_flag`: a rule
whose condition fails is treated exactly like a rule whose condition is
false. They are only visible to callers of
:func:`ffeval.services.expression.eval_rule_expr`.
"""


from __future__ import annotations


class EvaluationFailure(Exception):
    """Base class for condition evaluation failures.

    Attributes:
        detail: Human-readable description of the failure.
    """

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class MalformedExpression(EvaluationFailure):
    """The condition text has no recognizable shape, or a term fails to parse."""
    pass


class UnsupportedOperator(EvaluationFailure):
    """The operator is not defined for the resolved operand types."""
    pass


class UnsupportedMembershipTarget(EvaluationFailure):
    """The right-hand side of ``in`` is not a parenthesized list."""
    pass
