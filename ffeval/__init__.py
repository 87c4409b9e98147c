"""ffeval: deterministic rule-based feature flag evaluation."""

from ffeval.services.expression import eval_rule_expr
from ffeval.services.flag_service import eval_flag
from ffeval.services.models import EvalResult, Flag, Rule
from ffeval.services.rollout import rollout

__version__ = "0.1.0"

__all__ = [
    "EvalResult",
    "Flag",
    "Rule",
    "eval_flag",
    "eval_rule_expr",
    "rollout",
]
