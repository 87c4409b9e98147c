# ffeval/services/models.py
"""In-memory data model for flag evaluation.

Context values are plain Python values: ``str``, ``float``, ``bool`` or
``None`` (an absent/unknown identifier). Flags, rules and results are
immutable dataclasses; evaluation never mutates them.
"""


from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple, Union

Value = Union[str, float, bool, None]
Context = Mapping[str, Value]


@dataclass(frozen=True)
class Rule:
    """A single ``condition -> value`` rule.

    The condition text is kept verbatim and only evaluated on demand.
    """
    condition: str
    then_value: bool


@dataclass(frozen=True)
class Flag:
    """A feature flag: ordered rules plus a default value.

    Rule order is significant: the first rule whose condition holds wins.
    """
    key: str
    rules: Tuple[Rule, ...] = field(default_factory=tuple)
    default: bool = False

    def __post_init__(self) -> None:
        # Accept any sequence from callers but store a tuple.
        object.__setattr__(self, "rules", tuple(self.rules))


@dataclass(frozen=True)
class EvalResult:
    """Outcome of evaluating one flag against one context."""
    key: str
    enabled: bool
    matched_rule: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON-ready form ``{key, enabled, matchedRule}``."""
        return {
            "key": self.key,
            "enabled": self.enabled,
            "matchedRule": self.matched_rule,
        }
