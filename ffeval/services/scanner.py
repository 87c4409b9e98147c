# ffeval/services/scanner.py
"""Top-level operator scanning for rule conditions.

This is the only precedence mechanism of the expression language: callers
try operators in a fixed priority order and split at the first one found
outside quotes and parentheses.
"""


from __future__ import annotations

from typing import Optional


def find_top_level(text: str, token: str) -> Optional[int]:
    """Return the index of the first top-level occurrence of ``token``.

    An occurrence is top-level when no single- or double-quoted run is open
    and the parenthesis depth is zero. A quote character inside a run opened
    by the other quote character is ordinary text. Parentheses are only
    counted outside quotes.

    Args:
        text: The condition fragment to scan.
        token: The operator to look for (for example ``"||"`` or ``" in "``).

    Returns:
        The index where ``token`` starts, or ``None`` if it never occurs
        at top level.
    """
    if not token:
        return None

    in_single = False
    in_double = False
    depth = 0
    last_start = len(text) - len(token)

    i = 0
    while i <= last_start:
        ch = text[i]

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif not in_single and not in_double:
            if ch == "(":
                depth += 1
            elif ch == ")":
                depth -= 1

            if depth == 0 and text.startswith(token, i):
                return i

        i += 1

    return None
