"""Relations the proving collaborator can attest to.

The first operand is the first artifact (the exchange's reserves), the
second operand is the second artifact (the regulator's liabilities).
"""

from __future__ import annotations

import operator
from typing import Callable

_RELATIONS: dict[str, Callable[[int, int], bool]] = {
    "GreaterThan": operator.gt,
    "GreaterThanOrEqual": operator.ge,
    "LessThan": operator.lt,
    "Equal": operator.eq,
}

SUPPORTED_OPERATIONS: tuple[str, ...] = tuple(_RELATIONS)


def evaluate_relation(operation: str, left: int, right: int) -> bool:
    """Evaluate ``left <operation> right`` on plaintext values.

    Raises:
        ValueError: If the operation is unknown.
    """
    try:
        relation = _RELATIONS[operation]
    except KeyError:
        raise ValueError(f"unknown operation {operation!r}") from None
    return relation(left, right)


def describe_verdict(operation: str, passed: bool) -> str:
    """Human-readable interpretation of a published verdict."""
    if operation == "GreaterThan":
        if passed:
            return "Exchange reserves exceed liabilities"
        return "Exchange reserves do not exceed liabilities"
    return f"{operation} relation {'holds' if passed else 'does not hold'}"
