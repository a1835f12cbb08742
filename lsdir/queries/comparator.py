"""Relational and string comparison operators.

Shared by the filter (predicate evaluation) and the aggregator (max/min
ordering).
"""

from enum import Enum
from typing import Any

from ..core.errors import MalformedSpecError, TypeMismatchError

# Field label used in errors raised by compare()
OPERAND = "operand"


class Comparison(str, Enum):
    """Comparison operator between a record value and a literal."""

    EQ = "eq"
    NE = "ne"
    GT = "gt"
    GE = "ge"
    LT = "lt"
    LE = "le"
    CONTAINS = "contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"

    @property
    def string_only(self) -> bool:
        """True for operators that only make sense on strings."""
        return self in _STRING_ONLY

    @classmethod
    def parse(cls, text: str) -> "Comparison":
        """Parse an operator name or symbol (case-insensitive).

        Raises:
            MalformedSpecError: If the text names no known operator
        """
        try:
            return _ALIASES[text.strip().lower()]
        except KeyError:
            raise MalformedSpecError(f"Invalid comparison operator: {text}", spec=text) from None


_STRING_ONLY = frozenset({Comparison.CONTAINS, Comparison.STARTS_WITH, Comparison.ENDS_WITH})

_ALIASES = {
    "eq": Comparison.EQ,
    "equal": Comparison.EQ,
    "equals": Comparison.EQ,
    "=": Comparison.EQ,
    "==": Comparison.EQ,
    "ne": Comparison.NE,
    "neq": Comparison.NE,
    "not_equal": Comparison.NE,
    "!=": Comparison.NE,
    "gt": Comparison.GT,
    "greater": Comparison.GT,
    "greater_than": Comparison.GT,
    ">": Comparison.GT,
    "ge": Comparison.GE,
    "gte": Comparison.GE,
    "greater_equal": Comparison.GE,
    ">=": Comparison.GE,
    "lt": Comparison.LT,
    "less": Comparison.LT,
    "less_than": Comparison.LT,
    "<": Comparison.LT,
    "le": Comparison.LE,
    "lte": Comparison.LE,
    "less_equal": Comparison.LE,
    "<=": Comparison.LE,
    "contains": Comparison.CONTAINS,
    "starts_with": Comparison.STARTS_WITH,
    "startswith": Comparison.STARTS_WITH,
    "ends_with": Comparison.ENDS_WITH,
    "endswith": Comparison.ENDS_WITH,
}


def compare(comparison: Comparison, a: Any, b: Any) -> bool:
    """Evaluate ``a <comparison> b``.

    Args:
        comparison: Operator to apply
        a: Left-hand value (the record's field value)
        b: Right-hand value (the literal), same type as ``a``

    Returns:
        Result of the comparison

    Raises:
        TypeMismatchError: If a string-only operator is given non-strings
    """
    if comparison.string_only:
        if not (isinstance(a, str) and isinstance(b, str)):
            raise TypeMismatchError(
                OPERAND, comparison.value,
                f"Operator '{comparison.value}' requires string operands, "
                f"got {type(a).__name__} and {type(b).__name__}",
            )
        if comparison is Comparison.CONTAINS:
            return b in a
        if comparison is Comparison.STARTS_WITH:
            return a.startswith(b)
        return a.endswith(b)

    if comparison is Comparison.EQ:
        return a == b
    if comparison is Comparison.NE:
        return a != b
    if comparison is Comparison.GT:
        return a > b
    if comparison is Comparison.GE:
        return a >= b
    if comparison is Comparison.LT:
        return a < b
    return a <= b
