"""Aggregate functions evaluated per group.

Count and Sum are defined for an empty group (0).  Average, Max and Min
have no value for an empty group and report ``None`` instead; callers
decide how to render that.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from functools import cmp_to_key
from typing import Any, Iterable, Sequence

from ..core.errors import MalformedSpecError, TypeMismatchError
from ..core.models import FileRecord
from .comparator import Comparison, compare
from .fields import FieldSpec

logger = logging.getLogger(__name__)

ALL_RECORDS_KEY = "*"


class AggregateFunction(Enum):
    COUNT = "count"
    SUM = "sum"
    AVERAGE = "avg"
    MAX = "max"
    MIN = "min"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    AggregateFunction.COUNT: "Count",
    AggregateFunction.SUM: "Sum",
    AggregateFunction.AVERAGE: "Avg",
    AggregateFunction.MAX: "Max",
    AggregateFunction.MIN: "Min",
}


@dataclass(frozen=True)
class AggregateSpec:
    """An aggregate function and the field it applies to.

    COUNT takes no field.  SUM and AVERAGE need a numeric field; MAX and MIN
    need an ordered field.
    """

    function: AggregateFunction
    field: FieldSpec | None = None

    def __post_init__(self):
        if self.function is AggregateFunction.COUNT:
            return
        if self.field is None:
            raise MalformedSpecError(f"Missing field argument for {self.function.value}")
        if self.function in (AggregateFunction.SUM, AggregateFunction.AVERAGE):
            if not self.field.numeric:
                raise TypeMismatchError(self.field.name, self.function.value)
        elif not self.field.ordered:
            raise TypeMismatchError(self.field.name, self.function.value)

    @property
    def label(self) -> str:
        if self.field is None:
            return self.function.label
        return f"{self.function.label} of {self.field.name}"


def _order(field: FieldSpec):
    """Sort key ordering records by a field through the comparator."""

    def cmp(a: FileRecord, b: FileRecord) -> int:
        va, vb = field.value(a), field.value(b)
        if compare(Comparison.LT, va, vb):
            return -1
        if compare(Comparison.GT, va, vb):
            return 1
        return 0

    return cmp_to_key(cmp)


def count(records: Sequence[FileRecord]) -> int:
    return len(records)


def total(records: Sequence[FileRecord], field: FieldSpec) -> int:
    """Sum of a numeric field; 0 for no records."""
    return sum(field.value(r) for r in records)


def average(records: Sequence[FileRecord], field: FieldSpec) -> float | None:
    """Mean of a numeric field, or None when there are no records."""
    if not records:
        return None
    return total(records, field) / len(records)


def maximum(records: Sequence[FileRecord], field: FieldSpec) -> FileRecord | None:
    """Record with the greatest field value, or None when there are no records.

    When several records share the extreme value, which of them is returned
    is unspecified.
    """
    if not records:
        return None
    return max(records, key=_order(field))


def minimum(records: Sequence[FileRecord], field: FieldSpec) -> FileRecord | None:
    """Record with the smallest field value, or None when there are no records.

    When several records share the extreme value, which of them is returned
    is unspecified.
    """
    if not records:
        return None
    return min(records, key=_order(field))


def evaluate(records: Sequence[FileRecord], spec: AggregateSpec) -> Any:
    """Evaluate one aggregate over one group."""
    if spec.function is AggregateFunction.COUNT:
        return count(records)
    if spec.function is AggregateFunction.SUM:
        return total(records, spec.field)
    if spec.function is AggregateFunction.AVERAGE:
        return average(records, spec.field)
    if spec.function is AggregateFunction.MAX:
        return maximum(records, spec.field)
    return minimum(records, spec.field)


def apply_aggregate(
    groups: Mapping[str, Sequence[FileRecord]] | Iterable[FileRecord],
    spec: AggregateSpec,
    default_key: str = ALL_RECORDS_KEY,
) -> dict[str, Any]:
    """Evaluate an aggregate for every group.

    Args:
        groups: Mapping of group key to records, or a flat collection of
            records treated as a single group
        spec: Aggregate to compute
        default_key: Key used for a flat collection

    Returns:
        Dictionary mapping each group key to an int (count, sum), a float or
        None (average), or a FileRecord or None (max, min)
    """
    if not isinstance(groups, Mapping):
        groups = {default_key: list(groups)}

    result = {key: evaluate(list(records), spec) for key, records in groups.items()}
    logger.debug(f"Aggregated {spec.label} over {len(result)} groups")
    return result
