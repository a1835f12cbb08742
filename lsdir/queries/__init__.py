"""In-memory query engine for directory listings."""

from .aggregate import (
    AggregateFunction,
    AggregateSpec,
    apply_aggregate,
)
from .comparator import Comparison, compare
from .fields import FieldKind, FieldSpec, list_fields, resolve_field
from .filter import Predicate, apply_filter, name_matcher
from .group import (
    ExactKey,
    GroupingSpec,
    SizeKey,
    SizeUnit,
    TimeKey,
    TimeMask,
    apply_group,
)
from .parse import parse_aggregate, parse_grouping, parse_predicate
from .query_engine import QueryResult, run_query
from .display import (
    print_aggregates,
    print_groups,
    write_tsv,
)

__all__ = [
    # Specs
    "AggregateFunction",
    "AggregateSpec",
    "Comparison",
    "ExactKey",
    "FieldKind",
    "FieldSpec",
    "GroupingSpec",
    "Predicate",
    "SizeKey",
    "SizeUnit",
    "TimeKey",
    "TimeMask",
    # Engine functions
    "apply_aggregate",
    "apply_filter",
    "apply_group",
    "compare",
    "list_fields",
    "name_matcher",
    "resolve_field",
    "run_query",
    "QueryResult",
    # Parsing
    "parse_aggregate",
    "parse_grouping",
    "parse_predicate",
    # Display functions
    "print_aggregates",
    "print_groups",
    "write_tsv",
]
