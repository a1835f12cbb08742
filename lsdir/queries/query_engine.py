"""Query pipeline: filter, then group, then aggregate.

Every stage is optional; an absent stage passes the previous output through
unchanged.  lsdir.cli.main only parses options and renders the result.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable

from ..core.models import FileRecord
from .aggregate import ALL_RECORDS_KEY, AggregateSpec, apply_aggregate
from .filter import Predicate, apply_filter
from .group import GroupingSpec, apply_group

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryResult:
    """Output of one query evaluation."""

    records: list[FileRecord]
    """Records surviving the filter, in input order."""

    groups: dict[str, list[FileRecord]]
    """Group key -> records (a single group under the default key when ungrouped)."""

    aggregates: dict[str, Any] | None = None
    """Group key -> aggregate value, or None when no aggregate was requested."""

    predicate: Predicate | None = None
    grouping: GroupingSpec | None = None
    aggregate: AggregateSpec | None = None


def run_query(
    records: Iterable[FileRecord],
    predicate: Predicate | None = None,
    grouping: GroupingSpec | None = None,
    aggregate: AggregateSpec | None = None,
    default_key: str = ALL_RECORDS_KEY,
) -> QueryResult:
    """Evaluate a query over a materialised record collection.

    Args:
        records: Input records
        predicate: Optional WHERE condition
        grouping: Optional GROUP BY key derivation
        aggregate: Optional aggregate function
        default_key: Key of the single group used when no grouping is given
            (the CLI passes the listed directory path)

    Returns:
        QueryResult holding every stage's output
    """
    selected = list(records)
    if predicate is not None:
        selected = apply_filter(selected, predicate)

    if grouping is not None:
        groups = apply_group(selected, grouping)
    else:
        groups = {default_key: selected}

    aggregates = apply_aggregate(groups, aggregate) if aggregate is not None else None

    logger.debug(f"Query produced {len(selected)} records in {len(groups)} groups")
    return QueryResult(
        records=selected,
        groups=groups,
        aggregates=aggregates,
        predicate=predicate,
        grouping=grouping,
        aggregate=aggregate,
    )
