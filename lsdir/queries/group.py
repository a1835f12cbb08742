"""GROUP-BY-style key derivation and partitioning.

Group keys are strings.  Each grouping kind derives its key with one pure
method, so two records share a group exactly when their keys are equal.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable

from ..config import LsdirConfig
from ..core.errors import TypeMismatchError
from ..core.models import FileRecord
from .fields import SIZE, FieldKind, FieldSpec

logger = logging.getLogger(__name__)


class SizeUnit(Enum):
    """Byte-size units for size bucketing (1024-based)."""

    BYTES = ("B", 1)
    KB = ("KB", 1024)
    MB = ("MB", 1024**2)
    GB = ("GB", 1024**3)
    TB = ("TB", 1024**4)

    def __init__(self, suffix: str, divisor: int):
        self.suffix = suffix
        self.divisor = divisor

    def convert(self, size: int) -> int:
        """Convert bytes to this unit by truncating integer division.

        No rounding: 1023 bytes is 0 KB and 2047 bytes is 1 KB.
        """
        return size // self.divisor

    def format(self, size: int) -> str:
        return f"{self.convert(size)} {self.suffix}"


@dataclass(frozen=True)
class TimeMask:
    """Timestamp components kept in a time-based group key.

    Components set to False are replaced by the wildcard placeholder, so
    records differing only in those components share a group.
    """

    year: bool = False
    month: bool = False
    day: bool = False
    hour: bool = False
    minute: bool = False
    second: bool = False

    def format(self, moment: datetime, wildcard: str | None = None) -> str:
        """Format as ``DD.MM.YYYY HH:MM:SS`` with masked components wildcarded."""
        if wildcard is None:
            wildcard = LsdirConfig.MASK_WILDCARD

        def part(keep: bool, value: int, width: int) -> str:
            return f"{value:0{width}d}" if keep else wildcard

        return (
            f"{part(self.day, moment.day, 2)}."
            f"{part(self.month, moment.month, 2)}."
            f"{part(self.year, moment.year, 4)} "
            f"{part(self.hour, moment.hour, 2)}:"
            f"{part(self.minute, moment.minute, 2)}:"
            f"{part(self.second, moment.second, 2)}"
        )


class GroupingSpec(ABC):
    """Base class for group key derivation."""

    @abstractmethod
    def key(self, record: FileRecord) -> str:
        """Return the group key for a record."""
        pass


@dataclass(frozen=True)
class ExactKey(GroupingSpec):
    """Group by the raw value of a text field (extension, file type)."""

    field: FieldSpec

    def __post_init__(self):
        if self.field.kind is not FieldKind.TEXT:
            raise TypeMismatchError(self.field.name, "group by value")

    def key(self, record: FileRecord) -> str:
        return self.field.value(record)


@dataclass(frozen=True)
class SizeKey(GroupingSpec):
    """Group by size truncated to a unit."""

    unit: SizeUnit = SizeUnit.BYTES

    def key(self, record: FileRecord) -> str:
        return self.unit.format(SIZE.value(record))


@dataclass(frozen=True)
class TimeKey(GroupingSpec):
    """Group by a timestamp field with some components masked out."""

    field: FieldSpec
    mask: TimeMask

    def __post_init__(self):
        if self.field.kind is not FieldKind.TIME:
            raise TypeMismatchError(self.field.name, "group by time")

    def key(self, record: FileRecord) -> str:
        return self.mask.format(self.field.value(record))


def apply_group(records: Iterable[FileRecord], grouping: GroupingSpec) -> dict[str, list[FileRecord]]:
    """Partition records by group key.

    Every record lands in exactly one group; within a group, input order is
    kept.  The order of keys is not part of the contract.

    Args:
        records: Records to group
        grouping: Key derivation to use

    Returns:
        Dictionary mapping group key to its records
    """
    groups: dict[str, list[FileRecord]] = {}
    for record in records:
        groups.setdefault(grouping.key(record), []).append(record)
    logger.debug(f"Grouped into {len(groups)} groups using {grouping}")
    return groups
