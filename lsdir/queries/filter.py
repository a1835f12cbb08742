"""WHERE-style predicate evaluation over file records."""

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime
from functools import lru_cache
from typing import Any, Callable, Iterable

from ..core.errors import LiteralParseError, TypeMismatchError
from ..core.models import MAX_SIZE, FileRecord
from .comparator import Comparison, compare
from .fields import NAME, FieldKind, FieldSpec

logger = logging.getLogger(__name__)

# Accepted timestamp literal forms (local time)
DATETIME_FORMATS = ("%d.%m.%Y %H:%M:%S", "%d.%m.%Y %H:%M")
TIME_FORMATS = ("%H:%M:%S", "%H:%M")

_LITERAL_TYPES = {
    FieldKind.TEXT: str,
    FieldKind.SIZE: int,
    FieldKind.TIME: datetime,
}


def parse_size_literal(value: str) -> int:
    """Parse an unsigned 64-bit decimal byte count.

    Examples:
        "0"     -> 0
        "4096"  -> 4096

    Raises:
        LiteralParseError: For anything but a plain non-negative integer in range
    """
    text = value.strip()
    if not text.isascii() or not text.isdigit():
        raise LiteralParseError("size", value, "an unsigned integer")
    size = int(text)
    if size > MAX_SIZE:
        raise LiteralParseError("size", value, "an unsigned 64-bit integer")
    return size


def parse_timestamp_literal(value: str, field: str = "timestamp", today: date | None = None) -> datetime:
    """Parse a timestamp literal as local time.

    Two forms are accepted:
        "15.01.2024 10:30[:00]"  full date and time
        "10:30[:00]"             time only; today's date is substituted

    Args:
        value: Literal text
        field: Field name for the error message
        today: Date used for time-only literals (defaults to today)

    Raises:
        LiteralParseError: If the text matches neither form, or names a local
            time that is skipped or repeated by a DST transition
    """
    text = value.strip()
    for fmt in DATETIME_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt)
        except ValueError:
            continue
        return _localize(parsed, field, value)

    for fmt in TIME_FORMATS:
        try:
            moment = datetime.strptime(text, fmt).time()
        except ValueError:
            continue
        return _localize(datetime.combine(today or date.today(), moment), field, value)

    raise LiteralParseError(field, value, "DD.MM.YYYY HH:MM[:SS] or HH:MM[:SS]")


def _localize(naive: datetime, field: str, value: str) -> datetime:
    """Attach the local timezone, rejecting nonexistent or ambiguous wall times."""
    try:
        local = naive.astimezone()
        repeated = naive.replace(fold=1).astimezone() != local
    except (OverflowError, OSError) as e:
        raise LiteralParseError(field, value, "a date the platform can represent") from e
    if repeated or local.replace(tzinfo=None) != naive:
        raise LiteralParseError(field, value, "an unambiguous local date and time")
    return local


@lru_cache(maxsize=256)
def name_matcher(literal: str) -> Callable[[str], bool]:
    """Resolve a name literal to a matching function.

    The literal is compiled as a regular expression and matched anywhere in
    the name (unanchored search).  If it does not compile, it is compared
    for exact equality instead.  Results are cached, so a given literal
    always resolves to the same strategy.
    """
    try:
        pattern = re.compile(literal)
    except re.error:
        logger.debug(f"Name literal {literal!r} is not a valid regex; using exact match")
        return lambda name: name == literal
    return lambda name: pattern.search(name) is not None


@dataclass(frozen=True)
class Predicate:
    """A single filter condition: field, operator and literal value.

    ``value`` must already have the field's type: ``str`` for text fields,
    ``int`` for size, timezone-aware ``datetime`` for timestamps.  Use
    from_literal() to build one from text.
    """

    field: FieldSpec
    comparison: Comparison
    value: Any

    def __post_init__(self):
        if self.comparison.string_only and self.field.kind is not FieldKind.TEXT:
            raise TypeMismatchError(self.field.name, self.comparison.value)

        expected = _LITERAL_TYPES[self.field.kind]
        if isinstance(self.value, bool) or not isinstance(self.value, expected):
            raise TypeMismatchError(
                self.field.name, self.comparison.value,
                f"Field '{self.field.name}' expects a {expected.__name__} value, "
                f"got {self.value!r}",
            )
        if expected is datetime and self.value.tzinfo is None:
            raise TypeMismatchError(
                self.field.name, self.comparison.value,
                f"Field '{self.field.name}' expects a timezone-aware datetime",
            )

    @classmethod
    def from_literal(
        cls,
        field: FieldSpec,
        comparison: Comparison,
        literal: str,
        today: date | None = None,
    ) -> "Predicate":
        """Build a predicate, parsing the literal as the field's type.

        Raises:
            TypeMismatchError: If the operator does not apply to the field
            LiteralParseError: If the literal cannot be parsed
        """
        if comparison.string_only and field.kind is not FieldKind.TEXT:
            raise TypeMismatchError(field.name, comparison.value)

        if field.kind is FieldKind.SIZE:
            value = parse_size_literal(literal)
        elif field.kind is FieldKind.TIME:
            value = parse_timestamp_literal(literal, field.name, today=today)
        else:
            value = literal
        return cls(field, comparison, value)

    def matches(self, record: FileRecord) -> bool:
        actual = self.field.value(record)
        if self.field is NAME and self.comparison in (Comparison.EQ, Comparison.NE):
            hit = name_matcher(self.value)(actual)
            return hit if self.comparison is Comparison.EQ else not hit
        return compare(self.comparison, actual, self.value)

    def __str__(self) -> str:
        value = self.value
        if isinstance(value, datetime):
            value = value.strftime(DATETIME_FORMATS[0])
        return f"{self.field.name},{self.comparison.value},{value}"


def apply_filter(records: Iterable[FileRecord], predicate: Predicate) -> list[FileRecord]:
    """Return the records that satisfy the predicate.

    Input order is preserved and the surviving record objects are returned
    as-is (no copies).

    Args:
        records: Records to filter
        predicate: Condition to apply

    Returns:
        List of matching records (empty for empty input)
    """
    records = list(records)
    result = [record for record in records if predicate.matches(record)]
    logger.debug(f"Filter {predicate}: {len(records)} -> {len(result)} records")
    return result
