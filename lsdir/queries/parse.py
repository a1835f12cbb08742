"""Parsers for the textual query mini-language.

    predicate:  field,operator,value   (or field,value meaning eq)
    grouping:   field[,modifier...]
    aggregate:  function[,field]

Field names and operators are case-insensitive; predicate values keep
their case.
"""

from datetime import date

from ..core.errors import MalformedSpecError
from .aggregate import AggregateFunction, AggregateSpec
from .comparator import Comparison
from .fields import SIZE, FieldKind, resolve_field
from .filter import Predicate
from .group import ExactKey, GroupingSpec, SizeKey, SizeUnit, TimeKey, TimeMask

_SIZE_UNITS = {
    "bytes": SizeUnit.BYTES,
    "b": SizeUnit.BYTES,
    "kilobytes": SizeUnit.KB,
    "kb": SizeUnit.KB,
    "megabytes": SizeUnit.MB,
    "mb": SizeUnit.MB,
    "gigabytes": SizeUnit.GB,
    "gb": SizeUnit.GB,
    "terabytes": SizeUnit.TB,
    "tb": SizeUnit.TB,
}

_MASK_TOKENS = {
    "y": "year",
    "year": "year",
    "m": "month",
    "month": "month",
    "d": "day",
    "day": "day",
    "h": "hour",
    "hour": "hour",
    "min": "minute",
    "minute": "minute",
    "s": "second",
    "sec": "second",
    "second": "second",
}

_AGGREGATES = {
    "count": AggregateFunction.COUNT,
    "c": AggregateFunction.COUNT,
    "sum": AggregateFunction.SUM,
    "s": AggregateFunction.SUM,
    "average": AggregateFunction.AVERAGE,
    "avg": AggregateFunction.AVERAGE,
    "a": AggregateFunction.AVERAGE,
    "max": AggregateFunction.MAX,
    "min": AggregateFunction.MIN,
}


def _split(text: str, maxsplit: int = -1) -> list[str]:
    return [part.strip() for part in text.split(",", maxsplit)]


def parse_predicate(text: str, today: date | None = None) -> Predicate:
    """Parse ``field,operator,value`` into a Predicate.

    Examples:
        "size,gt,1000"
        "name,^report"            (operator defaults to eq)
        "modified,lt,15.01.2024 10:30"

    Raises:
        MalformedSpecError: Wrong part count, unknown field or operator
        TypeMismatchError: Operator not valid for the field
        LiteralParseError: Value not parseable as the field's type
    """
    parts = _split(text, 2)
    if len(parts) == 2:
        parts.insert(1, "eq")
    if len(parts) != 3 or not parts[0]:
        raise MalformedSpecError(
            f"Invalid predicate format. Expected: field,operator,value, got: {text}", spec=text
        )

    field = resolve_field(parts[0])
    comparison = Comparison.parse(parts[1])
    return Predicate.from_literal(field, comparison, parts[2], today=today)


def parse_grouping(text: str) -> GroupingSpec:
    """Parse ``field[,modifier...]`` into a grouping spec.

    Examples:
        "extension"
        "size,kb"
        "modified,y,m,d"

    Raises:
        MalformedSpecError: Unknown field or modifier, wrong modifier count
    """
    parts = [p.lower() for p in _split(text)]
    field = resolve_field(parts[0])
    modifiers = parts[1:]

    if field.kind is FieldKind.TEXT:
        if field.name not in ("extension", "file_type"):
            raise MalformedSpecError(f"Cannot group by field: {field.name}", spec=text)
        if modifiers:
            raise MalformedSpecError(
                f"Grouping by {field.name} takes no modifiers, got: {', '.join(modifiers)}",
                spec=text,
            )
        return ExactKey(field)

    if field.kind is FieldKind.SIZE:
        if len(modifiers) != 1:
            raise MalformedSpecError(
                "Grouping by size requires exactly one unit (bytes, kb, mb, gb, tb)", spec=text
            )
        if modifiers[0] not in _SIZE_UNITS:
            raise MalformedSpecError(f"Invalid size magnitude: {modifiers[0]}", spec=text)
        return SizeKey(_SIZE_UNITS[modifiers[0]])

    if not modifiers:
        raise MalformedSpecError(
            f"Grouping by {field.name} requires at least one time component "
            "(year, month, day, hour, minute, second)",
            spec=text,
        )
    components = {}
    for token in modifiers:
        if token not in _MASK_TOKENS:
            raise MalformedSpecError(f"Invalid time component: {token}", spec=text)
        components[_MASK_TOKENS[token]] = True
    return TimeKey(field, TimeMask(**components))


def parse_aggregate(text: str) -> AggregateSpec:
    """Parse ``function[,field]`` into an AggregateSpec.

    Examples:
        "count"
        "sum"          (field defaults to size)
        "max,modified"

    Raises:
        MalformedSpecError: Unknown function or field, missing/extra argument
        TypeMismatchError: Field not valid for the function
    """
    parts = _split(text)
    name = parts[0].lower()
    if name not in _AGGREGATES:
        raise MalformedSpecError(f"Unknown aggregate function: {text}", spec=text)
    function = _AGGREGATES[name]
    args = parts[1:]

    if function is AggregateFunction.COUNT:
        if args:
            raise MalformedSpecError("count takes no argument", spec=text)
        return AggregateSpec(function)

    if len(args) > 1:
        raise MalformedSpecError(f"Too many arguments for {function.value}", spec=text)
    if not args:
        if function in (AggregateFunction.MAX, AggregateFunction.MIN):
            raise MalformedSpecError(f"Missing argument for {function.value}", spec=text)
        return AggregateSpec(function, SIZE)
    return AggregateSpec(function, resolve_field(args[0]))
