"""Exception hierarchy for query evaluation.

Empty-group results (Average/Max/Min over zero records) are not errors;
they are reported as ``None`` by the aggregator.
"""


class LsdirError(ValueError):
    """Base class for all query errors surfaced to the caller."""


class MalformedSpecError(LsdirError):
    """Textual predicate/grouping/aggregate input could not be parsed."""

    def __init__(self, message: str, spec: str | None = None):
        super().__init__(message)
        self.spec = spec


class TypeMismatchError(LsdirError):
    """An operator or aggregate was applied to an incompatible field."""

    def __init__(self, field: str, operation: str, message: str | None = None):
        super().__init__(
            message or f"Operation '{operation}' is not supported for field '{field}'"
        )
        self.field = field
        self.operation = operation


class LiteralParseError(LsdirError):
    """A predicate literal could not be parsed as the target field's type."""

    def __init__(self, field: str, value: str, expected: str):
        super().__init__(f"Invalid {field} value: {value!r} (expected {expected})")
        self.field = field
        self.value = value
        self.expected = expected
