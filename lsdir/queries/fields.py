"""Registry of queryable record fields.

Each field maps a canonical name to an extractor and a kind.  The kind
decides which operators, grouping policies and aggregates a field supports,
so adding a field (or widening a kind's capabilities) happens here rather
than at every call site.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from ..core.errors import MalformedSpecError
from ..core.models import FileRecord


class FieldKind(Enum):
    TEXT = "text"
    SIZE = "size"
    TIME = "time"


@dataclass(frozen=True)
class FieldSpec:
    """A record field that queries can refer to."""

    name: str
    kind: FieldKind
    extract: Callable[[FileRecord], Any] = field(repr=False)
    aliases: tuple[str, ...] = ()

    @property
    def numeric(self) -> bool:
        """Valid argument for sum/average."""
        return self.kind in NUMERIC_KINDS

    @property
    def ordered(self) -> bool:
        """Valid argument for max/min and relational operators."""
        return self.kind in ORDERED_KINDS

    def value(self, record: FileRecord) -> Any:
        return self.extract(record)


NUMERIC_KINDS = frozenset({FieldKind.SIZE})
ORDERED_KINDS = frozenset({FieldKind.TEXT, FieldKind.SIZE, FieldKind.TIME})

NAME = FieldSpec("name", FieldKind.TEXT, lambda r: r.name, ("n",))
EXTENSION = FieldSpec("extension", FieldKind.TEXT, lambda r: r.extension, ("ext", "e"))
FILE_TYPE = FieldSpec(
    "file_type", FieldKind.TEXT, lambda r: r.file_type, ("filetype", "type", "ftype", "f", "t")
)
SIZE = FieldSpec("size", FieldKind.SIZE, lambda r: r.size, ("s",))
MODIFIED = FieldSpec("modified", FieldKind.TIME, lambda r: r.modified, ("mod", "m"))
ACCESSED = FieldSpec("accessed", FieldKind.TIME, lambda r: r.accessed, ("acc", "a"))
CREATED = FieldSpec("created", FieldKind.TIME, lambda r: r.created, ("cre", "c"))

# Registry of available fields: canonical name -> FieldSpec
_FIELD_REGISTRY: dict[str, FieldSpec] = {}
_ALIAS_INDEX: dict[str, FieldSpec] = {}


def register_field(field: FieldSpec) -> None:
    """Register a field and its aliases.

    Raises:
        ValueError: If the name or an alias is already taken
    """
    for key in (field.name, *field.aliases):
        if key in _ALIAS_INDEX:
            raise ValueError(f"Field name '{key}' already registered")
    _FIELD_REGISTRY[field.name] = field
    for key in (field.name, *field.aliases):
        _ALIAS_INDEX[key] = field


def resolve_field(text: str) -> FieldSpec:
    """Look up a field by canonical name or alias (case-insensitive).

    Raises:
        MalformedSpecError: If no field matches
    """
    key = text.strip().lower()
    if key not in _ALIAS_INDEX:
        available = ", ".join(sorted(_FIELD_REGISTRY))
        raise MalformedSpecError(
            f"Unknown field: '{text}'. Available fields: {available}", spec=text
        )
    return _ALIAS_INDEX[key]


def list_fields() -> list[str]:
    """List canonical field names."""
    return sorted(_FIELD_REGISTRY)


for _field in (NAME, EXTENSION, FILE_TYPE, SIZE, MODIFIED, ACCESSED, CREATED):
    register_field(_field)
