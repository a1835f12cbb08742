"""Core models, errors and the directory reader."""

from .errors import LiteralParseError, LsdirError, MalformedSpecError, TypeMismatchError
from .models import FILE_TYPE_DIRECTORY, FILE_TYPE_FILE, FileRecord
from .scanner import read_directory

__all__ = [
    "FILE_TYPE_DIRECTORY",
    "FILE_TYPE_FILE",
    "FileRecord",
    "LiteralParseError",
    "LsdirError",
    "MalformedSpecError",
    "TypeMismatchError",
    "read_directory",
]
