"""File record model shared by the scanner and the query engine."""

import os
import stat
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

FILE_TYPE_FILE = "File"
FILE_TYPE_DIRECTORY = "Directory"
FILE_TYPES = (FILE_TYPE_FILE, FILE_TYPE_DIRECTORY)

# Sizes are unsigned 64-bit byte counts
MAX_SIZE = 2**64 - 1


def _local_time(timestamp: float) -> datetime:
    return datetime.fromtimestamp(timestamp).astimezone()


@dataclass(frozen=True)
class FileRecord:
    """Metadata for a single directory entry.

    Records are immutable; every query stage returns new collections holding
    the same record objects rather than copies.
    """

    name: str
    """Final path component (no directory part)."""

    extension: str
    """Text after the last dot of the name, without the dot ("" if none)."""

    size: int
    """Size in bytes."""

    modified: datetime
    """Last modification time (timezone-aware)."""

    accessed: datetime
    """Last access time (timezone-aware)."""

    created: datetime
    """Creation time (timezone-aware)."""

    file_type: str
    """Either "File" or "Directory"."""

    def __post_init__(self):
        if isinstance(self.size, bool) or not isinstance(self.size, int):
            raise ValueError(f"size must be an integer, got {self.size!r}")
        if not 0 <= self.size <= MAX_SIZE:
            raise ValueError(f"size out of range: {self.size}")
        for attr in ("modified", "accessed", "created"):
            value = getattr(self, attr)
            if not isinstance(value, datetime) or value.tzinfo is None:
                raise ValueError(f"{attr} must be a timezone-aware datetime, got {value!r}")
        if self.file_type not in FILE_TYPES:
            raise ValueError(f"Unknown file type: {self.file_type!r}")

    @classmethod
    def from_path(cls, path: Path | str, follow_symlinks: bool = False) -> "FileRecord":
        """Build a record from filesystem metadata.

        Args:
            path: Path to the entry
            follow_symlinks: If True, report the symlink target's metadata

        Raises:
            OSError: If the metadata cannot be read
        """
        path = Path(path)
        st = os.stat(path) if follow_symlinks else os.lstat(path)

        # st_birthtime is not available on every platform (e.g. Linux)
        created = getattr(st, "st_birthtime", None)
        if created is None:
            created = st.st_ctime

        return cls(
            name=path.name,
            extension=path.suffix[1:],
            size=st.st_size,
            modified=_local_time(st.st_mtime),
            accessed=_local_time(st.st_atime),
            created=_local_time(created),
            file_type=FILE_TYPE_DIRECTORY if stat.S_ISDIR(st.st_mode) else FILE_TYPE_FILE,
        )
