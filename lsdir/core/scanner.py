"""Directory reader producing FileRecord values.

Only the direct children of the directory are listed; there is no recursion.
"""

import logging
import os
from pathlib import Path

from ..config import LsdirConfig
from .models import FileRecord

logger = logging.getLogger(__name__)


def read_directory(path: Path | str, follow_symlinks: bool | None = None) -> list[FileRecord]:
    """Read the entries of a directory into records.

    An entry whose metadata cannot be read (permission denied, removed while
    listing, dangling symlink when following links) is skipped with a warning;
    it never aborts the listing.

    Args:
        path: Directory to list
        follow_symlinks: Stat symlink targets instead of the links themselves
            (defaults to LSDIR_FOLLOW_SYMLINKS)

    Returns:
        Records sorted by name

    Raises:
        OSError: If the directory itself cannot be listed
    """
    if follow_symlinks is None:
        follow_symlinks = LsdirConfig.FOLLOW_SYMLINKS

    records = []
    with os.scandir(path) as entries:
        for entry in entries:
            try:
                records.append(FileRecord.from_path(entry.path, follow_symlinks=follow_symlinks))
            except (OSError, ValueError) as e:
                logger.warning(f"Could not read {entry.path}: {e}")

    records.sort(key=lambda r: r.name)
    logger.debug(f"Read {len(records)} entries from {path}")
    return records
