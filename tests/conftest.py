"""Shared fixtures for lsdir tests."""

from datetime import datetime, timedelta, timezone

import pytest

from lsdir.core.models import FILE_TYPE_DIRECTORY, FILE_TYPE_FILE, FileRecord

BASE_TIME = datetime(2024, 1, 15, 10, 30, 0, tzinfo=timezone.utc)


def _make_record(
    name: str = "file.txt",
    extension: str | None = None,
    size: int = 0,
    modified: datetime = BASE_TIME,
    accessed: datetime | None = None,
    created: datetime | None = None,
    file_type: str = FILE_TYPE_FILE,
) -> FileRecord:
    """Build a record; extension defaults to the name's suffix, times to ``modified``."""
    if extension is None:
        extension = name.rsplit(".", 1)[1] if "." in name else ""
    return FileRecord(
        name=name,
        extension=extension,
        size=size,
        modified=modified,
        accessed=accessed or modified,
        created=created or modified,
        file_type=file_type,
    )


@pytest.fixture
def sample_records():
    """Three files: txt (1000 B, now), rs (2048 B, 1h earlier), txt (4096 B, 2h earlier)."""
    return [
        _make_record("file1.txt", size=1000, modified=BASE_TIME),
        _make_record("file2.rs", size=2048, modified=BASE_TIME - timedelta(hours=1)),
        _make_record("file3.txt", size=4096, modified=BASE_TIME - timedelta(hours=2)),
    ]


@pytest.fixture
def mixed_records():
    """Files and a directory with varied names, sizes and timestamps."""
    return [
        _make_record("report.txt", size=100, modified=datetime(2024, 1, 10, 8, 0, tzinfo=timezone.utc)),
        _make_record("summary.txt", size=1023, modified=datetime(2024, 1, 20, 9, 15, tzinfo=timezone.utc)),
        _make_record("notes.md", size=1024, modified=datetime(2024, 2, 3, 9, 15, tzinfo=timezone.utc)),
        _make_record("Makefile", size=2047, modified=datetime(2023, 12, 31, 23, 59, 59, tzinfo=timezone.utc)),
        _make_record("src", size=4096, file_type=FILE_TYPE_DIRECTORY),
        _make_record("test_main.py", size=5000, modified=datetime(2024, 2, 3, 18, 0, tzinfo=timezone.utc)),
    ]


@pytest.fixture
def make_record():
    """Factory fixture building FileRecord values with sensible defaults."""
    return _make_record
