"""Tests for group key derivation and partitioning."""

from datetime import datetime, timezone

import pytest

from lsdir.config import LsdirConfig
from lsdir.core.errors import TypeMismatchError
from lsdir.queries import fields
from lsdir.queries.group import ExactKey, SizeKey, SizeUnit, TimeKey, TimeMask, apply_group


@pytest.fixture(autouse=True)
def default_wildcard(monkeypatch):
    monkeypatch.setattr(LsdirConfig, "MASK_WILDCARD", "*")


def names(groups):
    return {key: [r.name for r in records] for key, records in groups.items()}


# ============================================================================
# Size units
# ============================================================================


class TestSizeUnit:
    """Tests for truncating size conversion."""

    @pytest.mark.parametrize(
        "size,expected",
        [(0, 0), (1000, 0), (1023, 0), (1024, 1), (2047, 1), (2048, 2)],
    )
    def test_kilobytes_truncate(self, size, expected):
        assert SizeUnit.KB.convert(size) == expected

    def test_format(self):
        assert SizeUnit.BYTES.format(1023) == "1023 B"
        assert SizeUnit.KB.format(1023) == "0 KB"
        assert SizeUnit.MB.format(3 * 1024**2 + 1) == "3 MB"
        assert SizeUnit.GB.format(1024**3 - 1) == "0 GB"
        assert SizeUnit.TB.format(5 * 1024**4) == "5 TB"


# ============================================================================
# Time masks
# ============================================================================


class TestTimeMask:
    """Tests for timestamp masking."""

    MOMENT = datetime(2024, 3, 7, 9, 5, 3, tzinfo=timezone.utc)

    def test_all_components(self):
        mask = TimeMask(year=True, month=True, day=True, hour=True, minute=True, second=True)
        assert mask.format(self.MOMENT) == "07.03.2024 09:05:03"

    def test_no_components(self):
        assert TimeMask().format(self.MOMENT) == "*.*.* *:*:*"

    def test_year_and_month(self):
        assert TimeMask(year=True, month=True).format(self.MOMENT) == "*.03.2024 *:*:*"

    def test_hour_only(self):
        assert TimeMask(hour=True).format(self.MOMENT) == "*.*.* 09:*:*"

    def test_custom_wildcard(self):
        assert TimeMask(day=True).format(self.MOMENT, wildcard="?") == "07.?.? ?:?:?"

    def test_configured_wildcard(self, monkeypatch):
        monkeypatch.setattr(LsdirConfig, "MASK_WILDCARD", "_")
        assert TimeMask(year=True).format(self.MOMENT) == "_._.2024 _:_:_"


# ============================================================================
# Grouping
# ============================================================================


class TestApplyGroup:
    """Tests for apply_group() with each key kind."""

    def test_by_extension(self, sample_records):
        groups = apply_group(sample_records, ExactKey(fields.EXTENSION))
        assert names(groups) == {"txt": ["file1.txt", "file3.txt"], "rs": ["file2.rs"]}

    def test_empty_extension_is_a_group(self, mixed_records):
        groups = apply_group(mixed_records, ExactKey(fields.EXTENSION))
        assert names(groups)[""] == ["Makefile", "src"]

    def test_by_file_type(self, mixed_records):
        groups = apply_group(mixed_records, ExactKey(fields.FILE_TYPE))
        assert names(groups)["Directory"] == ["src"]
        assert len(groups["File"]) == 5

    def test_by_size_kb(self, make_record):
        records = [
            make_record("a", size=1000),
            make_record("b", size=1023),
            make_record("c", size=1024),
            make_record("d", size=2047),
        ]
        groups = apply_group(records, SizeKey(SizeUnit.KB))
        assert names(groups) == {"0 KB": ["a", "b"], "1 KB": ["c", "d"]}

    def test_by_size_bytes(self, make_record):
        records = [make_record("a", size=7), make_record("b", size=7), make_record("c", size=8)]
        groups = apply_group(records, SizeKey())
        assert names(groups) == {"7 B": ["a", "b"], "8 B": ["c"]}

    def test_by_month(self, mixed_records):
        groups = apply_group(mixed_records, TimeKey(fields.MODIFIED, TimeMask(year=True, month=True)))
        assert names(groups) == {
            "*.01.2024 *:*:*": ["report.txt", "summary.txt", "src"],
            "*.02.2024 *:*:*": ["notes.md", "test_main.py"],
            "*.12.2023 *:*:*": ["Makefile"],
        }

    def test_masked_component_merges(self, mixed_records):
        groups = apply_group(mixed_records, TimeKey(fields.MODIFIED, TimeMask(hour=True, minute=True)))
        assert names(groups)["*.*.* 09:15:*"] == ["summary.txt", "notes.md"]

    def test_day_masked_then_kept(self, make_record):
        records = [
            make_record("a", modified=datetime(2024, 4, 3, tzinfo=timezone.utc)),
            make_record("b", modified=datetime(2024, 4, 21, tzinfo=timezone.utc)),
        ]
        month = apply_group(records, TimeKey(fields.MODIFIED, TimeMask(year=True, month=True)))
        day = apply_group(records, TimeKey(fields.MODIFIED, TimeMask(year=True, month=True, day=True)))
        assert names(month) == {"*.04.2024 *:*:*": ["a", "b"]}
        assert names(day) == {"03.04.2024 *:*:*": ["a"], "21.04.2024 *:*:*": ["b"]}

    def test_kept_component_splits(self, make_record):
        records = [
            make_record("a", modified=datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)),
            make_record("b", modified=datetime(2024, 1, 1, 11, 0, tzinfo=timezone.utc)),
        ]
        by_day = apply_group(records, TimeKey(fields.MODIFIED, TimeMask(day=True)))
        by_hour = apply_group(records, TimeKey(fields.MODIFIED, TimeMask(day=True, hour=True)))
        assert len(by_day) == 1
        assert len(by_hour) == 2

    def test_empty_mask_is_one_group(self, mixed_records):
        groups = apply_group(mixed_records, TimeKey(fields.MODIFIED, TimeMask()))
        assert list(groups) == ["*.*.* *:*:*"]
        assert len(groups["*.*.* *:*:*"]) == len(mixed_records)

    def test_by_accessed_and_created(self, make_record):
        when = datetime(2024, 5, 1, tzinfo=timezone.utc)
        record = make_record("a", accessed=when, created=when)
        mask = TimeMask(year=True, month=True)
        assert apply_group([record], TimeKey(fields.ACCESSED, mask)) == {"*.05.2024 *:*:*": [record]}
        assert apply_group([record], TimeKey(fields.CREATED, mask)) == {"*.05.2024 *:*:*": [record]}

    def test_empty_input(self):
        assert apply_group([], ExactKey(fields.EXTENSION)) == {}

    @pytest.mark.parametrize(
        "grouping",
        [
            ExactKey(fields.EXTENSION),
            ExactKey(fields.FILE_TYPE),
            SizeKey(SizeUnit.KB),
            TimeKey(fields.MODIFIED, TimeMask(year=True, month=True, day=True)),
        ],
    )
    def test_partition(self, mixed_records, grouping):
        groups = apply_group(mixed_records, grouping)
        members = [r for records in groups.values() for r in records]
        assert len(members) == len(mixed_records)
        assert {id(r) for r in members} == {id(r) for r in mixed_records}
        for key, records in groups.items():
            assert records
            assert all(grouping.key(r) == key for r in records)


# ============================================================================
# Key validation
# ============================================================================


class TestKeyValidation:
    """Tests for field kind checks on key construction."""

    def test_exact_key_rejects_size(self):
        with pytest.raises(TypeMismatchError):
            ExactKey(fields.SIZE)

    def test_time_key_rejects_text(self):
        with pytest.raises(TypeMismatchError):
            TimeKey(fields.EXTENSION, TimeMask(year=True))
