"""Tests for comparison operators."""

from datetime import datetime, timezone

import pytest

from lsdir.core.errors import MalformedSpecError, TypeMismatchError
from lsdir.queries.comparator import OPERAND, Comparison, compare


class TestComparisonParse:
    """Tests for operator aliases."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("eq", Comparison.EQ),
            ("EQUALS", Comparison.EQ),
            ("==", Comparison.EQ),
            ("neq", Comparison.NE),
            ("!=", Comparison.NE),
            ("greater_than", Comparison.GT),
            ("gte", Comparison.GE),
            ("less", Comparison.LT),
            ("<=", Comparison.LE),
            ("contains", Comparison.CONTAINS),
            ("startswith", Comparison.STARTS_WITH),
            ("ends_with", Comparison.ENDS_WITH),
        ],
    )
    def test_aliases(self, text, expected):
        assert Comparison.parse(text) is expected

    def test_unknown_operator(self):
        with pytest.raises(MalformedSpecError, match="like"):
            Comparison.parse("like")

    def test_string_only_flags(self):
        assert Comparison.CONTAINS.string_only
        assert Comparison.STARTS_WITH.string_only
        assert Comparison.ENDS_WITH.string_only
        assert not Comparison.EQ.string_only
        assert not Comparison.GT.string_only


class TestCompare:
    """Tests for compare() across value types."""

    @pytest.mark.parametrize(
        "comparison,expected",
        [
            (Comparison.EQ, False),
            (Comparison.NE, True),
            (Comparison.GT, True),
            (Comparison.GE, True),
            (Comparison.LT, False),
            (Comparison.LE, False),
        ],
    )
    def test_integers(self, comparison, expected):
        assert compare(comparison, 20, 10) is expected

    def test_equal_integers(self):
        assert compare(Comparison.GE, 10, 10)
        assert compare(Comparison.LE, 10, 10)
        assert not compare(Comparison.GT, 10, 10)

    def test_timestamps(self):
        early = datetime(2024, 1, 1, tzinfo=timezone.utc)
        late = datetime(2024, 6, 1, tzinfo=timezone.utc)
        assert compare(Comparison.LT, early, late)
        assert compare(Comparison.GT, late, early)
        assert compare(Comparison.EQ, early, early)

    def test_strings_lexicographic(self):
        assert compare(Comparison.LT, "apple", "banana")
        assert compare(Comparison.GT, "b", "abc")

    def test_string_operators(self):
        assert compare(Comparison.CONTAINS, "my_test_file", "test")
        assert not compare(Comparison.CONTAINS, "my_file", "test")
        assert compare(Comparison.STARTS_WITH, "test_main.py", "test_")
        assert compare(Comparison.ENDS_WITH, "test_main.py", ".py")
        assert not compare(Comparison.ENDS_WITH, "test_main.py", ".rs")

    def test_string_operator_on_integers_raises(self):
        with pytest.raises(TypeMismatchError) as excinfo:
            compare(Comparison.CONTAINS, 1024, 10)
        assert excinfo.value.field == OPERAND
        assert excinfo.value.operation == "contains"
        assert "requires string operands, got int and int" in str(excinfo.value)
