"""
Tests for the empty-value and collection helpers.
"""

from collections import OrderedDict

import pytest

from codemagi.util import sequences, values


class TestEmptyValues:
    """Test is_empty and friends."""

    @pytest.mark.parametrize("value", [None, "", "   ", b"", [], [None, " "], {}, {"": None}])
    def test_empty(self, value):
        assert values.is_empty(value)

    @pytest.mark.parametrize("value", ["x", [None, "a"], {"k": None}, 0, [0]])
    def test_not_empty(self, value):
        assert not values.is_empty(value)

    def test_is_non_empty(self):
        assert values.is_non_empty([None, "", "a"])
        assert not values.is_non_empty([None, ""])
        assert not values.is_non_empty(None)

    def test_nvl(self):
        assert values.nvl(None, " ", "first", "second") == "first"
        assert values.nvl(None, "") == ""

    def test_no_nulls(self):
        assert values.no_nulls(None) == ""
        assert values.no_nulls("x") == "x"
        assert values.no_nulls("x", "shown") == "shown"
        assert values.no_nulls("", "shown", "fallback") == "fallback"

    def test_strip_non_numeric(self):
        assert values.strip_non_numeric("a1b2c3") == "123"
        assert values.strip_non_numeric(None) == ""


class TestDelimiting:
    """Test delimit and undelimit."""

    def test_delimit(self):
        assert sequences.delimit(["a", None, 3], "|") == "a|null|3"
        assert sequences.comma_delimit(["a", "b"]) == "a, b"
        assert sequences.delimit(None, ",") == ""

    @pytest.mark.parametrize("items,delimiter", [
        (["a", "b", "c"], ","),
        (["x"], "|"),
        (["one", "two"], " :: "),
        (["1.0", "2.0"], ";"),
        ([" "], ","),
        (["a", "  ", "b"], "|"),
    ])
    def test_undelimit_inverts_delimit(self, items, delimiter):
        """Test round trip for non-empty elements free of the delimiter."""
        assert sequences.undelimit(sequences.delimit(items, delimiter), delimiter) == items

    def test_undelimit_literal_delimiter(self):
        """Test regex metacharacters are matched literally."""
        assert sequences.undelimit("a|b.c", "|") == ["a", "b.c"]
        assert sequences.undelimit("a.b", ".") == ["a", "b"]

    def test_undelimit_empty(self):
        assert sequences.undelimit("", ",") == []
        assert sequences.undelimit(None, ",") == []
        assert sequences.undelimit("a,b", "") == []

    def test_undelimit_keeps_empty_fields(self):
        assert sequences.undelimit("a,,b", ",") == ["a", "", "b"]

    def test_undelimit_as_set(self):
        assert sequences.undelimit_as_set("a,b,a", ",") == {"a", "b"}


class TestCollections:
    """Test list and mapping helpers."""

    def test_not_in(self):
        assert sequences.not_in([1, 2, 3, 4], [2, 4]) == [1, 3]

    def test_last(self):
        assert sequences.last([1, 2, None]) == 2
        assert sequences.last([]) is None
        assert sequences.last(None) is None

    def test_first_key_and_value(self):
        mapping = OrderedDict([("a", 1), ("b", 2)])
        assert sequences.first_key(mapping) == "a"
        assert sequences.first_value(mapping) == 1
        assert sequences.first_key({}) is None

    def test_replace_item(self):
        items = ["a", "b"]
        sequences.replace_item(items, "b")
        assert items == ["a", "b"]
        with pytest.raises(ValueError):
            sequences.replace_item(items, "z")

    def test_put_at_inserts(self):
        mapping = OrderedDict([("a", 1), ("b", 2), ("c", 3)])
        result = sequences.put_at(mapping, "x", 9, 1)
        assert list(result.items()) == [("a", 1), ("x", 9), ("b", 2), ("c", 3)]
        assert list(mapping) == ["a", "b", "c"]

    def test_put_at_moves_existing_key(self):
        mapping = OrderedDict([("a", 1), ("b", 2), ("c", 3)])
        result = sequences.put_at(mapping, "c", 30, 0)
        assert list(result.items()) == [("c", 30), ("a", 1), ("b", 2)]

    def test_put_at_past_end_appends(self):
        result = sequences.put_at({"a": 1}, "b", 2, 10)
        assert list(result) == ["a", "b"]
