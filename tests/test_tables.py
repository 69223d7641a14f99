"""
Tests for OrderedTable, the grid types and the data loader.
"""

from datetime import date

import pytest

from codemagi.types import FileOperationError
from codemagi.util import loader
from codemagi.util.tables import FlatFile, GridList, GridMap, OrderedTable


class TestOrderedTable:
    """Test positional operations on OrderedTable."""

    def test_put_appends_and_keeps_position(self):
        table = OrderedTable()
        table.put("a", 1)
        table.put("b", 2)
        assert table.put("a", 10) == 1
        assert table.ordered_keys() == ["a", "b"]
        assert table.ordered_values() == [10, 2]

    def test_put_at_inserts_and_moves(self):
        table = OrderedTable([("a", 1), ("b", 2), ("c", 3)])
        table.put_at("x", 9, 1)
        assert table.ordered_keys() == ["a", "x", "b", "c"]
        table.put_at("c", 30, 0)
        assert table.ordered_keys() == ["c", "a", "x", "b"]
        assert table["c"] == 30

    def test_positional_lookup(self):
        table = OrderedTable([("a", 1), ("b", 2)])
        assert table.key_at(1) == "b"
        assert table.value_at(0) == 1
        assert table.element_at(5) is None
        assert table.index_of("b") == 1
        assert table.index_of("z") == -1

    def test_remove(self):
        table = OrderedTable([("a", 1), ("b", 2), ("c", 3)])
        assert table.remove("a") == 1
        assert table.remove("missing") is None
        assert table.remove_at(1) == 3
        assert table.ordered_keys() == ["b"]

    def test_add_uses_value_as_key(self):
        table = OrderedTable()
        table.add("x")
        assert table["x"] == "x"

    def test_keys_match_entries(self):
        table = OrderedTable()
        for i, key in enumerate("dcba"):
            table.put_at(key, i, 0)
        table.remove("b")
        assert set(table.ordered_keys()) == set(table.keys())
        assert len(table.ordered_keys()) == len(table)


class TestFlatFile:
    """Test the dense grid."""

    def test_set_grows_and_pads(self):
        grid = FlatFile()
        grid.set(2, 3, "x")
        assert grid.num_rows == 3
        assert grid.num_cols_in(2) == 4
        assert grid.get(2, 0) == ""
        assert grid.get(2, 3) == "x"

    def test_get_after_set(self):
        grid = FlatFile()
        for row, col, value in [(0, 0, "a"), (4, 2, 7), (1, 5, None)]:
            grid.set(row, col, value)
            assert grid.get(row, col) == ("" if value is None else value)

    def test_unset_cells_return_default(self):
        grid = FlatFile([["a"]])
        assert grid.get(0, 9) == ""
        assert grid.get(9, 0) == ""
        assert FlatFile(return_nulls=True).get(3, 3) is None
        assert grid.num_cols_in(9) == -1

    def test_negative_set_raises(self):
        with pytest.raises(IndexError):
            FlatFile().set(-1, 0, "x")

    def test_transforms(self):
        grid = FlatFile([['  "quoted"  ']], trim=True, unquote=True)
        assert grid.get(0, 0) == "quoted"

    def test_typed_getters(self):
        grid = FlatFile([[1, 2.5, "3.5", True, date(2024, 1, 1), "x"]])
        assert grid.get_int(0, 0) == 1
        assert grid.get_int(0, 3) is None
        assert grid.get_float(0, 1) == 2.5
        assert grid.get_float(0, 2) == 3.5
        assert grid.get_float(0, 5) is None
        assert grid.get_bool(0, 3) is True
        assert grid.get_date(0, 4) == date(2024, 1, 1)
        assert grid.get_string(0, 0) == "1"

    def test_to_string_and_sort(self):
        grid = FlatFile([["b", 2], ["a", 1]])
        grid.sort(key=lambda row: row[0])
        assert grid.to_string(",") == "a,1\nb,2\n"
        assert grid.row_string(1, "|") == "b|2"
        assert grid.num_cols == 2

    def test_to_file(self, tmp_path):
        path = tmp_path / "grid.tsv"
        FlatFile([["a", "b"]]).to_file(str(path))
        assert path.read_text() == "a\tb\n"

    def test_to_file_error(self, tmp_path):
        with pytest.raises(FileOperationError):
            FlatFile([["a"]]).to_file(str(tmp_path / "missing" / "grid.tsv"))


class TestGridList:
    """Test named columns on the dense grid."""

    def test_columns_are_case_insensitive(self):
        grid = GridList()
        assert grid.add_column("Name") == 0
        assert grid.add_column("age") == 1
        assert grid.add_column("NAME") == 0
        assert grid.column_number("name") == 0
        assert grid.column_name(1) == "AGE"
        assert grid.column_name(7) is None

    def test_unknown_column_resolves_to_zero(self):
        grid = GridList()
        grid.add_column("a")
        assert grid.column_number("nope") == GridList.COLUMN_NOT_FOUND == 0

    def test_set_by_new_name_adds_column(self):
        grid = GridList()
        grid.set(0, "first", "x")
        grid.set(0, "second", "y")
        assert grid.column_names == ["FIRST", "SECOND"]
        assert grid.get(0, "second") == "y"
        assert grid.get_column("first") == ["x"]

    def test_column_indices_are_dense(self):
        grid = GridList()
        for name in ["a", "b", "A", "c"]:
            grid.add_column(name)
        assert sorted(grid.columns.values()) == list(range(len(grid.columns)))

    def test_to_string_with_headers(self):
        grid = GridList([["1", "2"]])
        grid.add_column("x")
        grid.add_column("y")
        assert grid.to_string(",") == "X,Y\n1,2\n"
        assert grid.to_string(",", include_headers=False) == "1,2\n"

    def test_copy_is_independent(self):
        grid = GridList([["1"]])
        grid.add_column("x")
        clone = grid.copy()
        clone.set(0, 0, "changed")
        clone.add_column("y")
        assert grid.get(0, 0) == "1"
        assert grid.column_names == ["X"]


class TestGridMap:
    """Test the sparse grid."""

    def test_get_after_set(self):
        grid = GridMap()
        grid.set(10, 3, "far")
        grid.set(0, "name", "near")
        assert grid.get(10, 3) == "far"
        assert grid.get(0, "NAME") == "near"
        assert (10, 3) in grid
        assert len(grid) == 2

    def test_counts_are_one_past_highest_index(self):
        grid = GridMap()
        grid.set(4, 2, "x")
        assert grid.num_rows == 5
        assert grid.num_cols == 3

    def test_unset_and_unknown(self):
        grid = GridMap()
        assert grid.get(1, 1) == ""
        assert grid.column_number("missing") == GridMap.COLUMN_NOT_FOUND == -1
        assert grid.get(0, "missing") == ""
        assert GridMap(return_nulls=True).get(0, 0) is None


class TestLoader:
    """Test loading text data into tables."""

    def test_delimited_with_headers(self):
        table = loader.load_data_from_string("h1,h2\n1,2\n3,4", ",", has_headers=True)
        assert table.get(0, "h1") == "1"
        assert table.get(1, "h2") == "4"
        assert table.num_rows == 2

    def test_duplicate_headers_stay_addressable(self, caplog):
        with caplog.at_level("WARNING", logger="codemagi.util.loader"):
            table = loader.load_data_from_string("id,ID,name\n1,2,x", ",", has_headers=True)
        assert table.column_names == ["ID", "ID_1", "NAME"]
        assert table.get(0, "id") == "1"
        assert table.get(0, "ID_1") == "2"
        assert table.get(0, "name") == "x"
        assert "Duplicate header" in caplog.text

    def test_delimited_without_headers(self):
        table = loader.load_data_from_string("a|b\nc|d", "|")
        assert table.get(1, 0) == "c"
        assert table.column_names == []

    def test_quoted(self):
        table = loader.load_data_from_quoted_string('name,city\n"Smith, J","New York"', ",",
                                                    has_headers=True)
        assert table.get(0, "name") == "Smith, J"
        assert table.get(0, "city") == "New York"

    def test_fixed_width(self):
        table = loader.load_fixed_width_string("ab123\ncd45", [2, 3])
        assert table.get(0, 1) == "123"
        assert table.get(1, 1) == "45"

    def test_files(self, tmp_path):
        path = tmp_path / "data.csv"
        path.write_text("id;name\n1;one\n", encoding="utf-8")
        assert loader.load_data_from_file(str(path), ";", True).get(0, "name") == "one"
        assert loader.load_quoted_file(str(path), ";", True).get(0, "id") == "1"

        fixed = tmp_path / "fixed.txt"
        fixed.write_text("0001abc\n", encoding="utf-8")
        assert loader.load_fixed_width_file(str(fixed), [4, 3]).get(0, 0) == "0001"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileOperationError):
            loader.load_data_from_file(str(tmp_path / "nope.csv"), ",")

    def test_pre_clean_data(self):
        assert loader.pre_clean_data("café") == "caf&#233;"
