# Copyright (c) 2025 August Detlefsen and the codemagi-utils contributors.
# Licensed under the MIT License. See LICENSE for details.

"""
In-memory tables: an ordered mapping with positional access, and
two-dimensional grids addressed by (row, column) or (row, column name).

Grid reads never raise: an unset or out-of-range cell reads as "" (or None
when ``return_nulls`` is on). String cells can be trimmed and unquoted on
read.
"""

import logging
from collections import OrderedDict
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from ..types.errors import FileOperationError
from .text import trim as trim_text, unquote as unquote_text

logger = logging.getLogger(__name__)

Column = Union[int, str]


class OrderedTable(OrderedDict):
    """
    Insertion-ordered mapping with positional insert, move and lookup.

    New keys are appended; assigning to an existing key keeps its position.
    Key order lives in the mapping itself, so it cannot drift from the key set.
    """

    def put(self, key: Any, value: Any) -> Any:
        """Store ``value``; returns the previous value or None."""
        previous = self.get(key)
        self[key] = value
        return previous

    def put_at(self, key: Any, value: Any, where: int) -> Any:
        """
        Store ``value`` and place ``key`` at position ``where``, moving it
        if it already exists. Returns the previous value or None.
        """
        previous = self.get(key)
        if key in self:
            logger.debug("Moving key %r to %d", key, where)
        else:
            logger.debug("Adding key %r at %d", key, where)
        self[key] = value

        order = [k for k in self if k != key]
        order.insert(where, key)
        for k in order:
            self.move_to_end(k)
        return previous

    def add(self, value: Any) -> Any:
        """Store ``value`` under itself as key."""
        return self.put(value, value)

    def remove(self, key: Any) -> Any:
        """Remove ``key``; returns its value or None when absent."""
        return self.pop(key, None)

    def remove_at(self, index: int) -> Any:
        return self.pop(self.key_at(index))

    def key_at(self, index: int) -> Any:
        """Key at ``index``; raises IndexError when out of range."""
        return list(self)[index]

    def value_at(self, index: int) -> Any:
        return self[self.key_at(index)]

    def element_at(self, index: int) -> Any:
        """Value at ``index``, or None when out of range."""
        if 0 <= index < len(self):
            return self.value_at(index)
        return None

    def index_of(self, key: Any) -> int:
        for i, k in enumerate(self):
            if k == key:
                return i
        return -1

    def ordered_keys(self) -> List[Any]:
        return list(self.keys())

    def ordered_values(self) -> List[Any]:
        return list(self.values())


class _Grid:
    """Read options and typed getters shared by the grid types."""

    def __init__(self, trim: bool = False, unquote: bool = False,
                 return_nulls: bool = False):
        self.trim = trim
        self.unquote = unquote
        self.return_nulls = return_nulls

    def _default(self) -> Optional[str]:
        return None if self.return_nulls else ""

    def _transform(self, value: Any) -> Any:
        if value is None:
            return self._default()
        if isinstance(value, str):
            if self.trim:
                value = trim_text(value)
            if self.unquote:
                value = unquote_text(value)
        return value

    def get(self, row: int, column: Column) -> Any:
        raise NotImplementedError

    def get_string(self, row: int, column: Column) -> Optional[str]:
        value = self.get(row, column)
        if value is None:
            return None
        return value if isinstance(value, str) else str(value)

    def get_int(self, row: int, column: Column) -> Optional[int]:
        value = self.get(row, column)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return None

    def get_float(self, row: int, column: Column) -> Optional[float]:
        """Float cells, int cells and numeric strings; None otherwise."""
        value = self.get(row, column)
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return float(value)
        if isinstance(value, str):
            try:
                return float(value)
            except ValueError:
                return None
        return None

    def get_date(self, row: int, column: Column) -> Optional[date]:
        value = self.get(row, column)
        return value if isinstance(value, date) else None

    def get_bool(self, row: int, column: Column) -> Optional[bool]:
        value = self.get(row, column)
        return value if isinstance(value, bool) else None

    def _render(self, value: Any) -> str:
        value = self._transform(value)
        if value is None:
            return "null"
        return str(value)


class FlatFile(_Grid):
    """
    Dense grid stored as a list of rows.

    Setting a cell beyond the current bounds grows the row list and pads the
    row with "" cells.
    """

    def __init__(self, rows: Optional[List[List[Any]]] = None, trim: bool = False,
                 unquote: bool = False, return_nulls: bool = False):
        super().__init__(trim, unquote, return_nulls)
        self.rows: List[List[Any]] = [list(r) for r in rows] if rows else []

    def _column(self, column: Column, create: bool = False) -> int:
        if isinstance(column, str):
            raise TypeError("FlatFile columns are addressed by index")
        return column

    def _row(self, row: int) -> Optional[List[Any]]:
        if 0 <= row < len(self.rows):
            return self.rows[row]
        return None

    def add_row(self, values: Optional[List[Any]] = None) -> None:
        self.rows.append(list(values) if values is not None else [])

    @property
    def num_rows(self) -> int:
        return len(self.rows)

    @property
    def num_cols(self) -> int:
        """Width of the widest row."""
        return max((len(r) for r in self.rows), default=0)

    def num_cols_in(self, row: int) -> int:
        """Width of ``row``, or -1 when the row does not exist."""
        cells = self._row(row)
        return -1 if cells is None else len(cells)

    def get(self, row: int, column: Column) -> Any:
        col = self._column(column)
        cells = self._row(row)
        if cells is None or not 0 <= col < len(cells):
            return self._default()
        return self._transform(cells[col])

    def set(self, row: int, column: Column, value: Any) -> None:
        col = self._column(column, create=True)
        if row < 0 or col < 0:
            raise IndexError(f"Negative cell position ({row}, {col})")

        logger.debug("%s.set(%d, %d, %r)", type(self).__name__, row, col, value)
        while len(self.rows) <= row:
            self.rows.append([])
        cells = self.rows[row]
        while len(cells) <= col:
            cells.append("")
        cells[col] = value

    def row_string(self, row: int, delimiter: str = "\t") -> str:
        cells = self._row(row)
        if cells is None:
            return ""
        return delimiter.join("" if c is None else str(self._transform(c)) for c in cells)

    def to_string(self, delimiter: str = "\t", line_sep: str = "\n") -> str:
        lines = []
        for cells in self.rows:
            lines.append(delimiter.join(self._render(c) for c in cells))
            lines.append(line_sep)
        return "".join(lines)

    def to_file(self, path: str, delimiter: str = "\t") -> None:
        """Write the grid as delimited text; raises FileOperationError."""
        try:
            with open(path, 'w', encoding='utf-8', newline='') as f:
                f.write(self.to_string(delimiter))
        except OSError as e:
            raise FileOperationError(f"Cannot write table to {path}", path=path, cause=e) from e

    def sort(self, key: Optional[Callable[[List[Any]], Any]] = None,
             reverse: bool = False) -> None:
        self.rows.sort(key=key, reverse=reverse)

    def __str__(self):
        return self.to_string()


class _ColumnNames:
    """Case-insensitive column names mapped to dense indices in insertion order."""

    def _init_columns(self) -> None:
        self.columns: "OrderedDict[str, int]" = OrderedDict()

    def add_column(self, name: str) -> int:
        """Register ``name`` at the next index; an existing name keeps its index."""
        key = name.upper()
        if key in self.columns:
            return self.columns[key]
        position = len(self.columns)
        logger.debug("Adding column %s at position %d", key, position)
        self.columns[key] = position
        return position

    def column_name(self, index: int) -> Optional[str]:
        names = self.column_names
        if 0 <= index < len(names):
            return names[index]
        return None

    @property
    def column_names(self) -> List[str]:
        return list(self.columns)

    def _lookup(self, name: Optional[str]) -> Optional[int]:
        if name is None or not name.strip():
            return 0
        return self.columns.get(name.upper())


class GridList(_ColumnNames, FlatFile):
    """
    Dense grid whose columns may also be addressed by name.

    An unknown column name resolves to column 0. Setting a cell through an
    unknown name registers the column first.
    """

    COLUMN_NOT_FOUND = 0

    def __init__(self, rows: Optional[List[List[Any]]] = None, trim: bool = False,
                 unquote: bool = False, return_nulls: bool = False):
        FlatFile.__init__(self, rows, trim, unquote, return_nulls)
        self._init_columns()

    def column_number(self, name: Optional[str]) -> int:
        index = self._lookup(name)
        return self.COLUMN_NOT_FOUND if index is None else index

    def _column(self, column: Column, create: bool = False) -> int:
        if isinstance(column, str):
            if create and self._lookup(column) is None:
                return self.add_column(column)
            return self.column_number(column)
        return column

    def get_column(self, name: Column) -> List[Any]:
        return [self.get(i, name) for i in range(self.num_rows)]

    def to_string(self, delimiter: str = "\t", line_sep: str = "\n",
                  include_headers: bool = True) -> str:
        body = FlatFile.to_string(self, delimiter, line_sep)
        if not include_headers:
            return body
        return delimiter.join(self.column_names) + line_sep + body

    def copy(self) -> "GridList":
        clone = GridList(self.rows, self.trim, self.unquote, self.return_nulls)
        clone.columns = OrderedDict(self.columns)
        return clone


class GridMap(_ColumnNames, _Grid):
    """
    Sparse grid keyed by (row, column).

    An unknown column name resolves to -1, which never holds a value.
    Setting a cell through an unknown name registers the column first.
    ``num_rows`` and ``num_cols`` are one past the highest index set.
    """

    COLUMN_NOT_FOUND = -1

    def __init__(self, trim: bool = False, unquote: bool = False,
                 return_nulls: bool = False):
        super().__init__(trim, unquote, return_nulls)
        self._init_columns()
        self.cells: Dict[Tuple[int, int], Any] = {}
        self.num_rows = 0
        self.num_cols = 0

    def column_number(self, name: Optional[str]) -> int:
        index = self._lookup(name)
        return self.COLUMN_NOT_FOUND if index is None else index

    def _column(self, column: Column, create: bool = False) -> int:
        if isinstance(column, str):
            if create and self._lookup(column) is None:
                return self.add_column(column)
            return self.column_number(column)
        return column

    def get(self, row: int, column: Column) -> Any:
        return self._transform(self.cells.get((row, self._column(column))))

    def set(self, row: int, column: Column, value: Any) -> None:
        col = self._column(column, create=True)
        logger.debug("GridMap.set(%d, %d, %r)", row, col, value)
        self.cells[(row, col)] = value
        self.num_rows = max(self.num_rows, row + 1)
        self.num_cols = max(self.num_cols, col + 1)

    def __contains__(self, position: Tuple[int, int]) -> bool:
        return position in self.cells

    def __len__(self) -> int:
        return len(self.cells)
