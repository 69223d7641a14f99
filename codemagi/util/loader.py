# Copyright (c) 2025 August Detlefsen and the codemagi-utils contributors.
# Licensed under the MIT License. See LICENSE for details.

"""
Load delimited, quoted and fixed-width text data into a GridList.

When ``has_headers`` is set the first line supplies the column names, so
cells can be read back with ``table.get(row, "name")``. Data rows start at
row 0 either way.
"""

import csv
import logging
from typing import List, Optional, Sequence

from ..common.decorators import log_execution_time
from .files import read_text
from .sequences import split_fields
from .tables import GridList
from .text import unicode_to_html

logger = logging.getLogger(__name__)


def pre_clean_data(data: Optional[str]) -> str:
    """Replace non-ASCII characters with HTML entities before loading."""
    return unicode_to_html(data, False)


def _build_table(records: List[List[str]], has_headers: bool) -> GridList:
    table = GridList()
    if has_headers and records:
        for position, name in enumerate(records[0]):
            name = name.strip()
            if table.add_column(name) != position:
                # column names are case-insensitive
                alias = f"{name}_{position}"
                table.add_column(alias)
                logger.warning("Duplicate header %r in column %d; registered as %r",
                               name, position, alias)
        records = records[1:]
    for values in records:
        table.add_row(values)
    logger.debug("Loaded %d rows, %d columns", table.num_rows, table.num_cols)
    return table


def _parse_delimited(data: str, delimiter: str, has_headers: bool) -> GridList:
    records = [split_fields(line, delimiter) for line in data.splitlines()]
    return _build_table(records, has_headers)


def _parse_quoted(data: str, delimiter: str, has_headers: bool) -> GridList:
    reader = csv.reader(data.splitlines(), delimiter=delimiter, quotechar='"')
    return _build_table([row for row in reader], has_headers)


def _parse_fixed_width(data: str, widths: Sequence[int], has_headers: bool) -> GridList:
    records = []
    for line in data.splitlines():
        values = []
        start = 0
        for width in widths:
            values.append(line[start:start + width])
            start += width
        records.append(values)
    return _build_table(records, has_headers)


def load_data_from_string(data: str, delimiter: str, has_headers: bool = False) -> GridList:
    """Split each line on a literal delimiter. Quotes are kept as data."""
    return _parse_delimited(data or "", delimiter, has_headers)


def load_data_from_quoted_string(data: str, delimiter: str,
                                 has_headers: bool = False) -> GridList:
    """Parse delimited lines whose fields may be wrapped in double quotes."""
    return _parse_quoted(data or "", delimiter, has_headers)


def load_fixed_width_string(data: str, widths: Sequence[int],
                            has_headers: bool = False) -> GridList:
    """Cut each line into fields of the given widths; short lines yield "" fields."""
    return _parse_fixed_width(data or "", widths, has_headers)


@log_execution_time(logger)
def load_data_from_file(path: str, delimiter: str, has_headers: bool = False,
                        encoding: str = 'utf-8') -> GridList:
    return _parse_delimited(read_text(path, encoding), delimiter, has_headers)


@log_execution_time(logger)
def load_quoted_file(path: str, delimiter: str, has_headers: bool = False,
                     encoding: str = 'utf-8') -> GridList:
    return _parse_quoted(read_text(path, encoding), delimiter, has_headers)


@log_execution_time(logger)
def load_fixed_width_file(path: str, widths: Sequence[int], has_headers: bool = False,
                          encoding: str = 'utf-8') -> GridList:
    return _parse_fixed_width(read_text(path, encoding), widths, has_headers)
