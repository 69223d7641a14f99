# Copyright (c) 2025 August Detlefsen and the codemagi-utils contributors.
# Licensed under the MIT License. See LICENSE for details.

"""
SQL literal rendering for booleans and dates (Oracle-style TO_DATE).

These build literal text for hand-written SQL. Prefer bound parameters
wherever the driver allows them.
"""

from datetime import datetime
from typing import Any, Optional, Union

from . import dates
from .booleans import parse_bool

NULL = "NULL"

# Pattern accepted by char_to_date
DB_DATE_FORMAT = "%m/%d/%Y %H:%M:%S"
INSERT_FORMAT = "TO_DATE('%m %d %Y %H %M %S', 'MM DD YYYY HH24 MI SS')"

_MISSING = object()


def quote_boolean(value: Union[bool, str, None]) -> str:
    """
    Render TRUE, FALSE or NULL. Strings are read with the usual
    true/t/1/yes/y and false/f/0/no/n spellings; anything else is NULL.
    """
    if value is None:
        return NULL
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    parsed = parse_bool(value, default=None)
    if parsed is None:
        return NULL
    return "TRUE" if parsed else "FALSE"


def quote_boolean_as_num(value: Optional[bool]) -> str:
    """Render '1', '0' or NULL."""
    if value is None:
        return NULL
    return "'1'" if value else "'0'"


def quote_date(value: Optional[datetime]) -> str:
    """ISO date in single quotes, or NULL."""
    if value is None:
        return NULL
    return "'" + dates.format_date(value, dates.ISO_8601) + "'"


def char_to_date(text: Optional[str], default: Any = _MISSING) -> Optional[datetime]:
    """Parse "MM/DD/YYYY HH:MM:SS" text as returned by a database."""
    if default is _MISSING:
        return dates.to_date(text, DB_DATE_FORMAT)
    return dates.to_date(text, DB_DATE_FORMAT, default=default)


def to_db_date(value: Optional[datetime]) -> str:
    if value is None:
        return NULL
    return f"TO_DATE('{dates.format_date(value, dates.TO_DATE)}', 'MM DD YYYY HH24 MI SS')"


def to_timestamp(value: Optional[datetime]) -> str:
    if value is None:
        return NULL
    return f"TO_TIMESTAMP('{dates.format_date(value, '%m-%d-%Y %H:%M:%S')}', 'MM-DD-YYYY HH24:MI:SS')"


def sysdate() -> str:
    """The current time as a TO_DATE literal."""
    return dates.format_date(datetime.now(), INSERT_FORMAT)
