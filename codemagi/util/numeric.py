# Copyright (c) 2025 August Detlefsen and the codemagi-utils contributors.
# Licensed under the MIT License. See LICENSE for details.

"""
Number parsing, formatting and small arithmetic helpers.

Format constants are plain format-spec strings for ``format()``, so they
can be shared freely between threads.
"""

import math
import re
from typing import Any, Optional, Union

from ..types.errors import NumberFormatError
from .values import is_empty

Number = Union[int, float]

# Format specs
ZIP_5 = "05d"
ZIP_4 = "04d"
COMMA = ",.0f"
MONEY = ",.2f"

_MISSING = object()
_NOT_FLOAT_CHARS = re.compile(r'[^0-9.]')


def format_number(number: Optional[Number], spec: str) -> str:
    """
    Format a number with one of the format constants; "" for None.
    Integer specs round float input to the nearest integer first.
    """
    if number is None:
        return ""
    if spec.endswith("d") and not isinstance(number, int):
        number = int(round(number))
    return format(number, spec)


def round_currency(value: Optional[Number]) -> Optional[float]:
    """Round to cents, halves rounding up."""
    if value is None:
        return None
    return math.floor(value * 100 + 0.5) / 100.0


def parse_double(text: Optional[str], default: Any = _MISSING) -> float:
    """
    Parse a number that may contain thousands separators ("1,234.5").

    Empty input parses as 0.0. Malformed input raises NumberFormatError
    unless ``default`` is given.
    """
    if is_empty(text):
        return 0.0
    cleaned = text.replace(",", "").strip()
    try:
        return float(cleaned)
    except ValueError as e:
        if default is not _MISSING:
            return default
        raise NumberFormatError(f"Not a number: {text!r}", text=text, cause=e) from e


def parse_float(text: Optional[str], default: Any = _MISSING) -> float:
    """
    Parse a number after dropping every character except digits and ".",
    so "$150.00" parses as 150.0.

    Empty input parses as 0.0. Input with no usable digits raises
    NumberFormatError unless ``default`` is given.
    """
    if is_empty(text):
        return 0.0
    cleaned = _NOT_FLOAT_CHARS.sub("", text)
    try:
        return float(cleaned)
    except ValueError as e:
        if default is not _MISSING:
            return default
        raise NumberFormatError(f"Not a number: {text!r}", text=text, cause=e) from e


def min_max(minimum: Number, value: Number, maximum: Number) -> Number:
    """Clamp ``value`` into [minimum, maximum]."""
    if value < minimum:
        return minimum
    if value > maximum:
        return maximum
    return value


def final_digits(number: int, num_digits: int) -> int:
    """Last ``num_digits`` digits of the absolute value."""
    return abs(number) % (10 ** num_digits)


def equals(first: Optional[Number], second: Optional[Number]) -> bool:
    """Null-safe equality: two Nones are equal, None never equals a number."""
    if first is None or second is None:
        return first is None and second is None
    return first == second
