# Copyright (c) 2025 August Detlefsen and the codemagi-utils contributors.
# Licensed under the MIT License. See LICENSE for details.

"""
Null and emptiness helpers shared by the other utility modules.
"""

from collections.abc import Mapping
from typing import Any, Optional


def is_empty(value: Any) -> bool:
    """
    Check whether a value carries no content.

    None, a blank string, an empty sequence, a sequence holding only None or
    blank strings, and a mapping whose keys and values are all None or blank
    are empty. Any other non-string element makes a container non-empty.
    """
    if value is None:
        return True

    if isinstance(value, str):
        return not value.strip()

    if isinstance(value, (bytes, bytearray)):
        return len(value) == 0

    if isinstance(value, Mapping):
        for key, item in value.items():
            if not _is_blank(key) or not _is_blank(item):
                return False
        return True

    if isinstance(value, (list, tuple, set, frozenset)):
        return all(_is_blank(item) for item in value)

    return False


def _is_blank(item: Any) -> bool:
    if item is None:
        return True
    if isinstance(item, str):
        return not item.strip()
    return False


def is_non_empty(values) -> bool:
    """True when at least one element is a non-None, non-empty value."""
    if not values:
        return False
    for item in values:
        if item is None:
            continue
        if not isinstance(item, str) or len(item) > 0:
            return True
    return False


def nvl(*values: Any) -> Any:
    """Return the first non-empty argument, or "" when every argument is empty."""
    for value in values:
        if not is_empty(value):
            return value
    return ""


def no_nulls(value: Any, output: Optional[Any] = None, default: Any = "") -> Any:
    """
    Substitute a default for empty values.

    With only ``value``, returns ``value`` or ``default`` when it is empty.
    With ``output``, returns ``output`` when ``value`` is non-empty, so the
    call reads as "render output only if value is present".
    """
    if is_empty(value):
        return default
    if output is None:
        return value
    return output


def strip_non_numeric(value: Optional[str]) -> str:
    """Keep only the ASCII digits of a string."""
    if value is None:
        return ""
    return "".join(c for c in value if '0' <= c <= '9')
