# Copyright (c) 2025 August Detlefsen and the codemagi-utils contributors.
# Licensed under the MIT License. See LICENSE for details.

"""
Collection helpers: delimited join and split, set conversion and ordered
mapping manipulation.
"""

import logging
from collections import OrderedDict
from typing import Any, Iterable, List, Mapping, Optional, Set


logger = logging.getLogger(__name__)


def delimit(items: Optional[Iterable[Any]], delimiter: str) -> str:
    """
    Join items with ``delimiter``; None elements render as "null".
    Byte strings join their integer values.
    """
    if items is None:
        return ""
    return delimiter.join("null" if item is None else str(item) for item in items)


def comma_delimit(items: Optional[Iterable[Any]]) -> str:
    return delimit(items, ", ")


def split_fields(text: str, delimiter: str) -> List[str]:
    """
    Split on a literal delimiter, keeping empty fields.

    Unlike a regex split the delimiter is matched verbatim, so "|" or "."
    need no escaping. An empty delimiter yields no fields.
    """
    if not delimiter:
        return []
    return text.split(delimiter)


def undelimit(text: Optional[str], delimiter: str) -> List[str]:
    """
    Inverse of delimit for string elements.

    Empty input or an empty delimiter yields []. For non-empty elements that
    do not contain the delimiter, ``undelimit(delimit(xs, d), d) == xs``.
    """
    if text is None or text == "" or not delimiter:
        return []
    return split_fields(text, delimiter)


def as_set(items: Optional[Iterable[Any]]) -> Set[Any]:
    if items is None:
        return set()
    return set(items)


def undelimit_as_set(text: Optional[str], delimiter: str) -> Set[str]:
    return as_set(undelimit(text, delimiter))


def replace_item(items: List[Any], item: Any) -> None:
    """Replace the element equal to ``item`` with ``item`` itself, in place."""
    items[items.index(item)] = item


def not_in(first: Iterable[Any], second: Iterable[Any]) -> List[Any]:
    """Elements of ``first`` that are absent from ``second``, in order."""
    second = list(second)
    return [item for item in first if item not in second]


def last(items: Optional[Iterable[Any]]) -> Any:
    """Last non-None element, or None."""
    if items is None:
        return None
    for item in reversed(list(items)):
        if item is not None:
            return item
    return None


def first_key(mapping: Optional[Mapping[Any, Any]]) -> Any:
    if not mapping:
        return None
    return next(iter(mapping))


def first_value(mapping: Optional[Mapping[Any, Any]]) -> Any:
    if not mapping:
        return None
    return next(iter(mapping.values()))


def put_at(mapping: Optional[Mapping[Any, Any]], key: Any, value: Any,
           where: int) -> "OrderedDict[Any, Any]":
    """
    Return a new ordered mapping with ``key`` placed at position ``where``.

    An existing entry for ``key`` is moved rather than duplicated. A
    position past the end appends.
    """
    output = OrderedDict()
    if mapping is None:
        output[key] = value
        return output

    index = 0
    for existing_key, existing_value in mapping.items():
        if existing_key == key:
            continue
        if index == where:
            output[key] = value
        output[existing_key] = existing_value
        index += 1

    if key not in output:
        output[key] = value
    return output
