# Copyright (c) 2025 August Detlefsen and the codemagi-utils contributors.
# Licensed under the MIT License. See LICENSE for details.

"""
Null-safe boolean helpers. None counts as false.
"""

from typing import Any, Optional

from ..types.errors import ParseError

TRUE_STRINGS = frozenset(["true", "t", "1", "yes", "y"])
FALSE_STRINGS = frozenset(["false", "f", "0", "no", "n"])

_MISSING = object()


def and_(first: Optional[bool], second: Optional[bool]) -> bool:
    return bool(first) and bool(second)


def or_(first: Optional[bool], second: Optional[bool]) -> bool:
    return bool(first) or bool(second)


def to_yes_no(value: Optional[bool]) -> str:
    return "yes" if value else "no"


def parse_bool(text: Optional[str], default: Any = _MISSING) -> bool:
    """
    Parse true/t/1/yes/y or false/f/0/no/n, ignoring case and surrounding
    whitespace. Anything else raises ParseError unless ``default`` is given.
    """
    if isinstance(text, bool):
        return text

    normalized = text.strip().lower() if text is not None else ""
    if normalized in TRUE_STRINGS:
        return True
    if normalized in FALSE_STRINGS:
        return False

    if default is not _MISSING:
        return default
    raise ParseError(f"Not a boolean: {text!r}", text=text)
