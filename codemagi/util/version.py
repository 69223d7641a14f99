# Copyright (c) 2025 August Detlefsen and the codemagi-utils contributors.
# Licensed under the MIT License. See LICENSE for details.

"""
Dotted version strings compared numerically segment by segment.
"""

import functools
import re
from typing import List, Tuple, Union

from ..types.errors import VersionFormatError

_NON_DIGITS = re.compile(r'\D')


def _parse(text: str) -> Tuple[List[int], bool, bool]:
    if text is None or text == "":
        raise VersionFormatError("Version string is empty", text=text)

    parts = []
    alpha = beta = False
    for segment in text.split("."):
        if "a" in segment:
            alpha = True
        elif "b" in segment:
            beta = True

        digits = _NON_DIGITS.sub("", segment)
        if not digits:
            raise VersionFormatError(
                f"Version segment {segment!r} has no digits", text=text, segment=segment
            )
        parts.append(int(digits))
    return parts, alpha, beta


@functools.total_ordering
class Version:
    """
    A parsed dotted version such as "1.10.2" or "2.0b1".

    Segments are compared as integers, so "1.9" < "1.10", and missing
    trailing segments count as zero, so "1.1" == "1.1.0". A segment
    containing "a" marks the version alpha, otherwise one containing "b"
    marks it beta; the markers do not affect ordering.
    """

    def __init__(self, version: str):
        self.version = version

    @property
    def version(self) -> str:
        return self._version

    @version.setter
    def version(self, value: str) -> None:
        self._parts, self.alpha, self.beta = _parse(value)
        self._version = value

    @property
    def parts(self) -> Tuple[int, ...]:
        return tuple(self._parts)

    @property
    def major(self) -> int:
        return self.element(0)

    def element(self, index: int) -> int:
        """Segment value at ``index``; 0 past the last segment."""
        if index < 0 or index >= len(self._parts):
            return 0
        return self._parts[index]

    @property
    def num_elements(self) -> int:
        return len(self._parts)

    def compare(self, other: Union["Version", str]) -> int:
        """Return 1, -1 or 0 as this version is greater, smaller or equal."""
        other = _coerce(other)
        for i in range(max(self.num_elements, other.num_elements)):
            mine, theirs = self.element(i), other.element(i)
            if mine > theirs:
                return 1
            if theirs > mine:
                return -1
        return 0

    def is_greater(self, other: Union["Version", str]) -> bool:
        return self.compare(other) > 0

    def __eq__(self, other):
        if not isinstance(other, (Version, str)):
            return NotImplemented
        try:
            return self.compare(other) == 0
        except VersionFormatError:
            return False

    def __lt__(self, other):
        if not isinstance(other, (Version, str)):
            return NotImplemented
        try:
            return self.compare(other) < 0
        except VersionFormatError:
            return NotImplemented

    def __hash__(self):
        parts = list(self._parts)
        while parts and parts[-1] == 0:
            parts.pop()
        return hash(tuple(parts))

    def __str__(self):
        return self._version

    def __repr__(self):
        return f"Version({self._version!r})"


def _coerce(value: Union[Version, str]) -> Version:
    if isinstance(value, Version):
        return value
    return Version(value)


def compare_versions(first: Union[Version, str], second: Union[Version, str]) -> int:
    """Compare two version strings; negative, zero or positive like cmp()."""
    return _coerce(first).compare(second)
