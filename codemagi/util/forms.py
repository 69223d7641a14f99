# Copyright (c) 2025 August Detlefsen and the codemagi-utils contributors.
# Licensed under the MIT License. See LICENSE for details.

"""
Helpers for reading submitted form parameters from a plain mapping
(for example a framework's request.form converted to a dict).
"""

from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional

from . import dates
from .values import is_empty


def _param(params: Mapping[str, Any], name: str) -> Optional[str]:
    value = params.get(name)
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def get_date(params: Optional[Mapping[str, Any]], name: str) -> Optional[datetime]:
    """
    Build a date from the month_<name>_month, day_<name>_day and
    year_<name>_year parameters, plus optional hour_<name>_hour and
    minute_<name>_minute. Returns None when the parts do not form a date.
    """
    if params is None:
        return None

    month = _param(params, f"month_{name}_month")
    day = _param(params, f"day_{name}_day")
    year = _param(params, f"year_{name}_year")
    hour = _param(params, f"hour_{name}_hour")
    minute = _param(params, f"minute_{name}_minute")

    if is_empty(hour):
        hour = "00"
    if is_empty(minute):
        minute = "00"
    return dates.from_parts(month, day, year, hour, minute, default=None)


def get_calendar_date(params: Optional[Mapping[str, Any]], name: str) -> Optional[datetime]:
    """Parse a single MM/DD/YYYY parameter; None when missing or malformed."""
    if params is None:
        return None
    return dates.to_date(_param(params, name), dates.CALENDAR_FORMAT, default=None)


def get_parameters_by_name(params: Mapping[str, Any], prefix: str,
                           trim: bool = True) -> List[str]:
    """
    Names of the parameters starting with ``prefix``, in mapping order.
    With ``trim`` the prefix is removed from each returned name.
    """
    output = []
    for name in params:
        if name.startswith(prefix):
            output.append(name[len(prefix):] if trim else name)
    return output


def get_select_values(params: Mapping[str, Any], name: str) -> List[str]:
    """All values submitted for a multi-valued field; [] when absent."""
    value = params.get(name)
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def get_first_submit(params: Mapping[str, Any], names: Iterable[str]) -> str:
    """First of ``names`` submitted with a non-empty value, or ""."""
    for name in names:
        if not is_empty(_param(params, name)):
            return name
    return ""
