"""Date handling for front-matter ``date`` values."""

from __future__ import annotations

import datetime as dt
from typing import Any


def coerce_date(value: Any) -> dt.date:
    """Interpret a front-matter ``date`` value.

    Accepts ``date`` and ``datetime`` objects (as produced by YAML and
    TOML loaders) and ISO-8601 strings. Datetimes keep their time part.

    Raises:
        ValueError: *value* is not a recognizable date.

    Examples:
        >>> coerce_date("2019-03-01")
        datetime.date(2019, 3, 1)
        >>> coerce_date("2019-03-01T09:30:00")
        datetime.datetime(2019, 3, 1, 9, 30)
    """
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str):
        text = value.strip()
        for parse in (dt.date.fromisoformat, dt.datetime.fromisoformat):
            try:
                return parse(text)
            except ValueError:
                continue
    msg = f"not an ISO-8601 date: {value!r}"
    raise ValueError(msg)


def as_calendar_date(value: dt.date) -> dt.date:
    """Drop the time part of a datetime; dates pass through."""
    if isinstance(value, dt.datetime):
        return value.date()
    return value
