"""Value normalization shared by the built-in calculators."""

from datetime import date, datetime, timezone
from numbers import Integral
from typing import Any

import pandas as pd
from dateutil import parser

def is_null(value: Any) -> bool:
    """Check if a field value carries no data (None, NaN, NaT)."""
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        # Array-like values are never treated as missing.
        return False

def to_date(value: Any, dayfirst: bool = False) -> date:
    """
    Normalize a date-like value to a calendar date.

    Accepts epoch seconds (UTC), parseable date strings and datetime-like
    values; time of day is dropped. Ambiguous strings such as `10/08/2015`
    are read month first unless `dayfirst` is set.

    Raises:
        TypeError: If the value is not date-like
        ValueError: If a string cannot be parsed
    """
    if isinstance(value, Integral) and not isinstance(value, bool):
        return datetime.fromtimestamp(int(value), tz=timezone.utc).date()

    # datetime (and pd.Timestamp) before date: datetime is a date subclass.
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    if isinstance(value, str):
        text = value.strip()
        if dayfirst:
            # dateutil applies dayfirst to year-first strings too; ISO dates
            # are never ambiguous.
            try:
                return parser.isoparse(text).date()
            except ValueError:
                pass
        return parser.parse(text, dayfirst=dayfirst).date()

    raise TypeError(f"Cannot interpret {value!r} as a date")

def serial_day(value: Any, dayfirst: bool = False) -> int:
    """Continuous day number of a date-like value."""
    return to_date(value, dayfirst=dayfirst).toordinal()
