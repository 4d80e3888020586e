"""Classification interval parsing.

Intervals are exact durations: a month is 30.4375 days and a year 365.25 days,
so "12 months" equals "1 year". Adding an interval to a date and truncating to
midnight gives the estimated date of the next window.
"""

import re
from dataclasses import dataclass
from typing import Dict, Union

import pandas as pd

from sitsalign.utils.error_handling import InvalidIntervalError

_SECONDS_PER_DAY = 86400.0

UNIT_SECONDS: Dict[str, float] = {
    "second": 1.0,
    "minute": 60.0,
    "hour": 3600.0,
    "day": _SECONDS_PER_DAY,
    "week": 7 * _SECONDS_PER_DAY,
    "month": 30.4375 * _SECONDS_PER_DAY,
    "year": 365.25 * _SECONDS_PER_DAY,
}

_UNIT_ALIASES: Dict[str, str] = {
    "s": "second", "sec": "second", "secs": "second",
    "min": "minute", "mins": "minute",
    "h": "hour", "hr": "hour", "hrs": "hour",
    "d": "day",
    "w": "week", "wk": "week", "wks": "week",
    "m": "month", "mon": "month", "mons": "month", "mo": "month",
    "y": "year", "yr": "year", "yrs": "year",
}

_INTERVAL_PATTERN = re.compile(r"^\s*([0-9]+(?:\.[0-9]+)?)\s*([A-Za-z]+)\s*$")


def _canonical_unit(unit: str) -> str:
    unit = unit.lower()
    if unit in _UNIT_ALIASES:
        return _UNIT_ALIASES[unit]
    if unit.endswith("s") and unit[:-1] in UNIT_SECONDS:
        return unit[:-1]
    if unit in UNIT_SECONDS:
        return unit
    raise InvalidIntervalError(f"Unknown interval unit: '{unit}'")


@dataclass(frozen=True)
class Interval:
    """A positive, fixed-length interval between classifications."""
    text: str
    duration: pd.Timedelta

    @classmethod
    def parse(cls, value: Union[str, "Interval", pd.Timedelta]) -> "Interval":
        """
        Parse an interval such as "12 months" or "16 days".

        Args:
            value: Interval text, an Interval or a Timedelta

        Returns:
            Parsed Interval

        Raises:
            InvalidIntervalError: If the text cannot be parsed or is not positive
        """
        if isinstance(value, Interval):
            return value
        if isinstance(value, pd.Timedelta):
            if value <= pd.Timedelta(0):
                raise InvalidIntervalError(f"Interval must be positive, got {value}")
            return cls(text=str(value), duration=value)
        if not isinstance(value, str):
            raise InvalidIntervalError(f"Cannot interpret {value!r} as an interval")

        match = _INTERVAL_PATTERN.match(value)
        if not match:
            raise InvalidIntervalError(f"Cannot parse interval '{value}'")

        amount = float(match.group(1))
        unit = _canonical_unit(match.group(2))
        if amount <= 0:
            raise InvalidIntervalError(f"Interval must be positive, got '{value}'")

        duration = pd.Timedelta(seconds=amount * UNIT_SECONDS[unit])
        return cls(text=value.strip(), duration=duration)

    def add_to(self, date: pd.Timestamp) -> pd.Timestamp:
        """Date one interval after the given date, truncated to midnight."""
        return (pd.Timestamp(date) + self.duration).normalize()

    def __str__(self) -> str:
        return self.text
