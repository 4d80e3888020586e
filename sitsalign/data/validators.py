"""Validity checks of window boundaries against a timeline.

A boundary date is accepted when it lies inside the timeline, or when it falls
outside by no more than one acquisition interval. The acquisition interval is
estimated from the two entries at the relevant end of the timeline only.
"""

from typing import Sequence

import pandas as pd

from sitsalign.data.timeline import as_timeline


def _days(delta: pd.Timedelta) -> int:
    return int(delta / pd.Timedelta(days=1))


def within_timeline(date: pd.Timestamp, timeline: pd.DatetimeIndex) -> bool:
    """True if the date lies in [first, last] of the timeline."""
    return timeline[0] <= pd.Timestamp(date) <= timeline[-1]


def start_cadence(timeline: pd.DatetimeIndex) -> int:
    """Days between the first two entries of the timeline."""
    return _days(timeline[1] - timeline[0])


def end_cadence(timeline: pd.DatetimeIndex) -> int:
    """Days between the last two entries of the timeline."""
    return _days(timeline[-1] - timeline[-2])


def is_valid_start_date(date: pd.Timestamp, timeline: Sequence) -> bool:
    """
    Test if a starting date fits the timeline.

    Args:
        date: Candidate start date
        timeline: Timeline of observations (any sequence of dates)

    Returns:
        Whether the date is inside the timeline or at most one
        acquisition interval away from its first entry
    """
    timeline = as_timeline(timeline)
    date = pd.Timestamp(date).normalize()
    if within_timeline(date, timeline):
        return True
    return abs(_days(date - timeline[0])) <= start_cadence(timeline)


def is_valid_end_date(date: pd.Timestamp, timeline: Sequence) -> bool:
    """
    Test if an end date fits the timeline.

    Args:
        date: Candidate end date
        timeline: Timeline of observations (any sequence of dates)

    Returns:
        Whether the date is inside the timeline or at most one
        acquisition interval away from its last entry
    """
    timeline = as_timeline(timeline)
    date = pd.Timestamp(date).normalize()
    if within_timeline(date, timeline):
        return True
    return abs(_days(date - timeline[-1])) <= end_cadence(timeline)
