"""Timeline matching: tile a timeline with classification windows.

For correct classification the time series of the input data must be aligned
to those of the training samples. Given a timeline, the start and end dates of
a reference sample and an interval, the timeline is cut into windows that all
hold the same number of observations and start on the same day of the year
(as close as the timeline allows).
"""

import calendar
import logging
from typing import List, Sequence, Union

import numpy as np
import pandas as pd

from sitsalign.alignment.intervals import Interval
from sitsalign.data.structs import DateWindow, IndexWindow
from sitsalign.data.timeline import as_timeline
from sitsalign.data.validators import is_valid_end_date, is_valid_start_date
from sitsalign.utils.error_handling import (
    DateNotFoundError,
    InvalidIntervalError,
    MisalignedEndError,
    MisalignedStartError,
    WindowOverflowError,
)

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = "12 months"

IntervalLike = Union[str, Interval, pd.Timedelta]


def nearest_index(date: pd.Timestamp, timeline: pd.DatetimeIndex) -> int:
    """
    Position of the timeline entry closest to a date.

    Ties go to the earlier entry.
    """
    distance = np.abs(((timeline - pd.Timestamp(date)) / pd.Timedelta(days=1)).to_numpy())
    return int(np.argmin(distance))


def num_samples(timeline: Sequence, interval: IntervalLike = DEFAULT_INTERVAL) -> int:
    """
    Find the number of observations in one interval.

    Counts the timeline entries strictly before the first date plus one
    interval.

    Args:
        timeline: Timeline of input observations
        interval: Period to match the data to the patterns

    Returns:
        Number of observations in a classification window
    """
    timeline = as_timeline(timeline)
    interval = Interval.parse(interval)

    next_date = interval.add_to(timeline[0])
    count = int((timeline < next_date).sum())
    if count < 1:
        raise InvalidIntervalError(
            f"Interval '{interval}' is shorter than one day and covers no observations"
        )
    return count


def estimated_start_date(ref_start_date: pd.Timestamp, year: int) -> pd.Timestamp:
    """
    Reference day and month placed in the given year.

    February 29th falls back to February 28th in non-leap years.
    """
    ref = pd.Timestamp(ref_start_date)
    day = min(ref.day, calendar.monthrange(year, ref.month)[1])
    return pd.Timestamp(year=year, month=ref.month, day=day)


def match_timeline(
    timeline: Sequence,
    ref_start_date: pd.Timestamp,
    ref_end_date: pd.Timestamp,
    interval: IntervalLike = DEFAULT_INTERVAL,
) -> List[DateWindow]:
    """
    Find dates in the input timeline that match those of the patterns.

    Windows start on the reference day of the year in the first year of the
    timeline, are snapped to the nearest observation and hold the same number
    of observations. Successive windows start one interval apart; the last
    window is the last one that fits entirely inside the timeline.

    The start check applies to the estimated start date (reference day and
    month in the first year of the timeline), before it is snapped to an
    observation. A reference start earlier in the year than the first
    observation by more than one acquisition interval is rejected even though
    a nearby observation exists: a calendar-year reference (January 1st)
    against a MODIS timeline starting 2000-02-18 raises MisalignedStartError.
    Use a reference sample whose start falls within the observed part of the
    first year.

    Args:
        timeline: Timeline of input observations
        ref_start_date: Start date of the reference sample
        ref_end_date: End date of the reference sample
        interval: Period between two classifications

    Returns:
        Date windows covering the timeline, in order

    Raises:
        MisalignedStartError: If the expected start date is not inside the timeline
        WindowOverflowError: If not even one window fits in the timeline
        MisalignedEndError: If the last end date is not inside the timeline
        InvalidIntervalError: If the interval does not advance the windows
    """
    timeline = as_timeline(timeline)
    interval = Interval.parse(interval)
    n_samples = num_samples(timeline, interval)

    est_start_date = estimated_start_date(ref_start_date, timeline[0].year)
    if not is_valid_start_date(est_start_date, timeline):
        msg = (
            f"Expected start date {est_start_date.date()} is not inside timeline "
            f"of observations ({timeline[0].date()} to {timeline[-1].date()})"
        )
        logger.error(msg)
        raise MisalignedStartError(msg)

    start_idx = nearest_index(est_start_date, timeline)
    end_idx = start_idx + n_samples - 1

    if end_idx >= len(timeline):
        msg = (
            f"Start date {timeline[start_idx].date()} plus {n_samples} samples "
            f"runs past the timeline end {timeline[-1].date()}; compare the "
            f"timeline with the reference window {pd.Timestamp(ref_start_date).date()} "
            f"to {pd.Timestamp(ref_end_date).date()}"
        )
        logger.error(msg)
        raise WindowOverflowError(msg)

    windows: List[DateWindow] = []
    while end_idx < len(timeline):
        windows.append(DateWindow(timeline[start_idx], timeline[end_idx]))

        next_start_date = interval.add_to(timeline[start_idx])
        next_idx = nearest_index(next_start_date, timeline)
        if next_idx <= start_idx:
            if next_start_date > timeline[-1]:
                break
            msg = (
                f"Interval '{interval}' does not advance past "
                f"{timeline[start_idx].date()}; it is shorter than the timeline cadence"
            )
            logger.error(msg)
            raise InvalidIntervalError(msg)

        start_idx = next_idx
        end_idx = start_idx + n_samples - 1

    end_date = windows[-1].end_date
    if not is_valid_end_date(end_date, timeline):
        msg = f"Expected end date {end_date.date()} is not inside timeline of observations"
        logger.error(msg)
        raise MisalignedEndError(msg)

    logger.info(
        f"Matched {len(windows)} windows of {n_samples} samples "
        f"every '{interval}' from {windows[0].start_date.date()}"
    )
    return windows


def match_indexes(
    timeline: Sequence,
    date_windows: Sequence[DateWindow],
) -> List[IndexWindow]:
    """
    Find the timeline positions of each window's start and end dates.

    Args:
        timeline: Timeline of input observations
        date_windows: Windows produced by match_timeline

    Returns:
        0-based index windows, one per date window

    Raises:
        DateNotFoundError: If a window date is not a timeline entry
    """
    timeline = as_timeline(timeline)

    index_windows = []
    for start_date, end_date in date_windows:
        try:
            start_index = timeline.get_loc(pd.Timestamp(start_date))
            end_index = timeline.get_loc(pd.Timestamp(end_date))
        except KeyError as e:
            msg = (
                f"Window ({pd.Timestamp(start_date).date()}, "
                f"{pd.Timestamp(end_date).date()}) has a date outside the timeline"
            )
            logger.error(msg)
            raise DateNotFoundError(msg) from e
        index_windows.append(IndexWindow(int(start_index), int(end_index)))

    logger.debug(f"Mapped {len(index_windows)} windows to timeline indexes")
    return index_windows
