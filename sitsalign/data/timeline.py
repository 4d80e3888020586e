"""Timeline extraction from coverage descriptors and sample tables.

A timeline is the ordered list of acquisition dates of a data set. Coverage
descriptors carry it directly in a ``timeline`` field (possibly nested one
level, one timeline per coverage); sample tables carry one nested time series
per row in a ``time_series`` field, whose ``Index`` column holds the dates.
"""

from collections.abc import Mapping
from typing import Any, List, Sequence, Union

import numpy as np
import pandas as pd
import logging

from sitsalign.utils.error_handling import InvalidTimelineError

logger = logging.getLogger(__name__)

TIMELINE_FIELD = "timeline"
TIME_SERIES_FIELD = "time_series"
INDEX_COLUMN = "Index"
LABEL_COLUMN = "label"

DataDescriptor = Union[pd.DataFrame, Mapping]


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple, np.ndarray, pd.Index, pd.Series))


def as_timeline(dates: Sequence) -> pd.DatetimeIndex:
    """
    Normalize a sequence of dates to a timeline.

    Dates are truncated to midnight, sorted and de-duplicated.

    Args:
        dates: Anything pandas can parse as dates

    Returns:
        Strictly increasing DatetimeIndex with at least two entries

    Raises:
        InvalidTimelineError: If the dates are null, unparseable or too few
    """
    if dates is None:
        raise InvalidTimelineError("Input does not contain a valid timeline")
    try:
        timeline = pd.DatetimeIndex(pd.to_datetime(dates))
    except (ValueError, TypeError) as e:
        raise InvalidTimelineError(f"Timeline dates could not be parsed: {e}") from e

    if timeline.tz is not None:
        timeline = timeline.tz_localize(None)

    n_missing = int(timeline.isna().sum())
    if n_missing:
        logger.warning(f"Dropping {n_missing} missing dates from timeline")
        timeline = timeline[~timeline.isna()]

    timeline = timeline.normalize().unique().sort_values()

    if len(timeline) < 2:
        raise InvalidTimelineError(
            f"Timeline needs at least 2 distinct dates, got {len(timeline)}"
        )
    return timeline


def _first_value(data: DataDescriptor, field_name: str) -> Any:
    """Value of a field for the first row of a table, or of a mapping."""
    if isinstance(data, pd.DataFrame):
        if len(data) == 0:
            return None
        return data[field_name].iloc[0]
    return data[field_name]


def _has_field(data: DataDescriptor, field_name: str) -> bool:
    if isinstance(data, pd.DataFrame):
        return field_name in data.columns
    return field_name in data


def _series_dates(series: Any) -> Any:
    """Dates of one nested time series."""
    if isinstance(series, pd.DataFrame):
        if INDEX_COLUMN in series.columns:
            return series[INDEX_COLUMN]
        if isinstance(series.index, pd.DatetimeIndex):
            return series.index
        return None
    if isinstance(series, Mapping):
        return series.get(INDEX_COLUMN)
    return None


def extract_timeline(data: DataDescriptor) -> pd.DatetimeIndex:
    """
    Obtain the timeline of a coverage descriptor or a sample table.

    The time series field takes precedence when both fields are present.

    Args:
        data: DataFrame or mapping with a 'timeline' or 'time_series' field

    Returns:
        Timeline as a DatetimeIndex

    Raises:
        InvalidTimelineError: If no field yields a valid timeline
    """
    dates = None

    if _has_field(data, TIMELINE_FIELD):
        dates = _first_value(data, TIMELINE_FIELD)
        # Coverages list one timeline per sub-collection
        if _is_sequence(dates) and len(dates) > 0:
            first = dates.iloc[0] if isinstance(dates, pd.Series) else dates[0]
            if _is_sequence(first):
                dates = first

    if _has_field(data, TIME_SERIES_FIELD):
        dates = _series_dates(_first_value(data, TIME_SERIES_FIELD))

    if dates is None or (_is_sequence(dates) and len(dates) == 0):
        raise InvalidTimelineError("Input does not contain a valid timeline")

    timeline = as_timeline(dates)
    logger.debug(
        f"Extracted timeline of {len(timeline)} dates "
        f"({timeline[0].date()} to {timeline[-1].date()})"
    )
    return timeline


def bands_of(samples: pd.DataFrame) -> List[str]:
    """
    Band names of a sample table, in the column order of its time series.

    Args:
        samples: Sample table with a 'time_series' column

    Returns:
        Band names excluding the date column
    """
    if TIME_SERIES_FIELD not in samples.columns or len(samples) == 0:
        raise ValueError("Samples do not contain any time series")
    series = samples[TIME_SERIES_FIELD].iloc[0]
    if isinstance(series, pd.DataFrame):
        columns = list(series.columns)
    else:
        columns = list(series.keys())
    return [c for c in columns if c != INDEX_COLUMN]


def labels_of(samples: pd.DataFrame) -> List[str]:
    """Sorted distinct class labels of a sample table."""
    if LABEL_COLUMN not in samples.columns:
        raise ValueError(f"Samples are missing the '{LABEL_COLUMN}' column")
    return sorted(samples[LABEL_COLUMN].dropna().unique().tolist())
