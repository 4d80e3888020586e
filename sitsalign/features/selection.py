"""
Column selection for window-by-window classification.

Feature tables are wide: two leading metadata columns, then the values of
every band concatenated over the whole timeline (band 0 at all dates, then
band 1 at all dates, ...). For each classification window a boolean mask picks
the metadata columns plus each band's stretch of dates inside the window.
"""

import logging
from numbers import Integral
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from sitsalign.alignment.class_info import build_class_info
from sitsalign.alignment.matching import IntervalLike
from sitsalign.data.structs import AlignmentSettings, ClassificationInfo, IndexWindow
from sitsalign.data.timeline import DataDescriptor
from sitsalign.utils.error_handling import WindowOverflowError

logger = logging.getLogger(__name__)

METADATA_COLUMNS = 2

TimeIndex = Tuple[int, ...]


def flat_index(band_position: int, time_index: int, timeline_length: int) -> int:
    """
    Position of (band, time) in the band-major flattening of a bands x time array.

    Args:
        band_position: 0-based band position
        time_index: 0-based position in the single-band timeline
        timeline_length: Number of dates per band

    Returns:
        0-based position in the concatenated band values
    """
    if not 0 <= time_index < timeline_length:
        raise WindowOverflowError(
            f"Time index {time_index} outside timeline of length {timeline_length}"
        )
    return band_position * timeline_length + time_index


def column_position(flat: int, metadata_columns: int = METADATA_COLUMNS) -> int:
    """Column of a flattened band value in a table with leading metadata columns."""
    return flat + metadata_columns


def time_index(
    index_windows: Sequence[IndexWindow],
    timeline: Union[Sequence, int],
    bands: Sequence[str],
) -> List[TimeIndex]:
    """
    Create the time index of each window over the concatenated bands.

    Args:
        index_windows: Index windows of the timeline
        timeline: Timeline of the data set (or its length)
        bands: Bands used for classification

    Returns:
        One tuple per window: (start, end) of band 0, then of band 1, ...
    """
    timeline_length = int(timeline) if isinstance(timeline, Integral) else len(timeline)

    time_indexes = []
    for start_index, end_index in index_windows:
        idx: List[int] = []
        for band_position in range(len(bands)):
            idx.append(flat_index(band_position, start_index, timeline_length))
            idx.append(flat_index(band_position, end_index, timeline_length))
        time_indexes.append(tuple(idx))
    return time_indexes


def get_time_index(class_info: ClassificationInfo) -> List[TimeIndex]:
    """Time indexes of the blocks to extract for each classification window."""
    return time_index(class_info.index_windows, class_info.timeline, class_info.bands)


def selection_masks(
    time_indexes: Sequence[TimeIndex],
    n_bands: int,
    n_time_steps: int,
    metadata_columns: int = METADATA_COLUMNS,
) -> List[np.ndarray]:
    """
    Build the column mask of each classification window.

    Args:
        time_indexes: Time indexes from time_index()
        n_bands: Number of bands in the feature table
        n_time_steps: Number of dates per band in the feature table
        metadata_columns: Leading columns always selected

    Returns:
        Boolean arrays of length n_bands * n_time_steps + metadata_columns
    """
    size = n_bands * n_time_steps + metadata_columns

    masks = []
    for window, idx in enumerate(time_indexes):
        if len(idx) != 2 * n_bands:
            raise ValueError(
                f"Time index of window {window} has {len(idx)} entries, "
                f"expected {2 * n_bands} for {n_bands} bands"
            )
        mask = np.zeros(size, dtype=bool)
        mask[:metadata_columns] = True
        for band_position in range(n_bands):
            first = column_position(idx[2 * band_position], metadata_columns)
            last = column_position(idx[2 * band_position + 1], metadata_columns)
            if last >= size:
                raise WindowOverflowError(
                    f"Window {window} of band {band_position} ends at column {last}, "
                    f"beyond the {size} columns of the feature table"
                )
            mask[first:last + 1] = True
        masks.append(mask)

    logger.debug(f"Built {len(masks)} selection masks of {size} columns")
    return masks


def select_indexes(
    class_info: ClassificationInfo,
    n_time_steps: int,
    metadata_columns: int = METADATA_COLUMNS,
) -> List[np.ndarray]:
    """
    Selection masks for a feature table built from time series.

    Args:
        class_info: Classification info of the job
        n_time_steps: Number of dates per band in the feature table
        metadata_columns: Leading columns always selected

    Returns:
        One mask per classification window
    """
    if n_time_steps != len(class_info.timeline):
        logger.warning(
            f"Feature table has {n_time_steps} dates per band but the timeline "
            f"has {len(class_info.timeline)}; band offsets follow the timeline"
        )
    masks = selection_masks(
        get_time_index(class_info), class_info.num_bands, n_time_steps, metadata_columns
    )
    logger.info(f"Selection masks ready for {len(masks)} windows")
    return masks


def select_raster_indexes(
    coverage: DataDescriptor,
    samples: pd.DataFrame,
    interval: Optional[IntervalLike] = None,
    settings: Optional[AlignmentSettings] = None,
) -> List[np.ndarray]:
    """
    Selection masks for a feature table built from a raster coverage.

    The coverage timeline sets the number of dates per band and the samples
    set the band order.

    Args:
        coverage: Coverage descriptor with a 'timeline' field
        samples: Samples used for training
        interval: Classification interval
        settings: Alignment settings

    Returns:
        One mask per classification window
    """
    settings = settings or AlignmentSettings()
    class_info = build_class_info(coverage, samples, interval=interval, settings=settings)
    return selection_masks(
        get_time_index(class_info),
        class_info.num_bands,
        len(class_info.timeline),
        settings.metadata_columns,
    )


def select_columns(table: pd.DataFrame, mask: np.ndarray) -> pd.DataFrame:
    """
    Extract the columns of one classification window from a wide feature table.

    Args:
        table: Feature table with metadata columns followed by band values
        mask: Selection mask of the window

    Returns:
        DataFrame with the selected columns only
    """
    if len(mask) != table.shape[1]:
        raise ValueError(
            f"Mask of length {len(mask)} does not match table with {table.shape[1]} columns"
        )
    return table.loc[:, mask]
