"""Band-aware column selection for classification windows."""

from .selection import (
    flat_index,
    column_position,
    time_index,
    get_time_index,
    selection_masks,
    select_indexes,
    select_raster_indexes,
    select_columns,
)

__all__ = [
    "flat_index",
    "column_position",
    "time_index",
    "get_time_index",
    "selection_masks",
    "select_indexes",
    "select_raster_indexes",
    "select_columns",
]
