"""Alignment of satellite image time series with reference classification windows."""

from sitsalign.alignment.class_info import build_class_info, run_alignment_job
from sitsalign.alignment.matching import match_indexes, match_timeline, num_samples
from sitsalign.data.structs import ClassificationInfo, DateWindow, IndexWindow, ReferenceWindow
from sitsalign.features.selection import get_time_index, select_indexes, select_raster_indexes
from sitsalign.utils.config_manager import ConfigManager
from sitsalign.utils.logging_config import setup_logging

__version__ = "0.1.0"

__all__ = [
    "ClassificationInfo",
    "DateWindow",
    "IndexWindow",
    "ReferenceWindow",
    "build_class_info",
    "run_alignment_job",
    "match_timeline",
    "match_indexes",
    "num_samples",
    "get_time_index",
    "select_indexes",
    "select_raster_indexes",
    "ConfigManager",
    "setup_logging",
]
