"""Timeline extraction, validity checks and core data structures."""

from .structs import AlignmentSettings, ClassificationInfo, DateWindow, IndexWindow, ReferenceWindow
from .timeline import as_timeline, bands_of, extract_timeline, labels_of
from .validators import is_valid_end_date, is_valid_start_date

__all__ = [
    "AlignmentSettings",
    "ClassificationInfo",
    "DateWindow",
    "IndexWindow",
    "ReferenceWindow",
    "as_timeline",
    "bands_of",
    "extract_timeline",
    "labels_of",
    "is_valid_start_date",
    "is_valid_end_date",
]
