"""Interval parsing, timeline matching and classification info."""

from .intervals import Interval
from .matching import match_indexes, match_timeline, nearest_index, num_samples
from .class_info import build_class_info, run_alignment_job

__all__ = [
    "Interval",
    "match_indexes",
    "match_timeline",
    "nearest_index",
    "num_samples",
    "build_class_info",
    "run_alignment_job",
]
