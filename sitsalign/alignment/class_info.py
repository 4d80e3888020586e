"""Classification info: what a classification job needs to slice its input.

Time series classification runs in steps: provide labelled samples, describe
how classification is performed (timeline, interval, reference dates), clean
the samples, train a classifier and classify unlabelled data. This module
covers the second step.
"""

import logging
from typing import Optional

import pandas as pd

from sitsalign.alignment.matching import DEFAULT_INTERVAL, IntervalLike, match_indexes, match_timeline
from sitsalign.data.structs import AlignmentSettings, ClassificationInfo, ReferenceWindow
from sitsalign.data.timeline import DataDescriptor, bands_of, extract_timeline, labels_of
from sitsalign.utils.error_handling import FailureContext, TimelineAlignmentError

logger = logging.getLogger(__name__)


def build_class_info(
    data: DataDescriptor,
    samples: pd.DataFrame,
    interval: Optional[IntervalLike] = None,
    settings: Optional[AlignmentSettings] = None,
) -> ClassificationInfo:
    """
    Define the information required for classifying time series.

    Args:
        data: Description of the data being classified (coverage or samples)
        samples: Samples used for training the classification model
        interval: Interval between two successive classifications;
            overrides the one in settings
        settings: Alignment settings (interval, reference sample row)

    Returns:
        ClassificationInfo for the job
    """
    settings = settings or AlignmentSettings()
    if interval is None:
        interval = settings.interval or DEFAULT_INTERVAL

    timeline = extract_timeline(data)
    labels = labels_of(samples)
    bands = bands_of(samples)
    reference = ReferenceWindow.from_samples(samples, row=settings.reference_row)

    date_windows = match_timeline(timeline, reference.start_date, reference.end_date, interval)
    index_windows = match_indexes(timeline, date_windows)

    info = ClassificationInfo(
        bands=tuple(bands),
        labels=tuple(labels),
        interval=str(interval),
        timeline=timeline,
        num_samples=index_windows[0].length,
        date_windows=tuple(date_windows),
        index_windows=tuple(index_windows),
    )
    logger.info(
        f"Classification info: {info.num_bands} bands, {len(info.labels)} labels, "
        f"{info.num_windows} windows of {info.num_samples} samples"
    )
    return info


def run_alignment_job(
    job_id: str,
    data: DataDescriptor,
    samples: pd.DataFrame,
    settings: Optional[AlignmentSettings] = None,
) -> ClassificationInfo:
    """
    Build classification info for one job, recording alignment failures.

    Alignment errors are logged with their failure context and re-raised;
    a failed job yields no partial result.
    """
    try:
        return build_class_info(data, samples, settings=settings)
    except TimelineAlignmentError as e:
        context = FailureContext.from_exception(job_id, e)
        logger.error(
            f"Alignment job {job_id} failed: {e}",
            extra={"props": {"failure": context.to_dict()}},
        )
        raise
