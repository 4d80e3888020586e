import numpy as np
import pandas as pd

from sitsalign.alignment.class_info import build_class_info
from sitsalign.features.selection import select_columns, select_raster_indexes
from sitsalign.utils.config_manager import ConfigManager


def build_feature_table(samples, bands, timeline):
    """Wide table: id, label, then every band across the whole timeline."""
    rows = []
    for i, series in enumerate(samples["time_series"]):
        values = np.concatenate([series[band].to_numpy() for band in bands])
        rows.append(np.concatenate([[i, i % 2], values]))
    columns = ["id", "label"] + [
        f"{band}.{date.date()}" for band in bands for date in timeline
    ]
    return pd.DataFrame(rows, columns=columns)


def test_end_to_end_alignment(config_dir, modis_timeline, samples_factory, coverage_factory, bands, labels):
    """
    Test the full loop:
    1. Configuration
    2. Classification info from a coverage and training samples
    3. Selection masks
    4. Column extraction per window
    """
    # 1. Configuration
    settings = ConfigManager(str(config_dir)).load_settings()
    assert settings.interval == "12 months"

    # 2. Classification info
    coverage = coverage_factory(modis_timeline, bands)
    training = samples_factory(modis_timeline[13:36], bands, labels, "2000-09-13", "2001-08-29")
    info = build_class_info(coverage, training, settings=settings)

    assert info.num_samples == 23
    assert info.num_windows == 4

    # 3. Selection masks
    masks = select_raster_indexes(coverage, training, settings=settings)
    assert len(masks) == info.num_windows

    # 4. Column extraction, on points observed over the whole coverage
    points = samples_factory(modis_timeline, bands, labels, "2000-09-13", "2001-08-29")
    table = build_feature_table(points, bands, info.timeline)

    for window, mask in zip(info.date_windows, masks):
        selected = select_columns(table, mask)
        assert selected.shape == (len(labels), 2 + len(bands) * info.num_samples)
        assert list(selected.columns[:2]) == ["id", "label"]

        window_dates = info.timeline[
            (info.timeline >= window.start_date) & (info.timeline <= window.end_date)
        ]
        expected = [f"{band}.{date.date()}" for band in bands for date in window_dates]
        assert list(selected.columns[2:]) == expected

        # Values come from the same positions of the original series
        first_series = points["time_series"].iloc[0]
        in_window = first_series["Index"].between(window.start_date, window.end_date)
        np.testing.assert_allclose(
            selected.iloc[0, 2:2 + info.num_samples].to_numpy(dtype=float),
            first_series.loc[in_window, bands[0]].to_numpy(),
        )
