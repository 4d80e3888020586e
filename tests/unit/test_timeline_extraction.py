"""Unit tests for timeline extraction."""

import pytest
import pandas as pd

from sitsalign.data.timeline import as_timeline, bands_of, extract_timeline, labels_of
from sitsalign.utils.error_handling import InvalidTimelineError


class TestAsTimeline:
    """Tests for timeline normalization."""

    def test_sorts_and_deduplicates(self):
        timeline = as_timeline(["2001-01-17", "2001-01-01", "2001-01-17", "2001-02-02"])
        assert list(timeline) == [
            pd.Timestamp("2001-01-01"),
            pd.Timestamp("2001-01-17"),
            pd.Timestamp("2001-02-02"),
        ]
        assert timeline.is_monotonic_increasing and timeline.is_unique

    def test_truncates_times_to_dates(self):
        timeline = as_timeline(["2001-01-01 10:30", "2001-01-17 23:59"])
        assert timeline[0] == pd.Timestamp("2001-01-01")
        assert timeline[1] == pd.Timestamp("2001-01-17")

    def test_drops_missing_dates(self):
        timeline = as_timeline(["2001-01-01", None, "2001-01-17"])
        assert len(timeline) == 2

    def test_none_raises(self):
        with pytest.raises(InvalidTimelineError):
            as_timeline(None)

    def test_single_date_raises(self):
        with pytest.raises(InvalidTimelineError, match="at least 2"):
            as_timeline(["2001-01-01", "2001-01-01"])

    def test_unparseable_raises(self):
        with pytest.raises(InvalidTimelineError, match="could not be parsed"):
            as_timeline(["not a date", "neither"])


class TestExtractTimeline:
    """Tests for extraction from coverages and sample tables."""

    def test_from_coverage(self, modis_coverage, modis_timeline):
        timeline = extract_timeline(modis_coverage)
        assert timeline.equals(pd.DatetimeIndex(modis_timeline))

    def test_from_samples(self, daily_samples, daily_timeline):
        timeline = extract_timeline(daily_samples)
        assert timeline.equals(pd.DatetimeIndex(daily_timeline))

    def test_from_mapping_with_flat_timeline(self):
        timeline = extract_timeline({"timeline": ["2000-01-01", "2000-01-17", "2000-02-02"]})
        assert len(timeline) == 3

    def test_from_series_with_datetime_index(self, series_factory):
        series = series_factory(pd.date_range("2000-01-01", periods=5, freq="8D"), ["ndvi"])
        series = series.set_index("Index")
        timeline = extract_timeline({"time_series": series})
        assert len(timeline) == 5

    def test_time_series_wins_over_timeline(self, daily_samples, daily_timeline):
        data = daily_samples.copy()
        data["timeline"] = pd.Series(
            [["1990-01-01", "1990-01-02"]] * len(data), index=data.index, dtype=object
        )
        timeline = extract_timeline(data)
        assert timeline[0] == pd.Timestamp(daily_timeline[0])

    def test_missing_fields_raises(self):
        with pytest.raises(InvalidTimelineError, match="valid timeline"):
            extract_timeline(pd.DataFrame({"label": ["Forest"]}))

    def test_empty_timeline_raises(self):
        with pytest.raises(InvalidTimelineError):
            extract_timeline({"timeline": []})

    def test_empty_table_raises(self):
        with pytest.raises(InvalidTimelineError):
            extract_timeline(pd.DataFrame({"timeline": []}))


class TestSampleAccessors:
    """Tests for band and label accessors."""

    def test_bands_in_series_order(self, daily_samples, bands):
        assert bands_of(daily_samples) == bands

    def test_bands_without_series_raises(self):
        with pytest.raises(ValueError):
            bands_of(pd.DataFrame({"label": ["Forest"]}))

    def test_labels_sorted_and_unique(self, daily_samples):
        samples = pd.concat([daily_samples, daily_samples], ignore_index=True)
        assert labels_of(samples) == ["Cerrado", "Forest", "Pasture", "Soy_Corn"]
