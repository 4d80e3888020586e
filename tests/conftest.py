"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest
import pandas as pd
import numpy as np

CONFIG_DIR = Path(__file__).resolve().parents[1] / "config"


def make_series(timeline, bands, seed=42):
    """One sample time series: an 'Index' date column plus one column per band."""
    rng = np.random.default_rng(seed)
    data = {"Index": pd.DatetimeIndex(timeline)}
    for band in bands:
        data[band] = rng.uniform(0, 1, len(timeline))
    return pd.DataFrame(data)


def object_column(values):
    """Object array holding nested values one per row."""
    column = np.empty(len(values), dtype=object)
    for i, value in enumerate(values):
        column[i] = value
    return column


def make_samples(timeline, bands, labels, start_date, end_date):
    """Sample table with one row per label, all sharing the same reference window."""
    samples = pd.DataFrame({
        "longitude": np.linspace(-55.0, -54.0, len(labels)),
        "latitude": np.linspace(-12.0, -11.0, len(labels)),
        "start_date": pd.Timestamp(start_date),
        "end_date": pd.Timestamp(end_date),
        "label": labels,
        "coverage": "MOD13Q1",
    })
    samples["time_series"] = object_column(
        [make_series(timeline, bands, seed=i) for i in range(len(labels))]
    )
    return samples


def make_coverage(timeline, bands):
    """Coverage descriptor with a nested timeline, as listed by a data cube."""
    coverage = pd.DataFrame({
        "name": ["MOD13Q1"],
        "bands": object_column([list(bands)]),
    })
    coverage["timeline"] = object_column([[list(pd.DatetimeIndex(timeline))]])
    return coverage


@pytest.fixture
def daily_timeline():
    """Daily timeline covering three full years."""
    return pd.date_range(start="2000-01-01", end="2002-12-31", freq="D")


@pytest.fixture
def modis_timeline():
    """16-day composite timeline starting at the first MODIS acquisition."""
    return pd.date_range(start="2000-02-18", end="2004-12-31", freq="16D")


@pytest.fixture
def bands():
    return ["ndvi", "evi", "nir", "mir"]


@pytest.fixture
def labels():
    return ["Soy_Corn", "Pasture", "Forest", "Cerrado"]


@pytest.fixture
def daily_samples(daily_timeline, bands, labels):
    """Samples whose reference window is 2000-08-13 to 2001-08-09."""
    return make_samples(daily_timeline, bands, labels, "2000-08-13", "2001-08-09")


@pytest.fixture
def modis_samples(modis_timeline, bands, labels):
    return make_samples(modis_timeline[:23], bands, labels, "2000-09-13", "2001-08-29")


@pytest.fixture
def modis_coverage(modis_timeline, bands):
    return make_coverage(modis_timeline, bands)


@pytest.fixture
def config_dir():
    return CONFIG_DIR


@pytest.fixture
def samples_factory():
    """Build sample tables for arbitrary timelines and reference windows."""
    return make_samples


@pytest.fixture
def coverage_factory():
    """Build coverage descriptors for arbitrary timelines."""
    return make_coverage


@pytest.fixture
def series_factory():
    return make_series
