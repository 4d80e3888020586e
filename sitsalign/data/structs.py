"""Core data structures for classification-window alignment."""

from dataclasses import dataclass
from typing import Any, Dict, NamedTuple, Tuple

import pandas as pd


class DateWindow(NamedTuple):
    """One (start_date, end_date) classification window, both timeline entries."""
    start_date: pd.Timestamp
    end_date: pd.Timestamp


class IndexWindow(NamedTuple):
    """0-based positions of a DateWindow inside its timeline (inclusive)."""
    start_index: int
    end_index: int

    @property
    def length(self) -> int:
        """Number of timeline entries covered by the window."""
        return self.end_index - self.start_index + 1


@dataclass(frozen=True)
class ReferenceWindow:
    """
    Canonical classification period taken from one training sample.

    Only the month and day of ``start_date`` set the phase of the windows;
    the year comes from the timeline being classified.
    """
    start_date: pd.Timestamp
    end_date: pd.Timestamp

    def __post_init__(self):
        object.__setattr__(self, "start_date", pd.Timestamp(self.start_date).normalize())
        object.__setattr__(self, "end_date", pd.Timestamp(self.end_date).normalize())
        if self.end_date < self.start_date:
            raise ValueError(
                f"Reference window ends ({self.end_date.date()}) before it "
                f"starts ({self.start_date.date()})"
            )

    @classmethod
    def from_samples(cls, samples: pd.DataFrame, row: int = 0) -> "ReferenceWindow":
        """
        Build the reference window from an explicitly chosen sample row.

        Args:
            samples: Training samples with 'start_date' and 'end_date' columns
            row: Position of the representative sample

        Returns:
            ReferenceWindow for that sample
        """
        missing = [c for c in ("start_date", "end_date") if c not in samples.columns]
        if missing:
            raise ValueError(f"Samples are missing required columns: {missing}")
        if not 0 <= row < len(samples):
            raise ValueError(
                f"Reference row {row} out of range for {len(samples)} samples"
            )
        record = samples.iloc[row]
        return cls(start_date=record["start_date"], end_date=record["end_date"])


@dataclass(frozen=True, eq=False)
class ClassificationInfo:
    """
    Everything one classification job needs to slice its input.

    Attributes:
        bands: Band names, in the order their values are laid out
        labels: Class labels known to the trained model
        interval: Interval between two successive classifications
        timeline: Timeline of the data being classified
        num_samples: Timeline entries per classification window
        date_windows: Date pairs tiling the timeline
        index_windows: Timeline positions of each date pair
    """
    bands: Tuple[str, ...]
    labels: Tuple[str, ...]
    interval: str
    timeline: pd.DatetimeIndex
    num_samples: int
    date_windows: Tuple[DateWindow, ...]
    index_windows: Tuple[IndexWindow, ...]

    def __post_init__(self):
        """Validate consistency after initialization."""
        if len(self.date_windows) != len(self.index_windows):
            raise ValueError(
                f"Length mismatch: date_windows ({len(self.date_windows)}) vs "
                f"index_windows ({len(self.index_windows)})"
            )
        if self.num_samples < 1:
            raise ValueError(f"num_samples must be >= 1, got {self.num_samples}")
        if not self.bands:
            raise ValueError("Classification requires at least one band")

    @property
    def num_bands(self) -> int:
        return len(self.bands)

    @property
    def num_windows(self) -> int:
        return len(self.date_windows)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "bands": list(self.bands),
            "labels": list(self.labels),
            "interval": self.interval,
            "timeline": [d.date().isoformat() for d in self.timeline],
            "num_samples": self.num_samples,
            "date_windows": [
                [w.start_date.date().isoformat(), w.end_date.date().isoformat()]
                for w in self.date_windows
            ],
            "index_windows": [list(w) for w in self.index_windows],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClassificationInfo":
        """Create from dictionary."""
        return cls(
            bands=tuple(data["bands"]),
            labels=tuple(data["labels"]),
            interval=data["interval"],
            timeline=pd.DatetimeIndex(pd.to_datetime(data["timeline"])),
            num_samples=int(data["num_samples"]),
            date_windows=tuple(
                DateWindow(pd.Timestamp(s), pd.Timestamp(e))
                for s, e in data["date_windows"]
            ),
            index_windows=tuple(
                IndexWindow(int(s), int(e)) for s, e in data["index_windows"]
            ),
        )


@dataclass
class AlignmentSettings:
    """
    Typed view of an alignment job configuration.

    Mirrors the sections of ``config/alignment.yaml``: ``alignment``
    (interval, reference sample row), ``selection`` (metadata columns ahead
    of the band values) and ``logging`` (level, directory of the JSON logs).
    """
    interval: str = "12 months"
    reference_row: int = 0
    metadata_columns: int = 2
    log_level: str = "INFO"
    log_dir: str = "logs"

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "AlignmentSettings":
        """Create settings from a loaded configuration dictionary."""
        alignment = config.get("alignment", {})
        selection = config.get("selection", {})
        log_section = config.get("logging", {})
        return cls(
            interval=alignment.get("interval", cls.interval),
            reference_row=alignment.get("reference_row", cls.reference_row),
            metadata_columns=selection.get("metadata_columns", cls.metadata_columns),
            log_level=log_section.get("level", cls.log_level),
            log_dir=log_section.get("log_dir", cls.log_dir),
        )
