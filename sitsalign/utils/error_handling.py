"""Error taxonomy and failure capture for timeline alignment."""

import time
import traceback
from dataclasses import dataclass, field
from typing import Any, Dict


class TimelineAlignmentError(ValueError):
    """Base class for structural mismatches between samples and coverage."""


class InvalidTimelineError(TimelineAlignmentError):
    """The input carries no usable timeline."""


class InvalidIntervalError(TimelineAlignmentError):
    """The classification interval cannot be parsed or does not advance."""


class MisalignedStartError(TimelineAlignmentError):
    """The computed start date falls outside the timeline tolerance."""


class MisalignedEndError(TimelineAlignmentError):
    """The computed end date falls outside the timeline tolerance."""


class WindowOverflowError(TimelineAlignmentError):
    """A window extends past the available timeline data."""


class DateNotFoundError(TimelineAlignmentError):
    """A window date is not an entry of the timeline."""


@dataclass
class FailureContext:
    """Captures context of a failed alignment job for reporting."""
    job_id: str
    timestamp: float = field(default_factory=time.time)
    exception_type: str = ""
    exception_message: str = ""
    stack_trace: str = ""
    local_variables: Dict[str, str] = field(default_factory=dict)
    alignment_failure: bool = False

    @classmethod
    def from_exception(cls, job_id: str, exc: Exception) -> "FailureContext":
        """
        Create context from an exception.
        Captures locals from the frame where the exception was raised.
        """
        stack_trace = "".join(traceback.format_tb(exc.__traceback__))

        locals_repr = {}
        if exc.__traceback__:
            ptr = exc.__traceback__
            while ptr.tb_next:
                ptr = ptr.tb_next
            frame = ptr.tb_frame

            for k, v in frame.f_locals.items():
                try:
                    val_str = str(v)
                    # Timelines print long
                    if len(val_str) > 500:
                        val_str = val_str[:500] + "..."
                    locals_repr[k] = val_str
                except Exception:
                    locals_repr[k] = "<unprintable>"

        return cls(
            job_id=job_id,
            exception_type=type(exc).__name__,
            exception_message=str(exc),
            stack_trace=stack_trace,
            local_variables=locals_repr,
            alignment_failure=isinstance(exc, TimelineAlignmentError),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "job_id": self.job_id,
            "timestamp": self.timestamp,
            "exception_type": self.exception_type,
            "exception_message": self.exception_message,
            "stack_trace": self.stack_trace,
            "local_variables": self.local_variables,
            "alignment_failure": self.alignment_failure,
        }
