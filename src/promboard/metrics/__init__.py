"""Query windows, step selection and typed query results."""

from promboard.metrics.models import QueryResult, Sample, TimeSeries, TimeWindow
from promboard.metrics.step import (
    MAX_STEP,
    STEP_TABLE,
    compute_step,
    compute_step_for_duration,
    format_step,
)

__all__ = [
    "TimeWindow",
    "QueryResult",
    "TimeSeries",
    "Sample",
    "STEP_TABLE",
    "MAX_STEP",
    "compute_step",
    "compute_step_for_duration",
    "format_step",
]
