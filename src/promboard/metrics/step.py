"""
Adaptive step selection for range queries.

Maps the width of a query window onto a fixed table of resolutions so the
number of samples a range query returns stays roughly constant however wide
the window is. Month-scale bounds use 30-day months.
"""

from __future__ import annotations

from datetime import datetime, timedelta

_MINUTE = timedelta(minutes=1)
_HOUR = timedelta(hours=1)
_DAY = timedelta(days=1)

# (upper bound on window width, step); first bound >= width wins
STEP_TABLE: tuple[tuple[timedelta, timedelta], ...] = (
    (10 * _MINUTE, timedelta(seconds=5)),
    (30 * _MINUTE, timedelta(seconds=10)),
    (1 * _HOUR, timedelta(seconds=20)),
    (3 * _HOUR, 1 * _MINUTE),
    (6 * _HOUR, 2 * _MINUTE),
    (1 * _DAY, 8 * _MINUTE),
    (2 * _DAY, 16 * _MINUTE),
    (4 * _DAY, 32 * _MINUTE),
    (7 * _DAY, 56 * _MINUTE),
    (15 * _DAY, 2 * _HOUR),
    (30 * _DAY, 4 * _HOUR),
    (90 * _DAY, 12 * _HOUR),
    (180 * _DAY, 1 * _DAY),
    (360 * _DAY, 2 * _DAY),
    (720 * _DAY, 4 * _DAY),
    (1800 * _DAY, 10 * _DAY),
)

MAX_STEP = 30 * _DAY


def compute_step_for_duration(diff: timedelta) -> timedelta:
    """Return the step for a window of width ``diff``."""
    for bound, step in STEP_TABLE:
        if diff <= bound:
            return step
    return MAX_STEP


def compute_step(start: datetime, end: datetime) -> timedelta:
    """
    Compute the range query step for the window ``[start, end]``.

    Args:
        start: Window start
        end: Window end (expected to be >= start)

    Returns:
        Step as a timedelta; a boundary width resolves to the smaller step

    Example:
        >>> compute_step(datetime(2024, 1, 1, 0, 0), datetime(2024, 1, 1, 0, 9))
        datetime.timedelta(seconds=5)
    """
    return compute_step_for_duration(end - start)


def format_step(step: timedelta) -> str:
    """
    Render a step as a Prometheus duration string.

    Uses the largest of d/h/m/s that divides the step exactly, falling back
    to bare (fractional) seconds, which the query API also accepts.

    Example:
        >>> format_step(timedelta(minutes=56))
        '56m'
    """
    seconds = step.total_seconds()
    if seconds <= 0:
        raise ValueError(f"step must be positive, got {step!r}")

    if seconds.is_integer():
        whole = int(seconds)
        for unit, size in (("d", 86400), ("h", 3600), ("m", 60)):
            if whole % size == 0:
                return f"{whole // size}{unit}"
        return f"{whole}s"
    return f"{seconds:g}"
