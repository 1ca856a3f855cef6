"""Time window and query result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from promboard.core.errors import ValidationError
from promboard.metrics.step import compute_step

RESULT_TYPES = ("matrix", "vector", "scalar", "string")


@dataclass(frozen=True)
class TimeWindow:
    """Closed time range ``[start, end]`` for a range query."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValidationError(
                "Time window ends before it starts",
                details={"start": self.start.isoformat(), "end": self.end.isoformat()},
            )

    @classmethod
    def trailing(cls, duration: timedelta, *, end: datetime | None = None) -> TimeWindow:
        """Window of ``duration`` ending at ``end`` (default: now, UTC)."""
        end = end or datetime.now(timezone.utc)
        return cls(start=end - duration, end=end)

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def step(self) -> timedelta:
        return compute_step(self.start, self.end)

    def as_details(self) -> dict[str, str]:
        return {"start": self.start.isoformat(), "end": self.end.isoformat()}


@dataclass(frozen=True)
class Sample:
    timestamp: datetime
    value: float


@dataclass
class TimeSeries:
    """One labelled series from a query result."""

    metric: dict[str, str] = field(default_factory=dict)
    samples: list[Sample] = field(default_factory=list)

    @property
    def name(self) -> str | None:
        return self.metric.get("__name__")


@dataclass
class QueryResult:
    """
    Typed Prometheus query result.

    ``matrix`` results carry many samples per series, ``vector`` results one.
    ``scalar`` and ``string`` results are represented as a single unlabelled
    series; for ``string`` the raw text is kept in ``string_value``.
    """

    result_type: str
    series: list[TimeSeries] = field(default_factory=list)
    string_value: str | None = None
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> QueryResult:
        """
        Build a result from a Prometheus API response body.

        Raises:
            ValueError: If the body does not look like a query result
        """
        data = payload.get("data")
        if not isinstance(data, dict):
            raise ValueError("response has no 'data' object")

        result_type = data.get("resultType")
        if result_type not in RESULT_TYPES:
            raise ValueError(f"unknown resultType: {result_type!r}")

        raw = data.get("result")
        warnings = list(payload.get("warnings") or [])

        if result_type == "matrix":
            series = [
                TimeSeries(
                    metric=dict(item.get("metric") or {}),
                    samples=[_parse_sample(pair) for pair in item.get("values") or []],
                )
                for item in _as_list(raw)
            ]
            return cls(result_type, series=series, warnings=warnings)

        if result_type == "vector":
            series = [
                TimeSeries(
                    metric=dict(item.get("metric") or {}),
                    samples=[_parse_sample(item.get("value"))],
                )
                for item in _as_list(raw)
            ]
            return cls(result_type, series=series, warnings=warnings)

        if result_type == "scalar":
            return cls(result_type, series=[TimeSeries(samples=[_parse_sample(raw)])], warnings=warnings)

        # string
        if not isinstance(raw, list) or len(raw) != 2:
            raise ValueError(f"malformed string result: {raw!r}")
        return cls(
            result_type,
            series=[],
            string_value=str(raw[1]),
            warnings=warnings,
        )

    def __len__(self) -> int:
        return len(self.series)


def _as_list(raw: Any) -> list[dict[str, Any]]:
    if not isinstance(raw, list) or not all(isinstance(item, dict) for item in raw):
        raise ValueError(f"expected a list of series, got {type(raw).__name__}")
    return raw


def _parse_sample(pair: Any) -> Sample:
    # Prometheus encodes values as strings; float() understands NaN/+Inf/-Inf
    if not isinstance(pair, (list, tuple)) or len(pair) != 2:
        raise ValueError(f"malformed sample: {pair!r}")
    ts, value = pair
    try:
        return Sample(
            timestamp=datetime.fromtimestamp(float(ts), tz=timezone.utc),
            value=float(value),
        )
    except (TypeError, ValueError) as exc:
        raise ValueError(f"malformed sample: {pair!r}") from exc
