"""Metrics models."""

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import Field

from .base import PolarModel


class TimeInterval(str, Enum):
    YEAR = "year"
    MONTH = "month"
    WEEK = "week"
    DAY = "day"
    HOUR = "hour"


class MetricDefinition(PolarModel):
    slug: str
    display_name: str | None = None
    type: str | None = None


class MetricPeriod(PolarModel):
    """Values of every metric for one interval bucket."""

    timestamp: datetime

    # Remaining keys are metric slugs; kept in `values`
    values: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "MetricPeriod":
        if not isinstance(data, dict):
            return cls.model_validate(data)
        values = {k: v for k, v in data.items() if k != "timestamp"}
        return cls(timestamp=data.get("timestamp"), values=values)


class Metrics(PolarModel):
    """Response of GET /v1/metrics."""

    periods: list[MetricPeriod] = Field(default_factory=list)
    totals: dict[str, Any] = Field(default_factory=dict)
    metrics: dict[str, MetricDefinition] = Field(default_factory=dict)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Metrics":
        """
        Parse a metrics response.

        Raises pydantic ValidationError for bodies that are not JSON objects.
        """
        if not isinstance(data, dict):
            return cls.model_validate(data)
        periods = data.get("periods", [])
        if isinstance(periods, list):
            periods = [MetricPeriod.from_api(p) for p in periods]
        return cls.model_validate({
            "periods": periods,
            "totals": data.get("totals", {}),
            "metrics": data.get("metrics", {}),
        })

    def series(self, slug: str) -> list[tuple[datetime, Any]]:
        """(timestamp, value) pairs for a single metric."""
        return [(p.timestamp, p.values.get(slug)) for p in self.periods]


class IntervalLimit(PolarModel):
    max_days: int


class MetricLimits(PolarModel):
    """Allowed date range and per-interval span for metrics queries."""

    min_date: date
    intervals: dict[str, IntervalLimit] = Field(default_factory=dict)
