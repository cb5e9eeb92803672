"""Metrics resource."""

from datetime import date
from typing import Any

from ..errors import PolarValidationError
from ..models.metrics import MetricLimits, Metrics, TimeInterval
from ..query import MetricsQueryBuilder
from ..result import PolarResult
from .base import BaseResource


class MetricsResource(BaseResource):
    query_builder = MetricsQueryBuilder

    def get(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
        interval: TimeInterval | str | None = None,
        query: MetricsQueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> PolarResult[Metrics]:
        """
        Fetch metrics bucketed by `interval` between two dates.

        start_date, end_date and interval are required, either as arguments
        or on the query builder; missing values fail without a request.
        """
        try:
            builder = self._build_query(query, filters)
            if start_date is not None:
                builder.add("start_date", start_date)
            if end_date is not None:
                builder.add("end_date", end_date)
            if interval is not None:
                builder.add("interval", interval)
            builder.validate()
        except PolarValidationError as e:
            return PolarResult.fail(e)

        return self._request("GET", "metrics/", params=builder.params(), parse=Metrics.from_api, timeout=timeout)

    def get_limits(self, timeout: float | None = None) -> PolarResult[MetricLimits]:
        """Earliest date and maximum span per interval the metrics endpoint accepts."""
        return self._get("metrics/limits", MetricLimits, timeout=timeout)
