"""Usage meters."""

from datetime import datetime
from typing import Any, Iterator

from ..errors import PolarValidationError
from ..models.meters import Meter, MeterCreate, MeterQuantities, MeterUpdate
from ..models.metrics import TimeInterval
from ..pagination import DEFAULT_PAGE_SIZE, Page
from ..query import MeterQuantitiesQueryBuilder, MetersQueryBuilder, QueryBuilder
from ..result import PolarResult
from .base import BaseResource, Payload, segment


class MetersResource(BaseResource):
    query_builder = MetersQueryBuilder

    def list(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> PolarResult[Page[Meter]]:
        return self._list("meters/", Meter, page, limit, query, filters, timeout)

    def list_all(
        self,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> Iterator[PolarResult[Meter]]:
        return self._list_all("meters/", Meter, query, filters, timeout)

    def get(self, meter_id: str, timeout: float | None = None) -> PolarResult[Meter]:
        if error := self._require(meter_id=meter_id):
            return PolarResult.fail(error)
        return self._get(f"meters/{segment(meter_id)}", Meter, timeout=timeout)

    def create(self, data: Payload, timeout: float | None = None) -> PolarResult[Meter]:
        return self._send("POST", "meters/", data, MeterCreate, Meter, timeout)

    def update(self, meter_id: str, data: Payload, timeout: float | None = None) -> PolarResult[Meter]:
        if error := self._require(meter_id=meter_id):
            return PolarResult.fail(error)
        return self._send("PATCH", f"meters/{segment(meter_id)}", data, MeterUpdate, Meter, timeout)

    def delete(self, meter_id: str, timeout: float | None = None) -> PolarResult[None]:
        if error := self._require(meter_id=meter_id):
            return PolarResult.fail(error)
        return self._delete(f"meters/{segment(meter_id)}", timeout=timeout)

    def get_quantities(
        self,
        meter_id: str,
        start_timestamp: datetime,
        end_timestamp: datetime,
        interval: TimeInterval | str = TimeInterval.DAY,
        timeout: float | None = None,
        **filters: Any,
    ) -> PolarResult[MeterQuantities]:
        """Aggregated meter quantities per interval over a time range."""
        if error := self._require(meter_id=meter_id):
            return PolarResult.fail(error)

        builder = MeterQuantitiesQueryBuilder().extend(filters)
        builder.start_timestamp(start_timestamp).end_timestamp(end_timestamp).interval(interval)
        try:
            builder.validate()
        except PolarValidationError as e:
            return PolarResult.fail(e)

        return self._get(
            f"meters/{segment(meter_id)}/quantities",
            MeterQuantities,
            params=builder.params(),
            timeout=timeout,
        )
