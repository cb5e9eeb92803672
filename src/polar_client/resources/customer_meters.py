"""Customer meters resource."""

from typing import Any, Iterator

from ..models.meters import CustomerMeter
from ..pagination import DEFAULT_PAGE_SIZE, Page
from ..query import CustomerMetersQueryBuilder, QueryBuilder
from ..result import PolarResult
from .base import BaseResource, segment


class CustomerMetersResource(BaseResource):
    """Per-customer usage and credit balance on each meter. Read-only."""

    query_builder = CustomerMetersQueryBuilder

    def list(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> PolarResult[Page[CustomerMeter]]:
        return self._list("customer-meters/", CustomerMeter, page, limit, query, filters, timeout)

    def list_all(
        self,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> Iterator[PolarResult[CustomerMeter]]:
        return self._list_all("customer-meters/", CustomerMeter, query, filters, timeout)

    def get(self, customer_meter_id: str, timeout: float | None = None) -> PolarResult[CustomerMeter]:
        if error := self._require(customer_meter_id=customer_meter_id):
            return PolarResult.fail(error)
        return self._get(f"customer-meters/{segment(customer_meter_id)}", CustomerMeter, timeout=timeout)
