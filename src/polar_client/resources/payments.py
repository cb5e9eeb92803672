"""Refunds and payments."""

from typing import Any, Iterator

from ..models.orders import Payment, Refund, RefundCreate
from ..pagination import DEFAULT_PAGE_SIZE, Page
from ..query import PaymentsQueryBuilder, QueryBuilder, RefundsQueryBuilder
from ..result import PolarResult
from .base import BaseResource, Payload, segment


class RefundsResource(BaseResource):
    query_builder = RefundsQueryBuilder

    def list(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> PolarResult[Page[Refund]]:
        return self._list("refunds/", Refund, page, limit, query, filters, timeout)

    def list_all(
        self,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> Iterator[PolarResult[Refund]]:
        return self._list_all("refunds/", Refund, query, filters, timeout)

    def get(self, refund_id: str, timeout: float | None = None) -> PolarResult[Refund]:
        if error := self._require(refund_id=refund_id):
            return PolarResult.fail(error)
        return self._get(f"refunds/{segment(refund_id)}", Refund, timeout=timeout)

    def create(self, data: Payload, timeout: float | None = None) -> PolarResult[Refund]:
        """Refund part or all of an order. Amounts are in cents."""
        return self._send("POST", "refunds/", data, RefundCreate, Refund, timeout)


class PaymentsResource(BaseResource):
    query_builder = PaymentsQueryBuilder

    def list(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> PolarResult[Page[Payment]]:
        return self._list("payments/", Payment, page, limit, query, filters, timeout)

    def list_all(
        self,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> Iterator[PolarResult[Payment]]:
        return self._list_all("payments/", Payment, query, filters, timeout)

    def get(self, payment_id: str, timeout: float | None = None) -> PolarResult[Payment]:
        if error := self._require(payment_id=payment_id):
            return PolarResult.fail(error)
        return self._get(f"payments/{segment(payment_id)}", Payment, timeout=timeout)
