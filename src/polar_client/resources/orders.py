"""Orders resource."""

from typing import Any, Iterator

from ..models.orders import Order, OrderInvoice, OrderUpdate
from ..pagination import DEFAULT_PAGE_SIZE, Page
from ..query import OrdersQueryBuilder, QueryBuilder
from ..result import PolarResult
from .base import BaseResource, Payload, segment


class OrdersResource(BaseResource):
    """
    Orders are created by checkouts and subscription renewals.

    Invoices must be generated once (`generate_invoice`) before
    `get_invoice` returns a download URL.
    """

    query_builder = OrdersQueryBuilder

    def list(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> PolarResult[Page[Order]]:
        return self._list("orders/", Order, page, limit, query, filters, timeout)

    def list_all(
        self,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> Iterator[PolarResult[Order]]:
        return self._list_all("orders/", Order, query, filters, timeout)

    def get(self, order_id: str, timeout: float | None = None) -> PolarResult[Order]:
        if error := self._require(order_id=order_id):
            return PolarResult.fail(error)
        return self._get(f"orders/{segment(order_id)}", Order, timeout=timeout)

    def update(self, order_id: str, data: Payload, timeout: float | None = None) -> PolarResult[Order]:
        if error := self._require(order_id=order_id):
            return PolarResult.fail(error)
        return self._send("PATCH", f"orders/{segment(order_id)}", data, OrderUpdate, Order, timeout)

    def get_invoice(self, order_id: str, timeout: float | None = None) -> PolarResult[OrderInvoice]:
        if error := self._require(order_id=order_id):
            return PolarResult.fail(error)
        return self._get(f"orders/{segment(order_id)}/invoice", OrderInvoice, timeout=timeout)

    def generate_invoice(self, order_id: str, timeout: float | None = None) -> PolarResult[None]:
        """Ask Polar to render the invoice; it is built asynchronously."""
        if error := self._require(order_id=order_id):
            return PolarResult.fail(error)
        return self._post(f"orders/{segment(order_id)}/invoice", timeout=timeout).map(lambda _: None)
