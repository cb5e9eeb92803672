"""Subscriptions resource."""

from typing import Any, Iterator

from ..models.exports import ExportResponse, SubscriptionExportRequest
from ..models.orders import Subscription, SubscriptionCreate, SubscriptionUpdate
from ..pagination import DEFAULT_PAGE_SIZE, Page
from ..query import QueryBuilder, SubscriptionsQueryBuilder
from ..result import PolarResult
from .base import BaseResource, Payload, segment


class SubscriptionsResource(BaseResource):
    query_builder = SubscriptionsQueryBuilder

    def list(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> PolarResult[Page[Subscription]]:
        return self._list("subscriptions/", Subscription, page, limit, query, filters, timeout)

    def list_all(
        self,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> Iterator[PolarResult[Subscription]]:
        return self._list_all("subscriptions/", Subscription, query, filters, timeout)

    def get(self, subscription_id: str, timeout: float | None = None) -> PolarResult[Subscription]:
        if error := self._require(subscription_id=subscription_id):
            return PolarResult.fail(error)
        return self._get(f"subscriptions/{segment(subscription_id)}", Subscription, timeout=timeout)

    def create(self, data: Payload, timeout: float | None = None) -> PolarResult[Subscription]:
        """Subscribe a customer directly, without a checkout."""
        return self._send("POST", "subscriptions/", data, SubscriptionCreate, Subscription, timeout)

    def update(
        self,
        subscription_id: str,
        data: Payload,
        timeout: float | None = None,
    ) -> PolarResult[Subscription]:
        """Change product or discount, or set `cancel_at_period_end`."""
        if error := self._require(subscription_id=subscription_id):
            return PolarResult.fail(error)
        return self._send(
            "PATCH", f"subscriptions/{segment(subscription_id)}", data, SubscriptionUpdate, Subscription, timeout
        )

    def revoke(self, subscription_id: str, timeout: float | None = None) -> PolarResult[Subscription]:
        """Cancel immediately, without waiting for the end of the period."""
        if error := self._require(subscription_id=subscription_id):
            return PolarResult.fail(error)
        return self._request(
            "DELETE",
            f"subscriptions/{segment(subscription_id)}",
            parse=Subscription.model_validate,
            timeout=timeout,
        )

    def export(self, data: Payload | None = None, timeout: float | None = None) -> PolarResult[ExportResponse]:
        return self._send(
            "POST", "subscriptions/export", data or {}, SubscriptionExportRequest, ExportResponse, timeout
        )
