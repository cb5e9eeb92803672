"""Webhook endpoints and deliveries."""

from typing import Any, Iterator

from ..models.webhooks import (
    WebhookDelivery,
    WebhookEndpoint,
    WebhookEndpointCreate,
    WebhookEndpointUpdate,
)
from ..pagination import DEFAULT_PAGE_SIZE, Page
from ..query import QueryBuilder, WebhookDeliveriesQueryBuilder
from ..result import PolarResult
from .base import BaseResource, Payload, segment


class WebhooksResource(BaseResource):
    """
    Manage webhook endpoints and inspect deliveries.

    To verify incoming webhook requests use `polar_client.webhooks`.
    """

    query_builder = WebhookDeliveriesQueryBuilder

    def list_endpoints(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> PolarResult[Page[WebhookEndpoint]]:
        return self._list("webhooks/endpoints", WebhookEndpoint, page, limit, query or QueryBuilder(), filters, timeout)

    def list_all_endpoints(
        self,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> Iterator[PolarResult[WebhookEndpoint]]:
        return self._list_all("webhooks/endpoints", WebhookEndpoint, query or QueryBuilder(), filters, timeout)

    def get_endpoint(self, endpoint_id: str, timeout: float | None = None) -> PolarResult[WebhookEndpoint]:
        if error := self._require(endpoint_id=endpoint_id):
            return PolarResult.fail(error)
        return self._get(f"webhooks/endpoints/{segment(endpoint_id)}", WebhookEndpoint, timeout=timeout)

    def create_endpoint(self, data: Payload, timeout: float | None = None) -> PolarResult[WebhookEndpoint]:
        return self._send("POST", "webhooks/endpoints", data, WebhookEndpointCreate, WebhookEndpoint, timeout)

    def update_endpoint(
        self,
        endpoint_id: str,
        data: Payload,
        timeout: float | None = None,
    ) -> PolarResult[WebhookEndpoint]:
        if error := self._require(endpoint_id=endpoint_id):
            return PolarResult.fail(error)
        return self._send(
            "PATCH",
            f"webhooks/endpoints/{segment(endpoint_id)}",
            data,
            WebhookEndpointUpdate,
            WebhookEndpoint,
            timeout,
        )

    def delete_endpoint(self, endpoint_id: str, timeout: float | None = None) -> PolarResult[None]:
        if error := self._require(endpoint_id=endpoint_id):
            return PolarResult.fail(error)
        return self._delete(f"webhooks/endpoints/{segment(endpoint_id)}", timeout=timeout)

    def reset_endpoint_secret(self, endpoint_id: str, timeout: float | None = None) -> PolarResult[WebhookEndpoint]:
        """Rotate the signing secret; the new secret is in the returned endpoint."""
        if error := self._require(endpoint_id=endpoint_id):
            return PolarResult.fail(error)
        return self._patch(f"webhooks/endpoints/{segment(endpoint_id)}/secret", WebhookEndpoint, timeout=timeout)

    def list_deliveries(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> PolarResult[Page[WebhookDelivery]]:
        return self._list("webhooks/deliveries", WebhookDelivery, page, limit, query, filters, timeout)

    def redeliver(self, event_id: str, timeout: float | None = None) -> PolarResult[None]:
        """Schedule a new delivery of a webhook event to its endpoint."""
        if error := self._require(event_id=event_id):
            return PolarResult.fail(error)
        return self._post(f"webhooks/events/{segment(event_id)}/redeliver", timeout=timeout).map(lambda _: None)
