"""Customers resource."""

from typing import Any, Iterator

from ..models.customers import Customer, CustomerBalance, CustomerCreate, CustomerState, CustomerUpdate
from ..models.exports import CustomerExportRequest, ExportResponse
from ..pagination import DEFAULT_PAGE_SIZE, Page
from ..query import CustomersQueryBuilder, QueryBuilder
from ..result import PolarResult
from .base import BaseResource, Payload, segment


class CustomersResource(BaseResource):
    """
    Manage customers.

    Customers can be addressed by Polar id or by the external id you
    assigned when creating them.
    """

    query_builder = CustomersQueryBuilder

    def list(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> PolarResult[Page[Customer]]:
        return self._list("customers/", Customer, page, limit, query, filters, timeout)

    def list_all(
        self,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> Iterator[PolarResult[Customer]]:
        return self._list_all("customers/", Customer, query, filters, timeout)

    def get(self, customer_id: str, timeout: float | None = None) -> PolarResult[Customer]:
        if error := self._require(customer_id=customer_id):
            return PolarResult.fail(error)
        return self._get(f"customers/{segment(customer_id)}", Customer, timeout=timeout)

    def get_by_external_id(self, external_id: str, timeout: float | None = None) -> PolarResult[Customer]:
        if error := self._require(external_id=external_id):
            return PolarResult.fail(error)
        return self._get(f"customers/external/{segment(external_id)}", Customer, timeout=timeout)

    def create(self, data: Payload, timeout: float | None = None) -> PolarResult[Customer]:
        return self._send("POST", "customers/", data, CustomerCreate, Customer, timeout)

    def update(self, customer_id: str, data: Payload, timeout: float | None = None) -> PolarResult[Customer]:
        if error := self._require(customer_id=customer_id):
            return PolarResult.fail(error)
        return self._send("PATCH", f"customers/{segment(customer_id)}", data, CustomerUpdate, Customer, timeout)

    def update_by_external_id(
        self,
        external_id: str,
        data: Payload,
        timeout: float | None = None,
    ) -> PolarResult[Customer]:
        if error := self._require(external_id=external_id):
            return PolarResult.fail(error)
        return self._send(
            "PATCH", f"customers/external/{segment(external_id)}", data, CustomerUpdate, Customer, timeout
        )

    def delete(self, customer_id: str, timeout: float | None = None) -> PolarResult[None]:
        if error := self._require(customer_id=customer_id):
            return PolarResult.fail(error)
        return self._delete(f"customers/{segment(customer_id)}", timeout=timeout)

    def delete_by_external_id(self, external_id: str, timeout: float | None = None) -> PolarResult[None]:
        if error := self._require(external_id=external_id):
            return PolarResult.fail(error)
        return self._delete(f"customers/external/{segment(external_id)}", timeout=timeout)

    def get_state(self, customer_id: str, timeout: float | None = None) -> PolarResult[CustomerState]:
        """Customer with active subscriptions, granted benefits and meter balances."""
        if error := self._require(customer_id=customer_id):
            return PolarResult.fail(error)
        return self._get(f"customers/{segment(customer_id)}/state", CustomerState, timeout=timeout)

    def get_state_by_external_id(
        self,
        external_id: str,
        timeout: float | None = None,
    ) -> PolarResult[CustomerState]:
        if error := self._require(external_id=external_id):
            return PolarResult.fail(error)
        return self._get(f"customers/external/{segment(external_id)}/state", CustomerState, timeout=timeout)

    def get_balance(self, customer_id: str, timeout: float | None = None) -> PolarResult[CustomerBalance]:
        if error := self._require(customer_id=customer_id):
            return PolarResult.fail(error)
        return self._get(f"customers/{segment(customer_id)}/balance", CustomerBalance, timeout=timeout)

    def export(self, data: Payload | None = None, timeout: float | None = None) -> PolarResult[ExportResponse]:
        """Export customers matching the filters in `data` (CSV unless a format is given)."""
        return self._send("POST", "customers/export", data or {}, CustomerExportRequest, ExportResponse, timeout)
