"""Organizations resource."""

from typing import Any, Iterator

from ..models.organizations import Organization, OrganizationCreate, OrganizationUpdate
from ..pagination import DEFAULT_PAGE_SIZE, Page
from ..query import OrganizationsQueryBuilder, QueryBuilder
from ..result import PolarResult
from .base import BaseResource, Payload, segment


class OrganizationsResource(BaseResource):
    query_builder = OrganizationsQueryBuilder

    def list(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> PolarResult[Page[Organization]]:
        return self._list("organizations/", Organization, page, limit, query, filters, timeout)

    def list_all(
        self,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> Iterator[PolarResult[Organization]]:
        return self._list_all("organizations/", Organization, query, filters, timeout)

    def get(self, organization_id: str, timeout: float | None = None) -> PolarResult[Organization]:
        if error := self._require(organization_id=organization_id):
            return PolarResult.fail(error)
        return self._get(f"organizations/{segment(organization_id)}", Organization, timeout=timeout)

    def create(self, data: Payload, timeout: float | None = None) -> PolarResult[Organization]:
        return self._send("POST", "organizations/", data, OrganizationCreate, Organization, timeout)

    def update(
        self,
        organization_id: str,
        data: Payload,
        timeout: float | None = None,
    ) -> PolarResult[Organization]:
        if error := self._require(organization_id=organization_id):
            return PolarResult.fail(error)
        return self._send(
            "PATCH", f"organizations/{segment(organization_id)}", data, OrganizationUpdate, Organization, timeout
        )

    def delete(self, organization_id: str, timeout: float | None = None) -> PolarResult[None]:
        if error := self._require(organization_id=organization_id):
            return PolarResult.fail(error)
        return self._delete(f"organizations/{segment(organization_id)}", timeout=timeout)
