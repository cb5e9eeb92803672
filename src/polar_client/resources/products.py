"""Products and benefits."""

from typing import Any, Iterator

from ..models.exports import ExportFormat, ExportResponse
from ..models.products import (
    Benefit,
    BenefitCreate,
    BenefitGrant,
    BenefitGrantCreate,
    BenefitUpdate,
    Product,
    ProductCreate,
    ProductPrice,
    ProductPriceCreate,
    ProductUpdate,
)
from ..pagination import DEFAULT_PAGE_SIZE, Page
from ..query import BenefitsQueryBuilder, ProductsQueryBuilder, QueryBuilder
from ..result import PolarResult
from .base import BaseResource, Payload, segment


class ProductsResource(BaseResource):
    """
    Manage products and their prices.

    Products cannot be deleted; `archive` hides them from new checkouts
    while existing subscriptions keep working.
    """

    query_builder = ProductsQueryBuilder

    def list(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> PolarResult[Page[Product]]:
        return self._list("products/", Product, page, limit, query, filters, timeout)

    def list_all(
        self,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> Iterator[PolarResult[Product]]:
        return self._list_all("products/", Product, query, filters, timeout)

    def get(self, product_id: str, timeout: float | None = None) -> PolarResult[Product]:
        if error := self._require(product_id=product_id):
            return PolarResult.fail(error)
        return self._get(f"products/{segment(product_id)}", Product, timeout=timeout)

    def create(self, data: Payload, timeout: float | None = None) -> PolarResult[Product]:
        return self._send("POST", "products/", data, ProductCreate, Product, timeout)

    def update(self, product_id: str, data: Payload, timeout: float | None = None) -> PolarResult[Product]:
        if error := self._require(product_id=product_id):
            return PolarResult.fail(error)
        return self._send("PATCH", f"products/{segment(product_id)}", data, ProductUpdate, Product, timeout)

    def archive(self, product_id: str, timeout: float | None = None) -> PolarResult[Product]:
        return self.update(product_id, ProductUpdate(is_archived=True), timeout=timeout)

    def create_price(self, product_id: str, data: Payload, timeout: float | None = None) -> PolarResult[ProductPrice]:
        """Add a price to an existing product."""
        if error := self._require(product_id=product_id):
            return PolarResult.fail(error)
        return self._send(
            "POST", f"products/{segment(product_id)}/prices", data, ProductPriceCreate, ProductPrice, timeout
        )

    def export(
        self,
        format: ExportFormat | str = ExportFormat.CSV,
        timeout: float | None = None,
    ) -> PolarResult[ExportResponse]:
        return self._export("products/export", format, timeout=timeout)

    def export_prices(
        self,
        product_id: str,
        format: ExportFormat | str = ExportFormat.CSV,
        timeout: float | None = None,
    ) -> PolarResult[ExportResponse]:
        if error := self._require(product_id=product_id):
            return PolarResult.fail(error)
        return self._export(f"products/{segment(product_id)}/prices/export", format, timeout=timeout)


class BenefitsResource(BaseResource):
    query_builder = BenefitsQueryBuilder

    def list(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> PolarResult[Page[Benefit]]:
        return self._list("benefits/", Benefit, page, limit, query, filters, timeout)

    def list_all(
        self,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> Iterator[PolarResult[Benefit]]:
        return self._list_all("benefits/", Benefit, query, filters, timeout)

    def get(self, benefit_id: str, timeout: float | None = None) -> PolarResult[Benefit]:
        if error := self._require(benefit_id=benefit_id):
            return PolarResult.fail(error)
        return self._get(f"benefits/{segment(benefit_id)}", Benefit, timeout=timeout)

    def create(self, data: Payload, timeout: float | None = None) -> PolarResult[Benefit]:
        return self._send("POST", "benefits/", data, BenefitCreate, Benefit, timeout)

    def update(self, benefit_id: str, data: Payload, timeout: float | None = None) -> PolarResult[Benefit]:
        if error := self._require(benefit_id=benefit_id):
            return PolarResult.fail(error)
        return self._send("PATCH", f"benefits/{segment(benefit_id)}", data, BenefitUpdate, Benefit, timeout)

    def delete(self, benefit_id: str, timeout: float | None = None) -> PolarResult[None]:
        """Delete a benefit; grants already issued are revoked by the server."""
        if error := self._require(benefit_id=benefit_id):
            return PolarResult.fail(error)
        return self._delete(f"benefits/{segment(benefit_id)}", timeout=timeout)

    def list_grants(
        self,
        benefit_id: str,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        timeout: float | None = None,
        **filters: Any,
    ) -> PolarResult[Page[BenefitGrant]]:
        if error := self._require(benefit_id=benefit_id):
            return PolarResult.fail(error)
        return self._list(
            f"benefits/{segment(benefit_id)}/grants", BenefitGrant, page, limit, None, filters, timeout
        )

    def list_all_grants(
        self,
        benefit_id: str,
        timeout: float | None = None,
        **filters: Any,
    ) -> Iterator[PolarResult[BenefitGrant]]:
        if error := self._require(benefit_id=benefit_id):
            return iter([PolarResult.fail(error)])
        return self._list_all(f"benefits/{segment(benefit_id)}/grants", BenefitGrant, None, filters, timeout)

    def grant(self, benefit_id: str, data: Payload, timeout: float | None = None) -> PolarResult[BenefitGrant]:
        """Grant the benefit to a customer directly."""
        if error := self._require(benefit_id=benefit_id):
            return PolarResult.fail(error)
        return self._send(
            "POST", f"benefits/{segment(benefit_id)}/grant", data, BenefitGrantCreate, BenefitGrant, timeout
        )

    def revoke_grant(self, benefit_id: str, grant_id: str, timeout: float | None = None) -> PolarResult[BenefitGrant]:
        if error := self._require(benefit_id=benefit_id, grant_id=grant_id):
            return PolarResult.fail(error)
        return self._request(
            "DELETE",
            f"benefits/{segment(benefit_id)}/grants/{segment(grant_id)}",
            parse=BenefitGrant.model_validate,
            timeout=timeout,
        )

    def export(
        self,
        format: ExportFormat | str = ExportFormat.CSV,
        benefit_type: str | None = None,
        active: bool | None = None,
        timeout: float | None = None,
    ) -> PolarResult[ExportResponse]:
        return self._export("benefits/export", format, {"type": benefit_type, "active": active}, timeout)

    def export_grants(
        self,
        benefit_id: str,
        format: ExportFormat | str = ExportFormat.CSV,
        customer_id: str | None = None,
        status: str | None = None,
        timeout: float | None = None,
    ) -> PolarResult[ExportResponse]:
        if error := self._require(benefit_id=benefit_id):
            return PolarResult.fail(error)
        return self._export(
            f"benefits/{segment(benefit_id)}/grants/export",
            format,
            {"customer_id": customer_id, "status": status},
            timeout,
        )
