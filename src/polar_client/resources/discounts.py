"""Discounts resource."""

from typing import Any, Iterator

from ..models.discounts import Discount, DiscountCreate, DiscountUpdate
from ..pagination import DEFAULT_PAGE_SIZE, Page
from ..query import DiscountsQueryBuilder, QueryBuilder
from ..result import PolarResult
from .base import BaseResource, Payload, segment


class DiscountsResource(BaseResource):
    query_builder = DiscountsQueryBuilder

    def list(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> PolarResult[Page[Discount]]:
        return self._list("discounts/", Discount, page, limit, query, filters, timeout)

    def list_all(
        self,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> Iterator[PolarResult[Discount]]:
        return self._list_all("discounts/", Discount, query, filters, timeout)

    def get(self, discount_id: str, timeout: float | None = None) -> PolarResult[Discount]:
        if error := self._require(discount_id=discount_id):
            return PolarResult.fail(error)
        return self._get(f"discounts/{segment(discount_id)}", Discount, timeout=timeout)

    def create(self, data: Payload, timeout: float | None = None) -> PolarResult[Discount]:
        """
        Create a discount.

        Fixed discounts need `amount` and `currency`; percentage discounts
        need `basis_points` (1000 = 10%).
        """
        return self._send("POST", "discounts/", data, DiscountCreate, Discount, timeout)

    def update(self, discount_id: str, data: Payload, timeout: float | None = None) -> PolarResult[Discount]:
        if error := self._require(discount_id=discount_id):
            return PolarResult.fail(error)
        return self._send("PATCH", f"discounts/{segment(discount_id)}", data, DiscountUpdate, Discount, timeout)

    def delete(self, discount_id: str, timeout: float | None = None) -> PolarResult[None]:
        if error := self._require(discount_id=discount_id):
            return PolarResult.fail(error)
        return self._delete(f"discounts/{segment(discount_id)}", timeout=timeout)
