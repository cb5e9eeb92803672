"""Custom checkout fields."""

from typing import Any, Iterator

from ..models.custom_fields import CustomField, CustomFieldCreate, CustomFieldUpdate
from ..pagination import DEFAULT_PAGE_SIZE, Page
from ..query import CustomFieldsQueryBuilder, QueryBuilder
from ..result import PolarResult
from .base import BaseResource, Payload, segment


class CustomFieldsResource(BaseResource):
    query_builder = CustomFieldsQueryBuilder

    def list(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> PolarResult[Page[CustomField]]:
        return self._list("custom-fields/", CustomField, page, limit, query, filters, timeout)

    def list_all(
        self,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> Iterator[PolarResult[CustomField]]:
        return self._list_all("custom-fields/", CustomField, query, filters, timeout)

    def get(self, field_id: str, timeout: float | None = None) -> PolarResult[CustomField]:
        if error := self._require(field_id=field_id):
            return PolarResult.fail(error)
        return self._get(f"custom-fields/{segment(field_id)}", CustomField, timeout=timeout)

    def create(self, data: Payload, timeout: float | None = None) -> PolarResult[CustomField]:
        return self._send("POST", "custom-fields/", data, CustomFieldCreate, CustomField, timeout)

    def update(self, field_id: str, data: Payload, timeout: float | None = None) -> PolarResult[CustomField]:
        if error := self._require(field_id=field_id):
            return PolarResult.fail(error)
        return self._send("PATCH", f"custom-fields/{segment(field_id)}", data, CustomFieldUpdate, CustomField, timeout)

    def delete(self, field_id: str, timeout: float | None = None) -> PolarResult[None]:
        if error := self._require(field_id=field_id):
            return PolarResult.fail(error)
        return self._delete(f"custom-fields/{segment(field_id)}", timeout=timeout)
