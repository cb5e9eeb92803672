"""License keys resource."""

from typing import Any, Iterator

from ..models.license_keys import (
    LicenseKey,
    LicenseKeyActivate,
    LicenseKeyActivation,
    LicenseKeyDeactivate,
    LicenseKeyUpdate,
    LicenseKeyValidate,
    LicenseKeyValidated,
)
from ..pagination import DEFAULT_PAGE_SIZE, Page
from ..query import LicenseKeysQueryBuilder, QueryBuilder
from ..result import PolarResult
from .base import BaseResource, Payload, segment


class LicenseKeysResource(BaseResource):
    """
    Manage license keys and their activations.

    `validate`, `activate` and `deactivate` take the customer-facing key
    string plus organization id, the same way an application shipping the
    key would call them.
    """

    query_builder = LicenseKeysQueryBuilder

    def list(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> PolarResult[Page[LicenseKey]]:
        return self._list("license-keys/", LicenseKey, page, limit, query, filters, timeout)

    def list_all(
        self,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> Iterator[PolarResult[LicenseKey]]:
        return self._list_all("license-keys/", LicenseKey, query, filters, timeout)

    def get(self, license_key_id: str, timeout: float | None = None) -> PolarResult[LicenseKey]:
        if error := self._require(license_key_id=license_key_id):
            return PolarResult.fail(error)
        return self._get(f"license-keys/{segment(license_key_id)}", LicenseKey, timeout=timeout)

    def update(self, license_key_id: str, data: Payload, timeout: float | None = None) -> PolarResult[LicenseKey]:
        if error := self._require(license_key_id=license_key_id):
            return PolarResult.fail(error)
        return self._send(
            "PATCH", f"license-keys/{segment(license_key_id)}", data, LicenseKeyUpdate, LicenseKey, timeout
        )

    def get_activation(
        self,
        license_key_id: str,
        activation_id: str,
        timeout: float | None = None,
    ) -> PolarResult[LicenseKeyActivation]:
        if error := self._require(license_key_id=license_key_id, activation_id=activation_id):
            return PolarResult.fail(error)
        return self._get(
            f"license-keys/{segment(license_key_id)}/activations/{segment(activation_id)}",
            LicenseKeyActivation,
            timeout=timeout,
        )

    def validate(self, data: Payload, timeout: float | None = None) -> PolarResult[LicenseKeyValidated]:
        return self._send("POST", "license-keys/validate", data, LicenseKeyValidate, LicenseKeyValidated, timeout)

    def activate(self, data: Payload, timeout: float | None = None) -> PolarResult[LicenseKeyActivation]:
        return self._send("POST", "license-keys/activate", data, LicenseKeyActivate, LicenseKeyActivation, timeout)

    def deactivate(self, data: Payload, timeout: float | None = None) -> PolarResult[None]:
        return self._send("POST", "license-keys/deactivate", data, LicenseKeyDeactivate, None, timeout).map(
            lambda _: None
        )
