"""Checkout sessions and checkout links."""

from typing import Any, Iterator

from ..models.checkouts import (
    Checkout,
    CheckoutClientUpdate,
    CheckoutConfirm,
    CheckoutCreate,
    CheckoutLink,
    CheckoutLinkCreate,
    CheckoutLinkUpdate,
    CheckoutUpdate,
)
from ..pagination import DEFAULT_PAGE_SIZE, Page
from ..query import CheckoutLinksQueryBuilder, CheckoutsQueryBuilder, QueryBuilder
from ..result import PolarResult
from .base import BaseResource, Payload, segment


class CheckoutsResource(BaseResource):
    """
    Checkout sessions.

    Server-side operations use the session id; the `*_from_client` variants
    address a session by its client secret, as a browser would.
    """

    query_builder = CheckoutsQueryBuilder

    def list(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> PolarResult[Page[Checkout]]:
        return self._list("checkouts/", Checkout, page, limit, query, filters, timeout)

    def list_all(
        self,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> Iterator[PolarResult[Checkout]]:
        return self._list_all("checkouts/", Checkout, query, filters, timeout)

    def get(self, checkout_id: str, timeout: float | None = None) -> PolarResult[Checkout]:
        if error := self._require(checkout_id=checkout_id):
            return PolarResult.fail(error)
        return self._get(f"checkouts/{segment(checkout_id)}", Checkout, timeout=timeout)

    def create(self, data: Payload, timeout: float | None = None) -> PolarResult[Checkout]:
        return self._send("POST", "checkouts/", data, CheckoutCreate, Checkout, timeout)

    def update(self, checkout_id: str, data: Payload, timeout: float | None = None) -> PolarResult[Checkout]:
        if error := self._require(checkout_id=checkout_id):
            return PolarResult.fail(error)
        return self._send("PATCH", f"checkouts/{segment(checkout_id)}", data, CheckoutUpdate, Checkout, timeout)

    def get_from_client(self, client_secret: str, timeout: float | None = None) -> PolarResult[Checkout]:
        if error := self._require(client_secret=client_secret):
            return PolarResult.fail(error)
        return self._get(f"checkouts/client/{segment(client_secret)}", Checkout, timeout=timeout)

    def update_from_client(
        self,
        client_secret: str,
        data: Payload,
        timeout: float | None = None,
    ) -> PolarResult[Checkout]:
        if error := self._require(client_secret=client_secret):
            return PolarResult.fail(error)
        return self._send(
            "PATCH", f"checkouts/client/{segment(client_secret)}", data, CheckoutClientUpdate, Checkout, timeout
        )

    def confirm_from_client(
        self,
        client_secret: str,
        data: Payload | None = None,
        timeout: float | None = None,
    ) -> PolarResult[Checkout]:
        """Confirm the session, optionally applying last-minute customer changes."""
        if error := self._require(client_secret=client_secret):
            return PolarResult.fail(error)
        return self._send(
            "POST",
            f"checkouts/client/{segment(client_secret)}/confirm",
            data or {},
            CheckoutConfirm,
            Checkout,
            timeout,
        )


class CheckoutLinksResource(BaseResource):
    query_builder = CheckoutLinksQueryBuilder

    def list(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> PolarResult[Page[CheckoutLink]]:
        return self._list("checkout-links/", CheckoutLink, page, limit, query, filters, timeout)

    def list_all(
        self,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> Iterator[PolarResult[CheckoutLink]]:
        return self._list_all("checkout-links/", CheckoutLink, query, filters, timeout)

    def get(self, link_id: str, timeout: float | None = None) -> PolarResult[CheckoutLink]:
        if error := self._require(link_id=link_id):
            return PolarResult.fail(error)
        return self._get(f"checkout-links/{segment(link_id)}", CheckoutLink, timeout=timeout)

    def create(self, data: Payload, timeout: float | None = None) -> PolarResult[CheckoutLink]:
        return self._send("POST", "checkout-links/", data, CheckoutLinkCreate, CheckoutLink, timeout)

    def update(self, link_id: str, data: Payload, timeout: float | None = None) -> PolarResult[CheckoutLink]:
        if error := self._require(link_id=link_id):
            return PolarResult.fail(error)
        return self._send(
            "PATCH", f"checkout-links/{segment(link_id)}", data, CheckoutLinkUpdate, CheckoutLink, timeout
        )

    def delete(self, link_id: str, timeout: float | None = None) -> PolarResult[None]:
        if error := self._require(link_id=link_id):
            return PolarResult.fail(error)
        return self._delete(f"checkout-links/{segment(link_id)}", timeout=timeout)
