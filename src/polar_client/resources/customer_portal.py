"""
Customer portal: the API as seen by one customer.

Portal endpoints authenticate with a customer session token (see
`client.customer_sessions.create`) instead of the organization access
token. The resource shares the client's connection pool, retries and rate
limiter, and overrides only the Authorization header.

    session = client.customer_sessions.create({"customer_id": "cus_123"}).unwrap()
    portal = client.customer_portal(session.token)

    for result in portal.list_all_orders():
        print(result.unwrap().id)
"""

from typing import TYPE_CHECKING, Any, Iterator

from ..models.customers import Customer, CustomerUpdate, PaymentMethod, PaymentMethodCreate
from ..models.files import File
from ..models.license_keys import (
    LicenseKey,
    LicenseKeyActivate,
    LicenseKeyActivation,
    LicenseKeyDeactivate,
    LicenseKeyValidate,
    LicenseKeyValidated,
)
from ..models.orders import Order, Subscription
from ..models.organizations import Organization
from ..models.products import BenefitGrant
from ..models.seats import ClaimedSubscription, CustomerSeat, SeatAssign, SeatResendInvitation, SeatRevoke
from ..pagination import DEFAULT_PAGE_SIZE, Page
from ..query import QueryBuilder
from ..result import PolarResult
from .base import BaseResource, Payload, segment

if TYPE_CHECKING:
    from ..client import PolarClient

PORTAL = "customer-portal"


class CustomerPortalResource(BaseResource):
    def __init__(self, client: "PolarClient", customer_session_token: str) -> None:
        if not customer_session_token or not customer_session_token.strip():
            raise ValueError("customer_session_token is required")
        super().__init__(client)
        self._headers = {"Authorization": f"Bearer {customer_session_token}"}

    # ------------------------------------------------------------------
    # Customer and payment methods
    # ------------------------------------------------------------------

    def get_customer(self, timeout: float | None = None) -> PolarResult[Customer]:
        return self._get(f"{PORTAL}/customers", Customer, timeout=timeout)

    def update_customer(self, data: Payload, timeout: float | None = None) -> PolarResult[Customer]:
        return self._send("PATCH", f"{PORTAL}/customers", data, CustomerUpdate, Customer, timeout)

    def list_payment_methods(self, timeout: float | None = None) -> PolarResult[list[PaymentMethod]]:
        return self._request(
            "GET",
            f"{PORTAL}/customers/payment-methods",
            parse=self._list_parser(PaymentMethod),
            timeout=timeout,
        )

    def add_payment_method(self, data: Payload, timeout: float | None = None) -> PolarResult[PaymentMethod]:
        return self._send(
            "POST", f"{PORTAL}/customers/payment-methods", data, PaymentMethodCreate, PaymentMethod, timeout
        )

    def confirm_payment_method(
        self,
        payment_method_id: str,
        timeout: float | None = None,
    ) -> PolarResult[PaymentMethod]:
        if error := self._require(payment_method_id=payment_method_id):
            return PolarResult.fail(error)
        return self._post(
            f"{PORTAL}/customers/payment-methods/{segment(payment_method_id)}/confirm",
            PaymentMethod,
            timeout=timeout,
        )

    def delete_payment_method(self, payment_method_id: str, timeout: float | None = None) -> PolarResult[None]:
        if error := self._require(payment_method_id=payment_method_id):
            return PolarResult.fail(error)
        return self._delete(f"{PORTAL}/customers/payment-methods/{segment(payment_method_id)}", timeout=timeout)

    # ------------------------------------------------------------------
    # Orders and subscriptions
    # ------------------------------------------------------------------

    def list_orders(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> PolarResult[Page[Order]]:
        return self._list(f"{PORTAL}/orders", Order, page, limit, query, filters, timeout)

    def list_all_orders(
        self,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> Iterator[PolarResult[Order]]:
        return self._list_all(f"{PORTAL}/orders", Order, query, filters, timeout)

    def get_order(self, order_id: str, timeout: float | None = None) -> PolarResult[Order]:
        if error := self._require(order_id=order_id):
            return PolarResult.fail(error)
        return self._get(f"{PORTAL}/orders/{segment(order_id)}", Order, timeout=timeout)

    def list_subscriptions(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> PolarResult[Page[Subscription]]:
        return self._list(f"{PORTAL}/subscriptions", Subscription, page, limit, query, filters, timeout)

    def list_all_subscriptions(
        self,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> Iterator[PolarResult[Subscription]]:
        return self._list_all(f"{PORTAL}/subscriptions", Subscription, query, filters, timeout)

    def get_subscription(self, subscription_id: str, timeout: float | None = None) -> PolarResult[Subscription]:
        if error := self._require(subscription_id=subscription_id):
            return PolarResult.fail(error)
        return self._get(f"{PORTAL}/subscriptions/{segment(subscription_id)}", Subscription, timeout=timeout)

    def cancel_subscription(self, subscription_id: str, timeout: float | None = None) -> PolarResult[Subscription]:
        """Cancel at the end of the current period."""
        if error := self._require(subscription_id=subscription_id):
            return PolarResult.fail(error)
        return self._post(f"{PORTAL}/subscriptions/{segment(subscription_id)}/cancel", Subscription, timeout=timeout)

    # ------------------------------------------------------------------
    # Benefits, license keys and downloads
    # ------------------------------------------------------------------

    def list_benefit_grants(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> PolarResult[Page[BenefitGrant]]:
        return self._list(f"{PORTAL}/benefit-grants", BenefitGrant, page, limit, query, filters, timeout)

    def list_all_benefit_grants(
        self,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> Iterator[PolarResult[BenefitGrant]]:
        return self._list_all(f"{PORTAL}/benefit-grants", BenefitGrant, query, filters, timeout)

    def get_benefit_grant(self, benefit_grant_id: str, timeout: float | None = None) -> PolarResult[BenefitGrant]:
        if error := self._require(benefit_grant_id=benefit_grant_id):
            return PolarResult.fail(error)
        return self._get(f"{PORTAL}/benefit-grants/{segment(benefit_grant_id)}", BenefitGrant, timeout=timeout)

    def list_license_keys(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> PolarResult[Page[LicenseKey]]:
        return self._list(f"{PORTAL}/license-keys", LicenseKey, page, limit, query, filters, timeout)

    def list_all_license_keys(
        self,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> Iterator[PolarResult[LicenseKey]]:
        return self._list_all(f"{PORTAL}/license-keys", LicenseKey, query, filters, timeout)

    def get_license_key(self, license_key_id: str, timeout: float | None = None) -> PolarResult[LicenseKey]:
        if error := self._require(license_key_id=license_key_id):
            return PolarResult.fail(error)
        return self._get(f"{PORTAL}/license-keys/{segment(license_key_id)}", LicenseKey, timeout=timeout)

    def validate_license_key(self, data: Payload, timeout: float | None = None) -> PolarResult[LicenseKeyValidated]:
        return self._send(
            "POST", f"{PORTAL}/license-keys/validate", data, LicenseKeyValidate, LicenseKeyValidated, timeout
        )

    def activate_license_key(
        self,
        license_key_id: str,
        data: Payload,
        timeout: float | None = None,
    ) -> PolarResult[LicenseKeyActivation]:
        if error := self._require(license_key_id=license_key_id):
            return PolarResult.fail(error)
        return self._send(
            "POST",
            f"{PORTAL}/license-keys/{segment(license_key_id)}/activate",
            data,
            LicenseKeyActivate,
            LicenseKeyActivation,
            timeout,
        )

    def deactivate_license_key(
        self,
        license_key_id: str,
        data: Payload,
        timeout: float | None = None,
    ) -> PolarResult[None]:
        if error := self._require(license_key_id=license_key_id):
            return PolarResult.fail(error)
        return self._send(
            "POST",
            f"{PORTAL}/license-keys/{segment(license_key_id)}/deactivate",
            data,
            LicenseKeyDeactivate,
            None,
            timeout,
        ).map(lambda _: None)

    def list_downloadables(self, timeout: float | None = None) -> PolarResult[list[File]]:
        """Files the customer is entitled to download."""
        return self._request("GET", f"{PORTAL}/downloadables", parse=self._list_parser(File), timeout=timeout)

    def get_organization(self, timeout: float | None = None) -> PolarResult[Organization]:
        return self._get(f"{PORTAL}/organizations", Organization, timeout=timeout)

    # ------------------------------------------------------------------
    # Seats held or managed by the customer
    # ------------------------------------------------------------------

    def list_seats(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> PolarResult[Page[CustomerSeat]]:
        return self._list(f"{PORTAL}/seats", CustomerSeat, page, limit, query, filters, timeout)

    def list_all_seats(
        self,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> Iterator[PolarResult[CustomerSeat]]:
        return self._list_all(f"{PORTAL}/seats", CustomerSeat, query, filters, timeout)

    def assign_seat(self, data: Payload, timeout: float | None = None) -> PolarResult[None]:
        return self._send("POST", f"{PORTAL}/seats/assign", data, SeatAssign, None, timeout).map(lambda _: None)

    def revoke_seat(self, data: Payload, timeout: float | None = None) -> PolarResult[None]:
        return self._send("POST", f"{PORTAL}/seats/revoke", data, SeatRevoke, None, timeout).map(lambda _: None)

    def resend_seat_invitation(self, data: Payload, timeout: float | None = None) -> PolarResult[None]:
        return self._send(
            "POST", f"{PORTAL}/seats/resend_invitation", data, SeatResendInvitation, None, timeout
        ).map(lambda _: None)

    def list_claimed_subscriptions(self, timeout: float | None = None) -> PolarResult[list[ClaimedSubscription]]:
        """Subscriptions on which the customer holds a seat."""
        return self._request(
            "GET",
            f"{PORTAL}/seats/claimed_subscriptions",
            parse=self._list_parser(ClaimedSubscription),
            timeout=timeout,
        )
