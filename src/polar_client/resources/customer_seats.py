"""Seats on seat-based subscriptions, managed by the organization."""

from typing import Any, Iterator

from ..models.seats import (
    CustomerSeat,
    SeatAssign,
    SeatClaim,
    SeatClaimInfo,
    SeatResendInvitation,
    SeatRevoke,
)
from ..pagination import DEFAULT_PAGE_SIZE, Page
from ..query import CustomerSeatsQueryBuilder, QueryBuilder
from ..result import PolarResult
from .base import BaseResource, Payload, segment


class CustomerSeatsResource(BaseResource):
    """
    Assign, revoke and claim seats.

    Assigning a seat emails an invitation; the invitee claims it with the
    token from that email. `assign`, `revoke`, `resend_invitation` and
    `claim` return no value.
    """

    query_builder = CustomerSeatsQueryBuilder

    def list(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> PolarResult[Page[CustomerSeat]]:
        return self._list("customer-seats/", CustomerSeat, page, limit, query, filters, timeout)

    def list_all(
        self,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> Iterator[PolarResult[CustomerSeat]]:
        return self._list_all("customer-seats/", CustomerSeat, query, filters, timeout)

    def get(self, seat_id: str, timeout: float | None = None) -> PolarResult[CustomerSeat]:
        if error := self._require(seat_id=seat_id):
            return PolarResult.fail(error)
        return self._get(f"customer-seats/{segment(seat_id)}", CustomerSeat, timeout=timeout)

    def assign(self, data: Payload, timeout: float | None = None) -> PolarResult[None]:
        return self._send("POST", "customer-seats/assign", data, SeatAssign, None, timeout).map(lambda _: None)

    def revoke(self, data: Payload, timeout: float | None = None) -> PolarResult[None]:
        return self._send("POST", "customer-seats/revoke", data, SeatRevoke, None, timeout).map(lambda _: None)

    def resend_invitation(self, data: Payload, timeout: float | None = None) -> PolarResult[None]:
        return self._send(
            "POST", "customer-seats/resend_invitation", data, SeatResendInvitation, None, timeout
        ).map(lambda _: None)

    def get_claim_info(self, timeout: float | None = None) -> PolarResult[SeatClaimInfo]:
        return self._get("customer-seats/claim_info", SeatClaimInfo, timeout=timeout)

    def claim(self, data: Payload, timeout: float | None = None) -> PolarResult[None]:
        return self._send("POST", "customer-seats/claim", data, SeatClaim, None, timeout).map(lambda _: None)
