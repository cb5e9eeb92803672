"""Seat-based subscription models."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from .base import PolarModel, PolarRequest
from .customers import Customer
from .orders import Subscription


class SeatStatus(str, Enum):
    ACTIVE = "active"
    INVITED = "invited"
    REVOKED = "revoked"


class CustomerSeat(PolarModel):
    """One seat on a seat-based subscription, claimed or pending."""

    id: str
    subscription_id: str | None = None
    customer_id: str | None = None
    status: str | None = None
    user_id: str | None = None
    user_email: str | None = None
    user_name: str | None = None
    invitation_token: str | None = None
    invitation_expires_at: datetime | None = None
    last_invited_at: datetime | None = None
    customer: Customer | None = None
    subscription: Subscription | None = None
    created_at: datetime | None = None
    modified_at: datetime | None = None

    @property
    def is_claimed(self) -> bool:
        return self.status == SeatStatus.ACTIVE.value


class SeatClaimInfo(PolarModel):
    seat_id: str
    customer_id: str | None = None
    subscription_id: str | None = None
    invitation_token: str | None = None
    invitation_expires_at: datetime | None = None


class ClaimedSubscription(PolarModel):
    """A subscription whose seat the current customer holds."""

    subscription_id: str
    subscription_name: str | None = None
    customer_id: str | None = None
    customer_name: str | None = None
    available_seats: int = 0
    used_seats: int = 0


class SeatAssign(PolarRequest):
    subscription_id: str = Field(min_length=1)
    email: str
    metadata: dict[str, Any] | None = None

    @field_validator("email")
    @classmethod
    def require_email(cls, v: str) -> str:
        v = v.strip()
        if "@" not in v:
            raise ValueError("email must be a valid address")
        return v


class SeatRevoke(PolarRequest):
    subscription_id: str = Field(min_length=1)
    seat_id: str = Field(min_length=1)


class SeatResendInvitation(SeatRevoke):
    pass


class SeatClaim(PolarRequest):
    invitation_token: str = Field(min_length=1)
