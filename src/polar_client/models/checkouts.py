"""Checkout session and checkout link models."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from .base import PolarModel, PolarRequest
from .customers import Address


class CheckoutStatus(str, Enum):
    OPEN = "open"
    EXPIRED = "expired"
    CONFIRMED = "confirmed"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class Checkout(PolarModel):
    """Checkout session."""

    id: str
    status: str = CheckoutStatus.OPEN.value
    client_secret: str | None = None
    url: str | None = None
    expires_at: datetime | None = None
    success_url: str | None = None
    embed_origin: str | None = None
    amount: int | None = None
    discount_amount: int | None = None
    net_amount: int | None = None
    tax_amount: int | None = None
    total_amount: int | None = None
    currency: str | None = None
    product_id: str | None = None
    product_price_id: str | None = None
    discount_id: str | None = None
    allow_discount_codes: bool = True
    customer_id: str | None = None
    customer_email: str | None = None
    customer_name: str | None = None
    customer_billing_address: Address | None = None
    customer_external_id: str | None = None
    organization_id: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None
    modified_at: datetime | None = None

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v: Any) -> str:
        return str(v).lower() if v else CheckoutStatus.OPEN.value

    @property
    def is_open(self) -> bool:
        return self.status == CheckoutStatus.OPEN.value

    @property
    def is_succeeded(self) -> bool:
        return self.status == CheckoutStatus.SUCCEEDED.value


class CheckoutCreate(PolarRequest):
    """Create a checkout session for one or more products."""

    products: list[str] = Field(min_length=1)
    customer_id: str | None = None
    customer_email: str | None = None
    customer_name: str | None = None
    customer_external_id: str | None = None
    customer_billing_address: Address | None = None
    discount_id: str | None = None
    allow_discount_codes: bool | None = None
    amount: int | None = None
    success_url: str | None = None
    embed_origin: str | None = None
    metadata: dict[str, Any] | None = None
    customer_metadata: dict[str, Any] | None = None


class CheckoutUpdate(PolarRequest):
    product_id: str | None = None
    product_price_id: str | None = None
    amount: int | None = None
    customer_email: str | None = None
    customer_name: str | None = None
    customer_billing_address: Address | None = None
    discount_id: str | None = None
    allow_discount_codes: bool | None = None
    success_url: str | None = None
    metadata: dict[str, Any] | None = None


class CheckoutClientUpdate(PolarRequest):
    """Fields a customer may change from the client side of a checkout."""

    product_id: str | None = None
    product_price_id: str | None = None
    amount: int | None = None
    customer_email: str | None = None
    customer_name: str | None = None
    customer_billing_address: Address | None = None
    discount_code: str | None = None


class CheckoutConfirm(CheckoutClientUpdate):
    confirmation_token_id: str | None = None


# ---------------------------------------------------------------------------
# Checkout links
# ---------------------------------------------------------------------------

class CheckoutLink(PolarModel):
    """Reusable link that opens a new checkout session."""

    id: str
    url: str | None = None
    client_secret: str | None = None
    label: str | None = None
    success_url: str | None = None
    allow_discount_codes: bool = True
    discount_id: str | None = None
    product_id: str | None = None
    products: list[dict[str, Any]] = Field(default_factory=list)
    organization_id: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None
    modified_at: datetime | None = None


class CheckoutLinkCreate(PolarRequest):
    products: list[str] = Field(min_length=1)
    label: str | None = None
    success_url: str | None = None
    allow_discount_codes: bool | None = None
    discount_id: str | None = None
    metadata: dict[str, Any] | None = None


class CheckoutLinkUpdate(PolarRequest):
    products: list[str] | None = None
    label: str | None = None
    success_url: str | None = None
    allow_discount_codes: bool | None = None
    discount_id: str | None = None
    metadata: dict[str, Any] | None = None
