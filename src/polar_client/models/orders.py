"""Order, subscription, refund and payment models."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field, model_validator

from .base import PolarModel, PolarRequest
from .customers import Address, Customer
from .products import Product


class OrderStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"
    PARTIALLY_REFUNDED = "partially_refunded"


class OrderItem(PolarModel):
    id: str
    label: str
    amount: int = 0
    tax_amount: int = 0
    proration: bool = False
    product_price_id: str | None = None


class Order(PolarModel):
    """Order created by a checkout or a subscription cycle."""

    id: str
    status: str = OrderStatus.PENDING.value
    paid: bool = False
    subtotal_amount: int = 0
    discount_amount: int = 0
    net_amount: int = 0
    tax_amount: int = 0
    total_amount: int = 0
    refunded_amount: int = 0
    refunded_tax_amount: int = 0
    currency: str = "usd"
    billing_reason: str | None = None
    billing_name: str | None = None
    billing_address: Address | None = None
    invoice_number: str | None = None
    is_invoice_generated: bool = False
    customer_id: str | None = None
    product_id: str | None = None
    discount_id: str | None = None
    subscription_id: str | None = None
    checkout_id: str | None = None
    customer: Customer | None = None
    product: Product | None = None
    items: list[OrderItem] = Field(default_factory=list)
    custom_field_data: dict[str, Any] = Field(default_factory=dict)
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None
    modified_at: datetime | None = None

    @property
    def refundable_amount(self) -> int:
        return max(0, self.total_amount - self.refunded_amount)


class OrderUpdate(PolarRequest):
    billing_name: str | None = None
    billing_address: Address | None = None


class OrderInvoice(PolarModel):
    url: str


# ---------------------------------------------------------------------------
# Subscriptions
# ---------------------------------------------------------------------------

class SubscriptionStatus(str, Enum):
    INCOMPLETE = "incomplete"
    INCOMPLETE_EXPIRED = "incomplete_expired"
    TRIALING = "trialing"
    ACTIVE = "active"
    PAST_DUE = "past_due"
    CANCELED = "canceled"
    UNPAID = "unpaid"


class Subscription(PolarModel):
    """Recurring subscription to a product."""

    id: str
    status: str
    amount: int = 0
    currency: str = "usd"
    recurring_interval: str | None = None
    current_period_start: datetime | None = None
    current_period_end: datetime | None = None
    trial_start: datetime | None = None
    trial_end: datetime | None = None
    cancel_at_period_end: bool = False
    canceled_at: datetime | None = None
    started_at: datetime | None = None
    ends_at: datetime | None = None
    ended_at: datetime | None = None
    customer_id: str | None = None
    product_id: str | None = None
    discount_id: str | None = None
    checkout_id: str | None = None
    customer_cancellation_reason: str | None = None
    customer_cancellation_comment: str | None = None
    customer: Customer | None = None
    product: Product | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None
    modified_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.status in (SubscriptionStatus.ACTIVE.value, SubscriptionStatus.TRIALING.value)


class SubscriptionUpdate(PolarRequest):
    """Change product, apply a discount or schedule cancellation."""

    product_id: str | None = None
    discount_id: str | None = None
    cancel_at_period_end: bool | None = None
    customer_cancellation_reason: str | None = None
    customer_cancellation_comment: str | None = None
    proration_behavior: str | None = None
    revoke: bool | None = None


class SubscriptionCreate(PolarRequest):
    """
    Start a subscription without a checkout (free products, trials).

    The customer is identified by Polar id or external id, the product by
    product id or price id.
    """

    product_id: str | None = None
    product_price_id: str | None = None
    customer_id: str | None = None
    external_customer_id: str | None = None
    discount_id: str | None = None
    trial_period_days: int | None = Field(default=None, ge=1)
    metadata: dict[str, Any] | None = None

    @model_validator(mode="after")
    def identifiers(self) -> "SubscriptionCreate":
        if self.customer_id is None and self.external_customer_id is None:
            raise ValueError("customer_id or external_customer_id is required")
        if self.product_id is None and self.product_price_id is None:
            raise ValueError("product_id or product_price_id is required")
        return self


# ---------------------------------------------------------------------------
# Refunds
# ---------------------------------------------------------------------------

class RefundReason(str, Enum):
    DUPLICATE = "duplicate"
    FRAUDULENT = "fraudulent"
    CUSTOMER_REQUEST = "customer_request"
    SERVICE_DISRUPTION = "service_disruption"
    SATISFACTION_GUARANTEE = "satisfaction_guarantee"
    OTHER = "other"


class Refund(PolarModel):
    id: str
    status: str
    reason: str | None = None
    amount: int
    tax_amount: int = 0
    currency: str = "usd"
    order_id: str | None = None
    subscription_id: str | None = None
    customer_id: str | None = None
    revoke_benefits: bool = False
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None
    modified_at: datetime | None = None


class RefundCreate(PolarRequest):
    order_id: str
    reason: RefundReason
    amount: int = Field(gt=0)
    comment: str | None = None
    revoke_benefits: bool | None = None
    metadata: dict[str, Any] | None = None


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------

class Payment(PolarModel):
    id: str
    status: str
    amount: int
    currency: str = "usd"
    method: str | None = None
    processor: str | None = None
    decline_reason: str | None = None
    decline_message: str | None = None
    checkout_id: str | None = None
    order_id: str | None = None
    organization_id: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None
    modified_at: datetime | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == "succeeded"
