"""Customer, customer state and customer session models."""

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator, model_validator

from .base import PolarModel, PolarRequest


class Address(PolarModel):
    """Billing address."""

    line1: str | None = None
    line2: str | None = None
    postal_code: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None

    @property
    def formatted(self) -> str:
        parts = [
            self.line1,
            self.line2,
            " ".join(filter(None, [self.postal_code, self.city])),
            ", ".join(filter(None, [self.state, self.country])),
        ]
        return "\n".join(filter(None, parts))


class Customer(PolarModel):
    """Polar customer entity."""

    id: str
    email: str
    name: str | None = None
    external_id: str | None = None
    email_verified: bool = False
    avatar_url: str | None = None
    billing_address: Address | None = None
    tax_id: list[Any] | None = None
    organization_id: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None
    modified_at: datetime | None = None
    deleted_at: datetime | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.email

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


class CustomerStateSubscription(PolarModel):
    id: str
    status: str | None = None
    amount: int | None = None
    currency: str | None = None
    product_id: str | None = None
    current_period_end: datetime | None = None
    cancel_at_period_end: bool = False


class CustomerStateBenefitGrant(PolarModel):
    id: str
    benefit_id: str
    benefit_type: str | None = None
    granted_at: datetime | None = None


class CustomerStateMeter(PolarModel):
    id: str | None = None
    meter_id: str
    consumed_units: float = 0
    credited_units: float = 0
    balance: float = 0


class CustomerState(Customer):
    """Customer plus active subscriptions, granted benefits and meter balances."""

    active_subscriptions: list[CustomerStateSubscription] = Field(default_factory=list)
    granted_benefits: list[CustomerStateBenefitGrant] = Field(default_factory=list)
    active_meters: list[CustomerStateMeter] = Field(default_factory=list)


class CustomerCreate(PolarRequest):
    email: str
    name: str | None = None
    external_id: str | None = None
    billing_address: Address | None = None
    tax_id: list[Any] | None = None
    organization_id: str | None = None
    metadata: dict[str, Any] | None = None

    @field_validator("email")
    @classmethod
    def require_email(cls, v: str) -> str:
        v = v.strip()
        if "@" not in v:
            raise ValueError("email must be a valid address")
        return v


class CustomerUpdate(PolarRequest):
    email: str | None = None
    name: str | None = None
    external_id: str | None = None
    billing_address: Address | None = None
    tax_id: list[Any] | None = None
    metadata: dict[str, Any] | None = None


# ---------------------------------------------------------------------------
# Customer sessions
# ---------------------------------------------------------------------------

class CustomerSession(PolarModel):
    """Short-lived customer portal session."""

    id: str
    token: str
    expires_at: datetime | None = None
    return_url: str | None = None
    customer_portal_url: str | None = None
    customer_id: str
    customer: Customer | None = None
    created_at: datetime | None = None
    modified_at: datetime | None = None


class CustomerSessionCreate(PolarRequest):
    """Identify the customer either by Polar id or by external id."""

    customer_id: str | None = None
    external_customer_id: str | None = None
    return_url: str | None = None

    @model_validator(mode="after")
    def one_identifier(self) -> "CustomerSessionCreate":
        if self.customer_id is None and self.external_customer_id is None:
            raise ValueError("customer_id or external_customer_id is required")
        if self.customer_id is not None and self.external_customer_id is not None:
            raise ValueError("pass customer_id or external_customer_id, not both")
        return self


class CustomerBalance(PolarModel):
    """Credit balance in the smallest currency unit."""

    customer_id: str
    balance: int = 0
    currency: str = "usd"
    created_at: datetime | None = None
    updated_at: datetime | None = None


# ---------------------------------------------------------------------------
# Payment methods (customer portal)
# ---------------------------------------------------------------------------

class PaymentMethod(PolarModel):
    id: str
    type: str | None = None
    is_default: bool = False
    brand: str | None = None
    last4: str | None = None
    expiration_month: int | None = None
    expiration_year: int | None = None
    created_at: datetime | None = None


class PaymentMethodCreate(PolarRequest):
    """Attach a card confirmed client-side with Stripe."""

    confirmation_token_id: str = Field(min_length=1)
    set_default: bool = False
    return_url: str = Field(min_length=1)
