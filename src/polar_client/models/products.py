"""Product, price and benefit models."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field

from .base import PolarModel, PolarRequest


class RecurringInterval(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class PriceAmountType(str, Enum):
    FIXED = "fixed"
    CUSTOM = "custom"
    FREE = "free"
    METERED_UNIT = "metered_unit"


class ProductPrice(PolarModel):
    """Price attached to a product."""

    id: str
    amount_type: str | None = None
    type: str | None = None
    price_amount: int | None = None
    price_currency: str | None = None
    minimum_amount: int | None = None
    maximum_amount: int | None = None
    recurring_interval: str | None = None
    is_archived: bool = False
    product_id: str | None = None
    created_at: datetime | None = None
    modified_at: datetime | None = None

    @property
    def is_free(self) -> bool:
        return self.amount_type == PriceAmountType.FREE.value or self.price_amount == 0


class BenefitSummary(PolarModel):
    id: str
    type: str | None = None
    description: str | None = None


class Product(PolarModel):
    """Polar product entity."""

    id: str
    name: str
    description: str | None = None
    is_recurring: bool = False
    is_archived: bool = False
    recurring_interval: str | None = None
    organization_id: str | None = None
    prices: list[ProductPrice] = Field(default_factory=list)
    benefits: list[BenefitSummary] = Field(default_factory=list)
    medias: list[dict[str, Any]] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None
    modified_at: datetime | None = None

    @property
    def active_prices(self) -> list[ProductPrice]:
        return [p for p in self.prices if not p.is_archived]


class ProductPriceCreate(PolarRequest):
    amount_type: PriceAmountType = PriceAmountType.FIXED
    price_amount: int | None = Field(default=None, ge=0)
    price_currency: str | None = "usd"
    minimum_amount: int | None = None
    maximum_amount: int | None = None
    preset_amount: int | None = None
    meter_id: str | None = None
    unit_amount: float | None = None


class ProductCreate(PolarRequest):
    name: str = Field(min_length=1)
    description: str | None = None
    recurring_interval: RecurringInterval | None = None
    prices: list[ProductPriceCreate] = Field(min_length=1)
    organization_id: str | None = None
    medias: list[str] | None = None
    metadata: dict[str, Any] | None = None


class ProductUpdate(PolarRequest):
    name: str | None = None
    description: str | None = None
    recurring_interval: RecurringInterval | None = None
    is_archived: bool | None = None
    prices: list[dict[str, Any]] | None = None
    medias: list[str] | None = None
    metadata: dict[str, Any] | None = None


# ---------------------------------------------------------------------------
# Benefits
# ---------------------------------------------------------------------------

class BenefitType(str, Enum):
    CUSTOM = "custom"
    DISCORD = "discord"
    GITHUB_REPOSITORY = "github_repository"
    DOWNLOADABLES = "downloadables"
    LICENSE_KEYS = "license_keys"
    METER_CREDIT = "meter_credit"


class Benefit(PolarModel):
    """Benefit granted to customers who buy a product."""

    id: str
    type: str
    description: str | None = None
    selectable: bool = True
    deletable: bool = True
    organization_id: str | None = None
    properties: dict[str, Any] = Field(default_factory=dict)
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None
    modified_at: datetime | None = None


class BenefitGrant(PolarModel):
    id: str
    benefit_id: str
    customer_id: str | None = None
    order_id: str | None = None
    subscription_id: str | None = None
    is_granted: bool = False
    is_revoked: bool = False
    granted_at: datetime | None = None
    revoked_at: datetime | None = None
    properties: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None
    modified_at: datetime | None = None


class BenefitGrantCreate(PolarRequest):
    """Grant a benefit to a customer outside of an order or subscription."""

    customer_id: str = Field(min_length=1)
    properties: dict[str, Any] | None = None
    metadata: dict[str, Any] | None = None


class BenefitCreate(PolarRequest):
    type: BenefitType
    description: str = Field(min_length=3, max_length=42)
    properties: dict[str, Any] = Field(default_factory=dict)
    organization_id: str | None = None
    metadata: dict[str, Any] | None = None


class BenefitUpdate(PolarRequest):
    type: BenefitType
    description: str | None = None
    properties: dict[str, Any] | None = None
    metadata: dict[str, Any] | None = None
