"""Discount models."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field, model_validator

from .base import PolarModel, PolarRequest


class DiscountType(str, Enum):
    FIXED = "fixed"
    PERCENTAGE = "percentage"


class DiscountDuration(str, Enum):
    ONCE = "once"
    FOREVER = "forever"
    REPEATING = "repeating"


class Discount(PolarModel):
    """Discount that can be applied at checkout."""

    id: str
    name: str
    type: str
    duration: str | None = None
    duration_in_months: int | None = None
    amount: int | None = None
    currency: str | None = None
    basis_points: int | None = None
    code: str | None = None
    starts_at: datetime | None = None
    ends_at: datetime | None = None
    max_redemptions: int | None = None
    redemptions_count: int = 0
    organization_id: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None
    modified_at: datetime | None = None

    @property
    def percentage(self) -> float | None:
        """Percentage off, derived from basis points (1000 -> 10.0)."""
        if self.basis_points is None:
            return None
        return self.basis_points / 100

    @property
    def is_exhausted(self) -> bool:
        return self.max_redemptions is not None and self.redemptions_count >= self.max_redemptions


class DiscountCreate(PolarRequest):
    name: str = Field(min_length=1)
    type: DiscountType
    duration: DiscountDuration = DiscountDuration.ONCE
    duration_in_months: int | None = Field(default=None, ge=1)
    amount: int | None = Field(default=None, ge=0)
    currency: str | None = None
    basis_points: int | None = Field(default=None, ge=1, le=10000)
    code: str | None = None
    starts_at: datetime | None = None
    ends_at: datetime | None = None
    max_redemptions: int | None = Field(default=None, ge=1)
    products: list[str] | None = None
    organization_id: str | None = None
    metadata: dict[str, Any] | None = None

    @model_validator(mode="after")
    def check_amount(self) -> "DiscountCreate":
        if self.type == DiscountType.FIXED and self.amount is None:
            raise ValueError("fixed discounts require amount")
        if self.type == DiscountType.PERCENTAGE and self.basis_points is None:
            raise ValueError("percentage discounts require basis_points")
        if self.duration == DiscountDuration.REPEATING and self.duration_in_months is None:
            raise ValueError("repeating discounts require duration_in_months")
        if self.starts_at and self.ends_at and self.starts_at > self.ends_at:
            raise ValueError("starts_at must be before ends_at")
        return self


class DiscountUpdate(PolarRequest):
    name: str | None = None
    code: str | None = None
    starts_at: datetime | None = None
    ends_at: datetime | None = None
    max_redemptions: int | None = Field(default=None, ge=1)
    amount: int | None = Field(default=None, ge=0)
    basis_points: int | None = Field(default=None, ge=1, le=10000)
    products: list[str] | None = None
    metadata: dict[str, Any] | None = None
