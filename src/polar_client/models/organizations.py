"""Organization models."""

from datetime import datetime
from typing import Any

from pydantic import Field

from .base import PolarModel, PolarRequest


class Organization(PolarModel):
    """Polar organization (the merchant account)."""

    id: str
    name: str
    slug: str
    avatar_url: str | None = None
    email: str | None = None
    website: str | None = None
    socials: list[dict[str, Any]] = Field(default_factory=list)
    details: dict[str, Any] | None = None
    feature_settings: dict[str, Any] | None = None
    subscription_settings: dict[str, Any] | None = None
    created_at: datetime | None = None
    modified_at: datetime | None = None


class OrganizationUpdate(PolarRequest):
    name: str | None = None
    avatar_url: str | None = None
    email: str | None = None
    website: str | None = None
    socials: list[dict[str, Any]] | None = None
    details: dict[str, Any] | None = None
    feature_settings: dict[str, Any] | None = None
    subscription_settings: dict[str, Any] | None = None


class OrganizationCreate(PolarRequest):
    name: str = Field(min_length=1)
    slug: str = Field(min_length=3, pattern=r"^[a-z0-9][a-z0-9-]*$")
    avatar_url: str | None = None
    email: str | None = None
    website: str | None = None
    socials: list[dict[str, Any]] | None = None
    details: dict[str, Any] | None = None
    feature_settings: dict[str, Any] | None = None
    subscription_settings: dict[str, Any] | None = None
