"""License key models."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field

from .base import PolarModel, PolarRequest


class LicenseKeyStatus(str, Enum):
    GRANTED = "granted"
    REVOKED = "revoked"
    DISABLED = "disabled"


class LicenseKeyActivation(PolarModel):
    id: str
    license_key_id: str
    label: str
    meta: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None
    modified_at: datetime | None = None


class LicenseKey(PolarModel):
    """License key granted through a license_keys benefit."""

    id: str
    organization_id: str | None = None
    customer_id: str | None = None
    benefit_id: str | None = None
    key: str | None = None
    display_key: str | None = None
    status: str = LicenseKeyStatus.GRANTED.value
    limit_activations: int | None = None
    usage: int = 0
    limit_usage: int | None = None
    validations: int = 0
    last_validated_at: datetime | None = None
    expires_at: datetime | None = None
    activations: list[LicenseKeyActivation] = Field(default_factory=list)
    created_at: datetime | None = None
    modified_at: datetime | None = None

    @property
    def is_granted(self) -> bool:
        return self.status == LicenseKeyStatus.GRANTED.value


class LicenseKeyValidated(LicenseKey):
    """Validation response; includes the activation when one was checked."""

    activation: LicenseKeyActivation | None = None


class LicenseKeyUpdate(PolarRequest):
    status: LicenseKeyStatus | None = None
    usage: int | None = Field(default=None, ge=0)
    limit_activations: int | None = Field(default=None, ge=1, le=50)
    limit_usage: int | None = Field(default=None, ge=1)
    expires_at: datetime | None = None


class LicenseKeyValidate(PolarRequest):
    key: str = Field(min_length=1)
    organization_id: str
    activation_id: str | None = None
    benefit_id: str | None = None
    customer_id: str | None = None
    increment_usage: int | None = None
    conditions: dict[str, Any] | None = None


class LicenseKeyActivate(PolarRequest):
    key: str = Field(min_length=1)
    organization_id: str
    label: str = Field(min_length=1)
    conditions: dict[str, Any] | None = None
    meta: dict[str, Any] | None = None


class LicenseKeyDeactivate(PolarRequest):
    key: str = Field(min_length=1)
    organization_id: str
    activation_id: str = Field(min_length=1)
