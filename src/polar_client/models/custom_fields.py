"""Custom checkout field models."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field

from .base import PolarModel, PolarRequest


class CustomFieldType(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    CHECKBOX = "checkbox"
    SELECT = "select"


class CustomField(PolarModel):
    """Extra field collected at checkout."""

    id: str
    type: str
    slug: str
    name: str
    organization_id: str | None = None
    properties: dict[str, Any] = Field(default_factory=dict)
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None
    modified_at: datetime | None = None

    @property
    def options(self) -> list[dict[str, Any]]:
        """Choices of a select field; empty for other types."""
        return list(self.properties.get("options", []))


class CustomFieldCreate(PolarRequest):
    type: CustomFieldType
    slug: str = Field(min_length=1, pattern=r"^[a-z0-9_-]+$")
    name: str = Field(min_length=1)
    properties: dict[str, Any] = Field(default_factory=dict)
    organization_id: str | None = None
    metadata: dict[str, Any] | None = None


class CustomFieldUpdate(PolarRequest):
    type: CustomFieldType
    slug: str | None = Field(default=None, pattern=r"^[a-z0-9_-]+$")
    name: str | None = None
    properties: dict[str, Any] | None = None
    metadata: dict[str, Any] | None = None
