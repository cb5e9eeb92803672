"""Usage event models."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field, model_validator

from .base import PolarModel, PolarRequest


class EventSource(str, Enum):
    SYSTEM = "system"
    USER = "user"


class Event(PolarModel):
    """Event recorded for a customer, either by Polar or ingested by you."""

    id: str
    name: str
    source: str = EventSource.USER.value
    timestamp: datetime | None = None
    customer_id: str | None = None
    external_customer_id: str | None = None
    organization_id: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class EventName(PolarModel):
    name: str
    source: str = EventSource.USER.value
    occurrences: int = 0
    first_seen: datetime | None = None
    last_seen: datetime | None = None


class EventCreate(PolarRequest):
    """Event to ingest; identify the customer by Polar id or external id."""

    name: str = Field(min_length=1)
    timestamp: datetime | None = None
    customer_id: str | None = None
    external_customer_id: str | None = None
    organization_id: str | None = None
    metadata: dict[str, Any] | None = None

    @model_validator(mode="after")
    def require_customer(self) -> "EventCreate":
        if self.customer_id is None and self.external_customer_id is None:
            raise ValueError("customer_id or external_customer_id is required")
        return self


class EventsIngestResult(PolarModel):
    inserted: int = 0
