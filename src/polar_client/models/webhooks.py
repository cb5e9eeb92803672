"""Webhook endpoint, delivery and event payload models."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from .base import PolarModel, PolarRequest


class WebhookFormat(str, Enum):
    RAW = "raw"
    DISCORD = "discord"
    SLACK = "slack"


class WebhookEndpoint(PolarModel):
    """Endpoint that receives webhook deliveries."""

    id: str
    url: str
    format: str = WebhookFormat.RAW.value
    secret: str | None = None
    events: list[str] = Field(default_factory=list)
    organization_id: str | None = None
    created_at: datetime | None = None
    modified_at: datetime | None = None


class WebhookEndpointCreate(PolarRequest):
    url: str
    events: list[str] = Field(min_length=1)
    format: WebhookFormat = WebhookFormat.RAW
    secret: str | None = None
    organization_id: str | None = None

    @field_validator("url")
    @classmethod
    def require_https(cls, v: str) -> str:
        if not v.startswith("https://"):
            raise ValueError("webhook url must use https")
        return v


class WebhookEndpointUpdate(PolarRequest):
    url: str | None = None
    events: list[str] | None = None
    format: WebhookFormat | None = None
    secret: str | None = None


class WebhookEventPayload(PolarModel):
    id: str | None = None
    type: str
    payload: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None


class WebhookDelivery(PolarModel):
    """A single attempt to deliver a webhook event."""

    id: str
    succeeded: bool = False
    http_code: int | None = None
    response: str | None = None
    webhook_event: WebhookEventPayload | None = None
    created_at: datetime | None = None
    modified_at: datetime | None = None


class WebhookEvent(PolarModel):
    """Parsed body of an incoming webhook request."""

    type: str
    id: str | None = None
    timestamp: datetime | None = None
    data: dict[str, Any] = Field(default_factory=dict)
