"""Usage meter models."""

from datetime import datetime
from typing import Any

from pydantic import Field

from .base import PolarModel, PolarRequest
from .customers import Customer


class MeterFilterClause(PolarModel):
    property: str
    operator: str
    value: Any = None


class MeterFilter(PolarModel):
    conjunction: str = "and"
    clauses: list[Any] = Field(default_factory=list)


class MeterAggregation(PolarModel):
    func: str
    property: str | None = None


class Meter(PolarModel):
    """Aggregates ingested events into a billable quantity."""

    id: str
    name: str
    filter: MeterFilter | None = None
    aggregation: MeterAggregation | None = None
    organization_id: str | None = None
    archived_at: datetime | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None
    modified_at: datetime | None = None


class MeterQuantity(PolarModel):
    timestamp: datetime
    quantity: float


class MeterQuantities(PolarModel):
    quantities: list[MeterQuantity] = Field(default_factory=list)
    total: float = 0


class MeterCreate(PolarRequest):
    name: str = Field(min_length=3)
    filter: MeterFilter
    aggregation: MeterAggregation
    organization_id: str | None = None
    metadata: dict[str, Any] | None = None


class MeterUpdate(PolarRequest):
    name: str | None = None
    filter: MeterFilter | None = None
    aggregation: MeterAggregation | None = None
    is_archived: bool | None = None
    metadata: dict[str, Any] | None = None


class CustomerMeter(PolarModel):
    """A customer's running usage and balance on one meter."""

    id: str
    customer_id: str | None = None
    meter_id: str | None = None
    consumed_units: float = 0
    credited_units: float = 0
    balance: float = 0
    current_quantity: float | None = None
    period_start: datetime | None = None
    period_end: datetime | None = None
    meter: Meter | None = None
    customer: Customer | None = None
    created_at: datetime | None = None
    modified_at: datetime | None = None
