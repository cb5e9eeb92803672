"""
Fluent query builders for list endpoints.

    query = (
        OrdersQueryBuilder()
        .customer_id("cus_123")
        .created_after(datetime(2024, 1, 1))
    )
    client.orders.list(query=query)

Values are rendered the way the Polar API expects them:
- None and empty values are skipped
- booleans become "true"/"false"
- datetimes become UTC "YYYY-MM-DDTHH:MM:SSZ", dates "YYYY-MM-DD"
- sequences become a comma-joined value
"""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Iterable
from urllib.parse import quote, urlencode

from .errors import PolarValidationError
from .models.metrics import TimeInterval


def format_query_value(value: Any) -> str | None:
    """Render a single value; returns None when it should be skipped."""
    if value is None:
        return None
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (list, tuple, set, frozenset)):
        parts = [format_query_value(v) for v in value]
        joined = ",".join(p for p in parts if p)
        return joined or None
    text = str(value)
    return text if text.strip() else None


class QueryBuilder:
    """Base builder: accumulates parameters and checks date ranges."""

    # (start_key, end_key) pairs that must not be inverted
    date_ranges: tuple[tuple[str, str], ...] = (("created_after", "created_before"),)

    def __init__(self) -> None:
        self._params: dict[str, str] = {}
        self._raw: dict[str, Any] = {}

    def add(self, key: str, value: Any) -> "QueryBuilder":
        rendered = format_query_value(value)
        if rendered is None:
            return self
        self._params[key] = rendered
        self._raw[key] = value
        return self

    def extend(self, values: dict[str, Any]) -> "QueryBuilder":
        for key, value in values.items():
            self.add(key, value)
        return self

    def copy(self) -> "QueryBuilder":
        clone = type(self)()
        clone._params = dict(self._params)
        clone._raw = dict(self._raw)
        return clone

    def params(self) -> dict[str, str]:
        """Parameters as a dict, ready for httpx."""
        return dict(self._params)

    def values(self) -> dict[str, Any]:
        """Parameters as they were added, before rendering."""
        return dict(self._raw)

    def build(self) -> str:
        """Percent-encoded query string (without leading '?')."""
        return urlencode(self._params, quote_via=quote)

    def validate(self) -> None:
        """Raise PolarValidationError if the accumulated filters are inconsistent."""
        for start_key, end_key in self.date_ranges:
            start = _as_comparable(self._raw.get(start_key))
            end = _as_comparable(self._raw.get(end_key))
            if start is None or end is None:
                continue
            if start > end:
                raise PolarValidationError(
                    f"{start_key} must not be later than {end_key}",
                    status_code=None,
                    field_errors=[{"field": start_key, "message": "inverted date range", "type": "value_error"}],
                )

    def __len__(self) -> int:
        return len(self._params)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._params!r})"

    # Shared filters
    def created_after(self, value: datetime | None):
        return self.add("created_after", value)

    def created_before(self, value: datetime | None):
        return self.add("created_before", value)

    def organization_id(self, value: str | Iterable[str] | None):
        return self.add("organization_id", value)

    def search(self, value: str | None):
        return self.add("query", value)

    def sorting(self, value: str | Iterable[str] | None):
        """Sort keys, prefix with '-' for descending (e.g. "-created_at")."""
        return self.add("sorting", value)


def _as_comparable(value: Any) -> datetime | None:
    """Aware datetime for range checks; None for values that are not dates."""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    return None


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

class ProductsQueryBuilder(QueryBuilder):
    def is_archived(self, value: bool | None):
        return self.add("is_archived", value)

    def is_recurring(self, value: bool | None):
        return self.add("is_recurring", value)

    def benefit_id(self, value: str | Iterable[str] | None):
        return self.add("benefit_id", value)

    def product_type(self, value: str | None):
        return self.add("type", value)


class DiscountsQueryBuilder(QueryBuilder):
    date_ranges = (
        ("created_after", "created_before"),
        ("expires_after", "expires_before"),
    )

    def code(self, value: str | None):
        return self.add("code", value)

    def discount_type(self, value: str | None):
        return self.add("type", value)

    def is_active(self, value: bool | None):
        return self.add("is_active", value)

    def is_expired(self, value: bool | None):
        return self.add("is_expired", value)

    def expires_after(self, value: datetime | None):
        return self.add("expires_after", value)

    def expires_before(self, value: datetime | None):
        return self.add("expires_before", value)


class BenefitsQueryBuilder(QueryBuilder):
    def benefit_type(self, value: str | Iterable[str] | None):
        return self.add("type", value)

    def selectable(self, value: bool | None):
        return self.add("selectable", value)


class CustomFieldsQueryBuilder(QueryBuilder):
    def field_type(self, value: str | Iterable[str] | None):
        return self.add("type_filter", value)

    def slug(self, value: str | None):
        return self.add("slug", value)

    def required(self, value: bool | None):
        return self.add("required", value)


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------

class CheckoutsQueryBuilder(QueryBuilder):
    def status(self, value: str | Iterable[str] | None):
        return self.add("status", value)

    def customer_id(self, value: str | Iterable[str] | None):
        return self.add("customer_id", value)

    def product_id(self, value: str | Iterable[str] | None):
        return self.add("product_id", value)

    def success_url(self, value: str | None):
        return self.add("success_url", value)


class CheckoutLinksQueryBuilder(QueryBuilder):
    def product_id(self, value: str | Iterable[str] | None):
        return self.add("product_id", value)

    def enabled(self, value: bool | None):
        return self.add("enabled", value)

    def is_archived(self, value: bool | None):
        return self.add("is_archived", value)


# ---------------------------------------------------------------------------
# Customers and sales
# ---------------------------------------------------------------------------

class CustomersQueryBuilder(QueryBuilder):
    def email(self, value: str | None):
        return self.add("email", value)

    def external_id(self, value: str | None):
        return self.add("external_id", value)


class CustomerSeatsQueryBuilder(QueryBuilder):
    def subscription_id(self, value: str | None):
        return self.add("subscription_id", value)

    def status(self, value: str | Iterable[str] | None):
        return self.add("status", value)


class OrdersQueryBuilder(QueryBuilder):
    def status(self, value: str | Iterable[str] | None):
        return self.add("status", value)

    def customer_id(self, value: str | Iterable[str] | None):
        return self.add("customer_id", value)

    def product_id(self, value: str | Iterable[str] | None):
        return self.add("product_id", value)

    def discount_id(self, value: str | Iterable[str] | None):
        return self.add("discount_id", value)

    def checkout_id(self, value: str | Iterable[str] | None):
        return self.add("checkout_id", value)


class SubscriptionsQueryBuilder(QueryBuilder):
    def status(self, value: str | Iterable[str] | None):
        return self.add("status", value)

    def customer_id(self, value: str | Iterable[str] | None):
        return self.add("customer_id", value)

    def product_id(self, value: str | Iterable[str] | None):
        return self.add("product_id", value)

    def active(self, value: bool | None):
        return self.add("active", value)

    def canceled(self, value: bool | None):
        return self.add("canceled", value)

    def external_customer_id(self, value: str | None):
        return self.add("external_customer_id", value)


class RefundsQueryBuilder(QueryBuilder):
    def status(self, value: str | None):
        return self.add("status", value)

    def order_id(self, value: str | Iterable[str] | None):
        return self.add("order_id", value)

    def subscription_id(self, value: str | Iterable[str] | None):
        return self.add("subscription_id", value)

    def customer_id(self, value: str | Iterable[str] | None):
        return self.add("customer_id", value)

    def succeeded(self, value: bool | None):
        return self.add("succeeded", value)


class PaymentsQueryBuilder(QueryBuilder):
    def status(self, value: str | Iterable[str] | None):
        return self.add("status", value)

    def order_id(self, value: str | Iterable[str] | None):
        return self.add("order_id", value)

    def checkout_id(self, value: str | Iterable[str] | None):
        return self.add("checkout_id", value)

    def customer_id(self, value: str | Iterable[str] | None):
        return self.add("customer_id", value)

    def method(self, value: str | Iterable[str] | None):
        return self.add("method", value)

    def currency(self, value: str | None):
        return self.add("currency", value)


class LicenseKeysQueryBuilder(QueryBuilder):
    def status(self, value: str | None):
        return self.add("status", value)

    def customer_id(self, value: str | None):
        return self.add("customer_id", value)

    def benefit_id(self, value: str | Iterable[str] | None):
        return self.add("benefit_id", value)


# ---------------------------------------------------------------------------
# Platform
# ---------------------------------------------------------------------------

class FilesQueryBuilder(QueryBuilder):
    def ids(self, value: Iterable[str] | None):
        return self.add("ids", value)

    def name(self, value: str | None):
        return self.add("name", value)

    def mime_type(self, value: str | None):
        return self.add("mime_type", value)


class WebhookDeliveriesQueryBuilder(QueryBuilder):
    date_ranges = (
        ("created_after", "created_before"),
        ("start_timestamp", "end_timestamp"),
    )

    def endpoint_id(self, value: str | None):
        return self.add("endpoint_id", value)

    def event_type(self, value: str | Iterable[str] | None):
        return self.add("event_type", value)

    def succeeded(self, value: bool | None):
        return self.add("succeeded", value)

    def start_timestamp(self, value: datetime | None):
        return self.add("start_timestamp", value)

    def end_timestamp(self, value: datetime | None):
        return self.add("end_timestamp", value)


class OrganizationsQueryBuilder(QueryBuilder):
    def slug(self, value: str | None):
        return self.add("slug", value)

    def name(self, value: str | None):
        return self.add("name", value)


# ---------------------------------------------------------------------------
# Usage
# ---------------------------------------------------------------------------

class EventsQueryBuilder(QueryBuilder):
    date_ranges = (
        ("created_after", "created_before"),
        ("start_timestamp", "end_timestamp"),
    )

    def name(self, value: str | Iterable[str] | None):
        return self.add("name", value)

    def source(self, value: str | None):
        return self.add("source", value)

    def customer_id(self, value: str | Iterable[str] | None):
        return self.add("customer_id", value)

    def external_customer_id(self, value: str | Iterable[str] | None):
        return self.add("external_customer_id", value)

    def meter_id(self, value: str | None):
        return self.add("meter_id", value)

    def start_timestamp(self, value: datetime | None):
        return self.add("start_timestamp", value)

    def end_timestamp(self, value: datetime | None):
        return self.add("end_timestamp", value)


class CustomerMetersQueryBuilder(QueryBuilder):
    def customer_id(self, value: str | Iterable[str] | None):
        return self.add("customer_id", value)

    def external_customer_id(self, value: str | Iterable[str] | None):
        return self.add("external_customer_id", value)

    def meter_id(self, value: str | Iterable[str] | None):
        return self.add("meter_id", value)


class MetersQueryBuilder(QueryBuilder):
    def is_archived(self, value: bool | None):
        return self.add("is_archived", value)


class MeterQuantitiesQueryBuilder(QueryBuilder):
    date_ranges = (("start_timestamp", "end_timestamp"),)

    def start_timestamp(self, value: datetime | None):
        return self.add("start_timestamp", value)

    def end_timestamp(self, value: datetime | None):
        return self.add("end_timestamp", value)

    def interval(self, value: TimeInterval | str | None):
        return self.add("interval", value)

    def customer_id(self, value: str | Iterable[str] | None):
        return self.add("customer_id", value)

    def external_customer_id(self, value: str | Iterable[str] | None):
        return self.add("external_customer_id", value)

    def validate(self) -> None:
        super().validate()
        missing = [k for k in ("start_timestamp", "end_timestamp", "interval") if k not in self._params]
        if missing:
            raise PolarValidationError(
                f"Missing required parameters: {', '.join(missing)}",
                status_code=None,
                field_errors=[{"field": k, "message": "required", "type": "missing"} for k in missing],
            )


class MetricsQueryBuilder(QueryBuilder):
    """Filters for GET /v1/metrics; start_date, end_date and interval are required."""

    date_ranges = (("start_date", "end_date"),)

    def start_date(self, value: date | None):
        return self.add("start_date", value)

    def end_date(self, value: date | None):
        return self.add("end_date", value)

    def interval(self, value: TimeInterval | str | None):
        return self.add("interval", value)

    def timezone(self, value: str | None):
        return self.add("timezone", value)

    def product_id(self, value: str | Iterable[str] | None):
        return self.add("product_id", value)

    def customer_id(self, value: str | Iterable[str] | None):
        return self.add("customer_id", value)

    def billing_type(self, value: str | Iterable[str] | None):
        return self.add("billing_type", value)

    def validate(self) -> None:
        missing = [k for k in ("start_date", "end_date", "interval") if k not in self._params]
        if missing:
            raise PolarValidationError(
                f"Missing required parameters: {', '.join(missing)}",
                status_code=None,
                field_errors=[{"field": k, "message": "required", "type": "missing"} for k in missing],
            )
        interval = self._params["interval"]
        if interval not in {i.value for i in TimeInterval}:
            raise PolarValidationError(
                f"Invalid interval '{interval}'",
                status_code=None,
                field_errors=[{"field": "interval", "message": "invalid choice", "type": "enum"}],
            )
        super().validate()
