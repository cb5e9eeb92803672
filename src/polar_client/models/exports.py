"""Bulk export requests and the download descriptor the API returns."""

from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar

from pydantic import model_validator

from .base import PolarModel, PolarRequest


class ExportFormat(str, Enum):
    CSV = "csv"
    JSON = "json"
    EXCEL = "excel"


class ExportResponse(PolarModel):
    """Where to download a generated export."""

    export_url: str
    export_id: str | None = None
    format: str | None = None
    size: int | None = None
    record_count: int | None = None


def _utc(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class _DateRangeExport(PolarRequest):
    # (start, end) field names checked for inversion
    date_range: ClassVar[tuple[str, str]] = ("created_after", "created_before")

    @model_validator(mode="after")
    def check_range(self):
        start_key, end_key = self.date_range
        start, end = _utc(getattr(self, start_key)), _utc(getattr(self, end_key))
        if start is not None and end is not None and start > end:
            raise ValueError(f"{start_key} must not be later than {end_key}")
        return self


class CustomerExportRequest(_DateRangeExport):
    date_range: ClassVar[tuple[str, str]] = ("start_date", "end_date")

    format: ExportFormat = ExportFormat.CSV
    email: str | None = None
    external_id: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None


class SubscriptionExportRequest(_DateRangeExport):
    format: ExportFormat = ExportFormat.CSV
    product_id: str | None = None
    customer_id: str | None = None
    status: str | None = None
    created_after: datetime | None = None
    created_before: datetime | None = None
