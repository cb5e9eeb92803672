"""Shared base classes for Polar request and response models."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class PolarModel(BaseModel):
    """
    Base for response models.

    Unknown fields are ignored so that additions to the API do not break
    parsing.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert model to a JSON-compatible dictionary."""
        return self.model_dump(mode="json", exclude_none=True)


class PolarRequest(BaseModel):
    """
    Base for request payloads.

    Unset optional fields are omitted from the body so PATCH requests only
    touch what the caller provided.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="allow",
    )

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True, by_alias=True)
