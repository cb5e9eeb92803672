"""
Typed errors for the Polar API.

Every failure the client can observe maps to exactly one class here:
- Validation (400/422 or client-side checks)
- Auth (401/403)
- Not found (404)
- Conflict (409)
- Rate limit (429)
- Server (5xx)
- Network / timeout (no response at all)
"""

import json
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any

import httpx


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class PolarAPIError(Exception):
    """Base exception for Polar API errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_type: str | None = None,
        response_body: str | None = None,
        details: Any = None,
        retry_after: float | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_type = error_type
        self.response_body = response_body
        self.details = details
        self.retry_after = retry_after

    def __str__(self) -> str:
        base = super().__str__()
        if self.status_code:
            return f"{base} (HTTP {self.status_code})"
        return base

    @property
    def is_validation_error(self) -> bool:
        return isinstance(self, PolarValidationError)

    @property
    def is_auth_error(self) -> bool:
        return isinstance(self, PolarAuthError)

    @property
    def is_not_found_error(self) -> bool:
        return isinstance(self, PolarNotFoundError)

    @property
    def is_conflict_error(self) -> bool:
        return isinstance(self, PolarConflictError)

    @property
    def is_rate_limit_error(self) -> bool:
        return isinstance(self, PolarRateLimitError)

    @property
    def is_server_error(self) -> bool:
        return isinstance(self, PolarServerError)

    @property
    def is_network_error(self) -> bool:
        return isinstance(self, PolarNetworkError)

    @property
    def is_timeout_error(self) -> bool:
        return isinstance(self, PolarTimeoutError)

    @property
    def is_client_error(self) -> bool:
        """True for any 4xx response, including client-side validation."""
        if self.status_code is None:
            return self.is_validation_error
        return 400 <= self.status_code < 500


class PolarValidationError(PolarAPIError):
    """Raised on 400/422 responses or when a request fails client-side checks."""

    def __init__(
        self,
        message: str,
        status_code: int | None = 422,
        field_errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, status_code=status_code, **kwargs)
        self.field_errors = field_errors or []


class PolarAuthError(PolarAPIError):
    """Raised when authentication fails (401/403)."""
    pass


class PolarNotFoundError(PolarAPIError):
    """Raised when resource not found (404)."""
    pass


class PolarConflictError(PolarAPIError):
    """Raised when the request conflicts with server state (409)."""
    pass


class PolarRateLimitError(PolarAPIError):
    """Raised when API rate limit is exceeded (429)."""
    pass


class PolarServerError(PolarAPIError):
    """Raised on server errors (5xx) - these are retryable."""
    pass


class PolarNetworkError(PolarAPIError):
    """Raised when no response was received (connection reset, DNS, ...)."""
    pass


class PolarTimeoutError(PolarNetworkError):
    """Raised when the request timed out."""
    pass


# ---------------------------------------------------------------------------
# Response parsing
# ---------------------------------------------------------------------------

DEFAULT_MESSAGES = {
    400: "The request was invalid or malformed.",
    401: "Authentication failed or was not provided.",
    403: "Access to the requested resource is forbidden.",
    404: "The requested resource was not found.",
    405: "The HTTP method is not allowed for this endpoint.",
    408: "The request timed out on the server.",
    409: "The request conflicts with the current state of the resource.",
    422: "The request failed validation.",
    429: "Rate limit exceeded. Please try again later.",
    500: "An internal server error occurred.",
    502: "The server received an invalid response.",
    503: "The service is temporarily unavailable.",
    504: "The gateway timed out.",
}

MESSAGE_FIELDS = ("detail", "message", "error", "description")
TYPE_FIELDS = ("error", "type", "code", "error_code", "error_type")
DETAIL_FIELDS = ("details", "data", "context", "validation_errors")


def parse_retry_after(value: str | None) -> float | None:
    """
    Parse a Retry-After header into seconds.

    Accepts both delta-seconds and HTTP-date forms. Dates in the past
    yield None.
    """
    if not value:
        return None

    value = value.strip()
    try:
        return max(0.0, float(value))
    except ValueError:
        pass

    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)

    delay = (when - datetime.now(timezone.utc)).total_seconds()
    return delay if delay > 0 else None


def _field_errors(detail: list[Any]) -> list[dict[str, Any]]:
    """Normalize FastAPI-style `detail` lists into {field, message, type} dicts."""
    errors = []
    for item in detail:
        if not isinstance(item, dict):
            errors.append({"field": None, "message": str(item), "type": None})
            continue
        loc = item.get("loc") or []
        # First element is the location kind ("body", "query"), not the field
        parts = [str(p) for p in loc if p not in ("body", "query", "path")]
        errors.append({
            "field": ".".join(parts) or None,
            "message": item.get("msg") or item.get("message") or "",
            "type": item.get("type"),
        })
    return errors


def _extract_message(body: dict[str, Any]) -> tuple[str | None, list[dict[str, Any]]]:
    for key in MESSAGE_FIELDS:
        value = body.get(key)
        if value is None:
            continue
        if isinstance(value, list):
            errors = _field_errors(value)
            message = "; ".join(
                f"{e['field']}: {e['message']}" if e["field"] else e["message"]
                for e in errors
            )
            return message or None, errors
        if isinstance(value, (str, int, float)):
            # `error` usually carries the type name; only use it as message
            # when nothing better exists
            if key == "error" and any(k in body for k in ("detail", "message")):
                continue
            return str(value), []
        return json.dumps(value), []

    errors_value = body.get("errors")
    if isinstance(errors_value, list):
        messages = [
            e["message"] for e in errors_value
            if isinstance(e, dict) and isinstance(e.get("message"), str)
        ]
        if messages:
            return "; ".join(messages), []

    return None, []


def _extract_type(body: dict[str, Any]) -> str | None:
    for key in TYPE_FIELDS:
        value = body.get(key)
        if isinstance(value, str):
            return value
    return None


def _extract_details(body: dict[str, Any]) -> Any:
    for key in DETAIL_FIELDS:
        if key in body:
            return body[key]
    return None


def _add_rate_limit_context(message: str, retry_after: float | None) -> str:
    if retry_after is not None:
        return f"{message} Retry after {retry_after:.0f} seconds."
    return f"{message} Consider reducing request frequency."


def error_from_response(response: httpx.Response) -> PolarAPIError:
    """
    Build the typed error for a non-2xx response.

    JSON bodies are mined for message/type/details; anything else falls
    back to a status-based default message.
    """
    status = response.status_code
    body_text = response.text[:2000]
    retry_after = parse_retry_after(response.headers.get("Retry-After"))

    message: str | None = None
    error_type: str | None = None
    details: Any = None
    field_errors: list[dict[str, Any]] = []

    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        message, field_errors = _extract_message(body)
        error_type = _extract_type(body)
        details = _extract_details(body)

    if not message:
        message = DEFAULT_MESSAGES.get(status, f"HTTP {status}: {body_text[:200]}")
        error_type = error_type or httpx.codes.get_reason_phrase(status) or None

    if status == 429:
        message = _add_rate_limit_context(message, retry_after)

    kwargs: dict[str, Any] = {
        "error_type": error_type,
        "response_body": body_text,
        "details": details,
        "retry_after": retry_after,
    }

    if status in (400, 422):
        return PolarValidationError(
            message, status_code=status, field_errors=field_errors, **kwargs
        )
    if status in (401, 403):
        return PolarAuthError(message, status_code=status, **kwargs)
    if status == 404:
        return PolarNotFoundError(message, status_code=status, **kwargs)
    if status == 409:
        return PolarConflictError(message, status_code=status, **kwargs)
    if status == 429:
        return PolarRateLimitError(message, status_code=status, **kwargs)
    if status >= 500:
        return PolarServerError(message, status_code=status, **kwargs)
    return PolarAPIError(message, status_code=status, **kwargs)
