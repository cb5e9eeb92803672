"""
Helpers for incoming webhook requests.

Signature headers look like ``t=1700000000,v1=<hex>`` where the hex value is
the HMAC-SHA256 of ``"{t}.{payload}"`` keyed with the endpoint secret.
"""

import hashlib
import hmac
import json
import time
from typing import Any

import structlog
from pydantic import ValidationError

from .errors import PolarValidationError
from .models.webhooks import WebhookEvent

logger = structlog.get_logger(__name__)

DEFAULT_TOLERANCE_SECONDS = 300


def _parse_signature_header(header: str) -> tuple[int, list[str]] | None:
    timestamp: int | None = None
    signatures: list[str] = []
    for part in header.split(","):
        key, sep, value = part.strip().partition("=")
        if not sep:
            continue
        if key == "t":
            try:
                timestamp = int(value)
            except ValueError:
                return None
        elif key == "v1" and value:
            signatures.append(value)
    if timestamp is None or not signatures:
        return None
    return timestamp, signatures


def compute_signature(payload: str | bytes, secret: str, timestamp: int) -> str:
    """Hex HMAC-SHA256 of ``"{timestamp}.{payload}"``."""
    if isinstance(payload, bytes):
        payload = payload.decode("utf-8")
    message = f"{timestamp}.{payload}".encode("utf-8")
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


def verify_signature(
    payload: str | bytes,
    signature_header: str | None,
    secret: str,
    tolerance: int = DEFAULT_TOLERANCE_SECONDS,
    now: float | None = None,
) -> bool:
    """
    Check a webhook signature header against the raw request body.

    Returns False for malformed headers, timestamps outside `tolerance`
    seconds of `now`, or mismatched signatures. Never raises.

    Args:
        payload: Raw request body, exactly as received
        signature_header: Value of the signature header
        secret: Endpoint secret
        tolerance: Maximum age (and clock skew) in seconds; 0 disables the check
        now: Current unix time, for tests
    """
    if not signature_header or not secret:
        return False

    parsed = _parse_signature_header(signature_header)
    if parsed is None:
        logger.debug("Malformed webhook signature header")
        return False
    timestamp, signatures = parsed

    current = time.time() if now is None else now
    if tolerance and abs(current - timestamp) > tolerance:
        logger.debug("Webhook timestamp outside tolerance", timestamp=timestamp, tolerance=tolerance)
        return False

    try:
        expected = compute_signature(payload, secret, timestamp)
    except UnicodeDecodeError:
        return False

    return any(hmac.compare_digest(expected, candidate) for candidate in signatures)


def _load(payload: str | bytes) -> Any:
    try:
        return json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


def get_event_type(payload: str | bytes) -> str | None:
    """The event `type` field, or None if the body is not a JSON object."""
    data = _load(payload)
    if isinstance(data, dict) and isinstance(data.get("type"), str):
        return data["type"]
    return None


def get_event_id(payload: str | bytes) -> str | None:
    data = _load(payload)
    if isinstance(data, dict) and data.get("id") is not None:
        return str(data["id"])
    return None


def parse_event(payload: str | bytes) -> WebhookEvent:
    """
    Parse a webhook body into a WebhookEvent.

    Raises:
        PolarValidationError: body is not JSON or lacks a `type`
    """
    data = _load(payload)
    if not isinstance(data, dict):
        raise PolarValidationError("Webhook payload is not a JSON object", status_code=None)
    try:
        return WebhookEvent.model_validate(data)
    except ValidationError as e:
        raise PolarValidationError(
            "Invalid webhook payload",
            status_code=None,
            field_errors=[
                {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"], "type": err["type"]}
                for err in e.errors()
            ],
        ) from e
