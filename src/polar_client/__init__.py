"""
Polar API Client - Production Grade

A Python SDK for the Polar commerce platform REST API: checkouts,
customers, products, subscriptions, usage events, license keys and more.

Features:
- Typed pydantic models for every resource
- Result values instead of exceptions at the public boundary
- Token bucket rate limiting
- Retry with exponential backoff, jitter and Retry-After
- Page walking for every list endpoint
- Webhook signature verification

Quick Start:
    pip install polar-client
    export POLAR_ACCESS_TOKEN=polar_oat_...
    polar-client test        # Verify connection

    from polar_client import PolarClient

    with PolarClient.from_env() as client:
        result = client.customers.get("cus_123")
        if result:
            print(result.value.email)
"""

__version__ = "1.0.0"

from polar_client.client import PolarClient
from polar_client.config import (
    PRODUCTION_BASE_URL,
    SANDBOX_BASE_URL,
    PolarClientOptions,
    PolarEnvironment,
)
from polar_client.errors import (
    PolarAPIError,
    PolarAuthError,
    PolarConflictError,
    PolarNetworkError,
    PolarNotFoundError,
    PolarRateLimitError,
    PolarServerError,
    PolarTimeoutError,
    PolarValidationError,
)
from polar_client.pagination import Page, PaginationInfo, iter_values
from polar_client.query import QueryBuilder
from polar_client.rate_limiter import TokenBucketRateLimiter
from polar_client.result import PolarResult
from polar_client.webhooks import parse_event, verify_signature

__all__ = [
    "__version__",

    # API client
    "PolarClient",
    "PolarClientOptions",
    "PolarEnvironment",
    "PRODUCTION_BASE_URL",
    "SANDBOX_BASE_URL",

    # Results and errors
    "PolarResult",
    "PolarAPIError",
    "PolarValidationError",
    "PolarAuthError",
    "PolarNotFoundError",
    "PolarConflictError",
    "PolarRateLimitError",
    "PolarServerError",
    "PolarNetworkError",
    "PolarTimeoutError",

    # Pagination and filters
    "Page",
    "PaginationInfo",
    "iter_values",
    "QueryBuilder",

    # Rate limiting
    "TokenBucketRateLimiter",

    # Webhooks
    "verify_signature",
    "parse_event",
]
