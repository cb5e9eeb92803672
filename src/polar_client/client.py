"""
Polar API Client

Synchronous HTTP client with:
- Bearer token auth against production or sandbox
- Token bucket rate limiting shared by all resources
- Retry with exponential backoff and jitter for transient errors
- Retry-After support for 429 responses
- Connection pooling
- Request/response logging
"""

import logging
import random
import threading
import time
from typing import Any

import httpx
import structlog
from tenacity import (
    RetryCallState,
    before_sleep_log,
    retry,
    retry_if_exception,
    stop_after_attempt,
)

from .config import PolarClientOptions, PolarEnvironment
from .errors import (
    PolarAPIError,
    PolarNetworkError,
    PolarRateLimitError,
    PolarTimeoutError,
    error_from_response,
)
from .rate_limiter import TokenBucketRateLimiter
from .resources import (
    BenefitsResource,
    CheckoutLinksResource,
    CheckoutsResource,
    CustomFieldsResource,
    CustomerMetersResource,
    CustomerPortalResource,
    CustomerSeatsResource,
    CustomerSessionsResource,
    CustomersResource,
    DiscountsResource,
    EventsResource,
    FilesResource,
    LicenseKeysResource,
    MetersResource,
    MetricsResource,
    OAuth2Resource,
    OrdersResource,
    OrganizationsResource,
    PaymentsResource,
    ProductsResource,
    RefundsResource,
    SubscriptionsResource,
    WebhooksResource,
)

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Retry Configuration
# ---------------------------------------------------------------------------

IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "OPTIONS", "PUT", "DELETE"})
RETRYABLE_STATUS_CODES = frozenset({408, 500, 502, 503, 504})

RETRY_REASONS = {
    429: "Rate limit exceeded",
    500: "Internal server error",
    502: "Bad gateway",
    503: "Service unavailable",
    504: "Gateway timeout",
    408: "Request timeout",
}


def is_retryable_error(exception: BaseException, method: str = "GET") -> bool:
    """
    Determine if an exception should trigger a retry.

    429s are retried for every method since the server rejected the request
    before acting on it. Everything else transient is only retried when
    repeating the request is safe.
    """
    if isinstance(exception, PolarRateLimitError):
        return True
    if method.upper() not in IDEMPOTENT_METHODS:
        return False
    if isinstance(exception, PolarNetworkError):
        return True
    if isinstance(exception, PolarAPIError):
        return exception.status_code in RETRYABLE_STATUS_CODES
    return False


def retry_reason(exception: BaseException | None) -> str:
    """Human-readable reason for a retry, used in logs."""
    if isinstance(exception, PolarTimeoutError):
        return "Request timeout"
    if isinstance(exception, PolarNetworkError):
        return "Network error"
    status = getattr(exception, "status_code", None)
    if status is None:
        return "Unknown error"
    return RETRY_REASONS.get(status, f"HTTP {status} error")


class BackoffWithJitter:
    """
    Tenacity wait strategy.

    Exponential delay `initial * 2 ** (attempt - 1)` capped at `maximum`,
    plus up to `jitter_factor` of that delay at random. A rate limit error
    carrying Retry-After overrides the computed delay.
    """

    def __init__(
        self,
        initial: float = 1.0,
        maximum: float = 30.0,
        jitter_factor: float = 0.1,
        respect_retry_after: bool = True,
    ):
        self.initial = initial
        self.maximum = maximum
        self.jitter_factor = jitter_factor
        self.respect_retry_after = respect_retry_after

    def compute(self, attempt: int) -> float:
        delay = min(self.initial * (2 ** (attempt - 1)), self.maximum)
        if self.jitter_factor:
            delay += random.uniform(0, delay * self.jitter_factor)
        return delay

    def __call__(self, retry_state: RetryCallState) -> float:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        if (
            self.respect_retry_after
            and isinstance(exc, PolarRateLimitError)
            and exc.retry_after is not None
        ):
            return min(exc.retry_after, self.maximum)
        return self.compute(retry_state.attempt_number)


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class PolarClient:
    """
    Polar API client.

    Resource clients hang off the instance (`client.customers`,
    `client.checkouts`, ...) and every operation returns a PolarResult.

    Example:
        client = PolarClient(access_token="polar_oat_...", environment="sandbox")

        with client:
            for result in client.products.list_all(is_archived=False):
                print(result.unwrap().name)
    """

    def __init__(
        self,
        access_token: str | None = None,
        *,
        options: PolarClientOptions | None = None,
        http_client: httpx.Client | None = None,
        **kwargs: Any,
    ):
        """
        Initialize the client.

        Args:
            access_token: Organization access token
            options: Full configuration; mutually exclusive with kwargs
            http_client: Pre-built httpx client (tests, custom transports)
            **kwargs: Any PolarClientOptions field (environment, timeout, ...)
        """
        if options is None:
            if access_token is None:
                raise ValueError("access_token or options is required")
            options = PolarClientOptions(access_token=access_token, **kwargs)
        elif access_token is not None or kwargs:
            raise ValueError("pass either options or individual settings, not both")

        self.options = options
        self.base_url = options.resolved_base_url
        self.rate_limiter = TokenBucketRateLimiter(
            requests_per_minute=options.requests_per_minute
        )
        self.backoff = BackoffWithJitter(
            initial=options.initial_retry_delay,
            maximum=options.max_retry_delay,
            jitter_factor=options.jitter_factor,
            respect_retry_after=options.respect_retry_after,
        )
        self._client = http_client
        self._owns_client = http_client is None

        # Request counters for observability
        self._stats_lock = threading.Lock()
        self._request_count = 0
        self._error_count = 0
        self._retry_count = 0

        self._log = logger.bind(base_url=self.base_url)

        self.checkouts = CheckoutsResource(self)
        self.checkout_links = CheckoutLinksResource(self)
        self.customers = CustomersResource(self)
        self.customer_sessions = CustomerSessionsResource(self)
        self.customer_meters = CustomerMetersResource(self)
        self.customer_seats = CustomerSeatsResource(self)
        self.products = ProductsResource(self)
        self.discounts = DiscountsResource(self)
        self.webhooks = WebhooksResource(self)
        self.events = EventsResource(self)
        self.organizations = OrganizationsResource(self)
        self.license_keys = LicenseKeysResource(self)
        self.metrics = MetricsResource(self)
        self.files = FilesResource(self)
        self.oauth2 = OAuth2Resource(self)
        self.meters = MetersResource(self)
        self.orders = OrdersResource(self)
        self.subscriptions = SubscriptionsResource(self)
        self.benefits = BenefitsResource(self)
        self.refunds = RefundsResource(self)
        self.payments = PaymentsResource(self)
        self.custom_fields = CustomFieldsResource(self)

    def customer_portal(self, customer_session_token: str) -> CustomerPortalResource:
        """Portal endpoints on behalf of the customer owning `customer_session_token`."""
        return CustomerPortalResource(self, customer_session_token)

    @classmethod
    def from_env(cls, **overrides: Any) -> "PolarClient":
        """Build a client from POLAR_* environment variables."""
        return cls(options=PolarClientOptions.from_env(**overrides))

    @property
    def environment(self) -> PolarEnvironment:
        return self.options.environment

    def __enter__(self) -> "PolarClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Clean up HTTP client."""
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None

    def _build_http_client(self) -> httpx.Client:
        return httpx.Client(
            base_url=self.options.api_url,
            timeout=self.options.timeout,
            limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
            headers={
                "Authorization": f"Bearer {self.options.access_token}",
                "Accept": "application/json",
                "User-Agent": self.options.user_agent,
            },
        )

    @property
    def client(self) -> httpx.Client:
        """Get HTTP client, creating if needed."""
        if self._client is None:
            self._client = self._build_http_client()
            self._owns_client = True
        return self._client

    def _count(self, field: str) -> int:
        with self._stats_lock:
            value = getattr(self, field) + 1
            setattr(self, field, value)
            return value

    @staticmethod
    def _clean_params(params: dict[str, Any] | None) -> dict[str, Any]:
        """Drop None values and render booleans the way the API expects."""
        cleaned: dict[str, Any] = {}
        for key, value in (params or {}).items():
            if value is None:
                continue
            if isinstance(value, bool):
                cleaned[key] = "true" if value else "false"
            else:
                cleaned[key] = value
        return cleaned

    def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
        data: dict[str, Any] | None = None,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """
        Make a rate-limited, retrying request to the Polar API.

        Returns the decoded JSON body (None for empty bodies) or raises a
        PolarAPIError subclass.

        Args:
            method: HTTP method
            path: Path relative to /v1/ (e.g. "customers/cus_123")
            params: Query parameters
            json: Request body
            data: Form-encoded request body (OAuth2 token endpoints)
            timeout: Per-call timeout override in seconds
            headers: Extra headers for this call; they override client defaults
        """
        method = method.upper()
        path = path.lstrip("/")
        request_params = self._clean_params(params)
        log = self._log.bind(path=path, method=method)

        def _before_sleep(retry_state: RetryCallState) -> None:
            self._count("_retry_count")
            exc = retry_state.outcome.exception() if retry_state.outcome else None
            log.info(
                "Retrying request",
                attempt=retry_state.attempt_number,
                reason=retry_reason(exc),
                delay_seconds=round(retry_state.next_action.sleep, 2)
                if retry_state.next_action else None,
            )
            before_sleep_log(log, logging.DEBUG)(retry_state)

        @retry(
            retry=retry_if_exception(lambda e: is_retryable_error(e, method)),
            stop=stop_after_attempt(self.options.max_retries + 1),
            wait=self.backoff,
            before_sleep=_before_sleep,
            reraise=True,
        )
        def _do_request() -> Any:
            wait_limit = timeout if timeout is not None else self.options.timeout
            if not self.rate_limiter.acquire(timeout=wait_limit):
                self._count("_error_count")
                log.warning("Rate limiter wait timed out", timeout_seconds=wait_limit)
                raise PolarTimeoutError(f"Timed out waiting for rate limiter: {method} {path}")

            request_id = self._count("_request_count")
            log.debug("API request", request_id=request_id)

            start_time = time.monotonic()
            try:
                response = self.client.request(
                    method,
                    path,
                    params=request_params or None,
                    json=json,
                    data=data,
                    headers=headers,
                    timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT,
                )
            except httpx.TimeoutException as e:
                self._count("_error_count")
                raise PolarTimeoutError(f"Request timed out: {method} {path}") from e
            except httpx.TransportError as e:
                self._count("_error_count")
                raise PolarNetworkError(f"Network error: {e}") from e
            elapsed = time.monotonic() - start_time

            log.debug(
                "API response",
                request_id=request_id,
                status_code=response.status_code,
                elapsed_ms=round(elapsed * 1000),
            )

            if response.status_code >= 400:
                self._count("_error_count")
                raise error_from_response(response)

            if response.status_code == 204 or not response.content:
                return None

            try:
                return response.json()
            except ValueError as e:
                raise PolarAPIError(
                    f"Invalid JSON response: {e}",
                    status_code=response.status_code,
                    response_body=response.text[:500],
                ) from e

        return _do_request()

    def get_stats(self) -> dict[str, Any]:
        """Get client statistics for monitoring."""
        with self._stats_lock:
            request_count = self._request_count
            error_count = self._error_count
            retry_count = self._retry_count
        return {
            "base_url": self.base_url,
            "environment": self.options.environment.value,
            "request_count": request_count,
            "error_count": error_count,
            "retry_count": retry_count,
            "error_rate": round(error_count / max(1, request_count), 4),
            "rate_limiter": self.rate_limiter.get_stats(),
        }

    def health_check(self) -> dict[str, Any]:
        """Verify API connectivity and credentials."""
        result = self.organizations.list(limit=1)
        if result.is_success:
            page = result.value
            names = [org.name for org in page.items]
            return {
                "status": "healthy",
                "organization": names[0] if names else "unknown",
                "base_url": self.base_url,
            }
        if result.is_auth_error:
            return {"status": "auth_error", "message": "Invalid access token"}
        return {"status": "error", "message": str(result.error)}
