"""
Pytest configuration and fixtures for Polar client tests.
"""

import pytest

from polar_client import PolarClient

API = "https://sandbox-api.polar.sh/v1"


@pytest.fixture
def api_url():
    """Base URL every sandbox request is sent to."""
    return API


@pytest.fixture
def no_sleep(monkeypatch):
    """Record sleeps instead of waiting (retries and rate limiter)."""
    slept = []
    monkeypatch.setattr("time.sleep", lambda seconds: slept.append(seconds))
    return slept


@pytest.fixture
def client():
    """Sandbox client with retries disabled and a generous rate limit."""
    with PolarClient(
        access_token="polar_oat_test_token",
        environment="sandbox",
        max_retries=0,
        requests_per_minute=10000,
    ) as c:
        yield c


@pytest.fixture
def retry_client(no_sleep):
    """Sandbox client that retries up to 3 times without real waiting."""
    with PolarClient(
        access_token="polar_oat_test_token",
        environment="sandbox",
        max_retries=3,
        initial_retry_delay=0.5,
        max_retry_delay=4,
        jitter_factor=0,
        requests_per_minute=10000,
    ) as c:
        yield c


def _page_of(*items, total_count=None, max_page=1):
    return {
        "items": list(items),
        "pagination": {
            "total_count": len(items) if total_count is None else total_count,
            "max_page": max_page,
        },
    }


@pytest.fixture
def page_of():
    """Build a Polar list envelope: page_of(item, ..., max_page=n)."""
    return _page_of


@pytest.fixture
def sample_customer_data():
    """Sample customer from the Polar API."""
    return {
        "id": "cus_7b2a",
        "email": "jane@example.com",
        "name": "Jane Doe",
        "external_id": "user_42",
        "email_verified": True,
        "billing_address": {
            "line1": "1 Market St",
            "postal_code": "94105",
            "city": "San Francisco",
            "state": "CA",
            "country": "US",
        },
        "organization_id": "org_1",
        "metadata": {"plan": "pro"},
        "created_at": "2024-01-15T10:30:00Z",
        "modified_at": "2024-01-16T14:20:00Z",
        "deleted_at": None,
    }


@pytest.fixture
def sample_product_data():
    """Sample recurring product with one active and one archived price."""
    return {
        "id": "prod_1",
        "name": "Pro Plan",
        "description": "Everything in Basic, plus more",
        "is_recurring": True,
        "is_archived": False,
        "recurring_interval": "month",
        "organization_id": "org_1",
        "prices": [
            {
                "id": "price_1",
                "amount_type": "fixed",
                "price_amount": 2000,
                "price_currency": "usd",
                "is_archived": False,
            },
            {
                "id": "price_0",
                "amount_type": "fixed",
                "price_amount": 1500,
                "price_currency": "usd",
                "is_archived": True,
            },
        ],
        "benefits": [{"id": "ben_1", "type": "license_keys", "description": "License"}],
        "medias": [],
        "metadata": {},
        "created_at": "2024-01-01T00:00:00Z",
        "some_new_field": "ignored",
    }


@pytest.fixture
def sample_checkout_data():
    """Sample open checkout session."""
    return {
        "id": "co_1",
        "status": "open",
        "client_secret": "polar_c_secret",
        "url": "https://sandbox.polar.sh/checkout/polar_c_secret",
        "expires_at": "2024-02-01T00:00:00Z",
        "amount": 2000,
        "total_amount": 2000,
        "currency": "usd",
        "product_id": "prod_1",
        "product_price_id": "price_1",
        "customer_email": "jane@example.com",
        "metadata": {},
    }


@pytest.fixture
def sample_order_data(sample_customer_data):
    """Sample paid order, partially refunded."""
    return {
        "id": "ord_1",
        "status": "partially_refunded",
        "paid": True,
        "subtotal_amount": 2000,
        "net_amount": 2000,
        "tax_amount": 0,
        "total_amount": 2000,
        "refunded_amount": 500,
        "currency": "usd",
        "billing_reason": "purchase",
        "customer_id": "cus_7b2a",
        "product_id": "prod_1",
        "customer": sample_customer_data,
        "items": [{"id": "item_1", "label": "Pro Plan", "amount": 2000}],
        "created_at": "2024-01-20T12:00:00Z",
    }


@pytest.fixture
def sample_subscription_data():
    return {
        "id": "sub_1",
        "status": "active",
        "amount": 2000,
        "currency": "usd",
        "recurring_interval": "month",
        "current_period_start": "2024-01-01T00:00:00Z",
        "current_period_end": "2024-02-01T00:00:00Z",
        "cancel_at_period_end": False,
        "customer_id": "cus_7b2a",
        "product_id": "prod_1",
    }


@pytest.fixture
def sample_license_key_data():
    return {
        "id": "lk_1",
        "organization_id": "org_1",
        "customer_id": "cus_7b2a",
        "benefit_id": "ben_1",
        "key": "POLAR-1234-5678",
        "display_key": "****-5678",
        "status": "granted",
        "limit_activations": 3,
        "usage": 0,
        "validations": 2,
        "activations": [],
    }


@pytest.fixture
def sample_organization_data():
    return {
        "id": "org_1",
        "name": "Acme Software",
        "slug": "acme",
        "created_at": "2023-06-01T09:00:00Z",
    }
