"""
Tests for resource operations: URL, method, body and result shape.
"""

import json
from datetime import date, datetime
from urllib.parse import parse_qs

import pytest

from polar_client.errors import PolarValidationError
from polar_client.models import (
    CheckoutCreate,
    CustomerCreate,
    EventsIngestResult,
    LicenseKeyValidate,
    Metrics,
    ProductUpdate,
)
from polar_client.pagination import DEFAULT_PAGE_SIZE
from polar_client.query import CustomersQueryBuilder, OrdersQueryBuilder, QueryBuilder
from polar_client.resources.events import MAX_INGEST_BATCH


def body_of(request):
    return json.loads(request.content)


def form_of(request):
    return {k: v[0] for k, v in parse_qs(request.content.decode()).items()}


def params_of(request):
    return dict(request.url.params)


class TestListing:
    """Tests for list and list_all shared behavior."""

    def test_list_defaults(self, client, httpx_mock, page_of, sample_customer_data):
        httpx_mock.add_response(method="GET", json=page_of(sample_customer_data, total_count=1))

        result = client.customers.list()

        request = httpx_mock.get_request()
        assert request.url.path == "/v1/customers/"
        assert params_of(request) == {"page": "1", "limit": str(DEFAULT_PAGE_SIZE)}
        page = result.unwrap()
        assert page.items[0].email == "jane@example.com"
        assert page.total_count == 1

    def test_list_with_filters_and_query(self, client, httpx_mock, page_of):
        httpx_mock.add_response(method="GET", json=page_of())

        query = OrdersQueryBuilder().customer_id("cus_1")
        client.orders.list(page=2, limit=50, query=query, product_id=["prod_1", "prod_2"])

        assert params_of(httpx_mock.get_request()) == {
            "page": "2",
            "limit": "50",
            "customer_id": "cus_1",
            "product_id": "prod_1,prod_2",
        }
        # The caller's builder is not modified
        assert query.params() == {"customer_id": "cus_1"}

    def test_limit_clamped(self, client, httpx_mock, page_of):
        httpx_mock.add_response(method="GET", json=page_of())

        client.products.list(limit=500)

        assert params_of(httpx_mock.get_request())["limit"] == "100"

    @pytest.mark.parametrize("page,limit", [(0, 10), (1, 0), (-1, -1)])
    def test_non_positive_page_or_limit(self, client, page, limit):
        result = client.customers.list(page=page, limit=limit)
        assert result.is_validation_error

    def test_inverted_dates_fail_without_request(self, client):
        query = CustomersQueryBuilder().created_after(datetime(2024, 2, 1)).created_before(datetime(2024, 1, 1))
        result = client.customers.list(query=query)
        assert result.is_validation_error

    def test_list_all_walks_pages(self, client, httpx_mock, page_of):
        httpx_mock.add_response(json=page_of({"id": "p1", "name": "A"}, {"id": "p2", "name": "B"}, max_page=2))
        httpx_mock.add_response(json=page_of({"id": "p3", "name": "C"}, max_page=2))

        names = [r.unwrap().name for r in client.products.list_all(is_archived=False)]

        assert names == ["A", "B", "C"]
        first, second = httpx_mock.get_requests()
        assert params_of(first) == {"page": "1", "limit": "100", "is_archived": "false"}
        assert params_of(second)["page"] == "2"

    def test_list_all_stops_on_error(self, client, httpx_mock, page_of):
        httpx_mock.add_response(json=page_of({"id": "p1", "name": "A"}, max_page=3))
        httpx_mock.add_response(status_code=500, json={"detail": "boom"})

        results = list(client.products.list_all())

        assert results[0].is_success
        assert results[1].is_server_error
        assert len(results) == 2

    def test_unexpected_response_shape(self, client, httpx_mock):
        httpx_mock.add_response(json={"items": [{"email": "missing-id@example.com"}]})

        result = client.customers.list()

        assert result.is_failure
        assert result.error.error_type == "response_validation"


class TestPayloads:
    """Tests for client-side payload validation."""

    def test_accepts_model(self, client, httpx_mock, api_url, sample_customer_data):
        httpx_mock.add_response(method="POST", url=f"{api_url}/customers/", json=sample_customer_data)

        result = client.customers.create(CustomerCreate(email="jane@example.com", external_id="user_42"))

        assert result.value.id == "cus_7b2a"
        assert body_of(httpx_mock.get_request()) == {"email": "jane@example.com", "external_id": "user_42"}

    def test_accepts_mapping(self, client, httpx_mock, api_url, sample_customer_data):
        httpx_mock.add_response(method="POST", url=f"{api_url}/customers/", json=sample_customer_data)

        client.customers.create({"email": "jane@example.com", "metadata": {"plan": "pro"}})

        assert body_of(httpx_mock.get_request()) == {"email": "jane@example.com", "metadata": {"plan": "pro"}}

    def test_invalid_payload_sends_nothing(self, client):
        result = client.customers.create({"name": "No email"})

        assert result.is_validation_error
        assert result.error.status_code is None
        assert result.error.field_errors[0]["field"] == "email"

    def test_blank_identifier_sends_nothing(self, client):
        result = client.customers.get("  ")
        assert result.is_validation_error
        assert "customer_id" in result.error.message

    def test_identifier_is_escaped(self, client, httpx_mock, sample_customer_data):
        httpx_mock.add_response(json=sample_customer_data)

        client.customers.get_by_external_id("user/42")

        assert httpx_mock.get_request().url.raw_path == b"/v1/customers/external/user%2F42"


class TestCustomers:
    """Tests for customers and customer sessions."""

    @pytest.mark.parametrize(
        "call,method,path",
        [
            (lambda c: c.customers.get("cus_1"), "GET", "/v1/customers/cus_1"),
            (lambda c: c.customers.get_by_external_id("u1"), "GET", "/v1/customers/external/u1"),
            (lambda c: c.customers.update("cus_1", {"name": "J"}), "PATCH", "/v1/customers/cus_1"),
            (lambda c: c.customers.update_by_external_id("u1", {"name": "J"}), "PATCH", "/v1/customers/external/u1"),
            (lambda c: c.customers.get_state("cus_1"), "GET", "/v1/customers/cus_1/state"),
            (lambda c: c.customers.get_state_by_external_id("u1"), "GET", "/v1/customers/external/u1/state"),
        ],
    )
    def test_routes(self, client, httpx_mock, sample_customer_data, call, method, path):
        httpx_mock.add_response(method=method, json=sample_customer_data)

        assert call(client).is_success

        request = httpx_mock.get_request()
        assert request.method == method
        assert request.url.path == path

    def test_delete(self, client, httpx_mock, api_url):
        httpx_mock.add_response(method="DELETE", url=f"{api_url}/customers/cus_1", status_code=204)
        httpx_mock.add_response(method="DELETE", url=f"{api_url}/customers/external/u1", status_code=204)

        assert client.customers.delete("cus_1").value is None
        assert client.customers.delete_by_external_id("u1").is_success

    def test_not_found(self, client, httpx_mock):
        httpx_mock.add_response(status_code=404, json={"error": "ResourceNotFound", "detail": "Not found"})

        result = client.customers.get("cus_missing")

        assert result.is_not_found_error
        assert result.error.error_type == "ResourceNotFound"

    def test_state(self, client, httpx_mock, sample_customer_data):
        httpx_mock.add_response(json={
            **sample_customer_data,
            "active_subscriptions": [{"id": "sub_1", "status": "active", "amount": 2000}],
            "granted_benefits": [{"id": "g_1", "benefit_id": "ben_1", "benefit_type": "license_keys"}],
            "active_meters": [{"meter_id": "m_1", "consumed_units": 10, "credited_units": 100, "balance": 90}],
        })

        state = client.customers.get_state("cus_7b2a").unwrap()

        assert state.active_subscriptions[0].amount == 2000
        assert state.active_meters[0].balance == 90

    def test_session_create(self, client, httpx_mock, api_url):
        httpx_mock.add_response(
            method="POST",
            url=f"{api_url}/customer-sessions/",
            json={"id": "cs_1", "token": "polar_cst_x", "customer_id": "cus_1"},
        )

        result = client.customer_sessions.create({"external_customer_id": "u1", "return_url": "https://x.io"})

        assert result.value.token == "polar_cst_x"
        assert body_of(httpx_mock.get_request()) == {"external_customer_id": "u1", "return_url": "https://x.io"}

    def test_session_requires_identifier(self, client):
        assert client.customer_sessions.create({}).is_validation_error

    def test_session_introspect(self, client, httpx_mock, api_url):
        httpx_mock.add_response(
            method="POST",
            url=f"{api_url}/customer-sessions/introspect",
            json={"id": "cs_1", "token": "polar_cst_x", "customer_id": "cus_1"},
        )

        client.customer_sessions.introspect("polar_cst_x")

        assert body_of(httpx_mock.get_request()) == {"token": "polar_cst_x"}

    def test_balance(self, client, httpx_mock, api_url):
        httpx_mock.add_response(
            method="GET",
            url=f"{api_url}/customers/cus_1/balance",
            json={"customer_id": "cus_1", "balance": -1250, "currency": "usd"},
        )

        balance = client.customers.get_balance("cus_1").unwrap()

        assert balance.balance == -1250
        assert balance.currency == "usd"

    def test_export(self, client, httpx_mock, api_url):
        httpx_mock.add_response(
            method="POST",
            url=f"{api_url}/customers/export",
            json={"export_url": "https://files.polar.sh/exp_1.csv", "export_id": "exp_1", "record_count": 42},
        )

        result = client.customers.export({"email": "jane@example.com", "start_date": datetime(2024, 1, 1)})

        assert result.value.record_count == 42
        assert body_of(httpx_mock.get_request()) == {
            "format": "csv", "email": "jane@example.com", "start_date": "2024-01-01T00:00:00",
        }

    def test_export_inverted_range(self, client):
        result = client.customers.export({"start_date": datetime(2024, 2, 1), "end_date": datetime(2024, 1, 1)})
        assert result.is_validation_error


class TestCheckouts:
    """Tests for checkouts and checkout links."""

    def test_create(self, client, httpx_mock, api_url, sample_checkout_data):
        httpx_mock.add_response(method="POST", url=f"{api_url}/checkouts/", json=sample_checkout_data)

        result = client.checkouts.create(CheckoutCreate(products=["prod_1"], customer_email="jane@example.com"))

        assert result.value.is_open
        assert body_of(httpx_mock.get_request()) == {"products": ["prod_1"], "customer_email": "jane@example.com"}

    def test_create_requires_products(self, client):
        assert client.checkouts.create({"products": []}).is_validation_error

    def test_client_routes(self, client, httpx_mock, api_url, sample_checkout_data):
        base = f"{api_url}/checkouts/client/polar_c_secret"
        httpx_mock.add_response(method="GET", url=base, json=sample_checkout_data)
        httpx_mock.add_response(method="PATCH", url=base, json=sample_checkout_data)
        httpx_mock.add_response(method="POST", url=f"{base}/confirm", json={**sample_checkout_data, "status": "confirmed"})

        assert client.checkouts.get_from_client("polar_c_secret").is_success
        assert client.checkouts.update_from_client("polar_c_secret", {"discount_code": "LAUNCH"}).is_success
        confirmed = client.checkouts.confirm_from_client("polar_c_secret").unwrap()

        assert confirmed.status == "confirmed"
        get, patch, confirm = httpx_mock.get_requests()
        assert body_of(patch) == {"discount_code": "LAUNCH"}
        assert body_of(confirm) == {}

    def test_update(self, client, httpx_mock, api_url, sample_checkout_data):
        httpx_mock.add_response(method="PATCH", url=f"{api_url}/checkouts/co_1", json=sample_checkout_data)
        client.checkouts.update("co_1", {"metadata": {"ref": "abc"}})
        assert body_of(httpx_mock.get_request()) == {"metadata": {"ref": "abc"}}

    def test_links(self, client, httpx_mock, api_url):
        link = {"id": "cl_1", "url": "https://buy.polar.sh/cl_1", "label": "Pro"}
        httpx_mock.add_response(method="POST", url=f"{api_url}/checkout-links/", json=link)
        httpx_mock.add_response(method="GET", url=f"{api_url}/checkout-links/cl_1", json=link)
        httpx_mock.add_response(method="PATCH", url=f"{api_url}/checkout-links/cl_1", json=link)
        httpx_mock.add_response(method="DELETE", url=f"{api_url}/checkout-links/cl_1", status_code=204)

        assert client.checkout_links.create({"products": ["prod_1"], "label": "Pro"}).value.label == "Pro"
        assert client.checkout_links.get("cl_1").is_success
        assert client.checkout_links.update("cl_1", {"label": "Pro"}).is_success
        assert client.checkout_links.delete("cl_1").is_success


class TestCatalog:
    """Tests for products, benefits, discounts and custom fields."""

    def test_product_archive(self, client, httpx_mock, api_url, sample_product_data):
        httpx_mock.add_response(
            method="PATCH", url=f"{api_url}/products/prod_1", json={**sample_product_data, "is_archived": True}
        )

        product = client.products.archive("prod_1").unwrap()

        assert product.is_archived is True
        assert body_of(httpx_mock.get_request()) == {"is_archived": True}

    def test_product_create_and_update(self, client, httpx_mock, api_url, sample_product_data):
        httpx_mock.add_response(method="POST", url=f"{api_url}/products/", json=sample_product_data)
        httpx_mock.add_response(method="PATCH", url=f"{api_url}/products/prod_1", json=sample_product_data)

        client.products.create({
            "name": "Pro Plan",
            "recurring_interval": "month",
            "prices": [{"amount_type": "fixed", "price_amount": 2000}],
        })
        client.products.update("prod_1", ProductUpdate(name="Pro Plan v2"))

        create, update = httpx_mock.get_requests()
        assert body_of(create)["prices"][0]["price_amount"] == 2000
        assert body_of(update) == {"name": "Pro Plan v2"}

    def test_benefits(self, client, httpx_mock, api_url, page_of):
        benefit = {"id": "ben_1", "type": "custom", "description": "Priority support"}
        httpx_mock.add_response(method="POST", url=f"{api_url}/benefits/", json=benefit)
        httpx_mock.add_response(method="PATCH", url=f"{api_url}/benefits/ben_1", json=benefit)
        httpx_mock.add_response(method="DELETE", url=f"{api_url}/benefits/ben_1", status_code=204)
        httpx_mock.add_response(method="GET", json=page_of({"id": "g_1", "benefit_id": "ben_1", "is_granted": True}))

        assert client.benefits.create({"type": "custom", "description": "Priority support"}).is_success
        assert client.benefits.update("ben_1", {"type": "custom", "description": "Support"}).is_success
        assert client.benefits.delete("ben_1").is_success
        grants = client.benefits.list_grants("ben_1", is_granted=True).unwrap()

        assert grants.items[0].is_granted
        assert httpx_mock.get_requests()[-1].url.path == "/v1/benefits/ben_1/grants"

    def test_benefit_description_length(self, client):
        assert client.benefits.create({"type": "custom", "description": "x"}).is_validation_error

    def test_list_all_grants_blank_id(self, client):
        results = list(client.benefits.list_all_grants(""))
        assert len(results) == 1
        assert results[0].is_validation_error

    def test_discounts(self, client, httpx_mock, api_url):
        discount = {"id": "d_1", "name": "Launch", "type": "percentage", "basis_points": 2000}
        httpx_mock.add_response(method="POST", url=f"{api_url}/discounts/", json=discount)
        httpx_mock.add_response(method="GET", url=f"{api_url}/discounts/d_1", json=discount)
        httpx_mock.add_response(method="PATCH", url=f"{api_url}/discounts/d_1", json=discount)
        httpx_mock.add_response(method="DELETE", url=f"{api_url}/discounts/d_1", status_code=204)

        created = client.discounts.create(
            {"name": "Launch", "type": "percentage", "basis_points": 2000, "code": "LAUNCH"}
        ).unwrap()
        assert created.percentage == 20.0
        assert client.discounts.get("d_1").is_success
        assert client.discounts.update("d_1", {"max_redemptions": 100}).is_success
        assert client.discounts.delete("d_1").is_success

        assert body_of(httpx_mock.get_requests()[0]) == {
            "name": "Launch",
            "type": "percentage",
            "duration": "once",
            "basis_points": 2000,
            "code": "LAUNCH",
        }

    def test_custom_fields(self, client, httpx_mock, api_url):
        field = {"id": "cf_1", "type": "text", "slug": "company", "name": "Company"}
        httpx_mock.add_response(method="POST", url=f"{api_url}/custom-fields/", json=field)
        httpx_mock.add_response(method="GET", url=f"{api_url}/custom-fields/cf_1", json=field)
        httpx_mock.add_response(method="PATCH", url=f"{api_url}/custom-fields/cf_1", json=field)
        httpx_mock.add_response(method="DELETE", url=f"{api_url}/custom-fields/cf_1", status_code=204)

        assert client.custom_fields.create({"type": "text", "slug": "company", "name": "Company"}).is_success
        assert client.custom_fields.get("cf_1").value.slug == "company"
        assert client.custom_fields.update("cf_1", {"type": "text", "name": "Company name"}).is_success
        assert client.custom_fields.delete("cf_1").is_success

    def test_custom_field_slug_pattern(self, client):
        result = client.custom_fields.create({"type": "text", "slug": "Company Name", "name": "Company"})
        assert result.is_validation_error

    def test_product_create_price(self, client, httpx_mock, api_url):
        httpx_mock.add_response(
            method="POST",
            url=f"{api_url}/products/prod_1/prices",
            json={"id": "price_2", "amount_type": "fixed", "price_amount": 1500, "product_id": "prod_1"},
        )

        price = client.products.create_price("prod_1", {"price_amount": 1500}).unwrap()

        assert price.price_amount == 1500
        assert body_of(httpx_mock.get_request()) == {
            "amount_type": "fixed", "price_amount": 1500, "price_currency": "usd",
        }

    def test_product_exports(self, client, httpx_mock):
        export = {"export_url": "https://files.polar.sh/exp.json", "format": "json", "size": 2048}
        httpx_mock.add_response(method="GET", json=export)
        httpx_mock.add_response(method="GET", json=export)

        assert client.products.export("json").value.size == 2048
        assert client.products.export_prices("prod_1").is_success

        products, prices = httpx_mock.get_requests()
        assert products.url.path == "/v1/products/export"
        assert params_of(products) == {"format": "json"}
        assert prices.url.path == "/v1/products/prod_1/prices/export"
        assert params_of(prices) == {"format": "csv"}

    def test_export_unknown_format(self, client):
        result = client.products.export("pdf")

        assert result.is_validation_error
        assert result.error.field_errors[0]["field"] == "format"

    def test_benefit_grant_and_revoke(self, client, httpx_mock, api_url):
        grant = {"id": "g_1", "benefit_id": "ben_1", "customer_id": "cus_1", "is_granted": True}
        httpx_mock.add_response(method="POST", url=f"{api_url}/benefits/ben_1/grant", json=grant)
        httpx_mock.add_response(
            method="DELETE",
            url=f"{api_url}/benefits/ben_1/grants/g_1",
            json={**grant, "is_granted": False, "is_revoked": True},
        )

        assert client.benefits.grant("ben_1", {"customer_id": "cus_1"}).value.is_granted
        revoked = client.benefits.revoke_grant("ben_1", "g_1").unwrap()

        assert revoked.is_revoked
        assert body_of(httpx_mock.get_requests()[0]) == {"customer_id": "cus_1"}

    def test_benefit_grant_requires_customer(self, client):
        assert client.benefits.grant("ben_1", {}).is_validation_error
        assert client.benefits.revoke_grant("ben_1", "").is_validation_error

    def test_benefit_exports(self, client, httpx_mock):
        export = {"export_url": "https://files.polar.sh/exp.csv"}
        httpx_mock.add_response(method="GET", json=export)
        httpx_mock.add_response(method="GET", json=export)

        client.benefits.export(benefit_type="license_keys", active=True)
        client.benefits.export_grants("ben_1", customer_id="cus_1")

        benefits, grants = httpx_mock.get_requests()
        assert benefits.url.path == "/v1/benefits/export"
        assert params_of(benefits) == {"format": "csv", "type": "license_keys", "active": "true"}
        assert grants.url.path == "/v1/benefits/ben_1/grants/export"
        assert params_of(grants) == {"format": "csv", "customer_id": "cus_1"}


class TestSales:
    """Tests for orders, subscriptions, refunds and payments."""

    def test_order_routes(self, client, httpx_mock, api_url, sample_order_data):
        httpx_mock.add_response(method="GET", url=f"{api_url}/orders/ord_1", json=sample_order_data)
        httpx_mock.add_response(method="PATCH", url=f"{api_url}/orders/ord_1", json=sample_order_data)
        httpx_mock.add_response(method="POST", url=f"{api_url}/orders/ord_1/invoice", status_code=202)
        httpx_mock.add_response(
            method="GET", url=f"{api_url}/orders/ord_1/invoice", json={"url": "https://files.polar.sh/inv.pdf"}
        )

        assert client.orders.get("ord_1").value.refundable_amount == 1500
        assert client.orders.update("ord_1", {"billing_name": "Acme Inc"}).is_success
        assert client.orders.generate_invoice("ord_1").value is None
        assert client.orders.get_invoice("ord_1").value.url.endswith("inv.pdf")

    def test_subscription_routes(self, client, httpx_mock, api_url, sample_subscription_data):
        canceled = {**sample_subscription_data, "status": "canceled"}
        httpx_mock.add_response(method="GET", url=f"{api_url}/subscriptions/sub_1", json=sample_subscription_data)
        httpx_mock.add_response(method="PATCH", url=f"{api_url}/subscriptions/sub_1", json=sample_subscription_data)
        httpx_mock.add_response(method="DELETE", url=f"{api_url}/subscriptions/sub_1", json=canceled)

        assert client.subscriptions.get("sub_1").value.is_active
        assert client.subscriptions.update("sub_1", {"cancel_at_period_end": True}).is_success
        revoked = client.subscriptions.revoke("sub_1").unwrap()

        assert revoked.is_active is False
        assert body_of(httpx_mock.get_requests()[1]) == {"cancel_at_period_end": True}

    def test_subscriptions_list_filters(self, client, httpx_mock, page_of, sample_subscription_data):
        httpx_mock.add_response(json=page_of(sample_subscription_data))

        client.subscriptions.list(active=True, customer_id="cus_1")

        assert params_of(httpx_mock.get_request()) == {
            "page": "1", "limit": "10", "active": "true", "customer_id": "cus_1",
        }

    def test_refund_create(self, client, httpx_mock, api_url):
        httpx_mock.add_response(
            method="POST",
            url=f"{api_url}/refunds/",
            json={"id": "re_1", "status": "succeeded", "amount": 500, "order_id": "ord_1"},
        )

        refund = client.refunds.create({"order_id": "ord_1", "reason": "customer_request", "amount": 500}).unwrap()

        assert refund.amount == 500
        assert body_of(httpx_mock.get_request()) == {
            "order_id": "ord_1", "reason": "customer_request", "amount": 500,
        }

    def test_refund_invalid_reason(self, client):
        assert client.refunds.create({"order_id": "ord_1", "reason": "bored", "amount": 500}).is_validation_error

    def test_payments(self, client, httpx_mock, api_url, page_of):
        payment = {"id": "pay_1", "status": "succeeded", "amount": 2000, "method": "card"}
        httpx_mock.add_response(method="GET", url=f"{api_url}/payments/pay_1", json=payment)
        httpx_mock.add_response(method="GET", json=page_of(payment))

        assert client.payments.get("pay_1").value.succeeded
        assert len(client.payments.list(method="card").unwrap()) == 1

    def test_refund_get(self, client, httpx_mock, api_url):
        httpx_mock.add_response(
            method="GET",
            url=f"{api_url}/refunds/re_1",
            json={"id": "re_1", "status": "succeeded", "amount": 500, "order_id": "ord_1"},
        )

        assert client.refunds.get("re_1").value.order_id == "ord_1"

    def test_subscription_create(self, client, httpx_mock, api_url, sample_subscription_data):
        httpx_mock.add_response(method="POST", url=f"{api_url}/subscriptions/", json=sample_subscription_data)

        result = client.subscriptions.create({"product_id": "prod_1", "external_customer_id": "u1"})

        assert result.value.id == sample_subscription_data["id"]
        assert body_of(httpx_mock.get_request()) == {"product_id": "prod_1", "external_customer_id": "u1"}

    @pytest.mark.parametrize(
        "data",
        [
            {"product_id": "prod_1"},
            {"customer_id": "cus_1"},
            {"product_id": "prod_1", "customer_id": "cus_1", "trial_period_days": 0},
        ],
    )
    def test_subscription_create_invalid(self, client, data):
        assert client.subscriptions.create(data).is_validation_error

    def test_subscription_export(self, client, httpx_mock, api_url):
        httpx_mock.add_response(
            method="POST", url=f"{api_url}/subscriptions/export", json={"export_url": "https://files.polar.sh/s.csv"}
        )

        client.subscriptions.export({"format": "json", "status": "active"})

        assert body_of(httpx_mock.get_request()) == {"format": "json", "status": "active"}


class TestUsage:
    """Tests for events, meters and metrics."""

    def test_ingest(self, client, httpx_mock, api_url):
        httpx_mock.add_response(method="POST", url=f"{api_url}/events/ingest", json={"inserted": 2})

        result = client.events.ingest([
            {"name": "api_call", "external_customer_id": "u1", "metadata": {"tokens": 120}},
            {"name": "api_call", "customer_id": "cus_1", "timestamp": datetime(2024, 1, 1, 12)},
        ])

        assert result.value == EventsIngestResult(inserted=2)
        events = body_of(httpx_mock.get_request())["events"]
        assert events[0] == {"name": "api_call", "external_customer_id": "u1", "metadata": {"tokens": 120}}
        assert events[1]["timestamp"] == "2024-01-01T12:00:00"

    def test_ingest_rejects_empty_and_invalid(self, client):
        assert client.events.ingest([]).is_validation_error
        assert client.events.ingest([{"name": "api_call"}]).is_validation_error

    def test_ingest_batch_limit(self, client):
        events = [{"name": "e", "customer_id": "cus_1"}] * (MAX_INGEST_BATCH + 1)
        assert client.events.ingest(events).is_validation_error

    def test_event_names_and_get(self, client, httpx_mock, api_url, page_of):
        httpx_mock.add_response(method="GET", json=page_of({"name": "api_call", "occurrences": 12}))
        httpx_mock.add_response(
            method="GET", url=f"{api_url}/events/ev_1", json={"id": "ev_1", "name": "api_call", "source": "user"}
        )

        names = client.events.list_names().unwrap()
        event = client.events.get("ev_1").unwrap()

        assert names.items[0].occurrences == 12
        assert httpx_mock.get_requests()[0].url.path == "/v1/events/names"
        assert event.name == "api_call"

    def test_meters(self, client, httpx_mock, api_url):
        meter = {
            "id": "m_1",
            "name": "API calls",
            "filter": {"conjunction": "and", "clauses": [{"property": "name", "operator": "eq", "value": "api_call"}]},
            "aggregation": {"func": "count"},
        }
        httpx_mock.add_response(method="POST", url=f"{api_url}/meters/", json=meter)
        httpx_mock.add_response(method="GET", url=f"{api_url}/meters/m_1", json=meter)
        httpx_mock.add_response(method="PATCH", url=f"{api_url}/meters/m_1", json=meter)

        created = client.meters.create({
            "name": "API calls",
            "filter": meter["filter"],
            "aggregation": {"func": "count"},
        }).unwrap()
        assert created.aggregation.func == "count"
        assert client.meters.get("m_1").is_success
        assert client.meters.update("m_1", {"name": "API requests"}).is_success

    def test_meter_quantities(self, client, httpx_mock):
        httpx_mock.add_response(json={
            "quantities": [{"timestamp": "2024-01-01T00:00:00Z", "quantity": 12}],
            "total": 12,
        })

        result = client.meters.get_quantities(
            "m_1",
            start_timestamp=datetime(2024, 1, 1),
            end_timestamp=datetime(2024, 1, 31),
            interval="day",
            customer_id="cus_1",
        )

        assert result.value.total == 12
        request = httpx_mock.get_request()
        assert request.url.path == "/v1/meters/m_1/quantities"
        assert params_of(request) == {
            "start_timestamp": "2024-01-01T00:00:00Z",
            "end_timestamp": "2024-01-31T00:00:00Z",
            "interval": "day",
            "customer_id": "cus_1",
        }

    def test_meter_quantities_inverted_range(self, client):
        result = client.meters.get_quantities(
            "m_1", start_timestamp=datetime(2024, 2, 1), end_timestamp=datetime(2024, 1, 1)
        )
        assert result.is_validation_error

    def test_metrics(self, client, httpx_mock):
        httpx_mock.add_response(json={
            "periods": [{"timestamp": "2024-01-01T00:00:00Z", "revenue": 2000}],
            "totals": {"revenue": 2000},
            "metrics": {"revenue": {"slug": "revenue", "display_name": "Revenue", "type": "currency"}},
        })

        result = client.metrics.get(date(2024, 1, 1), date(2024, 1, 31), "month", product_id=["prod_1"])

        metrics = result.unwrap()
        assert isinstance(metrics, Metrics)
        assert metrics.totals["revenue"] == 2000
        assert params_of(httpx_mock.get_request()) == {
            "start_date": "2024-01-01",
            "end_date": "2024-01-31",
            "interval": "month",
            "product_id": "prod_1",
        }

    def test_metrics_requires_parameters(self, client):
        result = client.metrics.get(start_date=date(2024, 1, 1))
        assert result.is_validation_error
        assert "end_date" in result.error.message

    def test_metrics_invalid_interval(self, client):
        assert client.metrics.get(date(2024, 1, 1), date(2024, 1, 31), "fortnight").is_validation_error

    @pytest.mark.parametrize("body", [b"", b"[1, 2]", b"\"revenue\"", b'{"periods": [1]}'])
    def test_metrics_unexpected_body(self, client, httpx_mock, body):
        httpx_mock.add_response(content=body)

        result = client.metrics.get(date(2024, 1, 1), date(2024, 1, 31), "month")

        assert result.is_failure
        assert result.error.error_type == "response_validation"

    def test_metrics_plain_query_builder_still_validated(self, client):
        result = client.metrics.get(query=QueryBuilder())

        assert result.is_validation_error
        assert "start_date" in result.error.message

    def test_metrics_plain_query_builder_values_kept(self, client, httpx_mock):
        httpx_mock.add_response(json={"periods": [], "totals": {}, "metrics": {}})
        query = QueryBuilder().extend({"start_date": date(2024, 1, 1), "end_date": date(2024, 1, 31)})

        assert client.metrics.get(interval="week", query=query).is_success
        assert params_of(httpx_mock.get_request())["interval"] == "week"

    def test_metric_limits(self, client, httpx_mock, api_url):
        httpx_mock.add_response(
            url=f"{api_url}/metrics/limits",
            json={"min_date": "2023-01-01", "intervals": {"day": {"max_days": 366}}},
        )

        limits = client.metrics.get_limits().unwrap()

        assert limits.min_date == date(2023, 1, 1)
        assert limits.intervals["day"].max_days == 366

    def test_meter_delete(self, client, httpx_mock, api_url):
        httpx_mock.add_response(method="DELETE", url=f"{api_url}/meters/m_1", status_code=204)
        assert client.meters.delete("m_1").value is None

    def test_customer_meters(self, client, httpx_mock, api_url, page_of):
        customer_meter = {
            "id": "cm_1",
            "customer_id": "cus_1",
            "meter_id": "m_1",
            "consumed_units": 25,
            "credited_units": 100,
            "balance": 75,
            "meter": {"id": "m_1", "name": "API calls"},
        }
        httpx_mock.add_response(method="GET", url=f"{api_url}/customer-meters/cm_1", json=customer_meter)
        httpx_mock.add_response(method="GET", json=page_of(customer_meter))

        assert client.customer_meters.get("cm_1").value.meter.name == "API calls"
        page = client.customer_meters.list(customer_id="cus_1", meter_id="m_1").unwrap()

        assert page.items[0].balance == 75
        request = httpx_mock.get_requests()[1]
        assert request.url.path == "/v1/customer-meters/"
        assert params_of(request) == {"page": "1", "limit": str(DEFAULT_PAGE_SIZE), "customer_id": "cus_1", "meter_id": "m_1"}

    def test_customer_meters_list_all(self, client, httpx_mock, page_of):
        httpx_mock.add_response(json=page_of({"id": "cm_1"}, {"id": "cm_2"}, total_count=2))

        ids = [r.unwrap().id for r in client.customer_meters.list_all()]

        assert ids == ["cm_1", "cm_2"]


class TestLicensing:
    """Tests for license keys."""

    def test_routes(self, client, httpx_mock, api_url, sample_license_key_data):
        activation = {"id": "act_1", "license_key_id": "lk_1", "label": "laptop"}
        httpx_mock.add_response(method="GET", url=f"{api_url}/license-keys/lk_1", json=sample_license_key_data)
        httpx_mock.add_response(method="PATCH", url=f"{api_url}/license-keys/lk_1", json=sample_license_key_data)
        httpx_mock.add_response(
            method="GET", url=f"{api_url}/license-keys/lk_1/activations/act_1", json=activation
        )

        assert client.license_keys.get("lk_1").value.is_granted
        assert client.license_keys.update("lk_1", {"limit_activations": 5}).is_success
        assert client.license_keys.get_activation("lk_1", "act_1").value.label == "laptop"

    def test_validate_activate_deactivate(self, client, httpx_mock, api_url, sample_license_key_data):
        activation = {"id": "act_1", "license_key_id": "lk_1", "label": "laptop"}
        httpx_mock.add_response(
            method="POST", url=f"{api_url}/license-keys/validate", json={**sample_license_key_data, "activation": activation}
        )
        httpx_mock.add_response(method="POST", url=f"{api_url}/license-keys/activate", json=activation)
        httpx_mock.add_response(method="POST", url=f"{api_url}/license-keys/deactivate", status_code=204)

        validated = client.license_keys.validate(
            LicenseKeyValidate(key="POLAR-1234-5678", organization_id="org_1", activation_id="act_1")
        ).unwrap()
        activated = client.license_keys.activate(
            {"key": "POLAR-1234-5678", "organization_id": "org_1", "label": "laptop"}
        ).unwrap()
        deactivated = client.license_keys.deactivate(
            {"key": "POLAR-1234-5678", "organization_id": "org_1", "activation_id": "act_1"}
        )

        assert validated.activation.id == "act_1"
        assert activated.label == "laptop"
        assert deactivated.is_success and deactivated.value is None
        assert body_of(httpx_mock.get_requests()[0]) == {
            "key": "POLAR-1234-5678", "organization_id": "org_1", "activation_id": "act_1",
        }

    def test_activate_requires_label(self, client):
        result = client.license_keys.activate({"key": "POLAR-1234", "organization_id": "org_1"})
        assert result.is_validation_error

    def test_activation_blank_ids(self, client):
        result = client.license_keys.get_activation("lk_1", "")
        assert result.is_validation_error
        assert "activation_id" in result.error.message


class TestPlatform:
    """Tests for organizations, files, webhooks and OAuth2."""

    def test_organizations(self, client, httpx_mock, api_url, sample_organization_data):
        httpx_mock.add_response(method="GET", url=f"{api_url}/organizations/org_1", json=sample_organization_data)
        httpx_mock.add_response(method="PATCH", url=f"{api_url}/organizations/org_1", json=sample_organization_data)

        assert client.organizations.get("org_1").value.slug == "acme"
        assert client.organizations.update("org_1", {"website": "https://acme.dev"}).is_success
        assert body_of(httpx_mock.get_requests()[1]) == {"website": "https://acme.dev"}

    def test_files(self, client, httpx_mock, api_url):
        file = {"id": "f_1", "name": "manual.pdf", "mime_type": "application/pdf", "size": 1024}
        httpx_mock.add_response(method="POST", url=f"{api_url}/files/", json=file)
        httpx_mock.add_response(method="POST", url=f"{api_url}/files/f_1/uploaded", json={**file, "is_uploaded": True})
        httpx_mock.add_response(method="PATCH", url=f"{api_url}/files/f_1", json=file)
        httpx_mock.add_response(method="DELETE", url=f"{api_url}/files/f_1", status_code=204)

        assert client.files.create({
            "name": "manual.pdf",
            "mime_type": "application/pdf",
            "size": 1024,
            "service": "downloadable",
            "upload": {"parts": [{"number": 1, "chunk_start": 0, "chunk_end": 1023}]},
        }).is_success
        uploaded = client.files.complete_upload(
            "f_1", {"id": "upload_1", "path": "org/manual.pdf", "parts": [{"number": 1, "checksum_etag": "abc"}]}
        ).unwrap()
        assert uploaded.is_uploaded
        assert client.files.update("f_1", {"name": "guide.pdf"}).is_success
        assert client.files.delete("f_1").is_success

        create_body = body_of(httpx_mock.get_requests()[0])
        assert create_body["upload"] == {"parts": [{"number": 1, "chunk_start": 0, "chunk_end": 1023}]}

    def test_organization_create_and_delete(self, client, httpx_mock, api_url, sample_organization_data):
        httpx_mock.add_response(method="POST", url=f"{api_url}/organizations/", json=sample_organization_data)
        httpx_mock.add_response(method="DELETE", url=f"{api_url}/organizations/org_1", status_code=204)

        org = client.organizations.create({"name": "Acme Software", "slug": "acme"}).unwrap()

        assert org.id == "org_1"
        assert client.organizations.delete("org_1").is_success
        assert body_of(httpx_mock.get_requests()[0]) == {"name": "Acme Software", "slug": "acme"}

    @pytest.mark.parametrize("slug", ["ac", "Acme", "-acme", "acme software"])
    def test_organization_create_invalid_slug(self, client, slug):
        result = client.organizations.create({"name": "Acme Software", "slug": slug})

        assert result.is_validation_error

    def test_file_get(self, client, httpx_mock, api_url):
        httpx_mock.add_response(
            method="GET",
            url=f"{api_url}/files/f_1",
            json={"id": "f_1", "name": "manual.pdf", "mime_type": "application/pdf", "size": 1024},
        )

        assert client.files.get("f_1").unwrap().size == 1024
        assert client.files.get(" ").is_validation_error

    def test_webhook_endpoints(self, client, httpx_mock, api_url, page_of):
        endpoint = {"id": "we_1", "url": "https://example.com/hooks", "events": ["order.created"]}
        httpx_mock.add_response(method="GET", json=page_of(endpoint))
        httpx_mock.add_response(method="POST", url=f"{api_url}/webhooks/endpoints", json=endpoint)
        httpx_mock.add_response(method="GET", url=f"{api_url}/webhooks/endpoints/we_1", json=endpoint)
        httpx_mock.add_response(method="PATCH", url=f"{api_url}/webhooks/endpoints/we_1", json=endpoint)
        httpx_mock.add_response(
            method="PATCH", url=f"{api_url}/webhooks/endpoints/we_1/secret", json={**endpoint, "secret": "whsec_new"}
        )
        httpx_mock.add_response(method="DELETE", url=f"{api_url}/webhooks/endpoints/we_1", status_code=204)

        assert len(client.webhooks.list_endpoints().unwrap()) == 1
        assert client.webhooks.create_endpoint(
            {"url": "https://example.com/hooks", "events": ["order.created"]}
        ).is_success
        assert client.webhooks.get_endpoint("we_1").is_success
        assert client.webhooks.update_endpoint("we_1", {"events": ["order.paid"]}).is_success
        assert client.webhooks.reset_endpoint_secret("we_1").value.secret == "whsec_new"
        assert client.webhooks.delete_endpoint("we_1").is_success

        assert httpx_mock.get_requests()[0].url.path == "/v1/webhooks/endpoints"
        assert body_of(httpx_mock.get_requests()[1]) == {
            "url": "https://example.com/hooks", "events": ["order.created"], "format": "raw",
        }

    def test_webhook_endpoint_requires_https(self, client):
        result = client.webhooks.create_endpoint({"url": "http://example.com", "events": ["order.created"]})
        assert result.is_validation_error

    def test_webhook_deliveries_and_redeliver(self, client, httpx_mock, api_url, page_of):
        delivery = {
            "id": "wd_1",
            "succeeded": False,
            "http_code": 500,
            "webhook_event": {"id": "evt_1", "type": "order.created", "payload": {}},
        }
        httpx_mock.add_response(method="GET", json=page_of(delivery))
        httpx_mock.add_response(method="POST", url=f"{api_url}/webhooks/events/evt_1/redeliver", status_code=202)

        page = client.webhooks.list_deliveries(endpoint_id="we_1", succeeded=False).unwrap()
        assert page.items[0].webhook_event.type == "order.created"
        assert client.webhooks.redeliver("evt_1").is_success

        assert params_of(httpx_mock.get_requests()[0]) == {
            "page": "1", "limit": "10", "endpoint_id": "we_1", "succeeded": "false",
        }

    def test_oauth2_clients(self, client, httpx_mock, api_url):
        oauth_client = {"client_id": "polar_ci_1", "client_name": "My App", "redirect_uris": ["https://app.io/cb"]}
        httpx_mock.add_response(method="POST", url=f"{api_url}/oauth2/register", json=oauth_client)
        httpx_mock.add_response(method="GET", url=f"{api_url}/oauth2/register/polar_ci_1", json=oauth_client)
        httpx_mock.add_response(method="PUT", url=f"{api_url}/oauth2/register/polar_ci_1", json=oauth_client)
        httpx_mock.add_response(method="DELETE", url=f"{api_url}/oauth2/register/polar_ci_1", status_code=204)

        assert client.oauth2.create_client(
            {"client_name": "My App", "redirect_uris": ["https://app.io/cb"]}
        ).is_success
        assert client.oauth2.get_client("polar_ci_1").value.client_name == "My App"
        assert client.oauth2.update_client("polar_ci_1", {"client_name": "My App 2"}).is_success
        assert client.oauth2.delete_client("polar_ci_1").is_success

        assert body_of(httpx_mock.get_requests()[2]) == {"client_id": "polar_ci_1", "client_name": "My App 2"}

    def test_oauth2_token_is_form_encoded(self, client, httpx_mock, api_url):
        httpx_mock.add_response(
            method="POST",
            url=f"{api_url}/oauth2/token",
            json={"access_token": "polar_at_x", "token_type": "Bearer", "expires_in": 3600},
        )

        token = client.oauth2.request_token({
            "grant_type": "authorization_code",
            "client_id": "polar_ci_1",
            "client_secret": "secret",
            "code": "abc",
            "redirect_uri": "https://app.io/cb",
        }).unwrap()

        request = httpx_mock.get_request()
        assert token.access_token == "polar_at_x"
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert form_of(request) == {
            "grant_type": "authorization_code",
            "client_id": "polar_ci_1",
            "client_secret": "secret",
            "code": "abc",
            "redirect_uri": "https://app.io/cb",
        }

    @pytest.mark.parametrize(
        "grant_type,missing",
        [("authorization_code", "code"), ("refresh_token", "refresh_token")],
    )
    def test_oauth2_token_grant_requirements(self, client, grant_type, missing):
        result = client.oauth2.request_token(
            {"grant_type": grant_type, "client_id": "polar_ci_1", "client_secret": "secret"}
        )
        assert result.is_validation_error
        assert missing in result.error.message

    def test_oauth2_revoke_and_introspect(self, client, httpx_mock, api_url):
        httpx_mock.add_response(method="POST", url=f"{api_url}/oauth2/revoke", json={})
        httpx_mock.add_response(
            method="POST", url=f"{api_url}/oauth2/introspect", json={"active": True, "client_id": "polar_ci_1"}
        )

        assert client.oauth2.revoke_token("polar_at_x", "polar_ci_1", "secret", token_type_hint="access_token").is_success
        introspection = client.oauth2.introspect_token("polar_at_x", "polar_ci_1", "secret").unwrap()

        assert introspection.active is True
        revoke, introspect = httpx_mock.get_requests()
        assert form_of(revoke)["token_type_hint"] == "access_token"
        assert "token_type_hint" not in form_of(introspect)

    def test_oauth2_userinfo_keeps_extra_claims(self, client, httpx_mock, api_url):
        httpx_mock.add_response(
            method="GET",
            url=f"{api_url}/oauth2/userinfo",
            json={"sub": "user_1", "email": "jane@example.com", "organizations": ["org_1"]},
        )

        info = client.oauth2.get_user_info().unwrap()

        assert info.sub == "user_1"
        assert info.extra == {"organizations": ["org_1"]}

    @pytest.mark.parametrize("body", [b"", b"[]", b"null"])
    def test_oauth2_userinfo_unexpected_body(self, client, httpx_mock, body):
        httpx_mock.add_response(method="GET", content=body)

        result = client.oauth2.get_user_info()

        assert result.error.error_type == "response_validation"

    def test_validation_error_from_server(self, client, httpx_mock):
        httpx_mock.add_response(
            status_code=422,
            json={"detail": [{"loc": ["body", "email"], "msg": "already exists", "type": "value_error"}]},
        )

        result = client.customers.create({"email": "jane@example.com"})

        assert result.is_validation_error
        assert result.error.status_code == 422
        assert result.error.field_errors[0]["field"] == "email"
        with pytest.raises(PolarValidationError):
            result.unwrap()


class TestCustomerSeats:
    """Tests for organization-side seat management."""

    seat = {"id": "seat_1", "subscription_id": "sub_1", "status": "invited", "user_email": "sam@example.com"}

    def test_list_and_get(self, client, httpx_mock, api_url, page_of):
        httpx_mock.add_response(method="GET", json=page_of(self.seat))
        httpx_mock.add_response(method="GET", url=f"{api_url}/customer-seats/seat_1", json={**self.seat, "status": "active"})

        page = client.customer_seats.list(subscription_id="sub_1").unwrap()
        seat = client.customer_seats.get("seat_1").unwrap()

        assert not page.items[0].is_claimed
        assert seat.is_claimed
        request = httpx_mock.get_requests()[0]
        assert request.url.path == "/v1/customer-seats/"
        assert params_of(request)["subscription_id"] == "sub_1"

    def test_assign(self, client, httpx_mock, api_url):
        httpx_mock.add_response(method="POST", url=f"{api_url}/customer-seats/assign", json=self.seat)

        result = client.customer_seats.assign({"subscription_id": "sub_1", "email": " sam@example.com "})

        assert result.is_success
        assert result.value is None
        assert body_of(httpx_mock.get_request()) == {"subscription_id": "sub_1", "email": "sam@example.com"}

    def test_assign_invalid_email_sends_nothing(self, client, httpx_mock):
        result = client.customer_seats.assign({"subscription_id": "sub_1", "email": "sam"})

        assert result.is_validation_error
        assert httpx_mock.get_requests() == []

    def test_revoke_and_resend(self, client, httpx_mock, api_url):
        httpx_mock.add_response(method="POST", url=f"{api_url}/customer-seats/revoke", json=self.seat)
        httpx_mock.add_response(method="POST", url=f"{api_url}/customer-seats/resend_invitation", json=self.seat)

        assert client.customer_seats.revoke({"subscription_id": "sub_1", "seat_id": "seat_1"}).is_success
        assert client.customer_seats.resend_invitation({"subscription_id": "sub_1", "seat_id": "seat_1"}).is_success
        assert client.customer_seats.revoke({"subscription_id": "sub_1"}).is_validation_error

        for request in httpx_mock.get_requests():
            assert body_of(request) == {"subscription_id": "sub_1", "seat_id": "seat_1"}

    def test_claim_info_and_claim(self, client, httpx_mock, api_url):
        httpx_mock.add_response(
            method="GET",
            url=f"{api_url}/customer-seats/claim_info",
            json={"seat_id": "seat_1", "subscription_id": "sub_1", "invitation_token": "inv_1"},
        )
        httpx_mock.add_response(method="POST", url=f"{api_url}/customer-seats/claim", json={})

        info = client.customer_seats.get_claim_info().unwrap()

        assert info.seat_id == "seat_1"
        assert client.customer_seats.claim({"invitation_token": info.invitation_token}).is_success
        assert body_of(httpx_mock.get_requests()[1]) == {"invitation_token": "inv_1"}
        assert client.customer_seats.claim({"invitation_token": ""}).is_validation_error


class TestCustomerPortal:
    """Tests for customer portal endpoints authenticated by a session token."""

    @pytest.fixture
    def portal(self, client):
        return client.customer_portal("polar_cst_x")

    def test_session_token_replaces_access_token(self, client, portal, httpx_mock, api_url, sample_customer_data):
        httpx_mock.add_response(method="GET", url=f"{api_url}/customer-portal/customers", json=sample_customer_data)
        httpx_mock.add_response(method="GET", url=f"{api_url}/customers/cus_7b2a", json=sample_customer_data)

        assert portal.get_customer().unwrap().email == "jane@example.com"
        assert client.customers.get("cus_7b2a").is_success

        portal_request, org_request = httpx_mock.get_requests()
        assert portal_request.headers["Authorization"] == "Bearer polar_cst_x"
        assert org_request.headers["Authorization"] == "Bearer polar_oat_test_token"

    @pytest.mark.parametrize("token", ["", "   "])
    def test_blank_session_token(self, client, token):
        with pytest.raises(ValueError):
            client.customer_portal(token)

    def test_payment_methods(self, portal, httpx_mock, api_url):
        card = {"id": "pm_1", "type": "card", "is_default": True, "brand": "visa", "last4": "4242"}
        httpx_mock.add_response(method="GET", url=f"{api_url}/customer-portal/customers/payment-methods", json=[card])
        httpx_mock.add_response(
            method="POST", url=f"{api_url}/customer-portal/customers/payment-methods/pm_1/confirm", json=card
        )
        httpx_mock.add_response(
            method="DELETE", url=f"{api_url}/customer-portal/customers/payment-methods/pm_1", status_code=204
        )

        methods = portal.list_payment_methods().unwrap()

        assert [m.last4 for m in methods] == ["4242"]
        assert portal.confirm_payment_method("pm_1").unwrap().is_default
        assert portal.delete_payment_method("pm_1").is_success

    def test_payment_methods_enveloped(self, portal, httpx_mock, page_of):
        httpx_mock.add_response(method="GET", json=page_of({"id": "pm_1"}, {"id": "pm_2"}))

        assert [m.id for m in portal.list_payment_methods().unwrap()] == ["pm_1", "pm_2"]

    def test_add_payment_method_requires_return_url(self, portal, httpx_mock):
        result = portal.add_payment_method({"confirmation_token_id": "ctoken_1"})

        assert result.is_validation_error
        assert httpx_mock.get_requests() == []

    def test_orders_and_subscriptions(
        self, portal, httpx_mock, api_url, page_of, sample_order_data, sample_subscription_data
    ):
        httpx_mock.add_response(method="GET", json=page_of(sample_order_data, max_page=2))
        httpx_mock.add_response(
            method="POST",
            url=f"{api_url}/customer-portal/subscriptions/sub_1/cancel",
            json={**sample_subscription_data, "cancel_at_period_end": True},
        )

        page = portal.list_orders(page=2, limit=5, product_id="prod_1").unwrap()
        subscription = portal.cancel_subscription("sub_1").unwrap()

        assert page.items[0].id == "ord_1"
        assert subscription.cancel_at_period_end
        request = httpx_mock.get_requests()[0]
        assert request.url.path == "/v1/customer-portal/orders"
        assert params_of(request) == {"page": "2", "limit": "5", "product_id": "prod_1"}
        assert portal.get_subscription("").is_validation_error

    def test_license_key_activate(self, portal, httpx_mock, api_url):
        httpx_mock.add_response(
            method="POST",
            url=f"{api_url}/customer-portal/license-keys/lk_1/activate",
            json={"id": "act_1", "license_key_id": "lk_1", "label": "laptop"},
        )

        activation = portal.activate_license_key(
            "lk_1", {"key": "ACME-1234", "organization_id": "org_1", "label": "laptop"}
        ).unwrap()

        assert activation.license_key_id == "lk_1"

    def test_downloadables_and_claimed_subscriptions(self, portal, httpx_mock, api_url):
        httpx_mock.add_response(
            method="GET",
            url=f"{api_url}/customer-portal/downloadables",
            json=[{"id": "f_1", "name": "manual.pdf", "mime_type": "application/pdf", "size": 1024}],
        )
        httpx_mock.add_response(
            method="GET",
            url=f"{api_url}/customer-portal/seats/claimed_subscriptions",
            json=[{"subscription_id": "sub_1", "available_seats": 3, "used_seats": 2}],
        )

        assert portal.list_downloadables().unwrap()[0].name == "manual.pdf"
        claimed = portal.list_claimed_subscriptions().unwrap()

        assert claimed[0].available_seats == 3

    def test_unexpected_list_body(self, portal, httpx_mock):
        httpx_mock.add_response(method="GET", json={"id": "f_1"})

        assert portal.list_downloadables().error.error_type == "response_validation"

    def test_seats(self, portal, httpx_mock, api_url, page_of):
        httpx_mock.add_response(method="GET", json=page_of({"id": "seat_1", "status": "active"}))
        httpx_mock.add_response(method="POST", url=f"{api_url}/customer-portal/seats/assign", json={})

        assert portal.list_seats().unwrap().items[0].is_claimed
        assert portal.assign_seat({"subscription_id": "sub_1", "email": "sam@example.com"}).is_success
        assert httpx_mock.get_requests()[0].url.path == "/v1/customer-portal/seats"
