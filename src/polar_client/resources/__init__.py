"""Resource clients exposed as attributes of PolarClient."""

from .base import BaseResource
from .checkouts import CheckoutLinksResource, CheckoutsResource
from .custom_fields import CustomFieldsResource
from .customer_meters import CustomerMetersResource
from .customer_portal import CustomerPortalResource
from .customer_seats import CustomerSeatsResource
from .customer_sessions import CustomerSessionsResource
from .customers import CustomersResource
from .discounts import DiscountsResource
from .events import EventsResource
from .files import FilesResource
from .license_keys import LicenseKeysResource
from .meters import MetersResource
from .metrics import MetricsResource
from .oauth2 import OAuth2Resource
from .orders import OrdersResource
from .organizations import OrganizationsResource
from .payments import PaymentsResource, RefundsResource
from .products import BenefitsResource, ProductsResource
from .subscriptions import SubscriptionsResource
from .webhooks import WebhooksResource

__all__ = [
    "BaseResource",
    "BenefitsResource",
    "CheckoutLinksResource",
    "CheckoutsResource",
    "CustomFieldsResource",
    "CustomerMetersResource",
    "CustomerPortalResource",
    "CustomerSeatsResource",
    "CustomerSessionsResource",
    "CustomersResource",
    "DiscountsResource",
    "EventsResource",
    "FilesResource",
    "LicenseKeysResource",
    "MetersResource",
    "MetricsResource",
    "OAuth2Resource",
    "OrdersResource",
    "OrganizationsResource",
    "PaymentsResource",
    "ProductsResource",
    "RefundsResource",
    "SubscriptionsResource",
    "WebhooksResource",
]
