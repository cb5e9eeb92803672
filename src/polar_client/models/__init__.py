"""
Pydantic models for Polar API requests and responses.

Response models ignore unknown fields; request models drop unset fields
when serialized.
"""

from .base import PolarModel, PolarRequest
from .checkouts import (
    Checkout,
    CheckoutClientUpdate,
    CheckoutConfirm,
    CheckoutCreate,
    CheckoutLink,
    CheckoutLinkCreate,
    CheckoutLinkUpdate,
    CheckoutStatus,
    CheckoutUpdate,
)
from .custom_fields import CustomField, CustomFieldCreate, CustomFieldType, CustomFieldUpdate
from .customers import (
    Address,
    Customer,
    CustomerBalance,
    CustomerCreate,
    CustomerSession,
    CustomerSessionCreate,
    CustomerState,
    CustomerUpdate,
    PaymentMethod,
    PaymentMethodCreate,
)
from .discounts import Discount, DiscountCreate, DiscountDuration, DiscountType, DiscountUpdate
from .events import Event, EventCreate, EventName, EventSource, EventsIngestResult
from .exports import CustomerExportRequest, ExportFormat, ExportResponse, SubscriptionExportRequest
from .files import File, FileCreate, FileService, FileUpdate, FileUploadCompleted
from .license_keys import (
    LicenseKey,
    LicenseKeyActivate,
    LicenseKeyActivation,
    LicenseKeyDeactivate,
    LicenseKeyStatus,
    LicenseKeyUpdate,
    LicenseKeyValidate,
    LicenseKeyValidated,
)
from .meters import CustomerMeter, Meter, MeterCreate, MeterQuantities, MeterQuantity, MeterUpdate
from .metrics import MetricLimits, MetricPeriod, Metrics, TimeInterval
from .oauth2 import (
    OAuth2Client,
    OAuth2ClientCreate,
    OAuth2ClientUpdate,
    OAuth2Token,
    OAuth2TokenIntrospection,
    OAuth2TokenRequest,
    OAuth2UserInfo,
)
from .orders import (
    Order,
    OrderInvoice,
    OrderStatus,
    OrderUpdate,
    Payment,
    Refund,
    RefundCreate,
    RefundReason,
    Subscription,
    SubscriptionCreate,
    SubscriptionStatus,
    SubscriptionUpdate,
)
from .organizations import Organization, OrganizationCreate, OrganizationUpdate
from .products import (
    Benefit,
    BenefitCreate,
    BenefitGrant,
    BenefitGrantCreate,
    BenefitType,
    BenefitUpdate,
    PriceAmountType,
    Product,
    ProductCreate,
    ProductPrice,
    ProductPriceCreate,
    ProductUpdate,
    RecurringInterval,
)
from .seats import (
    ClaimedSubscription,
    CustomerSeat,
    SeatAssign,
    SeatClaim,
    SeatClaimInfo,
    SeatResendInvitation,
    SeatRevoke,
    SeatStatus,
)
from .webhooks import (
    WebhookDelivery,
    WebhookEndpoint,
    WebhookEndpointCreate,
    WebhookEndpointUpdate,
    WebhookEvent,
    WebhookFormat,
)

__all__ = [
    "PolarModel",
    "PolarRequest",
    # Checkouts
    "Checkout",
    "CheckoutClientUpdate",
    "CheckoutConfirm",
    "CheckoutCreate",
    "CheckoutLink",
    "CheckoutLinkCreate",
    "CheckoutLinkUpdate",
    "CheckoutStatus",
    "CheckoutUpdate",
    # Customers
    "Address",
    "Customer",
    "CustomerBalance",
    "CustomerCreate",
    "CustomerSession",
    "CustomerSessionCreate",
    "CustomerState",
    "CustomerUpdate",
    "PaymentMethod",
    "PaymentMethodCreate",
    "CustomerSeat",
    "ClaimedSubscription",
    "SeatAssign",
    "SeatClaim",
    "SeatClaimInfo",
    "SeatResendInvitation",
    "SeatRevoke",
    "SeatStatus",
    # Catalog
    "Product",
    "ProductCreate",
    "ProductPrice",
    "ProductPriceCreate",
    "ProductUpdate",
    "PriceAmountType",
    "RecurringInterval",
    "Benefit",
    "BenefitCreate",
    "BenefitGrant",
    "BenefitGrantCreate",
    "BenefitType",
    "BenefitUpdate",
    "Discount",
    "DiscountCreate",
    "DiscountDuration",
    "DiscountType",
    "DiscountUpdate",
    "CustomField",
    "CustomFieldCreate",
    "CustomFieldType",
    "CustomFieldUpdate",
    # Sales
    "Order",
    "OrderInvoice",
    "OrderStatus",
    "OrderUpdate",
    "Subscription",
    "SubscriptionCreate",
    "SubscriptionStatus",
    "SubscriptionUpdate",
    "Refund",
    "RefundCreate",
    "RefundReason",
    "Payment",
    # Usage
    "Event",
    "EventCreate",
    "EventName",
    "EventSource",
    "EventsIngestResult",
    "CustomerMeter",
    "Meter",
    "MeterCreate",
    "MeterQuantities",
    "MeterQuantity",
    "MeterUpdate",
    "Metrics",
    "MetricLimits",
    "MetricPeriod",
    "TimeInterval",
    # Licensing
    "LicenseKey",
    "LicenseKeyActivate",
    "LicenseKeyActivation",
    "LicenseKeyDeactivate",
    "LicenseKeyStatus",
    "LicenseKeyUpdate",
    "LicenseKeyValidate",
    "LicenseKeyValidated",
    # Platform
    "File",
    "FileCreate",
    "FileService",
    "FileUpdate",
    "FileUploadCompleted",
    "OAuth2Client",
    "OAuth2ClientCreate",
    "OAuth2ClientUpdate",
    "OAuth2Token",
    "OAuth2TokenIntrospection",
    "OAuth2TokenRequest",
    "OAuth2UserInfo",
    "Organization",
    "OrganizationCreate",
    "OrganizationUpdate",
    "WebhookDelivery",
    "WebhookEndpoint",
    "WebhookEndpointCreate",
    "WebhookEndpointUpdate",
    "WebhookEvent",
    "WebhookFormat",
    # Exports
    "CustomerExportRequest",
    "ExportFormat",
    "ExportResponse",
    "SubscriptionExportRequest",
]
