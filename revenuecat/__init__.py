from revenuecat.core import (
    Endpoint,
    PagedCollection,
    RevenueCatClient,
    connect,
    disconnect,
    disconnect_all,
    get_client,
)
from revenuecat.lifecycle import (
    enable_tracing,
    disable_tracing,
    RequestEvent,
    add_listener,
)
from revenuecat.models import (
    ListResponse,
    DeletedObject,
    Customer,
    CustomerAlias,
    CustomerAttribute,
    CustomerEntitlement,
    TransferResponse,
    CustomerAttributeInput,
    CreateCustomerRequest,
    TransferCustomerRequest,
    SetCustomerAttributesRequest,
    GrantEntitlementRequest,
    RevokeGrantedEntitlementRequest,
    AssignOfferingRequest,
    Subscription,
    Purchase,
    Invoice,
    VirtualCurrencyBalance,
    CreateVirtualCurrencyTransactionRequest,
    UpdateVirtualCurrencyBalanceRequest,
)
from revenuecat.services import CustomerService
from revenuecat.utils import (
    RevenueCatError,
    ApiError,
    BadRequest,
    AuthenticationError,
    PermissionDenied,
    NotFound,
    Conflict,
    RateLimited,
    ServerError,
    TransportError,
    MalformedResponse,
    MalformedPage,
    PaginationLimitExceeded,
    NotConnected,
    ConfigurationError,
    ClientSettings,
    Page,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "Endpoint",
    "PagedCollection",
    "RevenueCatClient",
    "connect",
    "disconnect",
    "disconnect_all",
    "get_client",
    # Lifecycle
    "enable_tracing",
    "disable_tracing",
    "RequestEvent",
    "add_listener",
    # Models
    "ListResponse",
    "DeletedObject",
    "Customer",
    "CustomerAlias",
    "CustomerAttribute",
    "CustomerEntitlement",
    "TransferResponse",
    "CustomerAttributeInput",
    "CreateCustomerRequest",
    "TransferCustomerRequest",
    "SetCustomerAttributesRequest",
    "GrantEntitlementRequest",
    "RevokeGrantedEntitlementRequest",
    "AssignOfferingRequest",
    "Subscription",
    "Purchase",
    "Invoice",
    "VirtualCurrencyBalance",
    "CreateVirtualCurrencyTransactionRequest",
    "UpdateVirtualCurrencyBalanceRequest",
    # Services
    "CustomerService",
    # Utils
    "RevenueCatError",
    "ApiError",
    "BadRequest",
    "AuthenticationError",
    "PermissionDenied",
    "NotFound",
    "Conflict",
    "RateLimited",
    "ServerError",
    "TransportError",
    "MalformedResponse",
    "MalformedPage",
    "PaginationLimitExceeded",
    "NotConnected",
    "ConfigurationError",
    "ClientSettings",
    "Page",
]
