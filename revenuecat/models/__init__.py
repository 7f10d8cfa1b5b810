from revenuecat.models.common import (
    Record,
    RequestBody,
    ListResponse,
    DeletedObject,
    MonetaryAmount,
)
from revenuecat.models.customers import (
    Customer,
    CustomerAlias,
    CustomerAttribute,
    CustomerEntitlement,
    CustomerExperiment,
    TransferResponse,
    CustomerAttributeInput,
    CreateCustomerRequest,
    TransferCustomerRequest,
    SetCustomerAttributesRequest,
    GrantEntitlementRequest,
    RevokeGrantedEntitlementRequest,
    AssignOfferingRequest,
)
from revenuecat.models.subscriptions import Entitlement, Environment, Subscription
from revenuecat.models.purchases import Purchase
from revenuecat.models.invoices import Invoice, InvoiceLineItem
from revenuecat.models.virtual_currencies import (
    VirtualCurrencyBalance,
    CreateVirtualCurrencyTransactionRequest,
    UpdateVirtualCurrencyBalanceRequest,
)

__all__ = [
    # Common
    "Record",
    "RequestBody",
    "ListResponse",
    "DeletedObject",
    "MonetaryAmount",
    # Customers
    "Customer",
    "CustomerAlias",
    "CustomerAttribute",
    "CustomerEntitlement",
    "CustomerExperiment",
    "TransferResponse",
    "CustomerAttributeInput",
    "CreateCustomerRequest",
    "TransferCustomerRequest",
    "SetCustomerAttributesRequest",
    "GrantEntitlementRequest",
    "RevokeGrantedEntitlementRequest",
    "AssignOfferingRequest",
    # Subscriptions & purchases
    "Entitlement",
    "Environment",
    "Subscription",
    "Purchase",
    # Invoices
    "Invoice",
    "InvoiceLineItem",
    # Virtual currencies
    "VirtualCurrencyBalance",
    "CreateVirtualCurrencyTransactionRequest",
    "UpdateVirtualCurrencyBalanceRequest",
]
