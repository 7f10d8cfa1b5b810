from __future__ import annotations

from typing import Optional

from pydantic import Field

from revenuecat.models.common import ListResponse, Record, RequestBody


# --- Records ---


class CustomerEntitlement(Record):
    """An entitlement currently active for a customer."""

    object: str = "customer.active_entitlement"
    entitlement_id: str
    expires_at: Optional[int] = None


class CustomerAlias(Record):
    object: str = "customer.alias"
    id: str
    created_at: int


class CustomerAttribute(Record):
    object: str = "customer.attribute"
    name: str
    value: str
    updated_at: int


class CustomerExperiment(Record):
    object: str = "experiment_enrollment"
    id: str
    name: str
    variant: str


class Customer(Record):
    """A RevenueCat customer.

    ``attributes`` is only populated when requested with ``expand``.
    Timestamps are milliseconds since the epoch.
    """

    object: str = "customer"
    id: str
    project_id: str
    first_seen_at: int
    last_seen_at: Optional[int] = None
    last_seen_app_version: Optional[str] = None
    last_seen_country: Optional[str] = None
    last_seen_platform: Optional[str] = None
    last_seen_platform_version: Optional[str] = None
    active_entitlements: Optional[ListResponse[CustomerEntitlement]] = None
    experiment: Optional[CustomerExperiment] = None
    attributes: Optional[ListResponse[CustomerAttribute]] = None


class TransferResponse(Record):
    object: str = "transfer"
    source_customer_id: str
    target_customer_id: str
    transferred_at: int


# --- Requests ---


class CustomerAttributeInput(RequestBody):
    """A name/value pair, e.g. ``$email`` or a custom attribute name."""

    name: str
    value: str


class CreateCustomerRequest(RequestBody):
    id: str
    attributes: Optional[list[CustomerAttributeInput]] = None


class TransferCustomerRequest(RequestBody):
    target_customer_id: str
    app_ids: Optional[list[str]] = None


class SetCustomerAttributesRequest(RequestBody):
    attributes: list[CustomerAttributeInput] = Field(min_length=1)


class GrantEntitlementRequest(RequestBody):
    entitlement_id: str
    expires_at: int


class RevokeGrantedEntitlementRequest(RequestBody):
    entitlement_id: str


class AssignOfferingRequest(RequestBody):
    """Assign an offering override, or clear it with ``offering_id=None``.

    The field has no default: it must always be given, and None is sent
    as an explicit JSON null.
    """

    offering_id: Optional[str]
