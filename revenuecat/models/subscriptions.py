from __future__ import annotations

from typing import Literal, Optional

from revenuecat.models.common import ListResponse, MonetaryAmount, Record

Environment = Literal["production", "sandbox"]


class Entitlement(Record):
    object: str = "entitlement"
    id: str
    project_id: Optional[str] = None
    lookup_key: str
    display_name: Optional[str] = None
    created_at: Optional[int] = None


class Subscription(Record):
    """A subscription as reported by the store, normalised by RevenueCat."""

    object: str = "subscription"
    id: str
    customer_id: str
    original_customer_id: Optional[str] = None
    product_id: Optional[str] = None
    starts_at: int
    current_period_starts_at: int
    current_period_ends_at: Optional[int] = None
    gives_access: bool
    pending_payment: bool = False
    auto_renewal_status: str
    status: str
    total_revenue_in_usd: Optional[MonetaryAmount] = None
    presented_offering_id: Optional[str] = None
    entitlements: Optional[ListResponse[Entitlement]] = None
    environment: str
    store: str
    store_subscription_identifier: Optional[str] = None
    ownership: Optional[str] = None
    country: Optional[str] = None
    management_url: Optional[str] = None
