from __future__ import annotations

from typing import Optional

from revenuecat.models.common import ListResponse, MonetaryAmount, Record
from revenuecat.models.subscriptions import Entitlement


class Purchase(Record):
    """A one-time (non-subscription) purchase."""

    object: str = "purchase"
    id: str
    customer_id: str
    original_customer_id: Optional[str] = None
    product_id: Optional[str] = None
    purchased_at: int
    revenue_in_usd: Optional[MonetaryAmount] = None
    quantity: int = 1
    status: str
    presented_offering_id: Optional[str] = None
    entitlements: Optional[ListResponse[Entitlement]] = None
    environment: str
    store: str
    store_purchase_identifier: Optional[str] = None
    ownership: Optional[str] = None
    country: Optional[str] = None
