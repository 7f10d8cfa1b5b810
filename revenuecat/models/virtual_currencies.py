from __future__ import annotations

from typing import Optional

from pydantic import Field

from revenuecat.models.common import Record, RequestBody


class VirtualCurrencyBalance(Record):
    object: str = "virtual_currency_balance"
    currency_code: str
    balance: int
    name: Optional[str] = None
    description: Optional[str] = None


class CreateVirtualCurrencyTransactionRequest(RequestBody):
    """Adjust balances and record a transaction.

    ``adjustments`` maps currency code to a signed delta.
    """

    adjustments: dict[str, int] = Field(min_length=1)
    reference: Optional[str] = None


class UpdateVirtualCurrencyBalanceRequest(RequestBody):
    """Set balances without recording a transaction.

    ``adjustments`` maps currency code to the new balance.
    """

    adjustments: dict[str, int] = Field(min_length=1)
    reference: Optional[str] = None
