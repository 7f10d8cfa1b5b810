from __future__ import annotations

from typing import Optional

from revenuecat.models.common import MonetaryAmount, Record


class InvoiceLineItem(Record):
    product_identifier: Optional[str] = None
    product_duration: Optional[str] = None
    product_starts_at: Optional[int] = None
    product_ends_at: Optional[int] = None
    quantity: int = 1
    unit_amount: Optional[MonetaryAmount] = None


class Invoice(Record):
    """A web billing invoice. Fetch the PDF with ``get_invoice_file``."""

    object: str = "invoice"
    id: str
    total_amount: Optional[MonetaryAmount] = None
    line_items: list[InvoiceLineItem] = []
    issued_at: int
    paid_at: Optional[int] = None
    invoice_url: Optional[str] = None
