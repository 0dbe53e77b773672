"""Invoice domain model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, Context, Decimal, localcontext

from invoicely.core.enums import INVOICE_DRAFT

# Unrounded arithmetic for sums and products of bounded item amounts.
EXACT_CONTEXT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)


@dataclass(frozen=True)
class InvoiceItem:
    description: str
    quantity: Decimal
    unit_price: Decimal

    @property
    def amount(self) -> Decimal:
        with localcontext(EXACT_CONTEXT):
            return self.quantity * self.unit_price


@dataclass
class Invoice:
    id: str
    owner: str
    customer: str
    customer_email: str
    items: tuple[InvoiceItem, ...]
    total: Decimal
    date: datetime
    notes: str = ""
    status: str = field(default=INVOICE_DRAFT)


def compute_total(items: tuple[InvoiceItem, ...] | list[InvoiceItem]) -> Decimal:
    """Exact sum of quantity * unit_price over all items."""
    with localcontext(EXACT_CONTEXT):
        return sum((item.amount for item in items), Decimal("0"))
