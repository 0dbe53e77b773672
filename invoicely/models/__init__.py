"""Domain models shared by services and repositories."""

from invoicely.models.account import Account
from invoicely.models.invoice import Invoice, InvoiceItem, compute_total

__all__ = [
    "Account",
    "Invoice",
    "InvoiceItem",
    "compute_total",
]
