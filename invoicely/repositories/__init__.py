"""Storage backends for accounts and invoices."""

from invoicely.repositories.base import AccountRepository, InvoiceRepository
from invoicely.repositories.memory import InMemoryAccountRepository, InMemoryInvoiceRepository
from invoicely.repositories.sql import SqlAccountRepository, SqlInvoiceRepository

__all__ = [
    "AccountRepository",
    "InMemoryAccountRepository",
    "InMemoryInvoiceRepository",
    "InvoiceRepository",
    "SqlAccountRepository",
    "SqlInvoiceRepository",
]
